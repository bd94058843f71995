"""
Institute model - schools and colleges students are enrolled at.
"""

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from app.database import Base
from app.models.mixins import IdentifiedMixin


class Institute(IdentifiedMixin, Base):
    """SQLAlchemy model for the institutes table."""
    __tablename__ = "institutes"

    name = Column(String(255), nullable=False, index=True,
                  doc="Institute name")
    location = Column(String(255), nullable=False,
                      doc="City or campus location")

    # Relationship: one institute has many students (cascade in the database)
    students = relationship("Student", back_populates="institute",
                            cascade="all, delete-orphan", passive_deletes=True,
                            order_by="Student.name")

    def __repr__(self):
        return f"<Institute(id={self.id}, name='{self.name}', location='{self.location}')>"
