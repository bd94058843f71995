"""
Course model - a course results are recorded against.

Course codes are unique; credits are bounded to 1-6 by a check constraint.
"""

from sqlalchemy import Column, String, Integer, CheckConstraint
from sqlalchemy.orm import relationship
from app.database import Base
from app.models.mixins import IdentifiedMixin


class Course(IdentifiedMixin, Base):
    """SQLAlchemy model for the courses table."""
    __tablename__ = "courses"

    title = Column(String(255), nullable=False,
                   doc="Course title")
    code = Column(String(50), nullable=False, unique=True, index=True,
                  doc="Unique course code, e.g. CS101")
    credits = Column(Integer, nullable=False, default=3,
                     doc="Credit weight, 1 to 6")

    # Relationship: one course has many results (cascade in the database)
    results = relationship("Result", back_populates="course",
                           cascade="all, delete-orphan", passive_deletes=True)

    __table_args__ = (
        CheckConstraint("credits BETWEEN 1 AND 6", name="ck_courses_credits"),
    )

    def __repr__(self):
        return f"<Course(id={self.id}, code='{self.code}', credits={self.credits})>"
