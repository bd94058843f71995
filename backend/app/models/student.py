"""
Student model - a student enrolled at an institute.

Each student belongs to exactly one institute and is linked 1:1 to the user
account that signed up for it. Results reference students via the
student_id foreign key in the results table.
"""

from sqlalchemy import Column, String, ForeignKey
from sqlalchemy.orm import relationship
from app.database import Base
from app.models.mixins import IdentifiedMixin


class Student(IdentifiedMixin, Base):
    """
    SQLAlchemy model for the students table.

    Deleting the parent institute or user cascades here; deleting a student
    cascades to its results.
    """
    __tablename__ = "students"

    name = Column(String(255), nullable=False, index=True,
                  doc="Student's full name")
    email = Column(String(255), nullable=False, index=True,
                   doc="Contact email")
    institute_id = Column(String(36),
                          ForeignKey("institutes.id", ondelete="CASCADE", onupdate="CASCADE"),
                          nullable=False, index=True,
                          doc="Reference to the institute the student attends")
    user_id = Column(String(36),
                     ForeignKey("users.id", ondelete="CASCADE", onupdate="CASCADE"),
                     nullable=False, unique=True, index=True,
                     doc="Reference to the owning user account (1:1)")

    # Relationships
    institute = relationship("Institute", back_populates="students")
    user = relationship("User", back_populates="student")
    results = relationship("Result", back_populates="student",
                           cascade="all, delete-orphan", passive_deletes=True)

    def __repr__(self):
        return f"<Student(id={self.id}, name='{self.name}', email='{self.email}')>"
