"""
Result model - one student's graded outcome in one course for one year.

The score, grade and year domains are enforced here with check constraints
as well as at the input-validation layer.
"""

from sqlalchemy import Column, String, Integer, Numeric, ForeignKey, CheckConstraint, Index
from sqlalchemy.orm import relationship
from app.database import Base
from app.models.mixins import IdentifiedMixin

GRADES = ("A+", "A", "A-", "B+", "B", "B-", "C+", "C", "C-", "D+", "D", "F")
MIN_YEAR = 2000
MAX_YEAR = 2100


class Result(IdentifiedMixin, Base):
    """
    SQLAlchemy model for the results table.

    Aggregation queries group on student_id and course_id, and filter on year,
    so all three are indexed.
    """
    __tablename__ = "results"

    student_id = Column(String(36),
                        ForeignKey("students.id", ondelete="CASCADE", onupdate="CASCADE"),
                        nullable=False,
                        doc="Reference to the student the result belongs to")
    course_id = Column(String(36),
                       ForeignKey("courses.id", ondelete="CASCADE", onupdate="CASCADE"),
                       nullable=False,
                       doc="Reference to the course the result was earned in")
    score = Column(Numeric(5, 2, asdecimal=False), nullable=False,
                   doc="Score between 0 and 100")
    grade = Column(String(2), nullable=False,
                   doc="Letter grade, one of GRADES")
    year = Column(Integer, nullable=False,
                  doc="Academic year, 2000 to 2100")

    # Relationships
    student = relationship("Student", back_populates="results")
    course = relationship("Course", back_populates="results")

    __table_args__ = (
        CheckConstraint("score >= 0 AND score <= 100", name="ck_results_score"),
        CheckConstraint(
            "grade IN ({})".format(", ".join("'{}'".format(g) for g in GRADES)),
            name="ck_results_grade",
        ),
        CheckConstraint("year BETWEEN {} AND {}".format(MIN_YEAR, MAX_YEAR), name="ck_results_year"),
        Index("ix_results_student_id", "student_id"),
        Index("ix_results_course_id", "course_id"),
        Index("ix_results_year", "year"),
        Index("ix_results_score", "score"),
        Index("ix_results_year_score", "year", "score"),
    )

    def __repr__(self):
        return f"<Result(id={self.id}, student={self.student_id}, course={self.course_id}, score={self.score})>"
