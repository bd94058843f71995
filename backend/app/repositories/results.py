"""Result data access."""

from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from app.errors import BadUserInput, NotFound
from app.models.course import Course
from app.models.result import Result
from app.models.student import Student
from app.schemas import CreateResultInput, UpdateResultInput
from app.services.pagination import Page, paginate_query


def get_by_id(db: Session, result_id: str) -> Result:
    result = db.get(Result, result_id)
    if result is None:
        raise NotFound("Result not found")
    return result


def find_many(db: Session, year: Optional[int] = None,
              limit: Optional[int] = None, offset: Optional[int] = None) -> Page:
    """Results newest year first, highest score first within a year."""
    query = db.query(Result).options(
        joinedload(Result.student),
        joinedload(Result.course)
    )
    if year is not None:
        query = query.filter(Result.year == year)
    query = query.order_by(Result.year.desc(), Result.score.desc(), Result.id.asc())
    return paginate_query(query, limit, offset)


def list_for_student(db: Session, student_id: str) -> List[Result]:
    return (db.query(Result)
            .filter(Result.student_id == student_id)
            .order_by(Result.year.desc(), Result.id.asc())
            .all())


def list_for_course(db: Session, course_id: str) -> List[Result]:
    return (db.query(Result)
            .filter(Result.course_id == course_id)
            .order_by(Result.year.desc(), Result.id.asc())
            .all())


def create(db: Session, data: CreateResultInput) -> Result:
    """Record a result after checking the student and course exist."""
    if db.get(Student, data.student_id) is None:
        raise BadUserInput("Student not found")
    if db.get(Course, data.course_id) is None:
        raise BadUserInput("Course not found")

    result = Result(**data.model_dump())
    db.add(result)
    db.flush()
    return result


def update(db: Session, result_id: str, data: UpdateResultInput) -> Result:
    result = get_by_id(db, result_id)
    for field, value in data.changes().items():
        setattr(result, field, value)
    db.flush()
    return result


def delete(db: Session, result_id: str) -> bool:
    result = get_by_id(db, result_id)
    db.delete(result)
    db.flush()
    return True
