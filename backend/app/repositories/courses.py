"""Course data access."""

from typing import List, Optional

from sqlalchemy.orm import Session

from app.errors import BadUserInput, NotFound
from app.models.course import Course
from app.repositories.common import search_filter
from app.schemas import CreateCourseInput, UpdateCourseInput
from app.services.pagination import Page, paginate_query


def get_by_id(db: Session, course_id: str) -> Course:
    course = db.get(Course, course_id)
    if course is None:
        raise NotFound("Course not found")
    return course


def find_by_code(db: Session, code: str) -> Optional[Course]:
    return db.query(Course).filter(Course.code == code).first()


def find_many(db: Session, search: Optional[str] = None,
              limit: Optional[int] = None, offset: Optional[int] = None) -> Page:
    """Courses ordered by code, optionally matching title or code."""
    query = db.query(Course)
    if search:
        query = query.filter(search_filter(search, Course.title, Course.code))
    query = query.order_by(Course.code.asc(), Course.id.asc())
    return paginate_query(query, limit, offset)


def get_many(db: Session, course_ids: List[str]) -> List[Course]:
    if not course_ids:
        return []
    return db.query(Course).filter(Course.id.in_(course_ids)).all()


def _require_unique_code(db: Session, code: str):
    if find_by_code(db, code) is not None:
        raise BadUserInput("Course with this code already exists")


def create(db: Session, data: CreateCourseInput) -> Course:
    _require_unique_code(db, data.code)
    course = Course(**data.model_dump())
    db.add(course)
    db.flush()
    return course


def update(db: Session, course_id: str, data: UpdateCourseInput) -> Course:
    course = get_by_id(db, course_id)
    changes = data.changes()
    # Keeping the current code is not a conflict
    if "code" in changes and changes["code"] != course.code:
        _require_unique_code(db, changes["code"])
    for field, value in changes.items():
        setattr(course, field, value)
    db.flush()
    return course


def delete(db: Session, course_id: str) -> bool:
    """Delete the course and every result recorded against it."""
    course = get_by_id(db, course_id)
    db.delete(course)
    db.flush()
    return True
