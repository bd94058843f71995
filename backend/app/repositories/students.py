"""Student data access."""

from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from app.errors import BadUserInput, NotFound
from app.models.institute import Institute
from app.models.student import Student
from app.models.user import User
from app.repositories.common import search_filter
from app.schemas import CreateStudentInput, UpdateStudentInput
from app.services.pagination import Page, paginate_query


def get_by_id(db: Session, student_id: str) -> Student:
    student = db.get(Student, student_id)
    if student is None:
        raise NotFound("Student not found")
    return student


def find_by_user_id(db: Session, user_id: str) -> Optional[Student]:
    return db.query(Student).filter(Student.user_id == user_id).first()


def find_many(db: Session, search: Optional[str] = None,
              limit: Optional[int] = None, offset: Optional[int] = None) -> Page:
    """Students ordered by name, optionally matching name or email."""
    query = db.query(Student).options(joinedload(Student.institute))
    if search:
        query = query.filter(search_filter(search, Student.name, Student.email))
    query = query.order_by(Student.name.asc(), Student.id.asc())
    return paginate_query(query, limit, offset)


def list_for_institute(db: Session, institute_id: str) -> List[Student]:
    return (db.query(Student)
            .filter(Student.institute_id == institute_id)
            .order_by(Student.name.asc(), Student.id.asc())
            .all())


def get_many_with_institute(db: Session, student_ids: List[str]) -> List[Student]:
    """Fetch several students with their institute in a single query."""
    if not student_ids:
        return []
    return (db.query(Student)
            .options(joinedload(Student.institute))
            .filter(Student.id.in_(student_ids))
            .all())


def _require_institute(db: Session, institute_id: str):
    if db.get(Institute, institute_id) is None:
        raise BadUserInput("Institute not found")


def create(db: Session, data: CreateStudentInput) -> Student:
    """Create a student after checking its institute and user exist."""
    _require_institute(db, data.institute_id)
    if db.get(User, data.user_id) is None:
        raise BadUserInput("User not found")
    if find_by_user_id(db, data.user_id) is not None:
        raise BadUserInput("User already has a student profile")

    student = Student(**data.model_dump())
    db.add(student)
    db.flush()
    return student


def update(db: Session, student_id: str, data: UpdateStudentInput) -> Student:
    student = get_by_id(db, student_id)
    changes = data.changes()
    if "institute_id" in changes and changes["institute_id"] != student.institute_id:
        _require_institute(db, changes["institute_id"])
    for field, value in changes.items():
        setattr(student, field, value)
    db.flush()
    return student


def delete(db: Session, student_id: str) -> bool:
    """Delete the student and its results. The linked user is kept."""
    student = get_by_id(db, student_id)
    db.delete(student)
    db.flush()
    return True
