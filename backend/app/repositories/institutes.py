"""Institute data access."""

from typing import List, Optional

from sqlalchemy.orm import Session, selectinload

from app.errors import NotFound
from app.models.institute import Institute
from app.models.result import Result
from app.models.student import Student
from app.repositories.common import search_filter
from app.schemas import CreateInstituteInput, UpdateInstituteInput
from app.services.pagination import Page, paginate_query


def get_by_id(db: Session, institute_id: str) -> Institute:
    institute = db.get(Institute, institute_id)
    if institute is None:
        raise NotFound("Institute not found")
    return institute


def find_many(db: Session, search: Optional[str] = None,
              limit: Optional[int] = None, offset: Optional[int] = None) -> Page:
    """Institutes ordered by name, optionally matching name or location."""
    query = db.query(Institute)
    if search:
        query = query.filter(search_filter(search, Institute.name, Institute.location))
    query = query.order_by(Institute.name.asc(), Institute.id.asc())
    return paginate_query(query, limit, offset)


def find_with_results(db: Session, institute_id: Optional[str] = None,
                      cap: Optional[int] = None) -> List[Institute]:
    """
    Institutes with students, their results and each result's course eagerly
    loaded (one SELECT per level, never per row).
    """
    query = db.query(Institute).options(
        selectinload(Institute.students)
        .selectinload(Student.results)
        .selectinload(Result.course)
    )
    if institute_id is not None:
        query = query.filter(Institute.id == institute_id)
    query = query.order_by(Institute.name.asc(), Institute.id.asc())
    if cap is not None:
        query = query.limit(cap)
    return query.all()


def create(db: Session, data: CreateInstituteInput) -> Institute:
    institute = Institute(**data.model_dump())
    db.add(institute)
    db.flush()
    return institute


def update(db: Session, institute_id: str, data: UpdateInstituteInput) -> Institute:
    institute = get_by_id(db, institute_id)
    for field, value in data.changes().items():
        setattr(institute, field, value)
    db.flush()
    return institute


def delete(db: Session, institute_id: str) -> bool:
    """Delete the institute; its students and their results go with it."""
    institute = get_by_id(db, institute_id)
    db.delete(institute)
    db.flush()
    return True
