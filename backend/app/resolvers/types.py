"""
GraphQL object types.

Each type wraps its ORM row (kept as a private field) and resolves
relationship fields on demand: if the initiating query already eager-loaded
the relationship it is used as-is, otherwise a single lookup keyed on the
foreign key already present on the parent is issued.
"""

from datetime import datetime
from typing import List, Optional

import strawberry
from sqlalchemy import inspect
from strawberry.types import Info

from app import models
from app.repositories import courses as course_repo
from app.repositories import institutes as institute_repo
from app.repositories import results as result_repo
from app.repositories import students as student_repo
from app.repositories import users as user_repo
from app.resolvers.context import blocking
from app.services.analytics import InstituteRollup, TopCourse as TopCourseRow, TopStudent as TopStudentRow
from app.services.pagination import Page


def is_loaded(instance, attribute: str) -> bool:
    """True when ``attribute`` is already populated on the ORM instance."""
    return attribute not in inspect(instance).unloaded


def _timestamp(value: Optional[datetime]) -> str:
    return value.isoformat() if value else ""


@strawberry.type
class User:
    id: strawberry.ID
    email: str
    role: str
    created_at: str
    updated_at: str
    model: strawberry.Private[models.User]

    @classmethod
    def from_model(cls, user: models.User) -> "User":
        return cls(
            id=strawberry.ID(user.id),
            email=user.email,
            role=user.role,
            created_at=_timestamp(user.created_at),
            updated_at=_timestamp(user.updated_at),
            model=user,
        )

    @strawberry.field
    @blocking
    def student(self, info: Info) -> Optional["Student"]:
        if is_loaded(self.model, "student"):
            student = self.model.student
        else:
            student = student_repo.find_by_user_id(info.context.db, self.model.id)
        return Student.from_model(student) if student else None


@strawberry.type
class Institute:
    id: strawberry.ID
    name: str
    location: str
    created_at: str
    updated_at: str
    model: strawberry.Private[models.Institute]

    @classmethod
    def from_model(cls, institute: models.Institute) -> "Institute":
        return cls(
            id=strawberry.ID(institute.id),
            name=institute.name,
            location=institute.location,
            created_at=_timestamp(institute.created_at),
            updated_at=_timestamp(institute.updated_at),
            model=institute,
        )

    @strawberry.field
    @blocking
    def students(self, info: Info) -> List["Student"]:
        if is_loaded(self.model, "students"):
            students = self.model.students
        else:
            students = student_repo.list_for_institute(info.context.db, self.model.id)
        return [Student.from_model(s) for s in students]


@strawberry.type
class Student:
    id: strawberry.ID
    name: str
    email: str
    created_at: str
    updated_at: str
    model: strawberry.Private[models.Student]

    @classmethod
    def from_model(cls, student: models.Student) -> "Student":
        return cls(
            id=strawberry.ID(student.id),
            name=student.name,
            email=student.email,
            created_at=_timestamp(student.created_at),
            updated_at=_timestamp(student.updated_at),
            model=student,
        )

    @strawberry.field
    @blocking
    def institute(self, info: Info) -> Institute:
        if is_loaded(self.model, "institute"):
            institute = self.model.institute
        else:
            institute = institute_repo.get_by_id(info.context.db, self.model.institute_id)
        return Institute.from_model(institute)

    @strawberry.field
    @blocking
    def user(self, info: Info) -> User:
        if is_loaded(self.model, "user"):
            user = self.model.user
        else:
            user = user_repo.get_by_id(info.context.db, self.model.user_id)
        return User.from_model(user)

    @strawberry.field
    @blocking
    def results(self, info: Info) -> List["Result"]:
        if is_loaded(self.model, "results"):
            results = self.model.results
        else:
            results = result_repo.list_for_student(info.context.db, self.model.id)
        return [Result.from_model(r) for r in results]


@strawberry.type
class Course:
    id: strawberry.ID
    title: str
    code: str
    credits: int
    created_at: str
    updated_at: str
    model: strawberry.Private[models.Course]

    @classmethod
    def from_model(cls, course: models.Course) -> "Course":
        return cls(
            id=strawberry.ID(course.id),
            title=course.title,
            code=course.code,
            credits=course.credits,
            created_at=_timestamp(course.created_at),
            updated_at=_timestamp(course.updated_at),
            model=course,
        )

    @strawberry.field
    @blocking
    def results(self, info: Info) -> List["Result"]:
        if is_loaded(self.model, "results"):
            results = self.model.results
        else:
            results = result_repo.list_for_course(info.context.db, self.model.id)
        return [Result.from_model(r) for r in results]


@strawberry.type
class Result:
    id: strawberry.ID
    score: float
    grade: str
    year: int
    created_at: str
    updated_at: str
    model: strawberry.Private[models.Result]

    @classmethod
    def from_model(cls, result: models.Result) -> "Result":
        return cls(
            id=strawberry.ID(result.id),
            score=float(result.score),
            grade=result.grade,
            year=result.year,
            created_at=_timestamp(result.created_at),
            updated_at=_timestamp(result.updated_at),
            model=result,
        )

    @strawberry.field
    @blocking
    def student(self, info: Info) -> Student:
        if is_loaded(self.model, "student"):
            student = self.model.student
        else:
            student = student_repo.get_by_id(info.context.db, self.model.student_id)
        return Student.from_model(student)

    @strawberry.field
    @blocking
    def course(self, info: Info) -> Course:
        if is_loaded(self.model, "course"):
            course = self.model.course
        else:
            course = course_repo.get_by_id(info.context.db, self.model.course_id)
        return Course.from_model(course)


@strawberry.type
class AuthPayload:
    token: str
    user: User


# ── Paginated lists ──────────────────────────────────────────

@strawberry.type
class PaginatedInstitutes:
    items: List[Institute]
    total_count: int
    has_more: bool
    limit: int
    offset: int

    @classmethod
    def from_page(cls, page: Page) -> "PaginatedInstitutes":
        return cls(items=[Institute.from_model(i) for i in page.items],
                   total_count=page.total_count, has_more=page.has_more,
                   limit=page.limit, offset=page.offset)


@strawberry.type
class PaginatedStudents:
    items: List[Student]
    total_count: int
    has_more: bool
    limit: int
    offset: int

    @classmethod
    def from_page(cls, page: Page) -> "PaginatedStudents":
        return cls(items=[Student.from_model(s) for s in page.items],
                   total_count=page.total_count, has_more=page.has_more,
                   limit=page.limit, offset=page.offset)


@strawberry.type
class PaginatedCourses:
    items: List[Course]
    total_count: int
    has_more: bool
    limit: int
    offset: int

    @classmethod
    def from_page(cls, page: Page) -> "PaginatedCourses":
        return cls(items=[Course.from_model(c) for c in page.items],
                   total_count=page.total_count, has_more=page.has_more,
                   limit=page.limit, offset=page.offset)


@strawberry.type
class PaginatedResults:
    items: List[Result]
    total_count: int
    has_more: bool
    limit: int
    offset: int

    @classmethod
    def from_page(cls, page: Page) -> "PaginatedResults":
        return cls(items=[Result.from_model(r) for r in page.items],
                   total_count=page.total_count, has_more=page.has_more,
                   limit=page.limit, offset=page.offset)


# ── Analytics ────────────────────────────────────────────────

@strawberry.type
class InstituteResults:
    institute: Institute
    results: List[Result]
    average_score: float
    total_students: int

    @classmethod
    def from_rollup(cls, rollup: InstituteRollup) -> "InstituteResults":
        return cls(
            institute=Institute.from_model(rollup.institute),
            results=[Result.from_model(r) for r in rollup.results],
            average_score=rollup.average_score,
            total_students=rollup.total_students,
        )


@strawberry.type
class TopCourse:
    course: Course
    enrollment_count: int
    year: int

    @classmethod
    def from_row(cls, row: TopCourseRow) -> "TopCourse":
        return cls(course=Course.from_model(row.course),
                   enrollment_count=row.enrollment_count, year=row.year)


@strawberry.type
class TopStudent:
    student: Student
    total_score: float
    average_score: float
    result_count: int

    @classmethod
    def from_row(cls, row: TopStudentRow) -> "TopStudent":
        return cls(student=Student.from_model(row.student),
                   total_score=row.total_score,
                   average_score=row.average_score,
                   result_count=row.result_count)
