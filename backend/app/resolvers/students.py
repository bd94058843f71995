"""Student queries and mutations."""

from typing import Optional

import strawberry
from strawberry.types import Info

from app.database import transaction
from app.repositories import students as student_repo
from app.resolvers.context import blocking
from app.resolvers.inputs import CreateStudentInput, UpdateStudentInput
from app.resolvers.types import PaginatedStudents, Student
from app.services.authorization import require_admin, require_authenticated


@strawberry.type
class StudentQuery:

    @strawberry.field
    @blocking
    def student(self, info: Info, id: strawberry.ID) -> Optional[Student]:
        require_authenticated(info.context.principal)
        return Student.from_model(student_repo.get_by_id(info.context.db, id))

    @strawberry.field
    @blocking
    def students(self, info: Info, limit: Optional[int] = None, offset: Optional[int] = None,
                 search: Optional[str] = None) -> PaginatedStudents:
        require_authenticated(info.context.principal)
        page = student_repo.find_many(info.context.db, search=search, limit=limit, offset=offset)
        return PaginatedStudents.from_page(page)


@strawberry.type
class StudentMutation:

    @strawberry.mutation
    @blocking
    def create_student(self, info: Info, input: CreateStudentInput) -> Student:
        require_admin(info.context.principal)
        data = input.to_model()
        db = info.context.db
        with transaction(db):
            student = student_repo.create(db, data)
        return Student.from_model(student)

    @strawberry.mutation
    @blocking
    def update_student(self, info: Info, id: strawberry.ID, input: UpdateStudentInput) -> Student:
        require_admin(info.context.principal)
        data = input.to_model()
        db = info.context.db
        with transaction(db):
            student = student_repo.update(db, id, data)
        return Student.from_model(student)

    @strawberry.mutation
    @blocking
    def delete_student(self, info: Info, id: strawberry.ID) -> bool:
        require_admin(info.context.principal)
        db = info.context.db
        with transaction(db):
            return student_repo.delete(db, id)
