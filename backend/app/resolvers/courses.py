"""Course queries and mutations."""

from typing import Optional

import strawberry
from strawberry.types import Info

from app.database import transaction
from app.repositories import courses as course_repo
from app.resolvers.context import blocking
from app.resolvers.inputs import CreateCourseInput, UpdateCourseInput
from app.resolvers.types import Course, PaginatedCourses
from app.services.authorization import require_admin, require_authenticated


@strawberry.type
class CourseQuery:

    @strawberry.field
    @blocking
    def course(self, info: Info, id: strawberry.ID) -> Optional[Course]:
        require_authenticated(info.context.principal)
        return Course.from_model(course_repo.get_by_id(info.context.db, id))

    @strawberry.field
    @blocking
    def courses(self, info: Info, limit: Optional[int] = None, offset: Optional[int] = None,
                search: Optional[str] = None) -> PaginatedCourses:
        require_authenticated(info.context.principal)
        page = course_repo.find_many(info.context.db, search=search, limit=limit, offset=offset)
        return PaginatedCourses.from_page(page)


@strawberry.type
class CourseMutation:

    @strawberry.mutation
    @blocking
    def create_course(self, info: Info, input: CreateCourseInput) -> Course:
        require_admin(info.context.principal)
        data = input.to_model()
        db = info.context.db
        with transaction(db):
            course = course_repo.create(db, data)
        return Course.from_model(course)

    @strawberry.mutation
    @blocking
    def update_course(self, info: Info, id: strawberry.ID, input: UpdateCourseInput) -> Course:
        require_admin(info.context.principal)
        data = input.to_model()
        db = info.context.db
        with transaction(db):
            course = course_repo.update(db, id, data)
        return Course.from_model(course)

    @strawberry.mutation
    @blocking
    def delete_course(self, info: Info, id: strawberry.ID) -> bool:
        require_admin(info.context.principal)
        db = info.context.db
        with transaction(db):
            return course_repo.delete(db, id)
