"""
Institute queries and mutations.

Listing institutes is public; fetching one requires a signed-in user;
creating, updating and deleting require the admin role.
"""

from typing import Optional

import strawberry
from strawberry.types import Info

from app.database import transaction
from app.repositories import institutes as institute_repo
from app.resolvers.context import blocking
from app.resolvers.inputs import CreateInstituteInput, UpdateInstituteInput
from app.resolvers.types import Institute, PaginatedInstitutes
from app.services.authorization import require_admin, require_authenticated


@strawberry.type
class InstituteQuery:

    @strawberry.field
    @blocking
    def institute(self, info: Info, id: strawberry.ID) -> Optional[Institute]:
        require_authenticated(info.context.principal)
        return Institute.from_model(institute_repo.get_by_id(info.context.db, id))

    @strawberry.field
    @blocking
    def institutes(self, info: Info, limit: Optional[int] = None, offset: Optional[int] = None,
                   search: Optional[str] = None) -> PaginatedInstitutes:
        page = institute_repo.find_many(info.context.db, search=search, limit=limit, offset=offset)
        return PaginatedInstitutes.from_page(page)


@strawberry.type
class InstituteMutation:

    @strawberry.mutation
    @blocking
    def create_institute(self, info: Info, input: CreateInstituteInput) -> Institute:
        require_admin(info.context.principal)
        data = input.to_model()
        db = info.context.db
        with transaction(db):
            institute = institute_repo.create(db, data)
        return Institute.from_model(institute)

    @strawberry.mutation
    @blocking
    def update_institute(self, info: Info, id: strawberry.ID, input: UpdateInstituteInput) -> Institute:
        require_admin(info.context.principal)
        data = input.to_model()
        db = info.context.db
        with transaction(db):
            institute = institute_repo.update(db, id, data)
        return Institute.from_model(institute)

    @strawberry.mutation
    @blocking
    def delete_institute(self, info: Info, id: strawberry.ID) -> bool:
        require_admin(info.context.principal)
        db = info.context.db
        with transaction(db):
            return institute_repo.delete(db, id)
