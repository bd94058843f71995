"""Result queries and mutations."""

from typing import Optional

import strawberry
from strawberry.types import Info

from app.database import transaction
from app.repositories import results as result_repo
from app.resolvers.context import blocking
from app.resolvers.inputs import CreateResultInput, UpdateResultInput
from app.resolvers.types import PaginatedResults, Result
from app.services.authorization import require_admin, require_authenticated


@strawberry.type
class ResultQuery:

    @strawberry.field
    @blocking
    def result(self, info: Info, id: strawberry.ID) -> Optional[Result]:
        require_authenticated(info.context.principal)
        return Result.from_model(result_repo.get_by_id(info.context.db, id))

    @strawberry.field
    @blocking
    def results(self, info: Info, limit: Optional[int] = None, offset: Optional[int] = None,
                year: Optional[int] = None) -> PaginatedResults:
        require_authenticated(info.context.principal)
        page = result_repo.find_many(info.context.db, year=year, limit=limit, offset=offset)
        return PaginatedResults.from_page(page)


@strawberry.type
class ResultMutation:

    @strawberry.mutation
    @blocking
    def create_result(self, info: Info, input: CreateResultInput) -> Result:
        require_admin(info.context.principal)
        data = input.to_model()
        db = info.context.db
        with transaction(db):
            result = result_repo.create(db, data)
        return Result.from_model(result)

    @strawberry.mutation
    @blocking
    def update_result(self, info: Info, id: strawberry.ID, input: UpdateResultInput) -> Result:
        require_admin(info.context.principal)
        data = input.to_model()
        db = info.context.db
        with transaction(db):
            result = result_repo.update(db, id, data)
        return Result.from_model(result)

    @strawberry.mutation
    @blocking
    def delete_result(self, info: Info, id: strawberry.ID) -> bool:
        require_admin(info.context.principal)
        db = info.context.db
        with transaction(db):
            return result_repo.delete(db, id)
