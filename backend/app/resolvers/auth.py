"""Sign-up, sign-in and the current user."""

from typing import Optional

import strawberry
from strawberry.types import Info

from app.resolvers.context import blocking
from app.resolvers.inputs import SignInInput, SignUpInput
from app.resolvers.types import AuthPayload, User
from app.services import auth as auth_service


@strawberry.type
class AuthQuery:

    @strawberry.field
    @blocking
    def me(self, info: Info) -> Optional[User]:
        user = auth_service.current_user(info.context.db, info.context.principal)
        return User.from_model(user) if user else None


@strawberry.type
class AuthMutation:

    @strawberry.mutation
    @blocking
    def sign_up(self, info: Info, input: SignUpInput) -> AuthPayload:
        outcome = auth_service.sign_up(info.context.db, input.to_model())
        return AuthPayload(token=outcome.token, user=User.from_model(outcome.user))

    @strawberry.mutation
    @blocking
    def sign_in(self, info: Info, input: SignInInput) -> AuthPayload:
        outcome = auth_service.sign_in(info.context.db, input.to_model())
        return AuthPayload(token=outcome.token, user=User.from_model(outcome.user))
