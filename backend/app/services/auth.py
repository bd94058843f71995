"""
Authentication Service - sign-up, sign-in and current-user lookup.

Sign-up creates the User and its Student profile inside one transaction so a
failure between the two inserts leaves neither behind. Sign-in answers every
bad credential with the same Unauthenticated message, whether the email is
unknown or the password is wrong.
"""

from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from app.database import transaction
from app.errors import BadUserInput, Unauthenticated
from app.logging_config import get_logger, log_with_context
from app.models.institute import Institute
from app.models.student import Student
from app.models.user import User
from app.repositories import users as user_repo
from app.schemas import SignInInput, SignUpInput
from app.security import Principal, create_access_token, get_password_hash, verify_password
from app.services.authorization import require_authenticated

logger = get_logger("auth")

INVALID_CREDENTIALS = "Invalid credentials"


@dataclass
class AuthResult:
    token: str
    user: User


def _issue_token(user: User) -> str:
    return create_access_token(user.id, user.email, user.role)


def sign_up(db: Session, data: SignUpInput) -> AuthResult:
    """Register a student account and return a token for it."""
    email = data.email.lower()

    if user_repo.find_by_email(db, email) is not None:
        raise BadUserInput("User with this email already exists")
    if db.get(Institute, data.institute_id) is None:
        raise BadUserInput("Institute not found")

    password_hash = get_password_hash(data.password)

    with transaction(db):
        user = user_repo.create(db, email=email, password_hash=password_hash, role="student")
        db.add(Student(name=data.name, email=email,
                       institute_id=data.institute_id, user_id=user.id))
        db.flush()

    log_with_context(logger, "INFO", "User signed up",
                     context={"user_id": user.id, "institute_id": data.institute_id})
    return AuthResult(token=_issue_token(user), user=user)


def sign_in(db: Session, data: SignInInput) -> AuthResult:
    user = user_repo.find_by_email(db, data.email.strip().lower())
    if user is None or not verify_password(data.password, user.password):
        log_with_context(logger, "INFO", "Rejected sign-in attempt")
        raise Unauthenticated(INVALID_CREDENTIALS)

    log_with_context(logger, "INFO", "User signed in", context={"user_id": user.id})
    return AuthResult(token=_issue_token(user), user=user)


def current_user(db: Session, principal: Optional[Principal]) -> Optional[User]:
    """The user behind the request's principal (None if since deleted)."""
    principal = require_authenticated(principal)
    return user_repo.find_by_id(db, principal.id)
