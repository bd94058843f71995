"""
Error taxonomy surfaced to GraphQL clients.

Each error carries an ``extensions`` mapping with its code. graphql-core
copies the ``extensions`` of the original exception onto the located
GraphQL error, so resolvers and services raise these directly.

Usage:
    from app.errors import NotFound

    if not course:
        raise NotFound("Course not found")
"""

from typing import Any, Dict


class AcademicError(Exception):
    """Base exception for all classified request errors"""

    code = "INTERNAL_SERVER_ERROR"
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def extensions(self) -> Dict[str, Any]:
        return {"code": self.code}


class Unauthenticated(AcademicError):
    """No principal (or an invalid one) where one is required"""

    code = "UNAUTHENTICATED"
    default_message = "Authentication required"


class Forbidden(AcademicError):
    """Authenticated, but the role is insufficient"""

    code = "FORBIDDEN"
    default_message = "Admin access required"


class NotFound(AcademicError):
    code = "NOT_FOUND"
    default_message = "Not found"


class BadUserInput(AcademicError):
    """Validation, uniqueness or referential violation on write"""

    code = "BAD_USER_INPUT"
    default_message = "Invalid input"
