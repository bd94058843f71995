"""
Authorization gate used by resolvers.

Only inspects the principal already attached to the request context; token
verification happens upstream in app.security.
"""

from typing import Optional

from app.errors import Forbidden, Unauthenticated
from app.security import Principal


def require_authenticated(principal: Optional[Principal]) -> Principal:
    if principal is None:
        raise Unauthenticated("Authentication required")
    return principal


def require_admin(principal: Optional[Principal]) -> Principal:
    principal = require_authenticated(principal)
    if not principal.is_admin:
        raise Forbidden("Admin access required")
    return principal
