"""
Password hashing and JWT handling.

Tokens are HS256-signed (python-jose) and carry the principal's id, email
and role plus an expiry. A missing, malformed or expired token never fails a
request on its own: the request simply runs without a principal and each
resolver decides whether it needs one.
"""

import os
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
from jose import JWTError, jwt

from app.logging_config import get_logger, log_with_context

logger = get_logger("auth")

_FALLBACK_SECRET = "fallback-secret-key-change-me"

JWT_SECRET = os.getenv("JWT_SECRET", _FALLBACK_SECRET)
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRES_MINUTES = int(os.getenv("JWT_EXPIRES_MINUTES", str(24 * 60)))
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "10"))

if JWT_SECRET == _FALLBACK_SECRET:
    log_with_context(logger, "WARNING",
                     "JWT_SECRET not set, using fallback secret (not secure for production)")


@dataclass(frozen=True)
class Principal:
    """The authenticated identity attached to a request."""
    id: str
    email: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


def get_password_hash(password: str) -> str:
    """Hash password with BCRYPT_ROUNDS rounds"""
    # Bcrypt has a 72 byte limit - truncate password if necessary
    password_bytes = password.encode("utf-8")[:72]
    hashed = bcrypt.hashpw(password_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS))
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    password_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(password_bytes, hashed_password.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def create_access_token(user_id: str, email: str, role: str,
                        expires_delta: Optional[timedelta] = None) -> str:
    """Create a signed token embedding id, email and role."""
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=JWT_EXPIRES_MINUTES))
    to_encode = {"id": user_id, "email": email, "role": role, "exp": expire}
    return jwt.encode(to_encode, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_token(token: str) -> Dict[str, Any]:
    """Verify signature and expiry; raises JWTError when either fails."""
    return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])


def principal_from_authorization(authorization: Optional[str]) -> Optional[Principal]:
    """
    Resolve an ``Authorization: Bearer <token>`` header into a Principal.

    Returns None for an absent header, a non-bearer scheme, or a token that
    fails verification.
    """
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None

    try:
        payload = decode_token(token.strip())
    except JWTError as e:
        log_with_context(logger, "INFO", "Ignoring invalid bearer token: {}".format(e))
        return None

    try:
        return Principal(id=str(payload["id"]), email=payload["email"], role=payload["role"])
    except KeyError as e:
        log_with_context(logger, "INFO", "Ignoring token without claim {}".format(e))
        return None
