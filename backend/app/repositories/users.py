"""User lookups and creation."""

from typing import Optional

from sqlalchemy.orm import Session

from app.errors import NotFound
from app.models.user import User


def get_by_id(db: Session, user_id: str) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFound("User not found")
    return user


def find_by_id(db: Session, user_id: str) -> Optional[User]:
    return db.get(User, user_id)


def find_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def create(db: Session, email: str, password_hash: str, role: str = "student") -> User:
    user = User(email=email, password=password_hash, role=role)
    db.add(user)
    db.flush()
    return user
