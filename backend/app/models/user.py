"""
User model - login accounts for the platform.

A user holds credentials and a role. Students sign up through a user account,
so each user owns zero or one Student profile.
"""

from sqlalchemy import Column, String, CheckConstraint
from sqlalchemy.orm import relationship
from app.database import Base
from app.models.mixins import IdentifiedMixin

ROLES = ("admin", "student")


class User(IdentifiedMixin, Base):
    """
    SQLAlchemy model for the users table.

    The password column only ever holds a bcrypt hash and is never exposed
    through the API.
    """
    __tablename__ = "users"

    email = Column(String(255), nullable=False, unique=True, index=True,
                   doc="Login email, unique across users")
    password = Column(String(255), nullable=False,
                      doc="bcrypt password hash")
    role = Column(String(16), nullable=False, default="student",
                  doc="Role claim: admin | student")

    # Relationship: one user has at most one student profile.
    # Deleting the user removes the profile (FK cascade); deleting the
    # profile leaves the user in place.
    student = relationship("Student", back_populates="user", uselist=False,
                           passive_deletes=True)

    __table_args__ = (
        CheckConstraint("role IN ('admin', 'student')", name="ck_users_role"),
    )

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
