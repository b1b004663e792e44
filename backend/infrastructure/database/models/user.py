"""
User database model.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


class UserRole(str, Enum):
    """User roles enumeration."""

    USER = "user"
    ADMIN = "admin"


class User(Base, TimestampMixin):
    """User account model.

    An admin without a newsroom is a super-admin and may administer every
    tenant. Everyone else is scoped to ``newsroom_id``.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(
        String(50),
        default=UserRole.USER.value,
        nullable=False,
    )

    newsroom_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("newsrooms.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    last_login: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    login_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    @property
    def is_super_admin(self) -> bool:
        """Admins not bound to a newsroom administer all tenants."""
        return self.is_admin and self.newsroom_id is None

    def can_access_newsroom(self, newsroom_id: int) -> bool:
        return self.is_super_admin or self.newsroom_id == newsroom_id

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
