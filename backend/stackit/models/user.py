"""
StackIt Backend: User SQLAlchemy Model
=======================================

What:  ORM model for the `users` table.
Who:   Read by SqlUserRepository; referenced by questions, answers and votes.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from stackit.database import Base
from stackit.schemas.entities import utcnow


class UserModel(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    username: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    avatar: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)

    # Display-only in this service; nothing writes it after creation
    reputation: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # guest | user | admin (validated by the Role enum on conversion)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="user")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )

    __table_args__ = (
        CheckConstraint("reputation >= 0", name="ck_users_reputation_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, username='{self.username}')>"
