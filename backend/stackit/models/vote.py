"""
StackIt Backend: Vote SQLAlchemy Model
=======================================

What:  ORM model for the `votes` ledger table.
Why:   One row per (user, target) enforces the one-vote-per-user rule at the
       database level as well as in VoteService.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from stackit.database import Base
from stackit.schemas.entities import new_id, utcnow


class VoteModel(Base):
    __tablename__ = "votes"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(String(64), ForeignKey("users.id"), nullable=False)

    # Tagged reference: target_type says which table target_id points into
    target_id: Mapped[str] = mapped_column(String(64), nullable=False)
    target_type: Mapped[str] = mapped_column(String(20), nullable=False)

    # up | down
    direction: Mapped[str] = mapped_column(String(10), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )

    __table_args__ = (
        UniqueConstraint("user_id", "target_type", "target_id", name="uq_votes_user_target"),
    )

    def __repr__(self) -> str:
        return (
            f"<VoteModel(user_id={self.user_id}, target={self.target_type}:{self.target_id}, "
            f"direction='{self.direction}')>"
        )
