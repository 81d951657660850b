"""
StackIt Backend: Question and Answer SQLAlchemy Models
=======================================================

What:  ORM models for the `questions` and `answers` tables.
Who:   Used by SqlQuestionRepository and by Alembic.

Table Design:
    - tags live on the question row as a JSON array. The ordered-set
      semantics (lowercase, deduplicated, max 5) are enforced before insert,
      and the tag filter always needs the full list alongside the question.
    - answers load eagerly with `selectin`: every read path (detail view,
      list preview answer counts) needs them, and async sessions cannot
      lazy-load on attribute access.
    - accepted_answer_id carries no foreign key. The answer row references
      the question, and a second FK in the other direction would make
      inserts order-dependent.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Index, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stackit.database import Base
from stackit.schemas.entities import new_id, utcnow


class QuestionModel(Base):
    __tablename__ = "questions"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(String(150), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    tags: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    author_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("users.id"), nullable=False
    )
    votes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    accepted_answer_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )

    answers: Mapped[List["AnswerModel"]] = relationship(
        back_populates="question",
        order_by="AnswerModel.created_at",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    # The three sort modes read these columns in descending order
    __table_args__ = (
        Index("idx_questions_created_at", created_at.desc()),
        Index("idx_questions_updated_at", updated_at.desc()),
        Index("idx_questions_votes", votes.desc()),
    )

    def __repr__(self) -> str:
        return f"<QuestionModel(id={self.id}, votes={self.votes}, answers={len(self.answers)})>"


class AnswerModel(Base):
    __tablename__ = "answers"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_id)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    question_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("questions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    author_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("users.id"), nullable=False
    )
    votes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_accepted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )

    question: Mapped[QuestionModel] = relationship(back_populates="answers")

    def __repr__(self) -> str:
        return f"<AnswerModel(id={self.id}, question_id={self.question_id}, accepted={self.is_accepted})>"
