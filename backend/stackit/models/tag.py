"""
StackIt Backend: Tag SQLAlchemy Model
======================================

What:  ORM model for the `tags` table.
Note:  questions_count is denormalized. SqlQuestionRepository.append bumps it
       in the same transaction that inserts the question.
"""

from typing import Optional

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from stackit.database import Base
from stackit.schemas.entities import new_id


class TagModel(Base):
    __tablename__ = "tags"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    questions_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<TagModel(name='{self.name}', questions_count={self.questions_count})>"
