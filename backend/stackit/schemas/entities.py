"""
StackIt Backend: Domain Entities
=================================

What:  Pydantic records for User, Question, Answer, Vote, Notification and Tag,
       plus the enums that constrain them.
Why:   The query layer, the question aggregate and the repositories all speak
       these types. ORM rows convert into them through `from_attributes`, so
       the services never see SQLAlchemy objects.

Relationships:
    Question ──< Answer        (answers are owned, ordered, append-only)
    Question >── User          (author_id)
    Answer   >── Question      (question_id is a back-reference only)
    Vote     ──> Question | Answer   (target_id + target_type)
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Iterable, List, Optional

from pydantic import BaseModel, Field, field_validator

MAX_TAGS = 5


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return uuid.uuid4().hex


def normalize_tags(tags: Iterable[str]) -> List[str]:
    """
    Lowercase and trim each tag, drop blanks and duplicates, keep the first
    MAX_TAGS in input order.
    """
    normalized: List[str] = []
    for tag in tags:
        name = tag.lower().strip()
        if name and name not in normalized and len(normalized) < MAX_TAGS:
            normalized.append(name)
    return normalized


class Role(str, Enum):
    GUEST = "guest"
    USER = "user"
    ADMIN = "admin"


class NotificationType(str, Enum):
    ANSWER = "answer"
    COMMENT = "comment"
    MENTION = "mention"
    ACCEPTED = "accepted"


class VoteTargetType(str, Enum):
    QUESTION = "question"
    ANSWER = "answer"


class VoteDirection(str, Enum):
    UP = "up"
    DOWN = "down"

    @property
    def weight(self) -> int:
        """+1 for an upvote, -1 for a downvote."""
        return 1 if self is VoteDirection.UP else -1


class SortMode(str, Enum):
    NEWEST = "newest"
    VOTES = "votes"
    ACTIVITY = "activity"


class User(BaseModel):
    id: str
    username: str
    email: str
    avatar: Optional[str] = None
    reputation: int = Field(default=0, ge=0)
    role: Role = Role.USER
    created_at: datetime = Field(default_factory=utcnow)

    model_config = {"from_attributes": True}


class Answer(BaseModel):
    id: str = Field(default_factory=new_id)
    content: str
    question_id: str
    author_id: str
    votes: int = 0
    is_accepted: bool = False
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    model_config = {"from_attributes": True}


class Question(BaseModel):
    """
    A posted question together with its answers.

    Invariant: at most one answer has is_accepted = True, and
    accepted_answer_id is that answer's id (or None when none is accepted).
    `stackit.services.question_detail.QuestionDetail` is the only code that
    changes acceptance state.

    Tags are normalized (`normalize_tags`) on construction and on assignment.
    """

    id: str = Field(default_factory=new_id)
    title: str
    description: str
    tags: List[str] = Field(default_factory=list)
    author_id: str
    votes: int = 0
    answers: List[Answer] = Field(default_factory=list)
    accepted_answer_id: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    model_config = {"from_attributes": True, "validate_assignment": True}

    @field_validator("tags")
    @classmethod
    def normalize_tag_list(cls, v: List[str]) -> List[str]:
        return normalize_tags(v)

    def find_answer(self, answer_id: str) -> Optional[Answer]:
        for answer in self.answers:
            if answer.id == answer_id:
                return answer
        return None


class Vote(BaseModel):
    id: str = Field(default_factory=new_id)
    user_id: str
    target_id: str
    target_type: VoteTargetType
    direction: VoteDirection
    created_at: datetime = Field(default_factory=utcnow)

    model_config = {"from_attributes": True}


class Notification(BaseModel):
    id: str = Field(default_factory=new_id)
    user_id: str
    type: NotificationType
    message: str
    target_id: str
    is_read: bool = False
    created_at: datetime = Field(default_factory=utcnow)


class Tag(BaseModel):
    id: str = Field(default_factory=new_id)
    name: str
    description: Optional[str] = None
    questions_count: int = Field(default=0, ge=0)

    model_config = {"from_attributes": True}
