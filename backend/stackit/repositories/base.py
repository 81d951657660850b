"""
StackIt Backend: Repository Interfaces
=======================================

What:  Abstract storage contracts for questions, users and votes.
Why:   The filter/sort layer and the question aggregate must not know where
       data lives. Routes receive a `Repositories` bundle and hand it to the
       services; swapping the in-memory fixtures for PostgreSQL touches only
       the dependency that builds the bundle.

Implementations:
    - repositories/memory.py: seeded fixtures, deep-copy isolation (default)
    - repositories/sql.py:    async SQLAlchemy over one session per request
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from stackit.schemas.entities import Question, Tag, User, Vote, VoteTargetType


class QuestionRepository(ABC):
    """
    Capability set {list, get_by_id, append} plus update and list_tags.

    Contract:
        - Returned entities are detached copies. Mutating them changes
          nothing until `update` is called with the mutated entity.
        - `list` returns questions in storage order; callers sort.
        - `append` also maintains the denormalized Tag.questions_count.
        - Vote counts change only through `apply_vote_delta`; `update` never
          writes them.
    """

    @abstractmethod
    async def list(self) -> List[Question]:
        ...

    @abstractmethod
    async def get_by_id(self, question_id: str) -> Optional[Question]:
        ...

    @abstractmethod
    async def append(self, question: Question) -> Question:
        """Store a new question. Raises DatabaseError if the id is taken."""
        ...

    @abstractmethod
    async def update(self, question: Question) -> Question:
        """
        Persist acceptance state, tags, updated_at and new answers of an
        existing question. Vote counts on the entity are ignored.

        Raises NotFoundError if the question does not exist.
        """
        ...

    @abstractmethod
    async def apply_vote_delta(
        self,
        question_id: str,
        target_type: VoteTargetType,
        target_id: str,
        delta: int,
    ) -> int:
        """
        Add `delta` to the stored vote count of the question or one of its
        answers in a single atomic step, and return the new count.

        Raises NotFoundError if the target does not belong to the question.
        """
        ...

    @abstractmethod
    async def list_tags(self) -> List[Tag]:
        ...


class UserRepository(ABC):
    @abstractmethod
    async def list(self) -> List[User]:
        ...

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        ...


class VoteRepository(ABC):
    """Vote ledger: at most one Vote per (user, target_type, target_id)."""

    @abstractmethod
    async def find(
        self, user_id: str, target_type: VoteTargetType, target_id: str
    ) -> Optional[Vote]:
        ...

    @abstractmethod
    async def save(self, vote: Vote) -> Vote:
        """Insert the vote, or overwrite the direction of the existing one."""
        ...

    @abstractmethod
    async def delete(self, vote: Vote) -> None:
        ...


@dataclass
class Repositories:
    """The repositories one request works against (one transaction in SQL)."""

    questions: QuestionRepository
    users: UserRepository
    votes: VoteRepository
