"""
StackIt Backend: In-Memory Repositories
========================================

What:  Dict-backed implementations of the repository interfaces, seeded from
       `repositories/fixtures.py`.
Why:   Default backend. The service runs with no database, and every
       mutation lives only until the process restarts (or `reset()`).

Isolation:
    Every read returns a deep copy and every write stores a deep copy, so a
    caller holding an entity cannot change stored state behind the
    repository's back. This matches the SQL implementation, where entities
    are detached pydantic objects.
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from stackit.exceptions import DatabaseError, NotFoundError
from stackit.repositories.base import (
    QuestionRepository,
    Repositories,
    UserRepository,
    VoteRepository,
)
from stackit.repositories.fixtures import seed_questions, seed_tags, seed_users
from stackit.schemas.entities import Question, Tag, User, Vote, VoteTargetType

logger = logging.getLogger(__name__)


class InMemoryQuestionRepository(QuestionRepository):
    def __init__(
        self,
        questions: Optional[Iterable[Question]] = None,
        tags: Optional[Iterable[Tag]] = None,
    ):
        self.reset(questions, tags)

    def reset(
        self,
        questions: Optional[Iterable[Question]] = None,
        tags: Optional[Iterable[Tag]] = None,
    ) -> None:
        """Replace all state (fixtures when no data is given)."""
        questions = seed_questions() if questions is None else questions
        tags = seed_tags() if tags is None else tags
        # dict preserves insertion order, which is the storage order `list` reports
        self._questions: Dict[str, Question] = {
            q.id: q.model_copy(deep=True) for q in questions
        }
        self._tags: Dict[str, Tag] = {t.name: t.model_copy() for t in tags}

    async def list(self) -> List[Question]:
        return [q.model_copy(deep=True) for q in self._questions.values()]

    async def get_by_id(self, question_id: str) -> Optional[Question]:
        question = self._questions.get(question_id)
        return question.model_copy(deep=True) if question else None

    async def append(self, question: Question) -> Question:
        if question.id in self._questions:
            raise DatabaseError(
                message="Could not save the question. Please try again.",
                context={"question_id": question.id, "reason": "duplicate id"},
            )
        self._questions[question.id] = question.model_copy(deep=True)
        for name in question.tags:
            tag = self._tags.get(name)
            if tag is None:
                self._tags[name] = Tag(name=name, questions_count=1)
            else:
                tag.questions_count += 1
        logger.debug("Appended question %s (%d tags)", question.id, len(question.tags))
        return question.model_copy(deep=True)

    async def update(self, question: Question) -> Question:
        stored = self._questions.get(question.id)
        if stored is None:
            raise NotFoundError(resource="question", resource_id=question.id)

        stored.accepted_answer_id = question.accepted_answer_id
        stored.updated_at = question.updated_at
        stored.tags = list(question.tags)

        # Same merge as the SQL repository: vote counts stay as stored
        existing = {a.id: a for a in stored.answers}
        for answer in question.answers:
            stored_answer = existing.get(answer.id)
            if stored_answer is None:
                stored.answers.append(answer.model_copy())
                continue
            stored_answer.is_accepted = answer.is_accepted
            stored_answer.updated_at = answer.updated_at
        return stored.model_copy(deep=True)

    async def apply_vote_delta(
        self,
        question_id: str,
        target_type: VoteTargetType,
        target_id: str,
        delta: int,
    ) -> int:
        stored = self._questions.get(question_id)
        if stored is None:
            raise NotFoundError(resource="question", resource_id=question_id)

        if target_type is VoteTargetType.QUESTION:
            if target_id != stored.id:
                raise NotFoundError(resource="question", resource_id=target_id)
            stored.votes += delta
            return stored.votes

        answer = stored.find_answer(target_id)
        if answer is None:
            raise NotFoundError(resource="answer", resource_id=target_id)
        answer.votes += delta
        return answer.votes

    async def list_tags(self) -> List[Tag]:
        return [t.model_copy() for t in self._tags.values()]


class InMemoryUserRepository(UserRepository):
    def __init__(self, users: Optional[Iterable[User]] = None):
        self.reset(users)

    def reset(self, users: Optional[Iterable[User]] = None) -> None:
        users = seed_users() if users is None else users
        self._users: Dict[str, User] = {u.id: u.model_copy() for u in users}

    async def list(self) -> List[User]:
        return [u.model_copy() for u in self._users.values()]

    async def get_by_id(self, user_id: str) -> Optional[User]:
        user = self._users.get(user_id)
        return user.model_copy() if user else None


VoteKey = Tuple[str, VoteTargetType, str]


class InMemoryVoteRepository(VoteRepository):
    def __init__(self, votes: Optional[Iterable[Vote]] = None):
        self.reset(votes)

    def reset(self, votes: Optional[Iterable[Vote]] = None) -> None:
        self._votes: Dict[VoteKey, Vote] = {}
        for vote in votes or ():
            self._votes[self._key(vote)] = vote.model_copy()

    @staticmethod
    def _key(vote: Vote) -> VoteKey:
        return (vote.user_id, vote.target_type, vote.target_id)

    async def find(
        self, user_id: str, target_type: VoteTargetType, target_id: str
    ) -> Optional[Vote]:
        vote = self._votes.get((user_id, target_type, target_id))
        return vote.model_copy() if vote else None

    async def save(self, vote: Vote) -> Vote:
        self._votes[self._key(vote)] = vote.model_copy()
        return vote.model_copy()

    async def delete(self, vote: Vote) -> None:
        self._votes.pop(self._key(vote), None)

    def __len__(self) -> int:
        return len(self._votes)


# Process-wide state for the memory backend (see dependencies.get_repositories)
memory_repositories = Repositories(
    questions=InMemoryQuestionRepository(),
    users=InMemoryUserRepository(),
    votes=InMemoryVoteRepository(),
)


def reset_memory_repositories() -> None:
    """Reseed every in-memory repository from the fixtures."""
    memory_repositories.questions.reset()
    memory_repositories.users.reset()
    memory_repositories.votes.reset()
