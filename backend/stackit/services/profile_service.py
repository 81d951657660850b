"""
StackIt Backend: Profile Service
=================================

What:  Per-user statistics for the profile page: questions asked, answers
       given, accepted answers, reputation, and the user's recent questions.
How:   Computed from the question repository on every request. Nothing is
       cached or denormalized; reputation is read as stored.
"""

from dataclasses import dataclass, field
from typing import List

from stackit.exceptions import NotFoundError
from stackit.repositories.base import Repositories
from stackit.schemas.entities import Question, SortMode, User
from stackit.services.query_service import filter_and_sort

RECENT_QUESTIONS_LIMIT = 5


@dataclass
class Profile:
    user: User
    questions_asked: int = 0
    answers_given: int = 0
    accepted_answers: int = 0
    recent_questions: List[Question] = field(default_factory=list)

    @property
    def reputation(self) -> int:
        return self.user.reputation


async def build_profile(repos: Repositories, user_id: str) -> Profile:
    user = await repos.users.get_by_id(user_id)
    if user is None:
        raise NotFoundError(resource="user", resource_id=user_id)

    questions = await repos.questions.list()
    asked = [q for q in questions if q.author_id == user_id]
    answers = [a for q in questions for a in q.answers if a.author_id == user_id]

    return Profile(
        user=user,
        questions_asked=len(asked),
        answers_given=len(answers),
        accepted_answers=sum(1 for a in answers if a.is_accepted),
        recent_questions=filter_and_sort(asked, sort=SortMode.NEWEST)[:RECENT_QUESTIONS_LIMIT],
    )
