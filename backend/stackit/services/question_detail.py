"""
StackIt Backend: Question Detail Aggregate
===========================================

What:  The single-question aggregate: answers, acceptance state and vote
       counts, changed in place by the three detail-page interactions.
Why:   Acceptance has an invariant spanning several records (at most one
       accepted answer, mirrored in accepted_answer_id). Every change to it
       goes through this class, so the invariant is checked in one place.
Who:   QuestionService loads a Question, wraps it, calls one operation and
       persists the result if it changed.

Authorization failures are silent: `toggle_accept` by anyone but the author
and `vote` by an anonymous caller return without changing anything.
"""

import logging
from typing import Optional

from stackit.exceptions import NotFoundError, ValidationError
from stackit.schemas.entities import (
    Answer,
    Question,
    Vote,
    VoteDirection,
    VoteTargetType,
    utcnow,
)
from stackit.services.auth import AuthSession
from stackit.services.vote_service import VoteOutcome, resolve_vote

logger = logging.getLogger(__name__)


class QuestionDetail:
    def __init__(self, question: Question):
        self.question = question

    def submit_answer(self, content: str, session: AuthSession) -> Answer:
        """
        Append an answer by the session's user.

        Raises:
            ValidationError: no authenticated user, or blank content.
                The question is left untouched.
        """
        if session.user is None:
            raise ValidationError("You must be logged in to post an answer", field="user")
        if not content or not content.strip():
            raise ValidationError("Answer content cannot be empty", field="content")

        now = utcnow()
        answer = Answer(
            content=content,
            question_id=self.question.id,
            author_id=session.user.id,
            votes=0,
            is_accepted=False,
            created_at=now,
            updated_at=now,
        )
        self.question.answers.append(answer)
        self.question.updated_at = now
        return answer

    def toggle_accept(self, answer_id: str, session: AuthSession) -> bool:
        """
        Accept the answer, or un-accept it if it is the accepted one.

        Only the question's author may do this. Returns True when the
        acceptance state changed.
        """
        if session.user is None or session.user.id != self.question.author_id:
            return False
        target = self.question.find_answer(answer_id)
        if target is None:
            return False

        now = utcnow()
        if target.is_accepted:
            target.is_accepted = False
            target.updated_at = now
            self.question.accepted_answer_id = None
        else:
            for answer in self.question.answers:
                if answer.is_accepted:
                    answer.is_accepted = False
                    answer.updated_at = now
            target.is_accepted = True
            target.updated_at = now
            self.question.accepted_answer_id = target.id

        self._check_acceptance()
        return True

    def vote(
        self,
        target_id: str,
        target_type: VoteTargetType,
        direction: VoteDirection,
        session: AuthSession,
        existing: Optional[Vote] = None,
    ) -> Optional[VoteOutcome]:
        """
        Apply the caller's vote to the question or one of its answers.

        `existing` is the caller's current vote on the target, from the vote
        ledger. Returns the outcome the caller must write back to the ledger,
        or None for an anonymous caller.

        Raises:
            NotFoundError: target is not this question or one of its answers.
        """
        logger.info(
            "Vote observed: %s %s:%s by %s",
            direction.value, target_type.value, target_id, session.user_id or "anonymous",
        )
        if target_type is VoteTargetType.QUESTION:
            if target_id != self.question.id:
                raise NotFoundError(resource="question", resource_id=target_id)
            target = self.question
        else:
            target = self.question.find_answer(target_id)
            if target is None:
                raise NotFoundError(resource="answer", resource_id=target_id)

        if session.user is None:
            return None

        outcome = resolve_vote(existing, session.user.id, target_id, target_type, direction)
        target.votes += outcome.delta
        return outcome

    def _check_acceptance(self) -> None:
        accepted = [a.id for a in self.question.answers if a.is_accepted]
        expected = [self.question.accepted_answer_id] if self.question.accepted_answer_id else []
        if accepted != expected:
            raise RuntimeError(
                f"Acceptance state of question {self.question.id} is inconsistent: "
                f"flagged={accepted} accepted_answer_id={self.question.accepted_answer_id}"
            )
