"""
StackIt Backend: Question Service (Business Logic Orchestrator)
================================================================

What:  Async workflows behind the question endpoints: list, detail, ask,
       answer, accept, vote.
Why:   Routes stay thin. Each workflow loads the aggregate from the
       repositories, applies one QuestionDetail operation, and writes the
       result back only when something changed.
Who:   Called by the route handlers in `stackit.routes.questions`.

Ask Question Flow:
    ┌───────────┐    ┌────────────┐    ┌──────────┐    ┌──────────────┐
    │ Validate  │───▶│ Normalize  │───▶│ Simulated│───▶│ Append       │
    │ (inline)  │    │ tags       │    │ latency  │    │ (tenacity)   │
    └───────────┘    └────────────┘    └──────────┘    └──────────────┘

    On failure:
    - Validation → ValidationError (400), nothing stored
    - Append still failing after retries → SubmissionError (503), nothing stored

Design Decision:
    QuestionService holds no per-request state. It receives the request's
    `Repositories` bundle and `AuthSession` on every call, so one instance
    serves the whole process and tests can pass in-memory repositories.
"""

import asyncio
import logging
import re
from typing import Iterable, List, Optional, Sequence, Tuple

from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    wait_random,
)

from stackit.config import settings
from stackit.exceptions import DatabaseError, NotFoundError, SubmissionError, ValidationError
from stackit.repositories.base import Repositories
from stackit.schemas.entities import (
    Answer,
    NotificationType,
    Question,
    SortMode,
    VoteDirection,
    VoteTargetType,
    normalize_tags,
    utcnow,
)
from stackit.services.auth import AuthSession
from stackit.services.notification_service import NotificationService, notification_service
from stackit.services.notifier import Notifier, notifier as default_notifier
from stackit.services.query_service import filter_and_sort
from stackit.services.question_detail import QuestionDetail
from stackit.services.vote_service import VoteOutcome

logger = logging.getLogger(__name__)

# ── Ask Question Rules ────────────────────────────────────────────────────
TITLE_MIN_LENGTH = 10
TITLE_MAX_LENGTH = 150
DESCRIPTION_MIN_LENGTH = 20

_HTML_TAG = re.compile(r"<[^>]*>")


def strip_html(text: str) -> str:
    return _HTML_TAG.sub("", text)


def validate_question_form(title: str, description: str, tags: Sequence[str]) -> None:
    """Raise ValidationError for the first rule the form breaks."""
    if not title.strip():
        raise ValidationError("Title is required", field="title")
    if len(title) < TITLE_MIN_LENGTH:
        raise ValidationError(
            f"Title must be at least {TITLE_MIN_LENGTH} characters long", field="title"
        )
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(
            f"Title must be at most {TITLE_MAX_LENGTH} characters long", field="title"
        )
    if len(strip_html(description).strip()) < DESCRIPTION_MIN_LENGTH:
        raise ValidationError(
            f"Description must be at least {DESCRIPTION_MIN_LENGTH} characters long",
            field="description",
        )
    if not tags:
        raise ValidationError("At least one tag is required", field="tags")


def submission_wait():
    """
    Backoff between append attempts: retry_min_wait doubling per attempt up to
    retry_max_wait, plus up to retry_min_wait of random jitter.
    """
    return wait_exponential(
        multiplier=settings.retry_min_wait,
        min=settings.retry_min_wait,
        max=settings.retry_max_wait,
    ) + wait_random(0, settings.retry_min_wait)


class QuestionService:
    """
    Orchestrates the question workflows.

    Error Handling Strategy:
        Validation failures raise ValidationError before any state changes.
        Missing questions raise NotFoundError. Repository failures surface as
        DatabaseError, except during ask_question, where they are retried and
        then converted into a retryable SubmissionError.
    """

    def __init__(
        self,
        notifier: Optional[Notifier] = None,
        notifications: Optional[NotificationService] = None,
    ):
        self.notifier = notifier or default_notifier
        self.notifications = notifications or notification_service

    # ── Reads ─────────────────────────────────────────────────────────────

    async def list_questions(
        self,
        repos: Repositories,
        query: str = "",
        tags: Iterable[str] = (),
        sort: SortMode = SortMode.NEWEST,
    ) -> List[Question]:
        questions = await repos.questions.list()
        return filter_and_sort(questions, query, tags, sort)

    async def get_question(self, repos: Repositories, question_id: str) -> Question:
        question = await repos.questions.get_by_id(question_id)
        if question is None:
            raise NotFoundError(resource="question", resource_id=question_id)
        return question

    # ── Detail interactions ───────────────────────────────────────────────

    async def submit_answer(
        self,
        repos: Repositories,
        question_id: str,
        content: str,
        session: AuthSession,
    ) -> Answer:
        question = await self.get_question(repos, question_id)
        answer = QuestionDetail(question).submit_answer(content, session)
        await repos.questions.update(question)
        logger.info("Answer %s posted on question %s by %s", answer.id, question.id, answer.author_id)

        if question.author_id != answer.author_id:
            self.notifications.push(
                question.author_id,
                NotificationType.ANSWER,
                f'{session.user.username} answered your question "{question.title}"',
                question.id,
            )
        return answer

    async def toggle_accept(
        self,
        repos: Repositories,
        question_id: str,
        answer_id: str,
        session: AuthSession,
    ) -> Question:
        """Toggle acceptance and return the question (unchanged when the call was a no-op)."""
        question = await self.get_question(repos, question_id)
        if not QuestionDetail(question).toggle_accept(answer_id, session):
            logger.debug(
                "Accept toggle ignored: question %s answer %s by %s",
                question_id, answer_id, session.user_id or "anonymous",
            )
            return question

        await repos.questions.update(question)
        accepted = question.find_answer(answer_id)
        logger.info(
            "Answer %s %s on question %s",
            answer_id, "accepted" if accepted.is_accepted else "unaccepted", question_id,
        )
        if accepted.is_accepted and accepted.author_id != question.author_id:
            self.notifications.push(
                accepted.author_id,
                NotificationType.ACCEPTED,
                "Your answer was accepted!",
                question.id,
            )
        return question

    async def vote(
        self,
        repos: Repositories,
        question_id: str,
        target_id: str,
        target_type: VoteTargetType,
        direction: VoteDirection,
        session: AuthSession,
    ) -> Tuple[Question, Optional[VoteOutcome]]:
        question = await self.get_question(repos, question_id)
        existing = None
        if session.user is not None:
            existing = await repos.votes.find(session.user.id, target_type, target_id)

        outcome = QuestionDetail(question).vote(target_id, target_type, direction, session, existing)
        if outcome is None:
            return question, None

        if outcome.vote_to_delete is not None:
            await repos.votes.delete(outcome.vote_to_delete)
        if outcome.vote_to_save is not None:
            await repos.votes.save(outcome.vote_to_save)

        # The stored count may include votes committed since `question` was read
        votes = await repos.questions.apply_vote_delta(
            question.id, target_type, target_id, outcome.delta
        )
        if target_type is VoteTargetType.QUESTION:
            question.votes = votes
        else:
            question.find_answer(target_id).votes = votes
        logger.info(
            "Vote %s on %s:%s (delta %+d)",
            outcome.action.value, target_type.value, target_id, outcome.delta,
        )
        return question, outcome

    # ── Ask Question ──────────────────────────────────────────────────────

    async def ask_question(
        self,
        repos: Repositories,
        title: str,
        description: str,
        tags: Iterable[str],
        session: AuthSession,
    ) -> Optional[Question]:
        """
        Validate and publish a new question.

        Returns the stored question, or None for an anonymous caller.

        Raises:
            ValidationError: the form breaks a rule (first failure wins)
            SubmissionError: the repository kept failing after all retries
        """
        if session.user is None:
            logger.debug("Ask question ignored: no authenticated user")
            return None

        normalized = normalize_tags(tags)
        validate_question_form(title, description, normalized)

        now = utcnow()
        question = Question(
            title=title,
            description=description,
            tags=normalized,
            author_id=session.user.id,
            created_at=now,
            updated_at=now,
        )

        await asyncio.sleep(settings.submission_delay_seconds)

        try:
            stored = await self._append_with_retry(repos, question)
        except DatabaseError as e:
            logger.error(
                "Question submission failed after %d attempts: %s",
                settings.retry_max_attempts, e.message,
            )
            raise SubmissionError(
                retry_after=5,
                context={"attempts": settings.retry_max_attempts, **e.context},
            ) from e

        logger.info("Question %s posted by %s with tags %s", stored.id, stored.author_id, stored.tags)
        self.notifier.notify(
            "Question posted successfully!",
            "Your question has been published and is now visible to the community.",
        )
        return stored

    @retry(
        retry=retry_if_exception_type(DatabaseError),
        stop=stop_after_attempt(settings.retry_max_attempts),
        wait=submission_wait(),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
    async def _append_with_retry(self, repos: Repositories, question: Question) -> Question:
        return await repos.questions.append(question)


question_service = QuestionService()
