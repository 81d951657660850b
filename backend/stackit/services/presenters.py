"""
StackIt Backend: Response Presenters
=====================================

What:  Turn domain entities into API response models.
How:   Author ids are resolved through a user lookup built once per request.
       An author missing from the user repository is shown as "unknown"
       rather than failing the whole response.
"""

from typing import Dict, Iterable, List, Optional

from stackit.repositories.base import Repositories
from stackit.schemas.entities import Answer, Notification, Question, User
from stackit.schemas.notification import NotificationFeedResponse, NotificationResponse
from stackit.schemas.question import (
    AnswerResponse,
    AuthorSummary,
    QuestionDetailResponse,
    QuestionListItem,
)
from stackit.schemas.user import UserProfileResponse, UserResponse
from stackit.services.notification_service import NotificationStore, icon_for
from stackit.services.profile_service import Profile
from stackit.services.question_service import strip_html

PREVIEW_LENGTH = 150

UserLookup = Dict[str, User]


async def load_user_lookup(repos: Repositories) -> UserLookup:
    return {user.id: user for user in await repos.users.list()}


def text_preview(description: str, length: int = PREVIEW_LENGTH) -> str:
    """Plain-text preview: HTML removed, first `length` characters plus "..."."""
    text = strip_html(description)
    if len(text) <= length:
        return text
    return text[:length] + "..."


def author_summary(author_id: str, users: UserLookup) -> AuthorSummary:
    user: Optional[User] = users.get(author_id)
    if user is None:
        return AuthorSummary(id=author_id, username="unknown")
    return AuthorSummary(
        id=user.id, username=user.username, avatar=user.avatar, reputation=user.reputation
    )


def present_answer(answer: Answer, users: UserLookup) -> AnswerResponse:
    return AnswerResponse(
        id=answer.id,
        content=answer.content,
        question_id=answer.question_id,
        author=author_summary(answer.author_id, users),
        votes=answer.votes,
        is_accepted=answer.is_accepted,
        created_at=answer.created_at,
        updated_at=answer.updated_at,
    )


def present_list_item(question: Question, users: UserLookup) -> QuestionListItem:
    return QuestionListItem(
        id=question.id,
        title=question.title,
        text_preview=text_preview(question.description),
        tags=list(question.tags),
        author=author_summary(question.author_id, users),
        votes=question.votes,
        answer_count=len(question.answers),
        has_accepted_answer=question.accepted_answer_id is not None,
        created_at=question.created_at,
        updated_at=question.updated_at,
    )


def present_detail(question: Question, users: UserLookup) -> QuestionDetailResponse:
    return QuestionDetailResponse(
        id=question.id,
        title=question.title,
        description=question.description,
        tags=list(question.tags),
        author=author_summary(question.author_id, users),
        votes=question.votes,
        answers=[present_answer(a, users) for a in question.answers],
        accepted_answer_id=question.accepted_answer_id,
        created_at=question.created_at,
        updated_at=question.updated_at,
    )


def present_notification(notification: Notification) -> NotificationResponse:
    return NotificationResponse(
        id=notification.id,
        type=notification.type,
        icon=icon_for(notification.type),
        message=notification.message,
        target_id=notification.target_id,
        is_read=notification.is_read,
        created_at=notification.created_at,
    )


def present_feed(store: Optional[NotificationStore]) -> NotificationFeedResponse:
    if store is None:
        return NotificationFeedResponse()
    return NotificationFeedResponse(
        notifications=[present_notification(n) for n in store.notifications],
        unread_count=store.unread_count,
    )


def present_profile(profile: Profile, users: UserLookup) -> UserProfileResponse:
    return UserProfileResponse(
        user=UserResponse.model_validate(profile.user),
        reputation=profile.reputation,
        questions_asked=profile.questions_asked,
        answers_given=profile.answers_given,
        accepted_answers=profile.accepted_answers,
        recent_questions=[present_list_item(q, users) for q in profile.recent_questions],
    )


def present_list(questions: Iterable[Question], users: UserLookup) -> List[QuestionListItem]:
    return [present_list_item(q, users) for q in questions]
