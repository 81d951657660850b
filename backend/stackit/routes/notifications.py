"""
StackIt Backend: Notification Route Handlers
=============================================

What:  The current user's notification feed and its read-state actions.
Why:   Anonymous callers get an empty feed rather than an error, so the
       header bell can render before sign-in.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends

from stackit.dependencies import get_auth_session
from stackit.schemas.notification import NotificationFeedResponse
from stackit.services.auth import AuthSession
from stackit.services.notification_service import NotificationStore, notification_service
from stackit.services.presenters import present_feed

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/notifications", tags=["Notifications"])


def _store(session: AuthSession) -> Optional[NotificationStore]:
    if session.user is None:
        return None
    return notification_service.store_for(session.user)


@router.get("", response_model=NotificationFeedResponse, summary="Notification feed")
async def get_notifications(
    session: AuthSession = Depends(get_auth_session),
) -> NotificationFeedResponse:
    return present_feed(_store(session))


@router.post(
    "/{notification_id}/read",
    response_model=NotificationFeedResponse,
    summary="Mark one notification read",
    description="Unknown or already-read ids leave the feed unchanged.",
)
async def mark_as_read(
    notification_id: str,
    session: AuthSession = Depends(get_auth_session),
) -> NotificationFeedResponse:
    store = _store(session)
    if store is not None and store.mark_as_read(notification_id):
        logger.debug("Notification %s read by %s", notification_id, session.user_id)
    return present_feed(store)


@router.post("/read-all", response_model=NotificationFeedResponse, summary="Mark all read")
async def mark_all_as_read(
    session: AuthSession = Depends(get_auth_session),
) -> NotificationFeedResponse:
    store = _store(session)
    if store is not None:
        changed = store.mark_all_as_read()
        logger.debug("%d notifications marked read for %s", changed, session.user_id)
    return present_feed(store)
