"""
StackIt Backend: Notification Store
====================================

What:  Per-user notification list with read/unread state, a derived unread
       count, and a registry that scopes stores to authenticated users.
Why:   The notification bell needs the count on every page; the feed needs
       the list in arrival order.
How:   `NotificationStore` owns one user's list. `NotificationService` creates
       a store, seeded with the fixture notifications, on the user's first
       access and drops it on logout.

State Model:
    Notifications live in process memory only, with either repository
    backend. The unread count is computed from the list on every read, so it
    can never drift from the read flags.

Notification icons:
    answer    → message-square
    mention   → at-sign
    accepted  → check-circle
    comment   → bell
"""

import logging
from typing import Dict, Iterable, List, Optional

from stackit.repositories.fixtures import seed_notifications
from stackit.schemas.entities import Notification, NotificationType, User

logger = logging.getLogger(__name__)

# Exhaustive over NotificationType; checked at import
NOTIFICATION_ICONS: Dict[NotificationType, str] = {
    NotificationType.ANSWER: "message-square",
    NotificationType.MENTION: "at-sign",
    NotificationType.ACCEPTED: "check-circle",
    NotificationType.COMMENT: "bell",
}

_missing_icons = set(NotificationType) - set(NOTIFICATION_ICONS)
if _missing_icons:
    raise RuntimeError(f"No icon for notification types: {sorted(t.value for t in _missing_icons)}")


def icon_for(notification_type: NotificationType) -> str:
    return NOTIFICATION_ICONS[notification_type]


class NotificationStore:
    """One user's notifications, in insertion order."""

    def __init__(self, user_id: str, notifications: Optional[Iterable[Notification]] = None):
        self.user_id = user_id
        self._notifications: List[Notification] = list(notifications or ())

    @property
    def notifications(self) -> List[Notification]:
        return list(self._notifications)

    @property
    def unread_count(self) -> int:
        return sum(1 for n in self._notifications if not n.is_read)

    def get(self, notification_id: str) -> Optional[Notification]:
        for notification in self._notifications:
            if notification.id == notification_id:
                return notification
        return None

    def mark_as_read(self, notification_id: str) -> bool:
        """
        Mark one notification read.

        Returns True if a notification changed state. An unknown id or an
        already-read notification is a no-op.
        """
        notification = self.get(notification_id)
        if notification is None or notification.is_read:
            return False
        notification.is_read = True
        return True

    def mark_all_as_read(self) -> int:
        """Mark every notification read. Returns how many changed."""
        changed = 0
        for notification in self._notifications:
            if not notification.is_read:
                notification.is_read = True
                changed += 1
        return changed

    def push(self, notification: Notification) -> Notification:
        self._notifications.append(notification)
        return notification


class NotificationService:
    """
    Registry of notification stores keyed by user id.

    Stores exist only for users who have been seen. `push` for a user with no
    store creates and seeds one first, so a notification sent before the
    recipient's first visit still shows up next to the seeded ones.
    """

    def __init__(self) -> None:
        self._stores: Dict[str, NotificationStore] = {}

    def store_for(self, user: User) -> NotificationStore:
        return self._store_for_id(user.id)

    def _store_for_id(self, user_id: str) -> NotificationStore:
        store = self._stores.get(user_id)
        if store is None:
            store = NotificationStore(user_id, seed_notifications(user_id))
            self._stores[user_id] = store
            logger.debug("Seeded notification store for user %s", user_id)
        return store

    def push(
        self,
        user_id: str,
        notification_type: NotificationType,
        message: str,
        target_id: str,
    ) -> Notification:
        notification = Notification(
            user_id=user_id,
            type=notification_type,
            message=message,
            target_id=target_id,
        )
        self._store_for_id(user_id).push(notification)
        logger.info(
            "Notification %s for user %s (target %s)",
            notification_type.value, user_id, target_id,
        )
        return notification

    def discard(self, user_id: str) -> None:
        """Drop a user's store (logout). The next access reseeds it."""
        if self._stores.pop(user_id, None) is not None:
            logger.debug("Discarded notification store for user %s", user_id)

    def reset(self) -> None:
        self._stores.clear()


notification_service = NotificationService()
