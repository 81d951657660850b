"""
StackIt Backend: Notification API Schemas
==========================================

What:  The notification feed returned to the bell dropdown.
"""

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from stackit.schemas.entities import NotificationType


class NotificationResponse(BaseModel):
    id: str
    type: NotificationType
    icon: str = Field(description="Icon name for the notification type")
    message: str
    target_id: str
    is_read: bool
    created_at: datetime


class NotificationFeedResponse(BaseModel):
    """Anonymous callers get an empty feed with unread_count 0."""
    notifications: List[NotificationResponse] = Field(default_factory=list)
    unread_count: int = 0
