"""
StackIt Backend: User Feedback Notifier
========================================

What:  Interface for transient user-facing feedback ("toasts"), plus the
       default implementation that writes them to the log.
Why:   The ask-question workflow reports success through a fire-and-forget
       call. Keeping it behind an interface lets a push channel replace the
       log without touching QuestionService.
"""

import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class Notifier(ABC):
    """Fire-and-forget feedback sink. Implementations must not raise."""

    @abstractmethod
    def notify(self, title: str, description: str = "") -> None:
        ...


class LogNotifier(Notifier):
    def notify(self, title: str, description: str = "") -> None:
        logger.info("Notify: %s | %s", title, description)


notifier = LogNotifier()
