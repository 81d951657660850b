"""
StackIt Backend: Authentication Context
========================================

What:  The `AuthSession` every domain operation receives explicitly.
Why:   Operations never read a global "current user". Tests build a session
       in one line, and anonymous callers are an ordinary value.
Who:   Built per request by `stackit.dependencies.get_auth_session`.

This is an identity stub, not a credential system: the user is whoever the
X-User-ID header names.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional

from stackit.schemas.entities import User


def _noop(user_id: str) -> None:
    return None


@dataclass
class AuthSession:
    user: Optional[User] = None
    on_logout: Callable[[str], None] = field(default=_noop, repr=False)

    @classmethod
    def anonymous(cls) -> "AuthSession":
        return cls(user=None)

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def user_id(self) -> Optional[str]:
        return self.user.id if self.user else None

    def logout(self) -> None:
        """Fire the logout hook for the current user, then forget the user."""
        if self.user is None:
            return
        self.on_logout(self.user.id)
        self.user = None
