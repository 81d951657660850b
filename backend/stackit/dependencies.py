"""
StackIt Backend: Request Dependencies
======================================

What:  FastAPI dependencies that build the per-request `Repositories` bundle
       and `AuthSession`.
How:   REPOSITORY_BACKEND=memory hands every request the process-wide
       in-memory bundle. REPOSITORY_BACKEND=database opens one session per
       request and builds the SQL repositories over it, so everything a
       request writes commits or rolls back together.
"""

import logging
from typing import AsyncGenerator, Optional

from fastapi import Depends, Header

from stackit.config import settings
from stackit.database import session_scope
from stackit.repositories.base import Repositories
from stackit.repositories.memory import memory_repositories
from stackit.repositories.sql import SqlQuestionRepository, SqlUserRepository, SqlVoteRepository
from stackit.services.auth import AuthSession
from stackit.services.notification_service import notification_service

logger = logging.getLogger(__name__)


async def get_repositories() -> AsyncGenerator[Repositories, None]:
    if not settings.uses_database:
        yield memory_repositories
        return

    async with session_scope() as session:
        yield Repositories(
            questions=SqlQuestionRepository(session),
            users=SqlUserRepository(session),
            votes=SqlVoteRepository(session),
        )


async def get_auth_session(
    x_user_id: Optional[str] = Header(default=None),
    repos: Repositories = Depends(get_repositories),
) -> AuthSession:
    """
    Resolve the X-User-ID header to a user.

    A missing header or an id with no matching user yields an anonymous
    session. Logging out discards the user's notification store.
    """
    if not x_user_id:
        return AuthSession.anonymous()
    user = await repos.users.get_by_id(x_user_id)
    if user is None:
        logger.debug("Unknown X-User-ID %r treated as anonymous", x_user_id)
        return AuthSession.anonymous()
    return AuthSession(user=user, on_logout=notification_service.discard)
