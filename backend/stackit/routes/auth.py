"""
StackIt Backend: Auth Route Handlers
=====================================

What:  Who am I, and logout.
Note:  Identity comes from the X-User-ID header. Logout does not invalidate
       anything client-side; it discards the user's notification store so
       the next visit starts from the seeded notifications.
"""

import logging

from fastapi import APIRouter, Depends

from stackit.dependencies import get_auth_session
from stackit.schemas.user import CurrentUserResponse, LogoutResponse, UserResponse
from stackit.services.auth import AuthSession

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.get("/me", response_model=CurrentUserResponse, summary="Current user")
async def me(session: AuthSession = Depends(get_auth_session)) -> CurrentUserResponse:
    if session.user is None:
        return CurrentUserResponse(authenticated=False)
    return CurrentUserResponse(authenticated=True, user=UserResponse.model_validate(session.user))


@router.post("/logout", response_model=LogoutResponse, summary="Log out")
async def logout(session: AuthSession = Depends(get_auth_session)) -> LogoutResponse:
    user_id = session.user_id
    session.logout()
    if user_id:
        logger.info("User %s logged out", user_id)
    return LogoutResponse()
