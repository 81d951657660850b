"""
StackIt Backend: User and Tag Route Handlers
=============================================

What:  GET /api/users/{id} (profile with stats) and GET /api/tags (popular tags).
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from stackit.dependencies import get_repositories
from stackit.repositories.base import Repositories
from stackit.schemas.common import ErrorResponse
from stackit.schemas.question import TagResponse
from stackit.schemas.user import UserProfileResponse
from stackit.services.presenters import load_user_lookup, present_profile
from stackit.services.profile_service import build_profile
from stackit.services.query_service import popular_tags

router = APIRouter(prefix="/api", tags=["Users"])


@router.get(
    "/users/{user_id}",
    response_model=UserProfileResponse,
    responses={404: {"description": "User not found", "model": ErrorResponse}},
    summary="User profile with activity stats",
)
async def get_profile(
    user_id: str,
    repos: Repositories = Depends(get_repositories),
) -> UserProfileResponse:
    profile = await build_profile(repos, user_id)
    users = await load_user_lookup(repos)
    return present_profile(profile, users)


@router.get("/tags", response_model=List[TagResponse], summary="Popular tags")
async def list_tags(
    limit: Optional[int] = Query(default=None, ge=1, le=100),
    repos: Repositories = Depends(get_repositories),
) -> List[TagResponse]:
    tags = popular_tags(await repos.questions.list_tags(), limit)
    return [TagResponse.model_validate(tag) for tag in tags]
