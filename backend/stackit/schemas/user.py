"""
StackIt Backend: User API Schemas
==================================

What:  Current-user, profile and logout response models.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from stackit.schemas.entities import Role
from stackit.schemas.question import QuestionListItem


class UserResponse(BaseModel):
    id: str
    username: str
    email: str
    avatar: Optional[str] = None
    reputation: int
    role: Role
    created_at: datetime

    model_config = {"from_attributes": True}


class UserProfileResponse(BaseModel):
    """
    What:  Profile page payload.
    Why:   The page shows reputation next to the three activity counters and
           the user's most recent questions.
    """
    user: UserResponse
    reputation: int
    questions_asked: int
    answers_given: int
    accepted_answers: int
    recent_questions: List[QuestionListItem] = Field(default_factory=list)


class CurrentUserResponse(BaseModel):
    authenticated: bool
    user: Optional[UserResponse] = None


class LogoutResponse(BaseModel):
    message: str = "Logged out"
