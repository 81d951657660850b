"""
StackIt Backend: Question API Schemas
======================================

What:  Request and response models for the question, answer, vote and tag
       endpoints.
Why:   The API contract is separate from the domain entities in
       `schemas/entities.py`: responses embed author summaries and computed
       fields (text preview, answer count) that the entities do not store.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from stackit.schemas.entities import SortMode, VoteDirection, VoteTargetType


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class AuthorSummary(BaseModel):
    """The author block shown on cards and answers."""
    id: str
    username: str
    avatar: Optional[str] = None
    reputation: int = 0


class AnswerResponse(BaseModel):
    id: str
    content: str = Field(description="Rich text (HTML)")
    question_id: str
    author: AuthorSummary
    votes: int
    is_accepted: bool
    created_at: datetime
    updated_at: datetime


class QuestionListItem(BaseModel):
    """
    What:  Compact question representation for the home page list.
    Why:   The card shows a plain-text preview instead of the full rich-text
           description, plus the answer count and an accepted-answer badge.
    """
    id: str
    title: str
    text_preview: str = Field(description="Description without HTML, first 150 characters")
    tags: List[str]
    author: AuthorSummary
    votes: int
    answer_count: int
    has_accepted_answer: bool
    created_at: datetime
    updated_at: datetime


class QuestionListResponse(BaseModel):
    questions: List[QuestionListItem]
    total_count: int = Field(description="Number of questions after filtering")
    query: str = ""
    tags: List[str] = Field(default_factory=list)
    sort: SortMode = SortMode.NEWEST


class QuestionDetailResponse(BaseModel):
    """Full question aggregate: description, answers and acceptance state."""
    id: str
    title: str
    description: str = Field(description="Rich text (HTML)")
    tags: List[str]
    author: AuthorSummary
    votes: int
    answers: List[AnswerResponse]
    accepted_answer_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class AskQuestionResponse(BaseModel):
    """
    Returned by POST /api/questions.

    `question` is null when the request had no authenticated user: asking
    without a session is ignored rather than rejected.
    """
    message: str
    question: Optional[QuestionDetailResponse] = None


class VoteResponse(BaseModel):
    target_id: str
    target_type: VoteTargetType
    votes: int = Field(description="Target's vote count after this request")
    action: Optional[str] = Field(
        default=None, description="cast, retract or switch; null when ignored"
    )
    user_vote: Optional[VoteDirection] = Field(
        default=None, description="The caller's standing vote on the target"
    )


class TagResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    questions_count: int

    model_config = {"from_attributes": True}


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class AskQuestionRequest(BaseModel):
    """
    Field rules (length, required tags) are business rules checked by
    QuestionService so their messages match the form's inline errors.
    """
    title: str = ""
    description: str = ""
    tags: List[str] = Field(default_factory=list)


class AnswerCreateRequest(BaseModel):
    content: str = ""


class VoteRequest(BaseModel):
    target_id: str
    target_type: VoteTargetType
    direction: VoteDirection
