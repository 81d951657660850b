"""
StackIt Backend: Question Route Handlers
=========================================

What:  List, detail, ask, answer, accept and vote endpoints.
How:   Each handler resolves the request's repositories and auth session,
       delegates to QuestionService, and presents the result.

Endpoints:
    GET  /api/questions                                    filtered list
    POST /api/questions                                    ask a question
    GET  /api/questions/{id}                               detail aggregate
    POST /api/questions/{id}/answers                       post an answer
    POST /api/questions/{id}/answers/{answer_id}/accept    toggle acceptance
    POST /api/questions/{id}/votes                         cast / retract / switch
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query, Response, status

from stackit.dependencies import get_auth_session, get_repositories
from stackit.repositories.base import Repositories
from stackit.schemas.common import ErrorResponse
from stackit.schemas.entities import SortMode, VoteTargetType
from stackit.schemas.question import (
    AnswerCreateRequest,
    AnswerResponse,
    AskQuestionRequest,
    AskQuestionResponse,
    QuestionDetailResponse,
    QuestionListResponse,
    VoteRequest,
    VoteResponse,
)
from stackit.services.auth import AuthSession
from stackit.services.presenters import (
    load_user_lookup,
    present_answer,
    present_detail,
    present_list,
)
from stackit.services.question_service import question_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/questions", tags=["Questions"])


@router.get(
    "",
    response_model=QuestionListResponse,
    summary="List questions",
    description=(
        "Questions filtered by free text (title, description, tags) and by "
        "selected tags (a question matches if it has any of them), then sorted."
    ),
)
async def list_questions(
    response: Response,
    q: str = Query(default="", description="Case-insensitive substring search"),
    tags: List[str] = Query(default=[], description="Repeat to select several tags"),
    sort: SortMode = Query(default=SortMode.NEWEST),
    repos: Repositories = Depends(get_repositories),
) -> QuestionListResponse:
    questions = await question_service.list_questions(repos, query=q, tags=tags, sort=sort)
    users = await load_user_lookup(repos)
    response.headers["X-Total-Count"] = str(len(questions))
    return QuestionListResponse(
        questions=present_list(questions, users),
        total_count=len(questions),
        query=q,
        tags=tags,
        sort=sort,
    )


@router.post(
    "",
    response_model=AskQuestionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Form validation failed", "model": ErrorResponse},
        503: {"description": "Submission failed, retry", "model": ErrorResponse},
    },
    summary="Ask a question",
)
async def ask_question(
    body: AskQuestionRequest,
    response: Response,
    repos: Repositories = Depends(get_repositories),
    session: AuthSession = Depends(get_auth_session),
) -> AskQuestionResponse:
    question = await question_service.ask_question(
        repos, body.title, body.description, body.tags, session
    )
    if question is None:
        response.status_code = status.HTTP_200_OK
        return AskQuestionResponse(message="Sign in to ask a question")
    users = await load_user_lookup(repos)
    return AskQuestionResponse(
        message="Question posted successfully!",
        question=present_detail(question, users),
    )


@router.get(
    "/{question_id}",
    response_model=QuestionDetailResponse,
    responses={404: {"description": "Question not found", "model": ErrorResponse}},
    summary="Get a question with its answers",
)
async def get_question(
    question_id: str,
    repos: Repositories = Depends(get_repositories),
) -> QuestionDetailResponse:
    question = await question_service.get_question(repos, question_id)
    users = await load_user_lookup(repos)
    return present_detail(question, users)


@router.post(
    "/{question_id}/answers",
    response_model=AnswerResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Empty answer or no session", "model": ErrorResponse},
        404: {"description": "Question not found", "model": ErrorResponse},
    },
    summary="Post an answer",
)
async def submit_answer(
    question_id: str,
    body: AnswerCreateRequest,
    repos: Repositories = Depends(get_repositories),
    session: AuthSession = Depends(get_auth_session),
) -> AnswerResponse:
    answer = await question_service.submit_answer(repos, question_id, body.content, session)
    users = await load_user_lookup(repos)
    return present_answer(answer, users)


@router.post(
    "/{question_id}/answers/{answer_id}/accept",
    response_model=QuestionDetailResponse,
    responses={404: {"description": "Question not found", "model": ErrorResponse}},
    summary="Accept or un-accept an answer",
    description="Only the question's author can change acceptance; other callers get the question unchanged.",
)
async def toggle_accept(
    question_id: str,
    answer_id: str,
    repos: Repositories = Depends(get_repositories),
    session: AuthSession = Depends(get_auth_session),
) -> QuestionDetailResponse:
    question = await question_service.toggle_accept(repos, question_id, answer_id, session)
    users = await load_user_lookup(repos)
    return present_detail(question, users)


@router.post(
    "/{question_id}/votes",
    response_model=VoteResponse,
    responses={404: {"description": "Question or answer not found", "model": ErrorResponse}},
    summary="Vote on the question or one of its answers",
    description=(
        "Voting again in the same direction retracts the vote; voting in the "
        "opposite direction switches it. Anonymous votes are ignored."
    ),
)
async def vote(
    question_id: str,
    body: VoteRequest,
    repos: Repositories = Depends(get_repositories),
    session: AuthSession = Depends(get_auth_session),
) -> VoteResponse:
    question, outcome = await question_service.vote(
        repos, question_id, body.target_id, body.target_type, body.direction, session
    )
    if body.target_type is VoteTargetType.QUESTION:
        votes = question.votes
    else:
        votes = question.find_answer(body.target_id).votes

    return VoteResponse(
        target_id=body.target_id,
        target_type=body.target_type,
        votes=votes,
        action=outcome.action.value if outcome else None,
        user_vote=outcome.current_direction if outcome else None,
    )
