"""
StackIt Backend: SQLAlchemy Repositories
=========================================

What:  Async SQLAlchemy implementations of the repository interfaces.
Who:   Built by `stackit.dependencies.get_repositories` when
       REPOSITORY_BACKEND=database, all three sharing one request session.
How:   Rows are converted to pydantic entities with `model_validate` before
       they leave the repository, so callers never hold live ORM objects.
       Writes only flush; the surrounding `session_scope()` commits.

Error Handling:
    SQLAlchemyError is logged with the operation name and re-raised as
    DatabaseError (500). Internal details stay in the log, never in the
    response body.
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from stackit.exceptions import DatabaseError, NotFoundError
from stackit.models.question import AnswerModel, QuestionModel
from stackit.models.tag import TagModel
from stackit.models.user import UserModel
from stackit.models.vote import VoteModel
from stackit.repositories.base import QuestionRepository, UserRepository, VoteRepository
from stackit.schemas.entities import Answer, Question, Tag, User, Vote, VoteTargetType

logger = logging.getLogger(__name__)


def _database_error(operation: str, error: SQLAlchemyError) -> DatabaseError:
    logger.error("Database error during %s: %s", operation, str(error), exc_info=True)
    return DatabaseError(
        message="A database error occurred. Please try again.",
        context={"operation": operation, "original_error": type(error).__name__},
    )


def _answer_row(answer: Answer) -> AnswerModel:
    return AnswerModel(
        id=answer.id,
        content=answer.content,
        question_id=answer.question_id,
        author_id=answer.author_id,
        votes=answer.votes,
        is_accepted=answer.is_accepted,
        created_at=answer.created_at,
        updated_at=answer.updated_at,
    )


class SqlQuestionRepository(QuestionRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def list(self) -> List[Question]:
        try:
            result = await self.session.execute(
                select(QuestionModel).order_by(QuestionModel.created_at)
            )
            rows = result.scalars().all()
        except SQLAlchemyError as e:
            raise _database_error("list_questions", e)
        return [Question.model_validate(row) for row in rows]

    async def get_by_id(self, question_id: str) -> Optional[Question]:
        try:
            row = await self.session.get(QuestionModel, question_id)
        except SQLAlchemyError as e:
            raise _database_error("get_question", e)
        return Question.model_validate(row) if row is not None else None

    async def append(self, question: Question) -> Question:
        row = QuestionModel(
            id=question.id,
            title=question.title,
            description=question.description,
            tags=list(question.tags),
            author_id=question.author_id,
            votes=question.votes,
            accepted_answer_id=question.accepted_answer_id,
            created_at=question.created_at,
            updated_at=question.updated_at,
            answers=[_answer_row(a) for a in question.answers],
        )
        # Savepoint: a failed insert leaves the request transaction usable for a retry
        try:
            async with self.session.begin_nested():
                self.session.add(row)
                await self._bump_tags(question.tags)
                await self.session.flush()
        except SQLAlchemyError as e:
            raise _database_error("append_question", e)
        logger.info("Question %s stored (%d tags)", question.id, len(question.tags))
        return question.model_copy(deep=True)

    async def _bump_tags(self, names: List[str]) -> None:
        for name in names:
            result = await self.session.execute(
                select(TagModel).where(TagModel.name == name)
            )
            tag = result.scalar_one_or_none()
            if tag is None:
                self.session.add(TagModel(name=name, questions_count=1))
            else:
                tag.questions_count += 1

    async def update(self, question: Question) -> Question:
        try:
            row = await self.session.get(QuestionModel, question.id)
            if row is None:
                raise NotFoundError(resource="question", resource_id=question.id)

            row.accepted_answer_id = question.accepted_answer_id
            row.updated_at = question.updated_at
            row.tags = list(question.tags)

            # Answers are append-only: existing rows change state, unknown ids are inserted
            existing = {a.id: a for a in row.answers}
            for answer in question.answers:
                answer_row = existing.get(answer.id)
                if answer_row is None:
                    row.answers.append(_answer_row(answer))
                    continue
                answer_row.is_accepted = answer.is_accepted
                answer_row.updated_at = answer.updated_at

            await self.session.flush()
        except SQLAlchemyError as e:
            raise _database_error("update_question", e)
        return question.model_copy(deep=True)

    async def apply_vote_delta(
        self,
        question_id: str,
        target_type: VoteTargetType,
        target_id: str,
        delta: int,
    ) -> int:
        """
        Increment the count in the UPDATE statement itself (`votes = votes + delta`).

        The row lock taken by the UPDATE serializes concurrent votes on one
        target, so every committed vote moves the count by its delta.
        """
        if target_type is VoteTargetType.QUESTION:
            if target_id != question_id:
                raise NotFoundError(resource="question", resource_id=target_id)
            model, target = QuestionModel, QuestionModel.id == question_id
        else:
            model = AnswerModel
            target = (AnswerModel.id == target_id) & (AnswerModel.question_id == question_id)

        try:
            await self.session.execute(
                update(model)
                .where(target)
                .values(votes=model.votes + delta)
                .execution_options(synchronize_session=False)
            )
            result = await self.session.execute(select(model.votes).where(target))
            votes = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise _database_error("apply_vote_delta", e)

        if votes is None:
            raise NotFoundError(resource=target_type.value, resource_id=target_id)
        return votes

    async def list_tags(self) -> List[Tag]:
        try:
            result = await self.session.execute(
                select(TagModel).order_by(TagModel.questions_count.desc(), TagModel.name)
            )
            rows = result.scalars().all()
        except SQLAlchemyError as e:
            raise _database_error("list_tags", e)
        return [Tag.model_validate(row) for row in rows]


class SqlUserRepository(UserRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def list(self) -> List[User]:
        try:
            result = await self.session.execute(select(UserModel).order_by(UserModel.id))
            rows = result.scalars().all()
        except SQLAlchemyError as e:
            raise _database_error("list_users", e)
        return [User.model_validate(row) for row in rows]

    async def get_by_id(self, user_id: str) -> Optional[User]:
        try:
            row = await self.session.get(UserModel, user_id)
        except SQLAlchemyError as e:
            raise _database_error("get_user", e)
        return User.model_validate(row) if row is not None else None


class SqlVoteRepository(VoteRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def _find_row(
        self, user_id: str, target_type: VoteTargetType, target_id: str
    ) -> Optional[VoteModel]:
        result = await self.session.execute(
            select(VoteModel).where(
                VoteModel.user_id == user_id,
                VoteModel.target_type == target_type.value,
                VoteModel.target_id == target_id,
            )
        )
        return result.scalar_one_or_none()

    async def find(
        self, user_id: str, target_type: VoteTargetType, target_id: str
    ) -> Optional[Vote]:
        try:
            row = await self._find_row(user_id, target_type, target_id)
        except SQLAlchemyError as e:
            raise _database_error("find_vote", e)
        return Vote.model_validate(row) if row is not None else None

    async def save(self, vote: Vote) -> Vote:
        try:
            row = await self._find_row(vote.user_id, vote.target_type, vote.target_id)
            if row is None:
                self.session.add(
                    VoteModel(
                        id=vote.id,
                        user_id=vote.user_id,
                        target_id=vote.target_id,
                        target_type=vote.target_type.value,
                        direction=vote.direction.value,
                        created_at=vote.created_at,
                    )
                )
            else:
                row.direction = vote.direction.value
            await self.session.flush()
        except SQLAlchemyError as e:
            raise _database_error("save_vote", e)
        return vote.model_copy()

    async def delete(self, vote: Vote) -> None:
        try:
            await self.session.execute(
                delete(VoteModel).where(
                    VoteModel.user_id == vote.user_id,
                    VoteModel.target_type == vote.target_type.value,
                    VoteModel.target_id == vote.target_id,
                )
            )
        except SQLAlchemyError as e:
            raise _database_error("delete_vote", e)
