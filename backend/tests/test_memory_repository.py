"""
StackIt Backend: In-Memory Repository Tests
============================================

What:  Seeded contents and copy isolation of the in-memory repositories.
"""

import pytest

from stackit.exceptions import DatabaseError, NotFoundError
from stackit.repositories.memory import (
    InMemoryQuestionRepository,
    InMemoryUserRepository,
    InMemoryVoteRepository,
)
from stackit.schemas.entities import Answer, Question, Vote, VoteDirection, VoteTargetType


@pytest.fixture
def repo():
    return InMemoryQuestionRepository()


class TestQuestionRepository:
    @pytest.mark.asyncio
    async def test_seeded_in_storage_order(self, repo):
        assert [q.id for q in await repo.list()] == ["1", "2", "3"]

    @pytest.mark.asyncio
    async def test_seeded_acceptance(self, repo):
        question = await repo.get_by_id("1")
        assert question.accepted_answer_id == "1"
        assert question.find_answer("1").is_accepted

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, repo):
        assert await repo.get_by_id("404") is None

    @pytest.mark.asyncio
    async def test_mutating_result_does_not_change_store(self, repo):
        question = await repo.get_by_id("1")
        question.votes = 1000
        question.answers.clear()
        stored = await repo.get_by_id("1")
        assert stored.votes == 15
        assert len(stored.answers) == 1

    @pytest.mark.asyncio
    async def test_update_persists_changes(self, repo):
        question = await repo.get_by_id("3")
        question.accepted_answer_id = "4"
        question.find_answer("4").is_accepted = True
        question.answers.append(Answer(content="Late answer", question_id="3", author_id="2"))
        await repo.update(question)

        stored = await repo.get_by_id("3")
        assert stored.accepted_answer_id == "4"
        assert stored.find_answer("4").is_accepted
        assert len(stored.answers) == 3

    @pytest.mark.asyncio
    async def test_update_keeps_stored_vote_counts(self, repo):
        stale = await repo.get_by_id("3")
        await repo.apply_vote_delta("3", VoteTargetType.QUESTION, "3", 1)
        await repo.apply_vote_delta("3", VoteTargetType.ANSWER, "4", -1)

        stale.find_answer("3").is_accepted = True
        stale.accepted_answer_id = "3"
        await repo.update(stale)

        stored = await repo.get_by_id("3")
        assert stored.votes == 9
        assert stored.find_answer("4").votes == 0
        assert stored.accepted_answer_id == "3"

    @pytest.mark.asyncio
    async def test_apply_vote_delta_returns_new_count(self, repo):
        assert await repo.apply_vote_delta("2", VoteTargetType.QUESTION, "2", 2) == 25
        assert await repo.apply_vote_delta("2", VoteTargetType.ANSWER, "2", -1) == 11

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "question_id,target_type,target_id",
        [
            ("404", VoteTargetType.QUESTION, "404"),
            ("1", VoteTargetType.QUESTION, "2"),
            ("1", VoteTargetType.ANSWER, "3"),
        ],
    )
    async def test_apply_vote_delta_unknown_target(self, repo, question_id, target_type, target_id):
        with pytest.raises(NotFoundError):
            await repo.apply_vote_delta(question_id, target_type, target_id, 1)

    @pytest.mark.asyncio
    async def test_tags_are_normalized_on_append(self, repo):
        question = Question(title="t", description="d", author_id="1", tags=[" Go", "go", "RUST"])
        await repo.append(question)
        assert (await repo.get_by_id(question.id)).tags == ["go", "rust"]

    @pytest.mark.asyncio
    async def test_update_missing_raises(self, repo):
        with pytest.raises(NotFoundError):
            await repo.update(Question(id="nope", title="t", description="d", author_id="1"))

    @pytest.mark.asyncio
    async def test_append_and_duplicate(self, repo):
        question = Question(title="A new question", description="desc", author_id="2", tags=["go"])
        await repo.append(question)
        assert (await repo.list())[-1].id == question.id
        with pytest.raises(DatabaseError):
            await repo.append(question)

    @pytest.mark.asyncio
    async def test_append_bumps_existing_and_creates_tags(self, repo):
        await repo.append(Question(title="t", description="d", author_id="1", tags=["react", "go"]))
        counts = {t.name: t.questions_count for t in await repo.list_tags()}
        assert counts["react"] == 1251
        assert counts["go"] == 1

    @pytest.mark.asyncio
    async def test_reset_restores_seed(self, repo):
        await repo.append(Question(title="t", description="d", author_id="1"))
        repo.reset()
        assert len(await repo.list()) == 3

    @pytest.mark.asyncio
    async def test_custom_contents(self):
        repo = InMemoryQuestionRepository(questions=[], tags=[])
        assert await repo.list() == []
        assert await repo.list_tags() == []


class TestUserRepository:
    @pytest.mark.asyncio
    async def test_seeded_users(self):
        repo = InMemoryUserRepository()
        users = await repo.list()
        assert [u.username for u in users] == [
            "reactdev", "securitypro", "csswizard", "typescriptpro", "moderator"
        ]
        assert (await repo.get_by_id("5")).role.value == "admin"
        assert await repo.get_by_id("missing") is None


class TestVoteRepository:
    @pytest.mark.asyncio
    async def test_one_entry_per_user_and_target(self):
        repo = InMemoryVoteRepository()
        vote = Vote(user_id="1", target_id="q", target_type=VoteTargetType.QUESTION,
                    direction=VoteDirection.UP)
        await repo.save(vote)
        await repo.save(vote.model_copy(update={"direction": VoteDirection.DOWN}))
        assert len(repo) == 1
        found = await repo.find("1", VoteTargetType.QUESTION, "q")
        assert found.direction is VoteDirection.DOWN

    @pytest.mark.asyncio
    async def test_target_type_is_part_of_key(self):
        repo = InMemoryVoteRepository()
        await repo.save(Vote(user_id="1", target_id="1", target_type=VoteTargetType.QUESTION,
                             direction=VoteDirection.UP))
        assert await repo.find("1", VoteTargetType.ANSWER, "1") is None

    @pytest.mark.asyncio
    async def test_delete(self):
        repo = InMemoryVoteRepository()
        vote = Vote(user_id="1", target_id="q", target_type=VoteTargetType.QUESTION,
                    direction=VoteDirection.UP)
        await repo.save(vote)
        await repo.delete(vote)
        assert await repo.find("1", VoteTargetType.QUESTION, "q") is None
        await repo.delete(vote)
