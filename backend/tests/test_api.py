"""
StackIt Backend: API Endpoint Tests
====================================

What:  HTTP-level tests for the FastAPI routes over the in-memory backend.
How:   HTTPX AsyncClient with ASGITransport (no server). Identity is passed
       with the X-User-ID header.
"""

import pytest

from stackit.config import settings

AUTHOR = {"X-User-ID": "1"}      # reactdev, asked question 1
ANSWERER = {"X-User-ID": "4"}    # typescriptpro, answer 1 on question 1


class TestHealth:
    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["repository"] == "memory"
        assert data["database"] == "not_configured"

    @pytest.mark.asyncio
    async def test_request_id_header(self, test_client):
        response = await test_client.get("/health", headers={"X-Request-ID": "abc12345"})
        assert response.headers["X-Request-ID"] == "abc12345"


class TestQuestionList:
    @pytest.mark.asyncio
    async def test_sort_by_votes(self, test_client):
        response = await test_client.get("/api/questions", params={"sort": "votes"})
        assert response.status_code == 200
        data = response.json()
        assert [q["votes"] for q in data["questions"]] == [23, 15, 8]
        assert data["total_count"] == 3
        assert response.headers["X-Total-Count"] == "3"

    @pytest.mark.asyncio
    async def test_search_and_tags(self, test_client):
        response = await test_client.get("/api/questions", params={"q": "React"})
        assert [q["id"] for q in response.json()["questions"]] == ["1"]

        response = await test_client.get(
            "/api/questions", params=[("tags", "css"), ("tags", "jwt"), ("sort", "votes")]
        )
        assert [q["id"] for q in response.json()["questions"]] == ["2", "3"]

    @pytest.mark.asyncio
    async def test_list_item_shape(self, test_client):
        response = await test_client.get("/api/questions", params={"sort": "votes"})
        item = response.json()["questions"][1]
        assert item["id"] == "1"
        assert item["author"]["username"] == "reactdev"
        assert item["answer_count"] == 1
        assert item["has_accepted_answer"] is True
        assert "<" not in item["text_preview"]
        assert item["text_preview"].endswith("...")

    @pytest.mark.asyncio
    async def test_invalid_sort_is_422(self, test_client):
        response = await test_client.get("/api/questions", params={"sort": "random"})
        assert response.status_code == 422


class TestQuestionDetail:
    @pytest.mark.asyncio
    async def test_detail(self, test_client):
        response = await test_client.get("/api/questions/1")
        assert response.status_code == 200
        data = response.json()
        assert data["accepted_answer_id"] == "1"
        assert data["answers"][0]["author"]["username"] == "typescriptpro"

    @pytest.mark.asyncio
    async def test_missing_is_404(self, test_client):
        response = await test_client.get("/api/questions/404")
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"


class TestAskQuestion:
    @pytest.mark.asyncio
    async def test_ask(self, test_client):
        response = await test_client.post(
            "/api/questions",
            json={
                "title": "What is a Python descriptor?",
                "description": "<p>I keep seeing __get__ in library code.</p>",
                "tags": ["Python", "descriptors"],
            },
            headers=AUTHOR,
        )
        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Question posted successfully!"
        assert data["question"]["tags"] == ["python", "descriptors"]

        listed = await test_client.get("/api/questions")
        assert listed.json()["questions"][0]["id"] == data["question"]["id"]

    @pytest.mark.asyncio
    async def test_validation_error_body(self, test_client):
        response = await test_client.post(
            "/api/questions",
            json={"title": "Short", "description": "", "tags": []},
            headers=AUTHOR,
        )
        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "validation_error"
        assert data["message"] == "Title must be at least 10 characters long"
        assert data["details"] == {"field": "title"}

    @pytest.mark.asyncio
    async def test_anonymous_ask_is_ignored(self, test_client):
        response = await test_client.post("/api/questions", json={"title": "x"})
        assert response.status_code == 200
        assert response.json()["question"] is None

    @pytest.mark.asyncio
    async def test_unknown_user_is_anonymous(self, test_client):
        response = await test_client.post(
            "/api/questions", json={"title": "x"}, headers={"X-User-ID": "ghost"}
        )
        assert response.json()["question"] is None

    @pytest.mark.asyncio
    async def test_submission_failure_is_503(self, test_client, repos, monkeypatch):
        from unittest.mock import AsyncMock
        from stackit.exceptions import DatabaseError

        monkeypatch.setattr(repos.questions, "append", AsyncMock(side_effect=DatabaseError("down")))
        response = await test_client.post(
            "/api/questions",
            json={
                "title": "What is a Python descriptor?",
                "description": "<p>I keep seeing __get__ in library code.</p>",
                "tags": ["python"],
            },
            headers=AUTHOR,
        )
        assert response.status_code == 503
        assert response.json()["message"] == "Failed to post question. Please try again."
        assert response.headers["Retry-After"] == "5"
        assert repos.questions.append.await_count == settings.retry_max_attempts


class TestAnswersAndAcceptance:
    @pytest.mark.asyncio
    async def test_post_answer(self, test_client):
        response = await test_client.post(
            "/api/questions/3/answers", json={"content": "<p>Grid for 2D.</p>"}, headers=ANSWERER
        )
        assert response.status_code == 201
        assert response.json()["votes"] == 0

        detail = await test_client.get("/api/questions/3")
        assert len(detail.json()["answers"]) == 3

    @pytest.mark.asyncio
    async def test_empty_answer_is_400(self, test_client):
        response = await test_client.post(
            "/api/questions/3/answers", json={"content": "  "}, headers=ANSWERER
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_anonymous_answer_is_400(self, test_client):
        response = await test_client.post("/api/questions/3/answers", json={"content": "Hi there"})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_toggle_accept_by_author(self, test_client):
        response = await test_client.post("/api/questions/1/answers/1/accept", headers=AUTHOR)
        assert response.json()["accepted_answer_id"] is None
        response = await test_client.post("/api/questions/1/answers/1/accept", headers=AUTHOR)
        assert response.json()["accepted_answer_id"] == "1"

    @pytest.mark.asyncio
    async def test_toggle_accept_by_other_is_noop(self, test_client):
        response = await test_client.post("/api/questions/1/answers/1/accept", headers=ANSWERER)
        assert response.status_code == 200
        assert response.json()["accepted_answer_id"] == "1"


class TestVotes:
    @pytest.mark.asyncio
    async def test_vote_cycle(self, test_client):
        body = {"target_id": "2", "target_type": "question", "direction": "up"}
        response = await test_client.post("/api/questions/2/votes", json=body, headers=ANSWERER)
        assert response.json() == {
            "target_id": "2",
            "target_type": "question",
            "votes": 24,
            "action": "cast",
            "user_vote": "up",
        }
        response = await test_client.post("/api/questions/2/votes", json=body, headers=ANSWERER)
        assert response.json()["votes"] == 23
        assert response.json()["action"] == "retract"
        assert response.json()["user_vote"] is None

    @pytest.mark.asyncio
    async def test_answer_vote(self, test_client):
        body = {"target_id": "2", "target_type": "answer", "direction": "down"}
        response = await test_client.post("/api/questions/2/votes", json=body, headers=ANSWERER)
        assert response.json()["votes"] == 11

    @pytest.mark.asyncio
    async def test_anonymous_vote_ignored(self, test_client):
        body = {"target_id": "2", "target_type": "question", "direction": "up"}
        response = await test_client.post("/api/questions/2/votes", json=body)
        assert response.status_code == 200
        assert response.json()["votes"] == 23
        assert response.json()["action"] is None

    @pytest.mark.asyncio
    async def test_unknown_target_is_404(self, test_client):
        body = {"target_id": "99", "target_type": "answer", "direction": "up"}
        response = await test_client.post("/api/questions/2/votes", json=body, headers=ANSWERER)
        assert response.status_code == 404


class TestNotifications:
    @pytest.mark.asyncio
    async def test_anonymous_feed_is_empty(self, test_client):
        response = await test_client.get("/api/notifications")
        assert response.json() == {"notifications": [], "unread_count": 0}

    @pytest.mark.asyncio
    async def test_feed_and_read_state(self, test_client):
        response = await test_client.get("/api/notifications", headers=AUTHOR)
        data = response.json()
        assert data["unread_count"] == 2
        assert [n["icon"] for n in data["notifications"]] == [
            "message-square", "at-sign", "check-circle"
        ]

        response = await test_client.post("/api/notifications/1/read", headers=AUTHOR)
        assert response.json()["unread_count"] == 1
        response = await test_client.post("/api/notifications/1/read", headers=AUTHOR)
        assert response.json()["unread_count"] == 1

        response = await test_client.post("/api/notifications/read-all", headers=AUTHOR)
        assert response.json()["unread_count"] == 0

    @pytest.mark.asyncio
    async def test_answer_notifies_question_author(self, test_client):
        await test_client.post(
            "/api/questions/1/answers", json={"content": "Another approach"}, headers=ANSWERER
        )
        data = (await test_client.get("/api/notifications", headers=AUTHOR)).json()
        assert data["unread_count"] == 3
        assert data["notifications"][-1]["type"] == "answer"

    @pytest.mark.asyncio
    async def test_logout_reseeds(self, test_client):
        await test_client.post("/api/notifications/read-all", headers=AUTHOR)
        response = await test_client.post("/api/auth/logout", headers=AUTHOR)
        assert response.status_code == 200
        data = (await test_client.get("/api/notifications", headers=AUTHOR)).json()
        assert data["unread_count"] == 2


class TestUsersAndTags:
    @pytest.mark.asyncio
    async def test_me(self, test_client):
        assert (await test_client.get("/api/auth/me")).json() == {
            "authenticated": False, "user": None
        }
        data = (await test_client.get("/api/auth/me", headers=AUTHOR)).json()
        assert data["user"]["username"] == "reactdev"

    @pytest.mark.asyncio
    async def test_profile(self, test_client):
        response = await test_client.get("/api/users/4")
        data = response.json()
        assert data["reputation"] == 2500
        assert data["questions_asked"] == 0
        assert data["answers_given"] == 2
        assert data["accepted_answers"] == 1

    @pytest.mark.asyncio
    async def test_profile_missing_user(self, test_client):
        assert (await test_client.get("/api/users/404")).status_code == 404

    @pytest.mark.asyncio
    async def test_tags(self, test_client):
        response = await test_client.get("/api/tags", params={"limit": 3})
        assert [t["name"] for t in response.json()] == ["javascript", "react", "typescript"]
