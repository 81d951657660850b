"""
StackIt Backend: Test Configuration (conftest.py)
==================================================

What:  Shared pytest fixtures for the test suite.
How:   Environment variables are set before any `stackit` import so the
       settings singleton picks them up: in-memory repositories, no
       submission delay, no retry backoff, quiet logs.

Fixtures:
    ├── reset_state (autouse): reseed in-memory repositories, clear notification stores
    ├── repos:            the in-memory Repositories bundle
    ├── reactdev / tsdev: authenticated sessions for seeded users 1 and 4
    ├── anonymous:        session with no user
    ├── recording_notifier / service: QuestionService with captured feedback
    ├── mock_db_session:  AsyncMock session for the SQL repositories
    └── test_client:      HTTPX AsyncClient bound to the FastAPI app
"""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["REPOSITORY_BACKEND"] = "memory"
os.environ["SUBMISSION_DELAY_SECONDS"] = "0"
os.environ["RETRY_MIN_WAIT"] = "0"
os.environ["RETRY_MAX_WAIT"] = "0"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import List, Tuple  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from stackit.repositories.memory import memory_repositories, reset_memory_repositories  # noqa: E402
from stackit.services.auth import AuthSession  # noqa: E402
from stackit.services.notification_service import NotificationService, notification_service  # noqa: E402
from stackit.services.notifier import Notifier  # noqa: E402
from stackit.services.question_service import QuestionService  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# State
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture(autouse=True)
def reset_state():
    """Every test starts from the seeded fixtures and no notification stores."""
    reset_memory_repositories()
    notification_service.reset()
    yield
    notification_service.reset()


@pytest.fixture
def repos():
    return memory_repositories


# ══════════════════════════════════════════════════════════════════════════
# Sessions
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def reactdev(repos) -> AuthSession:
    """User 1: author of question 1."""
    user = await repos.users.get_by_id("1")
    return AuthSession(user=user, on_logout=notification_service.discard)


@pytest_asyncio.fixture
async def tsdev(repos) -> AuthSession:
    """User 4: author of the accepted answer on question 1."""
    user = await repos.users.get_by_id("4")
    return AuthSession(user=user, on_logout=notification_service.discard)


@pytest.fixture
def anonymous() -> AuthSession:
    return AuthSession.anonymous()


# ══════════════════════════════════════════════════════════════════════════
# Services
# ══════════════════════════════════════════════════════════════════════════

class RecordingNotifier(Notifier):
    """Keeps every feedback message in order for assertions."""

    def __init__(self) -> None:
        self.messages: List[Tuple[str, str]] = []

    def notify(self, title: str, description: str = "") -> None:
        self.messages.append((title, description))


@pytest.fixture
def recording_notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def notifications() -> NotificationService:
    return NotificationService()


@pytest.fixture
def service(recording_notifier, notifications) -> QuestionService:
    return QuestionService(notifier=recording_notifier, notifications=notifications)


# ══════════════════════════════════════════════════════════════════════════
# Database / HTTP
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    A mock AsyncSession.

    Usage:
        mock_db_session.get.return_value = row
        mock_db_session.execute.return_value = result_mock
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()

    # `async with session.begin_nested():`
    savepoint = MagicMock()
    savepoint.__aenter__ = AsyncMock(return_value=None)
    savepoint.__aexit__ = AsyncMock(return_value=False)
    session.begin_nested = MagicMock(return_value=savepoint)
    return session


@pytest_asyncio.fixture
async def test_client():
    """
    HTTPX AsyncClient routed straight into the FastAPI app.

    Usage:
        response = await test_client.get("/health")
    """
    from stackit.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
