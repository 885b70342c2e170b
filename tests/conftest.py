"""
Pytest fixtures shared by the API tests.

Builds a test application whose repositories are in-memory fakes and whose
caller identity is set per test, so routers run end to end without a
database or real credentials.
"""

from typing import Generator

import pytest
from fastapi.testclient import TestClient

from api.deps import (
    get_current_actor,
    get_exercises_repo,
    get_personal_record_repo,
    get_program_repo,
    get_session_repo,
    get_settings,
    get_streak_repo,
)
from backend.main import create_app
from backend.settings import Settings
from domain.models import Actor, Role
from tests.fakes import (
    FakeExercisesRepository,
    FakePersonalRecordRepository,
    FakeProgramRepository,
    FakeSessionRepository,
    FakeStreakRepository,
    create_program_repo,
)


# ---------------------------------------------------------------------------
# Auth Mock
# ---------------------------------------------------------------------------

TEST_USER_ID = "athlete-1"
TRAINER_USER_ID = "coach-1"


class ActorHolder:
    """Mutable caller identity for the mocked auth dependency."""

    def __init__(self):
        self.actor = Actor(user_id=TEST_USER_ID)

    def as_client(self, user_id: str = TEST_USER_ID) -> None:
        self.actor = Actor(user_id=user_id)

    def as_trainer(self, user_id: str = TRAINER_USER_ID) -> None:
        self.actor = Actor(user_id=user_id, role=Role.TRAINER)


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with minimal configuration."""
    return Settings(environment="test", _env_file=None)


@pytest.fixture
def session_repo() -> FakeSessionRepository:
    return FakeSessionRepository()


@pytest.fixture
def program_repo() -> FakeProgramRepository:
    return create_program_repo(baselines={"barbell-back-squat": 100.0})


@pytest.fixture
def record_repo() -> FakePersonalRecordRepository:
    return FakePersonalRecordRepository()


@pytest.fixture
def streak_repo() -> FakeStreakRepository:
    return FakeStreakRepository()


@pytest.fixture
def actor() -> ActorHolder:
    return ActorHolder()


# ---------------------------------------------------------------------------
# Test App and Client
# ---------------------------------------------------------------------------


@pytest.fixture
def app(test_settings, session_repo, program_repo, record_repo, streak_repo, actor):
    """Create a test application wired to the fakes."""
    application = create_app(settings=test_settings)

    async def mock_get_current_actor() -> Actor:
        return actor.actor

    application.dependency_overrides[get_settings] = lambda: test_settings
    application.dependency_overrides[get_current_actor] = mock_get_current_actor
    application.dependency_overrides[get_session_repo] = lambda: session_repo
    application.dependency_overrides[get_program_repo] = lambda: program_repo
    application.dependency_overrides[get_exercises_repo] = lambda: FakeExercisesRepository()
    application.dependency_overrides[get_personal_record_repo] = lambda: record_repo
    application.dependency_overrides[get_streak_repo] = lambda: streak_repo
    return application


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    """
    Per-test FastAPI TestClient.
    Properly cleans up dependency overrides after each test.
    """
    yield TestClient(app)
    app.dependency_overrides.clear()
