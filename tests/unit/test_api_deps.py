"""
Unit tests for api/deps.py dependency providers.

These tests verify that the dependency providers are properly wired and
return the correct types. Uses mocks for external dependencies.
"""

import pytest
from unittest.mock import Mock, patch

from tests.fakes import (
    FakeExercisesRepository,
    FakePersonalRecordRepository,
    FakeProgramRepository,
    FakeSessionRepository,
    FakeStreakRepository,
)

# All tests in this module are pure logic tests with mocks - mark as unit
pytestmark = pytest.mark.unit


# =============================================================================
# Import Tests
# =============================================================================


class TestDepsImports:
    """Test that all dependency providers can be imported."""

    def test_import_from_api_package(self):
        """All providers should be importable from api package."""
        from api import (
            get_settings,
            get_supabase_client,
            get_supabase_client_required,
            get_session_repo,
            get_program_repo,
            get_exercises_repo,
            get_personal_record_repo,
            get_streak_repo,
            get_complete_session_use_case,
            get_progress_service,
            get_current_actor,
        )
        assert all([
            get_settings,
            get_supabase_client,
            get_supabase_client_required,
            get_session_repo,
            get_program_repo,
            get_exercises_repo,
            get_personal_record_repo,
            get_streak_repo,
            get_complete_session_use_case,
            get_progress_service,
            get_current_actor,
        ])

    def test_api_package_exports_every_provider(self):
        """Every provider in api.deps is re-exported by the api package."""
        import api
        import api.deps

        assert set(api.deps.__all__) <= set(api.__all__)
        for name in api.deps.__all__:
            assert getattr(api, name) is getattr(api.deps, name)


# =============================================================================
# Supabase Client Provider Tests
# =============================================================================


class TestSupabaseClientProvider:
    """Test get_supabase_client provider."""

    def test_returns_none_when_not_configured(self):
        from api.deps import get_supabase_client

        get_supabase_client.cache_clear()

        with patch("api.deps._get_settings") as mock_settings:
            mock_settings.return_value = Mock(
                supabase_url=None,
                supabase_key=None,
            )
            assert get_supabase_client() is None

        get_supabase_client.cache_clear()

    def test_creates_client_when_configured(self):
        from api.deps import get_supabase_client

        get_supabase_client.cache_clear()

        with patch("api.deps._get_settings") as mock_settings:
            mock_settings.return_value = Mock(
                supabase_url="https://test.supabase.co",
                supabase_key="test-key",
            )
            with patch("api.deps.create_client") as mock_create:
                mock_create.return_value = Mock()
                assert get_supabase_client() is not None
                mock_create.assert_called_once_with(
                    "https://test.supabase.co", "test-key"
                )

        get_supabase_client.cache_clear()

    def test_required_raises_503_when_not_configured(self):
        from api.deps import get_supabase_client_required
        from fastapi import HTTPException

        with patch("api.deps.get_supabase_client") as mock_get:
            mock_get.return_value = None
            with pytest.raises(HTTPException) as exc_info:
                get_supabase_client_required()
            assert exc_info.value.status_code == 503
            assert "Database not available" in exc_info.value.detail


# =============================================================================
# Repository Provider Tests
# =============================================================================


class TestRepositoryProviders:
    """Test repository provider functions."""

    @pytest.mark.parametrize(
        "provider_name,repo_class",
        [
            ("get_session_repo", "SupabaseSessionRepository"),
            ("get_program_repo", "SupabaseProgramRepository"),
            ("get_exercises_repo", "SupabaseExercisesRepository"),
            ("get_personal_record_repo", "SupabasePersonalRecordRepository"),
            ("get_streak_repo", "SupabaseStreakRepository"),
        ],
    )
    def test_provider_returns_supabase_repository(self, provider_name, repo_class):
        import api.deps
        import infrastructure

        mock_client = Mock()
        repo = getattr(api.deps, provider_name)(mock_client)
        assert isinstance(repo, getattr(infrastructure, repo_class))
        assert repo._client is mock_client


# =============================================================================
# Use Case Provider Tests
# =============================================================================


class TestUseCaseProviders:
    """Use case providers compose whatever repositories they are handed."""

    def test_start_session_use_case_reads_settings(self):
        from api.deps import get_start_session_use_case
        from application.use_cases import StartSessionUseCase
        from backend.settings import Settings

        settings = Settings(
            _env_file=None,
            enforce_single_active_session=True,
            default_program_weeks=8,
        )
        use_case = get_start_session_use_case(
            FakeSessionRepository(), FakeProgramRepository(), settings
        )

        assert isinstance(use_case, StartSessionUseCase)
        assert use_case._enforce_single_active is True
        assert use_case._default_total_weeks == 8

    def test_complete_session_use_case(self):
        from api.deps import get_complete_session_use_case
        from application.use_cases import CompleteSessionUseCase

        use_case = get_complete_session_use_case(
            FakeSessionRepository(),
            FakePersonalRecordRepository(),
            FakeStreakRepository(),
        )
        assert isinstance(use_case, CompleteSessionUseCase)

    def test_add_exercise_use_case(self):
        from api.deps import get_add_exercise_use_case
        from application.use_cases import AddExerciseUseCase

        use_case = get_add_exercise_use_case(
            FakeSessionRepository(), FakeExercisesRepository()
        )
        assert isinstance(use_case, AddExerciseUseCase)

    def test_session_detail_use_case(self):
        from api.deps import get_session_detail_use_case
        from application.use_cases import GetSessionUseCase

        use_case = get_session_detail_use_case(FakeSessionRepository())
        assert isinstance(use_case, GetSessionUseCase)


# =============================================================================
# Authentication Provider Tests
# =============================================================================


class TestAuthProviders:
    """Test authentication provider functions."""

    @pytest.mark.asyncio
    async def test_get_current_actor_wraps_backend_auth(self):
        """get_current_actor should delegate to backend.auth."""
        from api.deps import get_current_actor
        from domain.models import Actor

        settings = Mock()
        with patch("api.deps._get_current_actor") as mock_auth:
            mock_auth.return_value = Actor(user_id="user_123")
            result = await get_current_actor(
                authorization="Bearer test_token",
                x_api_key=None,
                settings=settings,
            )
            assert result.user_id == "user_123"
            mock_auth.assert_called_once_with(
                authorization="Bearer test_token",
                x_api_key=None,
                settings=settings,
            )
