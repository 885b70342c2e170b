"""
Unit tests for CompleteSessionUseCase.

Tests for:
- Volume and duration aggregation
- Personal record detection and streak update on completion
- Double completion and racing completions
- Ownership checks
"""

from datetime import timedelta

import pytest

from application.use_cases import CompleteSessionUseCase, Outcome
from domain.models import Actor, RecordType
from tests.fakes import (
    FIXED_NOW,
    FakePersonalRecordRepository,
    FakeSessionRepository,
    FakeStreakRepository,
    build_session,
)


OWNER = Actor(user_id="athlete-1")


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def session_repo() -> FakeSessionRepository:
    repo = FakeSessionRepository()
    repo.seed(build_session(sets=[(100, 5), (0, 5), (80, 5)]))
    return repo


@pytest.fixture
def record_repo() -> FakePersonalRecordRepository:
    return FakePersonalRecordRepository()


@pytest.fixture
def streak_repo() -> FakeStreakRepository:
    return FakeStreakRepository()


@pytest.fixture
def use_case(session_repo, record_repo, streak_repo) -> CompleteSessionUseCase:
    return CompleteSessionUseCase(
        session_repo,
        record_repo,
        streak_repo,
        clock=lambda: FIXED_NOW,
    )


# =============================================================================
# Tests
# =============================================================================


@pytest.mark.unit
class TestCompleteSession:
    """Happy-path completion."""

    def test_persists_volume_and_duration(self, use_case, session_repo):
        result = use_case.execute(OWNER, "session-1", notes="Felt strong")

        assert result.success
        assert result.total_volume == 900
        assert result.duration_seconds == 3600

        session = session_repo.get_session("session-1")
        assert not session.is_active
        assert session.completed_at == FIXED_NOW
        assert session.total_volume == 900
        assert session.duration_seconds == 3600
        assert session.notes == "Felt strong"

    def test_incomplete_sets_excluded_from_volume(self, session_repo, use_case):
        session_repo.update_set("entry-1-set-3", {"completed": False})

        assert use_case.execute(OWNER, "session-1").total_volume == 500

    def test_detects_records(self, use_case, record_repo):
        result = use_case.execute(OWNER, "session-1")

        # 100x5 sets both records; 80x5 is lower on both
        assert sorted(r.record_type for r in result.new_records) == [
            RecordType.E1RM,
            RecordType.MAX_WEIGHT,
        ]
        assert len(record_repo.records) == 2

    def test_updates_streak(self, use_case, streak_repo):
        use_case.execute(OWNER, "session-1")

        streak = streak_repo.get("athlete-1")
        assert streak.current_streak == 1
        assert streak.last_activity_date == FIXED_NOW

    def test_empty_session_completes_with_zero_volume(self, record_repo, streak_repo):
        repo = FakeSessionRepository()
        repo.seed(build_session())
        use_case = CompleteSessionUseCase(repo, record_repo, streak_repo, clock=lambda: FIXED_NOW)

        result = use_case.execute(OWNER, "session-1")

        assert result.total_volume == 0
        assert result.new_records == []

    def test_duration_never_negative(self, record_repo, streak_repo):
        repo = FakeSessionRepository()
        repo.seed(build_session(started_at=FIXED_NOW + timedelta(minutes=5)))
        use_case = CompleteSessionUseCase(repo, record_repo, streak_repo, clock=lambda: FIXED_NOW)

        assert use_case.execute(OWNER, "session-1").duration_seconds == 0


@pytest.mark.unit
class TestCompletionGuards:
    """Failure paths."""

    def test_double_completion_is_illegal_state(self, use_case, session_repo, record_repo, streak_repo):
        use_case.execute(OWNER, "session-1")

        second = use_case.execute(OWNER, "session-1")

        assert second.outcome == Outcome.ILLEGAL_STATE
        assert len(record_repo.records) == 2
        assert streak_repo.get("athlete-1").current_streak == 1
        assert streak_repo.save_calls == 1

    def test_lost_race_skips_side_effects(self, use_case, session_repo, record_repo, streak_repo):
        # Another request completes the session between our read and write
        original = session_repo.mark_completed

        def racing_mark_completed(session_id, **kwargs):
            original(session_id, **kwargs)
            return original(session_id, **kwargs)

        session_repo.mark_completed = racing_mark_completed

        result = use_case.execute(OWNER, "session-1")

        assert result.outcome == Outcome.ILLEGAL_STATE
        assert record_repo.records == []
        assert streak_repo.save_calls == 0

    def test_unknown_session_is_not_found(self, use_case):
        assert use_case.execute(OWNER, "missing").outcome == Outcome.NOT_FOUND

    def test_other_athlete_is_unauthorized(self, use_case, session_repo):
        result = use_case.execute(Actor(user_id="athlete-2"), "session-1")

        assert result.outcome == Outcome.UNAUTHORIZED
        assert session_repo.get_session("session-1").is_active
