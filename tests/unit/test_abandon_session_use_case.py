"""
Unit tests for AbandonSessionUseCase and DeleteSessionUseCase.
"""

import pytest

from application.use_cases import (
    AbandonSessionUseCase,
    DeleteSessionUseCase,
    Outcome,
)
from domain.models import Actor, PersonalRecord, RecordType, Role
from tests.fakes import (
    FIXED_NOW,
    FakePersonalRecordRepository,
    FakeSessionRepository,
    build_session,
)


OWNER = Actor(user_id="athlete-1")
TRAINER = Actor(user_id="coach-1", role=Role.TRAINER)


def _seed(completed: bool = False) -> FakeSessionRepository:
    repo = FakeSessionRepository()
    repo.seed(build_session(
        sets=[(100, 5), (100, 5)],
        completed_at=FIXED_NOW if completed else None,
    ))
    return repo


@pytest.mark.unit
class TestAbandonSession:
    """Tests for AbandonSessionUseCase."""

    def test_deletes_session_entries_and_sets(self):
        repo = _seed()

        result = AbandonSessionUseCase(repo).execute(OWNER, "session-1")

        assert result.success
        assert result.deleted is True
        assert repo.get_session("session-1") is None
        assert repo.get_entry("entry-1") is None
        assert repo.get_set("entry-1-set-1") is None

    def test_completed_session_is_illegal_state(self):
        repo = _seed(completed=True)

        result = AbandonSessionUseCase(repo).execute(OWNER, "session-1")

        assert result.outcome == Outcome.ILLEGAL_STATE
        assert result.deleted is False
        assert repo.get_session("session-1") is not None
        assert len(repo.get_session("session-1").all_sets) == 2

    def test_completion_landing_before_delete_keeps_session(self):
        repo = _seed()
        original = repo.delete_active_session

        def completed_first(session_id):
            repo.mark_completed(
                session_id,
                completed_at=FIXED_NOW,
                total_volume=1000,
                duration_seconds=600,
            )
            return original(session_id)

        repo.delete_active_session = completed_first

        result = AbandonSessionUseCase(repo).execute(OWNER, "session-1")

        assert result.outcome == Outcome.ILLEGAL_STATE
        assert result.deleted is False
        session = repo.get_session("session-1")
        assert session is not None
        assert not session.is_active
        assert len(session.all_sets) == 2

    def test_trainer_cannot_abandon_client_session(self):
        repo = _seed()

        result = AbandonSessionUseCase(repo).execute(TRAINER, "session-1")

        assert result.outcome == Outcome.UNAUTHORIZED
        assert repo.get_session("session-1") is not None

    def test_unknown_session_is_not_found(self):
        result = AbandonSessionUseCase(FakeSessionRepository()).execute(OWNER, "missing")

        assert result.outcome == Outcome.NOT_FOUND


@pytest.mark.unit
class TestDeleteSession:
    """Tests for DeleteSessionUseCase."""

    @pytest.fixture
    def record_repo(self) -> FakePersonalRecordRepository:
        repo = FakePersonalRecordRepository()
        repo.seed([
            PersonalRecord(
                athlete_id="athlete-1",
                exercise_id="barbell-bench-press",
                record_type=RecordType.MAX_WEIGHT,
                value=100,
                achieved_at=FIXED_NOW,
                session_id="session-1",
            ),
            PersonalRecord(
                athlete_id="athlete-1",
                exercise_id="barbell-bench-press",
                record_type=RecordType.MAX_WEIGHT,
                value=90,
                achieved_at=FIXED_NOW,
                session_id="older-session",
            ),
        ])
        return repo

    def test_owner_deletes_completed_session_and_its_records(self, record_repo):
        repo = _seed(completed=True)

        result = DeleteSessionUseCase(repo, record_repo).execute(OWNER, "session-1")

        assert result.deleted is True
        assert repo.get_session("session-1") is None
        assert [r.session_id for r in record_repo.records] == ["older-session"]

    def test_trainer_may_delete_client_session(self, record_repo):
        repo = _seed()

        result = DeleteSessionUseCase(repo, record_repo).execute(TRAINER, "session-1")

        assert result.success
        assert repo.get_session("session-1") is None

    def test_other_client_is_unauthorized(self, record_repo):
        repo = _seed(completed=True)

        result = DeleteSessionUseCase(repo, record_repo).execute(
            Actor(user_id="athlete-2"), "session-1"
        )

        assert result.outcome == Outcome.UNAUTHORIZED
        assert len(record_repo.records) == 2

    def test_unknown_session_is_not_found(self, record_repo):
        result = DeleteSessionUseCase(FakeSessionRepository(), record_repo).execute(
            OWNER, "missing"
        )

        assert result.outcome == Outcome.NOT_FOUND
