"""
AbandonSession and DeleteSession Use Cases.

Abandoning cancels an ACTIVE session and is reserved for its owner.
Deleting removes a session from history in any state; trainers may delete
a client's session. Neither asks for confirmation.
"""

import logging

from application.ports import PersonalRecordRepository, SessionRepository
from application.use_cases.results import Outcome, RemoveSessionResult
from application.use_cases.session_access import load_owned_session
from domain.models import Actor

logger = logging.getLogger(__name__)


class AbandonSessionUseCase:
    """Use case for abandoning an in-progress session."""

    def __init__(self, session_repo: SessionRepository) -> None:
        self._session_repo = session_repo

    def execute(self, actor: Actor, session_id: str) -> RemoveSessionResult:
        """
        Delete an ACTIVE session with its entries and sets.

        Completed sessions are rejected with ILLEGAL_STATE and left intact.
        """
        _, outcome, error = load_owned_session(
            self._session_repo, session_id, actor, action="abandon"
        )
        if outcome is not None:
            return RemoveSessionResult.failure(outcome, error)

        if not self._session_repo.delete_active_session(session_id):
            # Completed between our read and the delete
            return RemoveSessionResult.failure(
                Outcome.ILLEGAL_STATE,
                "Cannot abandon a completed session",
            )
        logger.info(f"Session {session_id} abandoned by {actor.user_id}")
        return RemoveSessionResult(deleted=True)


class DeleteSessionUseCase:
    """Use case for removing a session from history."""

    def __init__(
        self,
        session_repo: SessionRepository,
        record_repo: PersonalRecordRepository,
    ) -> None:
        self._session_repo = session_repo
        self._record_repo = record_repo

    def execute(self, actor: Actor, session_id: str) -> RemoveSessionResult:
        """
        Delete a session in any state, plus the records set during it.

        Owners may delete their own sessions; trainers may delete anyone's.
        """
        session = self._session_repo.get_session(session_id)
        if session is None:
            return RemoveSessionResult.failure(
                Outcome.NOT_FOUND,
                f"Session not found: {session_id}",
            )

        if not (session.owned_by(actor.user_id) or actor.is_trainer):
            return RemoveSessionResult.failure(
                Outcome.UNAUTHORIZED,
                "Not allowed to delete this session",
            )

        removed_records = self._record_repo.delete_for_session(session_id)
        deleted = self._session_repo.delete_session(session_id)
        logger.info(
            f"Session {session_id} deleted by {actor.user_id} "
            f"({removed_records} personal record(s) removed)"
        )
        return RemoveSessionResult(deleted=deleted)
