"""
Get Session Use Case.

Reads one session, in any state, with its entries and sets. The athlete
who owns it and trainers may read it.
"""

import logging

from application.ports import SessionRepository
from application.use_cases.results import Outcome, SessionDetailResult
from domain.models import Actor

logger = logging.getLogger(__name__)


class GetSessionUseCase:
    """Use case for retrieving a single session."""

    def __init__(self, session_repo: SessionRepository) -> None:
        """
        Initialize with required dependencies.

        Args:
            session_repo: Repository for session persistence
        """
        self._session_repo = session_repo

    def execute(self, actor: Actor, session_id: str) -> SessionDetailResult:
        """
        Get a session by ID.

        Args:
            actor: Caller (for authorization)
            session_id: ID of the session to retrieve

        Returns:
            SessionDetailResult with the assembled session, entries ordered
            by position and sets by set number
        """
        session = self._session_repo.get_session(session_id)
        if session is None:
            return SessionDetailResult.failure(
                Outcome.NOT_FOUND,
                f"Session not found: {session_id}",
            )

        if not (session.owned_by(actor.user_id) or actor.is_trainer):
            logger.warning(f"{actor.user_id} denied read of session {session_id}")
            return SessionDetailResult.failure(
                Outcome.UNAUTHORIZED,
                "Not allowed to view this session",
            )

        return SessionDetailResult(session=session)
