"""
Shared lookups and checks for session use cases.
"""

from typing import Optional, Tuple

from application.ports import SessionRepository
from application.use_cases.results import Outcome
from domain.models import Actor, WorkoutSession


def load_owned_session(
    session_repo: SessionRepository,
    session_id: str,
    actor: Actor,
    *,
    require_active: bool = True,
    action: str = "modify",
) -> Tuple[Optional[WorkoutSession], Optional[Outcome], Optional[str]]:
    """
    Fetch a session and verify the actor owns it.

    Checks run in order: existence, ownership, then (optionally) that the
    session is still ACTIVE.

    Returns:
        (session, None, None) on success, or (None, outcome, message)
    """
    session = session_repo.get_session(session_id)
    if session is None:
        return None, Outcome.NOT_FOUND, f"Session not found: {session_id}"

    if not session.owned_by(actor.user_id):
        return None, Outcome.UNAUTHORIZED, f"Not allowed to {action} this session"

    if require_active and not session.is_active:
        return None, Outcome.ILLEGAL_STATE, f"Cannot {action} a completed session"

    return session, None, None
