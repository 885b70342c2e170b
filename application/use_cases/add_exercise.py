"""
AddExercise Use Case.

Appends a catalog exercise to an ACTIVE session, for quick workouts and
mid-session additions.
"""

import logging

from application.ports import ExercisesRepository, SessionRepository
from application.use_cases.results import AddExerciseResult, Outcome
from application.use_cases.session_access import load_owned_session
from domain.models import Actor

logger = logging.getLogger(__name__)

_ALPHABET_SIZE = 26


def position_label(order: int) -> str:
    """
    Display position for an appended entry.

    Each appended exercise is its own block, so the label is the block
    letter sequence (A..Z, AA, AB, ...) followed by 1: 0 -> "A1",
    25 -> "Z1", 26 -> "AA1".
    """
    letters = ""
    n = order + 1
    while n > 0:
        n, remainder = divmod(n - 1, _ALPHABET_SIZE)
        letters = chr(ord("A") + remainder) + letters
    return f"{letters}1"


class AddExerciseUseCase:
    """Use case for appending an exercise entry to a session."""

    def __init__(
        self,
        session_repo: SessionRepository,
        exercises_repo: ExercisesRepository,
    ) -> None:
        self._session_repo = session_repo
        self._exercises_repo = exercises_repo

    def execute(self, actor: Actor, session_id: str, exercise_id: str) -> AddExerciseResult:
        """
        Append `exercise_id` after all existing entries of the session.

        Returns:
            AddExerciseResult with the new entry ID and position label
        """
        session, outcome, error = load_owned_session(
            self._session_repo, session_id, actor, action="add exercises to"
        )
        if outcome is not None:
            return AddExerciseResult.failure(outcome, error)

        if self._exercises_repo.get_by_id(exercise_id) is None:
            return AddExerciseResult.failure(
                Outcome.NOT_FOUND,
                f"Exercise not found: {exercise_id}",
            )

        order = session.next_order
        entry = self._session_repo.add_entry(
            session_id,
            exercise_id=exercise_id,
            position=position_label(order),
            order=order,
        )
        logger.info(f"Added {exercise_id} to session {session_id} at {entry.position}")

        return AddExerciseResult(
            entry_id=entry.id,
            exercise_id=exercise_id,
            position=entry.position,
        )
