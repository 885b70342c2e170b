"""
LogSet Use Case.

Creates and edits the sets of an ACTIVE session. Set numbers are not
required to be logged in order. Out-of-range values (negative weight, RPE
above 10, ...) come back as an INVALID outcome.
"""

import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from application.ports import SessionRepository
from application.use_cases.results import LogSetResult, Outcome
from application.use_cases.session_access import load_owned_session
from domain.models import Actor, ExerciseSet, SetType

logger = logging.getLogger(__name__)

# Columns a caller may change on an existing set
UPDATABLE_SET_FIELDS = frozenset({
    "set_type",
    "weight",
    "reps",
    "duration_seconds",
    "rpe",
    "completed",
})


def _describe(error: ValidationError) -> str:
    """One-line summary of the fields that failed validation."""
    fields = ", ".join(
        ".".join(str(part) for part in err["loc"]) for err in error.errors()
    )
    return f"Invalid set values: {fields}"


class LogSetUseCase:
    """Use case for logging new sets and updating existing ones."""

    def __init__(self, session_repo: SessionRepository) -> None:
        self._session_repo = session_repo

    def log_set(
        self,
        actor: Actor,
        entry_id: str,
        *,
        set_number: int,
        set_type: SetType = SetType.WORKING,
        weight: Optional[float] = None,
        reps: Optional[int] = None,
        duration_seconds: Optional[int] = None,
        rpe: Optional[float] = None,
    ) -> LogSetResult:
        """
        Append a completed set to a session exercise entry.

        Returns:
            LogSetResult with the new set ID
        """
        entry = self._session_repo.get_entry(entry_id)
        if entry is None:
            return LogSetResult.failure(Outcome.NOT_FOUND, f"Session exercise not found: {entry_id}")

        _, outcome, error = load_owned_session(
            self._session_repo, entry.session_id, actor, action="log sets in"
        )
        if outcome is not None:
            return LogSetResult.failure(outcome, error)

        try:
            new_set = ExerciseSet(
                entry_id=entry_id,
                set_number=set_number,
                set_type=set_type,
                weight=weight,
                reps=reps,
                duration_seconds=duration_seconds,
                rpe=rpe,
                completed=True,
            )
        except ValidationError as e:
            return LogSetResult.failure(Outcome.INVALID, _describe(e))

        created = self._session_repo.create_set(new_set)
        logger.debug(f"Logged set {set_number} on entry {entry_id}: {weight}kg x {reps}")
        return LogSetResult(set_id=created.id)

    def update_set(
        self,
        actor: Actor,
        set_id: str,
        fields: Dict[str, Any],
    ) -> LogSetResult:
        """
        Apply a partial update to an existing set.

        Args:
            actor: Caller; must own the session
            set_id: Set to update
            fields: Subset of UPDATABLE_SET_FIELDS; unknown keys are ignored

        Returns:
            LogSetResult echoing the set ID
        """
        existing = self._session_repo.get_set(set_id)
        if existing is None:
            return LogSetResult.failure(Outcome.NOT_FOUND, f"Set not found: {set_id}")

        entry = self._session_repo.get_entry(existing.entry_id)
        if entry is None:
            return LogSetResult.failure(
                Outcome.NOT_FOUND,
                f"Session exercise not found: {existing.entry_id}",
            )

        _, outcome, error = load_owned_session(
            self._session_repo, entry.session_id, actor, action="edit sets in"
        )
        if outcome is not None:
            return LogSetResult.failure(outcome, error)

        changes = {k: v for k, v in fields.items() if k in UPDATABLE_SET_FIELDS}
        if not changes:
            return LogSetResult(set_id=set_id)

        # Validate the merged set so coercion (e.g. "DROP" -> SetType.DROP) applies
        try:
            merged = ExerciseSet.model_validate({**existing.model_dump(), **changes})
        except ValidationError as e:
            return LogSetResult.failure(Outcome.INVALID, _describe(e))
        changes = {k: getattr(merged, k) for k in changes}

        self._session_repo.update_set(set_id, changes)
        return LogSetResult(set_id=set_id)
