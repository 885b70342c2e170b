"""
Session Repository Interface (Port).

This module defines the abstract interface for workout session persistence:
sessions, their exercise entries and the sets logged against them.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol

from domain.models import ExerciseSet, SessionExerciseEntry, WorkoutSession


class SessionRepository(Protocol):
    """
    Abstract interface for workout session persistence.

    Implementations own the session -> entry -> set hierarchy. Reads of a
    session always include its entries (ordered) and their sets (ordered by
    set number).
    """

    def create_session(
        self,
        athlete_id: str,
        *,
        started_at: datetime,
        template_id: Optional[str] = None,
        week_number: Optional[int] = None,
        logged_by: Optional[str] = None,
    ) -> WorkoutSession:
        """
        Create a new ACTIVE session.

        Args:
            athlete_id: User performing the session
            started_at: Start timestamp
            template_id: Originating template, if any
            week_number: Program week, if any
            logged_by: User who created the session

        Returns:
            The persisted session with its generated ID and no entries
        """
        ...

    def get_session(self, session_id: str) -> Optional[WorkoutSession]:
        """
        Get a session with all entries and sets.

        Returns:
            WorkoutSession or None if not found
        """
        ...

    def list_active_sessions(self, athlete_id: str) -> List[WorkoutSession]:
        """
        Get the athlete's sessions that have not been completed.

        Entries are not required to be populated.
        """
        ...

    def add_entry(
        self,
        session_id: str,
        *,
        exercise_id: str,
        position: str,
        order: int,
    ) -> SessionExerciseEntry:
        """Append an exercise entry to a session."""
        ...

    def get_entry(self, entry_id: str) -> Optional[SessionExerciseEntry]:
        """Get an entry (without requiring its sets)."""
        ...

    def create_set(self, exercise_set: ExerciseSet) -> ExerciseSet:
        """Persist a new set and return it with its generated ID."""
        ...

    def get_set(self, set_id: str) -> Optional[ExerciseSet]:
        """Get a set by ID."""
        ...

    def update_set(self, set_id: str, fields: Dict[str, Any]) -> Optional[ExerciseSet]:
        """
        Apply a partial update to a set.

        Args:
            set_id: Set to update
            fields: Column -> value mapping; only these columns change

        Returns:
            The updated set, or None if it does not exist
        """
        ...

    def mark_completed(
        self,
        session_id: str,
        *,
        completed_at: datetime,
        total_volume: float,
        duration_seconds: int,
        notes: Optional[str] = None,
    ) -> bool:
        """
        Record the completion of a session.

        The write must only apply while the session is still ACTIVE, so two
        racing completions cannot both succeed.

        Returns:
            True if this call completed the session, False otherwise
        """
        ...

    def delete_session(self, session_id: str) -> bool:
        """
        Delete a session together with its entries and sets.

        Returns:
            True if a session was deleted
        """
        ...

    def delete_active_session(self, session_id: str) -> bool:
        """
        Delete a session with its entries and sets, but only while it is
        still ACTIVE.

        A completion that lands first makes this a no-op, so an abandon can
        never remove a COMPLETED session.

        Returns:
            True if this call deleted the session
        """
        ...

    def list_completed_sessions(
        self,
        athlete_id: str,
        *,
        since: datetime,
        exercise_id: Optional[str] = None,
    ) -> List[WorkoutSession]:
        """
        Get the athlete's sessions completed at or after `since`, oldest
        completion first.

        Args:
            athlete_id: Athlete whose history to read
            since: Earliest completion timestamp to include
            exercise_id: When given, only sessions that include the exercise
                are returned, each carrying just that exercise's entries
                (with sets). Otherwise entries are not required to be
                populated.
        """
        ...

    def get_last_completed_entry(
        self,
        athlete_id: str,
        exercise_id: str,
    ) -> Optional[SessionExerciseEntry]:
        """
        Get the exercise entry from the athlete's most recently completed
        session that included this exercise, with its sets.
        """
        ...
