"""
Supabase implementation of SessionRepository.

Sessions live in three tables:
- workout_sessions: one row per session (completed_at NULL while ACTIVE)
- session_exercises: exercise entries, ordered by order_index
- exercise_sets: sets, keyed by session_exercise_id
"""
import logging
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from supabase import Client

from application.exceptions import RepositoryError
from domain.models import ExerciseSet, SessionExerciseEntry, WorkoutSession

logger = logging.getLogger(__name__)

_ENTRY_SELECT = "*, exercise_sets(*)"
_SESSION_SELECT = f"*, session_exercises({_ENTRY_SELECT})"


def _set_from_row(row: Dict[str, Any]) -> ExerciseSet:
    return ExerciseSet(
        id=row["id"],
        entry_id=row["session_exercise_id"],
        set_number=row["set_number"],
        set_type=row.get("set_type") or "WORKING",
        weight=row.get("weight"),
        reps=row.get("reps"),
        duration_seconds=row.get("duration_seconds"),
        rpe=row.get("rpe"),
        completed=row.get("completed", True),
    )


def _entry_from_row(row: Dict[str, Any]) -> SessionExerciseEntry:
    sets = [_set_from_row(s) for s in row.get("exercise_sets") or []]
    return SessionExerciseEntry(
        id=row["id"],
        session_id=row["session_id"],
        exercise_id=row["exercise_id"],
        position=row["position"],
        order=row.get("order_index") or 0,
        sets=sorted(sets, key=lambda s: s.set_number),
    )


def _session_from_row(row: Dict[str, Any]) -> WorkoutSession:
    entries = [_entry_from_row(e) for e in row.get("session_exercises") or []]
    return WorkoutSession(
        id=row["id"],
        athlete_id=row["athlete_id"],
        template_id=row.get("template_id"),
        week_number=row.get("week_number"),
        started_at=row["started_at"],
        completed_at=row.get("completed_at"),
        total_volume=row.get("total_volume"),
        duration_seconds=row.get("duration_seconds"),
        notes=row.get("notes"),
        logged_by=row.get("logged_by"),
        entries=sorted(entries, key=lambda e: e.order),
    )


class SupabaseSessionRepository:
    """
    Supabase implementation of SessionRepository protocol.

    Failed queries are logged and re-raised as RepositoryError.
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
        """
        self._client = client

    def create_session(
        self,
        athlete_id: str,
        *,
        started_at: datetime,
        template_id: Optional[str] = None,
        week_number: Optional[int] = None,
        logged_by: Optional[str] = None,
    ) -> WorkoutSession:
        data = {
            "athlete_id": athlete_id,
            "started_at": started_at.isoformat(),
            "template_id": template_id,
            "week_number": week_number,
            "logged_by": logged_by,
        }
        try:
            result = self._client.table("workout_sessions").insert(data).execute()
        except Exception as e:
            logger.error(f"Failed to create session for {athlete_id}: {e}")
            raise RepositoryError(f"Failed to create session: {e}") from e

        if not result.data:
            raise RepositoryError("Session insert returned no data")
        return _session_from_row(result.data[0])

    def get_session(self, session_id: str) -> Optional[WorkoutSession]:
        try:
            result = (
                self._client.table("workout_sessions")
                .select(_SESSION_SELECT)
                .eq("id", session_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to get session {session_id}: {e}")
            raise RepositoryError(f"Failed to get session: {e}") from e

        if not result.data:
            return None
        return _session_from_row(result.data[0])

    def list_active_sessions(self, athlete_id: str) -> List[WorkoutSession]:
        try:
            result = (
                self._client.table("workout_sessions")
                .select("*")
                .eq("athlete_id", athlete_id)
                .is_("completed_at", "null")
                .order("started_at", desc=True)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to list active sessions for {athlete_id}: {e}")
            raise RepositoryError(f"Failed to list active sessions: {e}") from e

        return [_session_from_row(row) for row in result.data or []]

    def add_entry(
        self,
        session_id: str,
        *,
        exercise_id: str,
        position: str,
        order: int,
    ) -> SessionExerciseEntry:
        data = {
            "session_id": session_id,
            "exercise_id": exercise_id,
            "position": position,
            "order_index": order,
        }
        try:
            result = self._client.table("session_exercises").insert(data).execute()
        except Exception as e:
            logger.error(f"Failed to add {exercise_id} to session {session_id}: {e}")
            raise RepositoryError(f"Failed to add session exercise: {e}") from e

        if not result.data:
            raise RepositoryError("Session exercise insert returned no data")
        return _entry_from_row(result.data[0])

    def get_entry(self, entry_id: str) -> Optional[SessionExerciseEntry]:
        try:
            result = (
                self._client.table("session_exercises")
                .select(_ENTRY_SELECT)
                .eq("id", entry_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to get session exercise {entry_id}: {e}")
            raise RepositoryError(f"Failed to get session exercise: {e}") from e

        if not result.data:
            return None
        return _entry_from_row(result.data[0])

    def create_set(self, exercise_set: ExerciseSet) -> ExerciseSet:
        data = {
            "session_exercise_id": exercise_set.entry_id,
            "set_number": exercise_set.set_number,
            "set_type": exercise_set.set_type.value,
            "weight": exercise_set.weight,
            "reps": exercise_set.reps,
            "duration_seconds": exercise_set.duration_seconds,
            "rpe": exercise_set.rpe,
            "completed": exercise_set.completed,
        }
        try:
            result = self._client.table("exercise_sets").insert(data).execute()
        except Exception as e:
            logger.error(f"Failed to log set on {exercise_set.entry_id}: {e}")
            raise RepositoryError(f"Failed to create set: {e}") from e

        if not result.data:
            raise RepositoryError("Set insert returned no data")
        return _set_from_row(result.data[0])

    def get_set(self, set_id: str) -> Optional[ExerciseSet]:
        try:
            result = (
                self._client.table("exercise_sets")
                .select("*")
                .eq("id", set_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to get set {set_id}: {e}")
            raise RepositoryError(f"Failed to get set: {e}") from e

        if not result.data:
            return None
        return _set_from_row(result.data[0])

    def update_set(self, set_id: str, fields: Dict[str, Any]) -> Optional[ExerciseSet]:
        data = {
            key: value.value if isinstance(value, Enum) else value
            for key, value in fields.items()
        }
        try:
            result = (
                self._client.table("exercise_sets")
                .update(data)
                .eq("id", set_id)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to update set {set_id}: {e}")
            raise RepositoryError(f"Failed to update set: {e}") from e

        if not result.data:
            return None
        return _set_from_row(result.data[0])

    def mark_completed(
        self,
        session_id: str,
        *,
        completed_at: datetime,
        total_volume: float,
        duration_seconds: int,
        notes: Optional[str] = None,
    ) -> bool:
        data: Dict[str, Any] = {
            "completed_at": completed_at.isoformat(),
            "total_volume": total_volume,
            "duration_seconds": duration_seconds,
        }
        if notes is not None:
            data["notes"] = notes

        try:
            # Only matches while the row is still ACTIVE
            result = (
                self._client.table("workout_sessions")
                .update(data)
                .eq("id", session_id)
                .is_("completed_at", "null")
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to complete session {session_id}: {e}")
            raise RepositoryError(f"Failed to complete session: {e}") from e

        return bool(result.data)

    def delete_session(self, session_id: str) -> bool:
        try:
            entries = (
                self._client.table("session_exercises")
                .select("id")
                .eq("session_id", session_id)
                .execute()
            )
            entry_ids = [row["id"] for row in entries.data or []]
            if entry_ids:
                self._client.table("exercise_sets").delete().in_(
                    "session_exercise_id", entry_ids
                ).execute()
                self._client.table("session_exercises").delete().eq(
                    "session_id", session_id
                ).execute()

            result = (
                self._client.table("workout_sessions")
                .delete()
                .eq("id", session_id)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to delete session {session_id}: {e}")
            raise RepositoryError(f"Failed to delete session: {e}") from e

        return bool(result.data)

    def delete_active_session(self, session_id: str) -> bool:
        """
        Delete an ACTIVE session in one transaction.

        Runs the delete_active_session database function, which removes the
        sets, entries and session row only while completed_at IS NULL.
        """
        try:
            result = self._client.rpc(
                "delete_active_session",
                {"p_session_id": session_id},
            ).execute()
        except Exception as e:
            logger.error(f"Failed to abandon session {session_id}: {e}")
            raise RepositoryError(f"Failed to abandon session: {e}") from e

        return bool(result.data)

    def list_completed_sessions(
        self,
        athlete_id: str,
        *,
        since: datetime,
        exercise_id: Optional[str] = None,
    ) -> List[WorkoutSession]:
        select = "*"
        if exercise_id:
            select = f"*, session_exercises!inner({_ENTRY_SELECT})"

        try:
            query = (
                self._client.table("workout_sessions")
                .select(select)
                .eq("athlete_id", athlete_id)
                .not_.is_("completed_at", "null")
                .gte("completed_at", since.isoformat())
            )
            if exercise_id:
                query = query.eq("session_exercises.exercise_id", exercise_id)
            result = query.order("completed_at").execute()
        except Exception as e:
            logger.error(f"Failed to list completed sessions for {athlete_id}: {e}")
            raise RepositoryError(f"Failed to list completed sessions: {e}") from e

        return [_session_from_row(row) for row in result.data or []]

    def get_last_completed_entry(
        self,
        athlete_id: str,
        exercise_id: str,
    ) -> Optional[SessionExerciseEntry]:
        try:
            result = (
                self._client.table("workout_sessions")
                .select(f"id, completed_at, session_exercises!inner({_ENTRY_SELECT})")
                .eq("athlete_id", athlete_id)
                .eq("session_exercises.exercise_id", exercise_id)
                .not_.is_("completed_at", "null")
                .order("completed_at", desc=True)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to get previous {exercise_id} for {athlete_id}: {e}")
            raise RepositoryError(f"Failed to get previous performance: {e}") from e

        if not result.data:
            return None
        entries = result.data[0].get("session_exercises") or []
        if not entries:
            return None
        return _entry_from_row(entries[0])
