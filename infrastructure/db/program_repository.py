"""
Supabase implementation of ProgramRepository.

Reads the program context a session is started from. Templates, programs,
assignments and baselines are written by the program authoring side; this
adapter never modifies them.
"""
import logging
from typing import Any, Dict, Optional

from supabase import Client

from application.exceptions import RepositoryError
from domain.models import (
    ProgramAssignment,
    ProgramContext,
    TemplateExercise,
    WorkoutTemplate,
)

logger = logging.getLogger(__name__)


def _template_exercise_from_row(row: Dict[str, Any]) -> TemplateExercise:
    return TemplateExercise(
        exercise_id=row["exercise_id"],
        position=row.get("position") or "A1",
        target_sets=row.get("target_sets") or 3,
        target_reps=row.get("target_reps") or "8-12",
        target_weight=row.get("target_weight") or "",
        rest_seconds=row.get("rest_seconds") if row.get("rest_seconds") is not None else 90,
    )


class SupabaseProgramRepository:
    """
    Supabase implementation of ProgramRepository protocol.

    Tables: workout_templates, template_exercises, programs,
    program_assignments and exercise_baselines.
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
        """
        self._client = client

    def get_template(self, template_id: str) -> Optional[WorkoutTemplate]:
        try:
            result = (
                self._client.table("workout_templates")
                .select(
                    "id, name, program_id, "
                    "programs(id, weeks, progression_scheme), "
                    "template_exercises(*)"
                )
                .eq("id", template_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to get template {template_id}: {e}")
            raise RepositoryError(f"Failed to get template: {e}") from e

        if not result.data:
            return None
        row = result.data[0]

        program = None
        program_row = row.get("programs")
        if program_row:
            program = ProgramContext(
                id=program_row["id"],
                weeks=program_row.get("weeks") or 0,
                progression_scheme=program_row.get("progression_scheme") or "NONE",
            )

        # Block order first, then exercise order within the block
        exercise_rows = sorted(
            row.get("template_exercises") or [],
            key=lambda r: (r.get("block_order") or 0, r.get("order_index") or 0),
        )

        return WorkoutTemplate(
            id=row["id"],
            name=row.get("name") or "",
            program=program,
            exercises=[_template_exercise_from_row(r) for r in exercise_rows],
        )

    def get_active_assignment(
        self,
        program_id: str,
        athlete_id: str,
    ) -> Optional[ProgramAssignment]:
        try:
            result = (
                self._client.table("program_assignments")
                .select("*")
                .eq("program_id", program_id)
                .eq("athlete_id", athlete_id)
                .eq("active", True)
                .order("start_date", desc=True)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to get assignment for {athlete_id} on {program_id}: {e}")
            raise RepositoryError(f"Failed to get program assignment: {e}") from e

        if not result.data:
            return None
        return ProgramAssignment.model_validate(result.data[0])

    def get_exercise_baselines(self, assignment_id: str) -> Dict[str, float]:
        try:
            result = (
                self._client.table("exercise_baselines")
                .select("exercise_id, starting_weight")
                .eq("assignment_id", assignment_id)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to get baselines for assignment {assignment_id}: {e}")
            raise RepositoryError(f"Failed to get exercise baselines: {e}") from e

        return {
            row["exercise_id"]: float(row["starting_weight"])
            for row in result.data or []
            if row.get("starting_weight") is not None
        }
