"""
Program Repository Interface (Port).

Read-only access to the program context a session is started from:
workout templates, client program assignments and exercise baselines.
Authoring of these records happens outside the engine.
"""
from typing import Dict, Optional, Protocol

from domain.models import ProgramAssignment, WorkoutTemplate


class ProgramRepository(Protocol):
    """Abstract interface for reading templates, assignments and baselines."""

    def get_template(self, template_id: str) -> Optional[WorkoutTemplate]:
        """
        Get a template with its program context and exercises.

        Exercises are returned flattened in template order (block order, then
        exercise order within the block).

        Returns:
            WorkoutTemplate or None if not found
        """
        ...

    def get_active_assignment(
        self,
        program_id: str,
        athlete_id: str,
    ) -> Optional[ProgramAssignment]:
        """Get the athlete's active assignment to a program, if any."""
        ...

    def get_exercise_baselines(self, assignment_id: str) -> Dict[str, float]:
        """
        Get the starting weights recorded for an assignment.

        Returns:
            Mapping of exercise ID -> starting weight (kg); empty if no
            baseline has been recorded
        """
        ...
