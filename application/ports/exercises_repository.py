"""
Exercises Repository Interface (Port).

This module defines the abstract interface for looking up catalog exercises.
The catalog itself is managed outside the engine.
"""
from typing import Any, Dict, Optional, Protocol


class ExercisesRepository(Protocol):
    """Abstract interface for querying the exercise catalog."""

    def get_by_id(self, exercise_id: str) -> Optional[Dict[str, Any]]:
        """
        Get an exercise by its ID.

        Args:
            exercise_id: Catalog exercise ID

        Returns:
            Exercise dictionary (at least "id" and "name") or None if not found
        """
        ...
