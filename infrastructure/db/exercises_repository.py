"""
Supabase implementation of ExercisesRepository.

This module provides the concrete Supabase implementation for looking up
exercises in the catalog table.
"""
import logging
from typing import Any, Dict, Optional

from supabase import Client

from application.exceptions import RepositoryError

logger = logging.getLogger(__name__)


class SupabaseExercisesRepository:
    """
    Supabase implementation of ExercisesRepository protocol.

    Lookups are cached per instance; the catalog changes rarely and a
    repository lives for a single request.
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
        """
        self._client = client
        self._exercises_cache: Dict[str, Dict[str, Any]] = {}

    def get_by_id(self, exercise_id: str) -> Optional[Dict[str, Any]]:
        """
        Get an exercise by its ID.

        Args:
            exercise_id: Catalog exercise ID

        Returns:
            Exercise dictionary or None if not found
        """
        cached = self._exercises_cache.get(exercise_id)
        if cached:
            return cached

        try:
            result = (
                self._client.table("exercises")
                .select("*")
                .eq("id", exercise_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to get exercise {exercise_id}: {e}")
            raise RepositoryError(f"Failed to get exercise: {e}") from e

        if not result.data:
            return None
        exercise = result.data[0]
        self._exercises_cache[exercise_id] = exercise
        return exercise
