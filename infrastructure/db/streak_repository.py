"""
Supabase implementation of StreakRepository.
"""
import logging
from typing import Optional

from supabase import Client

from application.exceptions import RepositoryError
from domain.models import Streak

logger = logging.getLogger(__name__)


class SupabaseStreakRepository:
    """Supabase implementation of StreakRepository protocol (one row per athlete)."""

    def __init__(self, client: Client):
        self._client = client

    def get(self, athlete_id: str) -> Optional[Streak]:
        try:
            result = (
                self._client.table("streaks")
                .select("*")
                .eq("athlete_id", athlete_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to get streak for {athlete_id}: {e}")
            raise RepositoryError(f"Failed to get streak: {e}") from e

        if not result.data:
            return None
        return Streak.model_validate(result.data[0])

    def save(self, streak: Streak) -> Streak:
        data = streak.model_dump(mode="json")
        try:
            result = (
                self._client.table("streaks")
                .upsert(data, on_conflict="athlete_id")
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to save streak for {streak.athlete_id}: {e}")
            raise RepositoryError(f"Failed to save streak: {e}") from e

        if not result.data:
            return streak
        return Streak.model_validate(result.data[0])
