"""
Supabase implementation of PersonalRecordRepository.

Records are only ever inserted by the completion path; the single delete
is used when a session is removed from history.
"""
import logging
from typing import List, Optional

from supabase import Client

from application.exceptions import RepositoryError
from domain.models import PersonalRecord, RecordType

logger = logging.getLogger(__name__)


class SupabasePersonalRecordRepository:
    """Supabase implementation of PersonalRecordRepository protocol."""

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
        """
        self._client = client

    def get_best(
        self,
        athlete_id: str,
        exercise_id: str,
        record_type: RecordType,
    ) -> Optional[PersonalRecord]:
        try:
            result = (
                self._client.table("personal_records")
                .select("*")
                .eq("athlete_id", athlete_id)
                .eq("exercise_id", exercise_id)
                .eq("record_type", record_type.value)
                .order("value", desc=True)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to get best {record_type.value} for {athlete_id}/{exercise_id}: {e}")
            raise RepositoryError(f"Failed to get personal record: {e}") from e

        if not result.data:
            return None
        return PersonalRecord.model_validate(result.data[0])

    def append(self, record: PersonalRecord) -> PersonalRecord:
        data = record.model_dump(mode="json", exclude={"id"})
        try:
            result = self._client.table("personal_records").insert(data).execute()
        except Exception as e:
            logger.error(f"Failed to append personal record for {record.athlete_id}: {e}")
            raise RepositoryError(f"Failed to append personal record: {e}") from e

        if not result.data:
            raise RepositoryError("Personal record insert returned no data")
        return PersonalRecord.model_validate(result.data[0])

    def list_for_athlete(self, athlete_id: str) -> List[PersonalRecord]:
        try:
            result = (
                self._client.table("personal_records")
                .select("*")
                .eq("athlete_id", athlete_id)
                .order("achieved_at", desc=True)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to list personal records for {athlete_id}: {e}")
            raise RepositoryError(f"Failed to list personal records: {e}") from e

        return [PersonalRecord.model_validate(row) for row in result.data or []]

    def delete_for_session(self, session_id: str) -> int:
        try:
            result = (
                self._client.table("personal_records")
                .delete()
                .eq("session_id", session_id)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to delete personal records for session {session_id}: {e}")
            raise RepositoryError(f"Failed to delete personal records: {e}") from e

        return len(result.data or [])
