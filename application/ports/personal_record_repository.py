"""
Personal Record Repository Interface (Port).

Records are append-only. The current best for a record type is always the
row with the highest value, derived at query time.
"""
from typing import List, Optional, Protocol

from domain.models import PersonalRecord, RecordType


class PersonalRecordRepository(Protocol):
    """Abstract interface for personal record history."""

    def get_best(
        self,
        athlete_id: str,
        exercise_id: str,
        record_type: RecordType,
    ) -> Optional[PersonalRecord]:
        """
        Get the highest-valued record of a type for an athlete and exercise.

        Returns:
            PersonalRecord or None if none exists yet
        """
        ...

    def append(self, record: PersonalRecord) -> PersonalRecord:
        """Insert a new record and return it with its generated ID."""
        ...

    def list_for_athlete(self, athlete_id: str) -> List[PersonalRecord]:
        """Get every record for an athlete, newest first."""
        ...

    def delete_for_session(self, session_id: str) -> int:
        """
        Delete the records set during a session.

        Returns:
            Number of records removed
        """
        ...
