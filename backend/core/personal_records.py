"""
Personal record detection.

Runs once per completed session. Every completed set with a positive weight
and rep count is checked against the athlete's current bests for:
- E1RM: estimated one-rep max
- MAX_WEIGHT: heaviest load lifted

Both checks are strict greater-than, so ties never create a record. The two
types are independent, so one set can produce zero, one or two records.
"""
from datetime import datetime
from typing import List, Optional
import logging

from application.ports.personal_record_repository import PersonalRecordRepository
from backend.core.metrics import estimated_one_rep_max, format_weight, round_metric
from domain.models import ExerciseSet, PersonalRecord, RecordType, WorkoutSession

logger = logging.getLogger(__name__)


def record_context(weight: float, reps: int) -> str:
    """Human-readable description of the set behind a record."""
    return f"{format_weight(weight)}kg x {reps} reps"


class PersonalRecordDetector:
    """
    Detects and appends new personal records for a completed session.

    History is append-only: existing records are never changed. The current
    best is re-read from the repository for every set, so a later set in the
    same session competes with records appended by earlier sets.
    """

    def __init__(self, record_repo: PersonalRecordRepository):
        """
        Initialize the detector.

        Args:
            record_repo: Repository for personal record history
        """
        self._record_repo = record_repo

    def detect(
        self,
        session: WorkoutSession,
        *,
        achieved_at: datetime,
    ) -> List[PersonalRecord]:
        """
        Check every eligible set in a session and append new records.

        Args:
            session: The completed session with entries and sets
            achieved_at: Timestamp to stamp on new records

        Returns:
            The records appended, in detection order
        """
        new_records: List[PersonalRecord] = []

        for entry in sorted(session.entries, key=lambda e: e.order):
            for exercise_set in sorted(entry.sets, key=lambda s: s.set_number):
                if not self._is_eligible(exercise_set):
                    continue

                weight = float(exercise_set.weight)
                reps = int(exercise_set.reps)
                context = record_context(weight, reps)

                e1rm = round_metric(estimated_one_rep_max(weight, reps))
                record = self._check(
                    session,
                    entry.exercise_id,
                    RecordType.E1RM,
                    e1rm,
                    context,
                    achieved_at,
                )
                if record:
                    new_records.append(record)

                record = self._check(
                    session,
                    entry.exercise_id,
                    RecordType.MAX_WEIGHT,
                    weight,
                    context,
                    achieved_at,
                )
                if record:
                    new_records.append(record)

        if new_records:
            logger.info(
                "Session %s produced %d personal record(s) for athlete %s",
                session.id,
                len(new_records),
                session.athlete_id,
            )
        return new_records

    @staticmethod
    def _is_eligible(exercise_set: ExerciseSet) -> bool:
        return bool(
            exercise_set.completed
            and exercise_set.weight
            and exercise_set.reps
            and exercise_set.weight > 0
            and exercise_set.reps > 0
        )

    def _check(
        self,
        session: WorkoutSession,
        exercise_id: str,
        record_type: RecordType,
        value: float,
        context: str,
        achieved_at: datetime,
    ) -> Optional[PersonalRecord]:
        best = self._record_repo.get_best(session.athlete_id, exercise_id, record_type)
        if best is not None and value <= best.value:
            return None

        return self._record_repo.append(
            PersonalRecord(
                athlete_id=session.athlete_id,
                exercise_id=exercise_id,
                record_type=record_type,
                value=value,
                context=context,
                achieved_at=achieved_at,
                session_id=session.id,
            )
        )
