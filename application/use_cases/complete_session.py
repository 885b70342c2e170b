"""
CompleteSession Use Case.

Finishes an ACTIVE session. The steps run in a fixed order because each
one assumes the previous has been persisted:
1. Aggregate sets and compute total volume and duration
2. Persist the completion (only if the session is still ACTIVE)
3. Detect personal records
4. Update the athlete's streak

The steps are not wrapped in a transaction: if step 3 or 4 fails, the
completion from step 2 stays persisted.
"""

import logging
import math
from datetime import datetime
from typing import Callable, Optional

from application.ports import (
    PersonalRecordRepository,
    SessionRepository,
    StreakRepository,
)
from application.use_cases.results import CompleteSessionResult, Outcome
from application.use_cases.session_access import load_owned_session
from backend.core.clock import ensure_utc, utc_now
from backend.core.metrics import total_volume
from backend.core.personal_records import PersonalRecordDetector
from backend.core.streak_tracker import StreakTracker
from domain.models import Actor

logger = logging.getLogger(__name__)


class CompleteSessionUseCase:
    """
    Use case for completing a workout session.

    Usage:
        >>> use_case = CompleteSessionUseCase(session_repo, record_repo, streak_repo)
        >>> result = use_case.execute(actor, "session-1", notes="Felt strong")
        >>> result.total_volume, result.duration_seconds
    """

    def __init__(
        self,
        session_repo: SessionRepository,
        record_repo: PersonalRecordRepository,
        streak_repo: StreakRepository,
        *,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """
        Initialize the use case with required dependencies.

        Args:
            session_repo: Repository for session persistence
            record_repo: Repository for personal record history
            streak_repo: Repository for streaks
            clock: Source of the current time
        """
        self._session_repo = session_repo
        self._detector = PersonalRecordDetector(record_repo)
        self._streak_tracker = StreakTracker(streak_repo)
        self._clock = clock

    def execute(
        self,
        actor: Actor,
        session_id: str,
        *,
        notes: Optional[str] = None,
    ) -> CompleteSessionResult:
        """
        Execute the complete session workflow.

        Args:
            actor: Caller; must own the session
            session_id: Session to complete
            notes: Optional free-text notes

        Returns:
            CompleteSessionResult with volume, duration and new records
        """
        session, outcome, error = load_owned_session(
            self._session_repo, session_id, actor, action="complete"
        )
        if outcome is not None:
            logger.warning(f"Cannot complete session {session_id}: {error}")
            return CompleteSessionResult.failure(outcome, error)

        # Step 1: aggregates
        now = self._clock()
        volume = total_volume(session.all_sets)
        elapsed = ensure_utc(now) - ensure_utc(session.started_at)
        duration = max(0, math.floor(elapsed.total_seconds()))

        # Step 2: persist completion
        completed = self._session_repo.mark_completed(
            session_id,
            completed_at=now,
            total_volume=volume,
            duration_seconds=duration,
            notes=notes,
        )
        if not completed:
            # Another request completed it between our read and write
            return CompleteSessionResult.failure(
                Outcome.ILLEGAL_STATE,
                "Session has already been completed",
            )
        logger.info(
            f"Completed session {session_id}: volume={volume}, duration={duration}s"
        )

        # Step 3: personal records
        new_records = self._detector.detect(session, achieved_at=now)

        # Step 4: streak
        self._streak_tracker.record_completion(session.athlete_id, now=now)

        return CompleteSessionResult(
            total_volume=volume,
            duration_seconds=duration,
            new_records=new_records,
        )
