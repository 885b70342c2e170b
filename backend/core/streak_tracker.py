"""
Weekly training streak.

The streak counts consecutive completions that are at most seven days apart
(a rolling window, not calendar weeks). Same-day completions each advance
the streak.
"""
from datetime import datetime, timedelta
import logging

from application.ports.streak_repository import StreakRepository
from backend.core.clock import ensure_utc
from domain.models import Streak

logger = logging.getLogger(__name__)

STREAK_WINDOW_DAYS = 7


class StreakTracker:
    """Updates an athlete's streak after a completed session."""

    def __init__(self, streak_repo: StreakRepository):
        self._streak_repo = streak_repo

    def record_completion(self, athlete_id: str, *, now: datetime) -> Streak:
        """
        Advance or reset the athlete's streak for a completion at `now`.

        Returns:
            The saved streak
        """
        streak = self._streak_repo.get(athlete_id)

        if streak is None:
            updated = Streak(
                athlete_id=athlete_id,
                current_streak=1,
                longest_streak=1,
                last_activity_date=now,
            )
        elif streak.last_activity_date is None:
            updated = streak.model_copy(update={
                "current_streak": 1,
                "longest_streak": max(1, streak.longest_streak),
                "last_activity_date": now,
            })
        else:
            elapsed = ensure_utc(now) - ensure_utc(streak.last_activity_date)
            days = elapsed // timedelta(days=1)

            if days <= STREAK_WINDOW_DAYS:
                current = streak.current_streak + 1
                updated = streak.model_copy(update={
                    "current_streak": current,
                    "longest_streak": max(current, streak.longest_streak),
                    "last_activity_date": now,
                })
            else:
                logger.info(
                    "Streak reset for athlete %s after %d days without training",
                    athlete_id,
                    days,
                )
                updated = streak.model_copy(update={
                    "current_streak": 1,
                    "last_activity_date": now,
                })

        return self._streak_repo.save(updated)
