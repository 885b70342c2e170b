"""
Streak Repository Interface (Port).

One streak row per athlete, created lazily on first completion.
"""
from typing import Optional, Protocol

from domain.models import Streak


class StreakRepository(Protocol):
    """Abstract interface for streak persistence."""

    def get(self, athlete_id: str) -> Optional[Streak]:
        """Get an athlete's streak, or None if they have never completed a session."""
        ...

    def save(self, streak: Streak) -> Streak:
        """Insert or replace the athlete's streak."""
        ...
