"""
Unit tests for the weekly streak tracker.
"""
from datetime import timedelta

import pytest

from backend.core.streak_tracker import STREAK_WINDOW_DAYS, StreakTracker
from domain.models import Streak
from tests.fakes import FIXED_NOW, FakeStreakRepository


@pytest.fixture
def streak_repo() -> FakeStreakRepository:
    return FakeStreakRepository()


@pytest.fixture
def tracker(streak_repo) -> StreakTracker:
    return StreakTracker(streak_repo)


@pytest.mark.unit
class TestStreakTracker:
    """Tests for StreakTracker.record_completion."""

    def test_first_completion_starts_streak(self, tracker):
        streak = tracker.record_completion("athlete-1", now=FIXED_NOW)

        assert streak.current_streak == 1
        assert streak.longest_streak == 1
        assert streak.last_activity_date == FIXED_NOW
        assert streak.freezes_allowed == 2

    def test_increment_then_reset(self, tracker, streak_repo):
        tracker.record_completion("athlete-1", now=FIXED_NOW)

        second = tracker.record_completion("athlete-1", now=FIXED_NOW + timedelta(days=5))
        assert (second.current_streak, second.longest_streak) == (2, 2)

        third = tracker.record_completion("athlete-1", now=FIXED_NOW + timedelta(days=15))
        assert (third.current_streak, third.longest_streak) == (1, 2)

        assert streak_repo.get("athlete-1") == third

    def test_exactly_seven_days_continues(self, tracker):
        tracker.record_completion("athlete-1", now=FIXED_NOW)

        streak = tracker.record_completion(
            "athlete-1",
            now=FIXED_NOW + timedelta(days=STREAK_WINDOW_DAYS, hours=23),
        )

        assert streak.current_streak == 2

    def test_eight_days_resets(self, tracker):
        tracker.record_completion("athlete-1", now=FIXED_NOW)

        streak = tracker.record_completion("athlete-1", now=FIXED_NOW + timedelta(days=8))

        assert streak.current_streak == 1

    def test_same_day_completions_each_count(self, tracker):
        tracker.record_completion("athlete-1", now=FIXED_NOW)
        streak = tracker.record_completion("athlete-1", now=FIXED_NOW + timedelta(hours=2))

        assert streak.current_streak == 2

    def test_missing_last_activity_restarts_at_one(self, tracker, streak_repo):
        streak_repo.seed(Streak(athlete_id="athlete-1", current_streak=0, longest_streak=4))

        streak = tracker.record_completion("athlete-1", now=FIXED_NOW)

        assert streak.current_streak == 1
        assert streak.longest_streak == 4

    def test_reset_keeps_longest_and_freezes(self, tracker, streak_repo):
        streak_repo.seed(Streak(
            athlete_id="athlete-1",
            current_streak=6,
            longest_streak=9,
            last_activity_date=FIXED_NOW - timedelta(days=30),
            freezes_used=1,
        ))

        streak = tracker.record_completion("athlete-1", now=FIXED_NOW)

        assert streak.current_streak == 1
        assert streak.longest_streak == 9
        assert streak.freezes_used == 1
