"""
Progress Service for athlete-facing progress views.

Read-side queries over the data written by session completion:
- Personal record bests, grouped by exercise
- Training streak
- Previous performance for an exercise (pre-fills the next session)
- Week-by-week progression previews for a template exercise
- Chart series: weekly volume, e1RM per session, and daily activity
"""
import calendar
from collections import Counter
from datetime import date, datetime, timedelta
from typing import Callable, Dict, List, Optional
from dataclasses import dataclass, field
import logging
import math

from application.ports.personal_record_repository import PersonalRecordRepository
from application.ports.session_repository import SessionRepository
from application.ports.streak_repository import StreakRepository
from backend.core.clock import ensure_utc, utc_now
from backend.core.metrics import (
    estimated_one_rep_max,
    format_e1rm,
    intensity_percentage,
    progressive_overload,
    round_metric,
)
from backend.core.progression import WeekTargets, generate_progression_preview
from domain.models import (
    Actor,
    ExerciseSet,
    NominalTargets,
    PersonalRecord,
    ProgressionScheme,
    RecordType,
    Streak,
)

logger = logging.getLogger(__name__)


def week_start(moment: datetime) -> date:
    """Monday of the UTC week containing the moment."""
    day = ensure_utc(moment).date()
    return day - timedelta(days=day.weekday())


def months_before(moment: datetime, months: int) -> datetime:
    """
    Same time of day `months` calendar months earlier.

    The day is clamped to the end of shorter months (May 31 minus three
    months is February 28 or 29).
    """
    year, month = divmod(moment.year * 12 + moment.month - 1 - months, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


# =============================================================================
# Response DTOs
# =============================================================================


@dataclass
class ExerciseRecords:
    """Current bests for one exercise, keyed by record type."""
    exercise_id: str
    records: Dict[RecordType, PersonalRecord] = field(default_factory=dict)


@dataclass
class PersonalRecordsResponse:
    """Response for the personal records view."""
    athlete_id: str
    exercises: List[ExerciseRecords] = field(default_factory=list)


@dataclass
class PreviousPerformance:
    """What the athlete did last time they performed an exercise."""
    exercise_id: str
    entry_id: Optional[str]
    session_id: Optional[str]
    sets: List[ExerciseSet] = field(default_factory=list)
    best_e1rm: Optional[float] = None


@dataclass
class VolumePoint:
    """Completed volume for one training week (Monday start, UTC)."""
    week_start: date
    volume: int
    sessions: int
    label: str
    # Versus the previous week that had training; None for the first
    change_percent: Optional[float] = None


@dataclass
class E1RMPoint:
    """Best estimated 1RM for an exercise within one completed session."""
    session_id: str
    completed_at: datetime
    e1rm: float
    weight: float
    reps: int
    display: str
    intensity: int


@dataclass
class ActivityDay:
    """Number of sessions completed on one UTC day."""
    day: date
    count: int


# =============================================================================
# Progress Service
# =============================================================================


class ProgressService:
    """
    Service for progress queries.

    Trainers may look at any athlete; everyone else only ever sees their own
    data, whatever athlete ID they ask for.
    """

    def __init__(
        self,
        session_repo: SessionRepository,
        record_repo: PersonalRecordRepository,
        streak_repo: StreakRepository,
        *,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Initialize the progress service.

        Args:
            session_repo: Repository for session history
            record_repo: Repository for personal record history
            streak_repo: Repository for streaks
            clock: Source of "now" for the chart windows
        """
        self._session_repo = session_repo
        self._record_repo = record_repo
        self._streak_repo = streak_repo
        self._clock = clock

    @staticmethod
    def resolve_athlete(actor: Actor, athlete_id: Optional[str] = None) -> str:
        """Athlete whose data the actor is allowed to read."""
        if athlete_id and actor.is_trainer:
            return athlete_id
        return actor.user_id

    def get_personal_records(
        self,
        actor: Actor,
        athlete_id: Optional[str] = None,
    ) -> PersonalRecordsResponse:
        """
        Get the best record of each type for every exercise.

        History is append-only, so the best is the highest value; on a tie
        the earliest record wins.
        """
        target = self.resolve_athlete(actor, athlete_id)
        history = self._record_repo.list_for_athlete(target)

        by_exercise: Dict[str, ExerciseRecords] = {}
        for record in sorted(history, key=lambda r: r.achieved_at):
            group = by_exercise.setdefault(
                record.exercise_id,
                ExerciseRecords(exercise_id=record.exercise_id),
            )
            best = group.records.get(record.record_type)
            if best is None or record.value > best.value:
                group.records[record.record_type] = record

        return PersonalRecordsResponse(
            athlete_id=target,
            exercises=sorted(by_exercise.values(), key=lambda g: g.exercise_id),
        )

    def get_streak(
        self,
        actor: Actor,
        athlete_id: Optional[str] = None,
    ) -> Streak:
        """Get the athlete's streak, or zeroed defaults if they have none."""
        target = self.resolve_athlete(actor, athlete_id)
        streak = self._streak_repo.get(target)
        if streak is None:
            return Streak(athlete_id=target)
        return streak

    def get_previous_performance(
        self,
        athlete_id: str,
        exercise_id: str,
    ) -> PreviousPerformance:
        """
        Get the sets from the athlete's most recent completed session that
        included the exercise, with the best e1RM among them.
        """
        entry = self._session_repo.get_last_completed_entry(athlete_id, exercise_id)
        if entry is None:
            logger.debug(f"No previous performance for {athlete_id}/{exercise_id}")
            return PreviousPerformance(
                exercise_id=exercise_id,
                entry_id=None,
                session_id=None,
            )

        sets = sorted(entry.sets, key=lambda s: s.set_number)
        estimates = [
            estimated_one_rep_max(s.weight, s.reps)
            for s in sets
            if s.completed
        ]
        best = max(estimates, default=0.0)

        return PreviousPerformance(
            exercise_id=exercise_id,
            entry_id=entry.id,
            session_id=entry.session_id,
            sets=sets,
            best_e1rm=round_metric(best) if best > 0 else None,
        )

    def get_volume_history(
        self,
        actor: Actor,
        athlete_id: Optional[str] = None,
        *,
        weeks: int = 12,
    ) -> List[VolumePoint]:
        """
        Total completed volume per week over the last `weeks` weeks.

        Sessions are bucketed by the Monday of their completion week. Weeks
        without training are left out rather than reported as zero.
        """
        target = self.resolve_athlete(actor, athlete_id)
        since = self._clock() - timedelta(weeks=weeks)
        sessions = self._session_repo.list_completed_sessions(target, since=since)

        totals: Dict[date, float] = {}
        counts: Counter = Counter()
        for session in sessions:
            if session.total_volume is None:
                continue
            bucket = week_start(session.completed_at)
            totals[bucket] = totals.get(bucket, 0.0) + session.total_volume
            counts[bucket] += 1

        points: List[VolumePoint] = []
        for bucket in sorted(totals):
            volume = math.floor(totals[bucket] + 0.5)
            count = counts[bucket]
            change = None
            if points:
                change = round_metric(progressive_overload(volume, points[-1].volume))
            points.append(VolumePoint(
                week_start=bucket,
                volume=volume,
                sessions=count,
                label=f"{count} session{'s' if count != 1 else ''}",
                change_percent=change,
            ))
        return points

    def get_e1rm_history(
        self,
        actor: Actor,
        exercise_id: str,
        athlete_id: Optional[str] = None,
        *,
        months: int = 6,
    ) -> List[E1RMPoint]:
        """
        Best estimated 1RM for an exercise in each completed session.

        Only completed sets with both weight and reps count. On equal
        estimates the earlier set wins. Sessions where nothing qualifies
        produce no point.
        """
        target = self.resolve_athlete(actor, athlete_id)
        since = months_before(self._clock(), months)
        sessions = self._session_repo.list_completed_sessions(
            target, since=since, exercise_id=exercise_id
        )

        points: List[E1RMPoint] = []
        for session in sessions:
            best_set: Optional[ExerciseSet] = None
            best = 0.0
            for entry in session.entries:
                if entry.exercise_id != exercise_id:
                    continue
                for s in entry.sets:
                    if not (s.completed and s.weight and s.reps):
                        continue
                    estimate = estimated_one_rep_max(s.weight, s.reps)
                    if estimate > best:
                        best, best_set = estimate, s

            if best_set is None:
                continue
            points.append(E1RMPoint(
                session_id=session.id,
                completed_at=session.completed_at,
                e1rm=round_metric(best),
                weight=best_set.weight,
                reps=best_set.reps,
                display=format_e1rm(best_set.weight, best_set.reps),
                intensity=intensity_percentage(best_set.weight, best),
            ))

        logger.debug(f"{len(points)} e1RM point(s) for {target}/{exercise_id}")
        return points

    def get_activity(
        self,
        actor: Actor,
        athlete_id: Optional[str] = None,
        *,
        months: int = 6,
    ) -> List[ActivityDay]:
        """Sessions completed per UTC day over the last `months` months."""
        target = self.resolve_athlete(actor, athlete_id)
        since = months_before(self._clock(), months)
        sessions = self._session_repo.list_completed_sessions(target, since=since)

        per_day = Counter(ensure_utc(s.completed_at).date() for s in sessions)
        return [ActivityDay(day=day, count=per_day[day]) for day in sorted(per_day)]

    def get_progression_preview(
        self,
        nominal: NominalTargets,
        scheme: ProgressionScheme,
        total_weeks: int,
        starting_weight: Optional[float] = None,
    ) -> List[WeekTargets]:
        """Targets for every week of a program."""
        return generate_progression_preview(nominal, scheme, total_weeks, starting_weight)
