"""
Progression calculator for program-based training.

Turns a template's nominal targets into week-adjusted targets according to
the program's progression scheme:
- Weight: +2.5% per week from the client's baseline (STRENGTH, HYPERTROPHY,
  LINEAR) or +1% per week (ENDURANCE)
- Reps, sets and rest: scheme-specific adjustments
- RPE guidance and a short human-readable note

Everything here is pure: no I/O, no exceptions for in-domain inputs.
"""
import math
from datetime import datetime, timedelta
from typing import List, Optional, Tuple

from backend.core.clock import ensure_utc, utc_now
from domain.models import NominalTargets, ProgressedTargets, ProgressionScheme


WEIGHT_INCREASE_PER_WEEK = 0.025
ENDURANCE_WEIGHT_INCREASE_PER_WEEK = 0.01
STRENGTH_REP_FLOOR = 4
STRENGTH_REST_BUMP_SECONDS = 15
ENDURANCE_REP_GAIN = 6
ENDURANCE_REST_DROP_SECONDS = 30
ENDURANCE_REST_FLOOR_SECONDS = 30
WEIGHT_INCREMENT_KG = 2.5

DEFAULT_REP_RANGE = (8, 12)

_WEIGHTED_SCHEMES = {
    ProgressionScheme.STRENGTH,
    ProgressionScheme.HYPERTROPHY,
    ProgressionScheme.LINEAR,
}


class WeekTargets(ProgressedTargets):
    """Progressed targets tagged with the week they apply to."""

    week: int


# =============================================================================
# Rep Range Parsing
# =============================================================================


def _to_int(value: str) -> int:
    try:
        return int(value.strip())
    except ValueError:
        return 0


def parse_rep_range(reps: str) -> Tuple[int, int]:
    """
    Parse a rep prescription into (low, high).

    "8-12" -> (8, 12), "10" -> (10, 10). Anything unparseable falls back
    to (8, 12).
    """
    trimmed = (reps or "").strip()

    if "-" in trimmed:
        low_text, _, high_text = trimmed.partition("-")
        low = _to_int(low_text) or DEFAULT_REP_RANGE[0]
        high = _to_int(high_text) or DEFAULT_REP_RANGE[1]
        return low, high

    n = _to_int(trimmed)
    if n:
        return n, n

    return DEFAULT_REP_RANGE


def format_rep_range(low: int, high: int) -> str:
    if low == high:
        return str(low)
    return f"{low}-{high}"


# =============================================================================
# Week Calculation
# =============================================================================


def calculate_week_number(
    start_date: datetime,
    total_weeks: int,
    now: Optional[datetime] = None,
) -> int:
    """
    Program week for today given the assignment start date.

    Week 1 covers the first seven days. The result is clamped to
    [1, total_weeks].
    """
    now = ensure_utc(now or utc_now())
    elapsed = now - ensure_utc(start_date)
    weeks_since_start = math.floor(elapsed / timedelta(weeks=1))
    return max(1, min(weeks_since_start + 1, total_weeks))


# =============================================================================
# Core Progression Logic
# =============================================================================


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def round_to_increment(value: float, increment: float = WEIGHT_INCREMENT_KG) -> float:
    """Round a load to the nearest plate increment (2.5 kg by default)."""
    return _round_half_up(value / increment) * increment


def _identity(nominal: NominalTargets) -> ProgressedTargets:
    return ProgressedTargets(
        target_sets=nominal.target_sets,
        target_reps=nominal.target_reps,
        target_weight=nominal.target_weight,
        rest_seconds=nominal.rest_seconds,
    )


def _target_rpe(
    scheme: ProgressionScheme,
    week: int,
    total_weeks: int,
) -> Optional[str]:
    weeks_elapsed = week - 1
    halfway_week = math.ceil(total_weeks / 2)
    fraction = weeks_elapsed / (total_weeks - 1) if total_weeks > 1 else 0

    if scheme == ProgressionScheme.STRENGTH:
        if fraction < 0.33:
            return "7-8"
        return "8-9" if fraction < 0.66 else "9-10"
    if scheme == ProgressionScheme.HYPERTROPHY:
        return "7-8" if week <= halfway_week else "8-9"
    if scheme == ProgressionScheme.ENDURANCE:
        return "6-7" if fraction < 0.5 else "7-8"
    if scheme == ProgressionScheme.LINEAR:
        return "7-8" if fraction < 0.5 else "8-9"
    return None


def apply_progression(
    nominal: NominalTargets,
    week_number: int,
    scheme: ProgressionScheme,
    total_weeks: int,
    starting_weight: Optional[float] = None,
) -> ProgressedTargets:
    """
    Compute the targets for one week of a program.

    Args:
        nominal: Template targets before any adjustment
        week_number: 1-based program week; clamped to [1, total_weeks]
        scheme: Program progression scheme
        total_weeks: Program length; <= 0 disables progression
        starting_weight: Client baseline for this exercise (kg), if recorded

    Returns:
        ProgressedTargets. With a baseline, `target_weight_kg` carries the
        absolute load; without one, `suggested_weight_change` carries the
        relative change and `target_weight` is annotated with it.
    """
    if scheme == ProgressionScheme.NONE or total_weeks <= 0:
        return _identity(nominal)

    week = max(1, min(week_number, total_weeks))
    weeks_elapsed = week - 1
    halfway_week = math.ceil(total_weeks / 2)
    span = max(total_weeks - 1, 1)
    has_baseline = starting_weight is not None and starting_weight > 0

    low, high = parse_rep_range(nominal.target_reps)
    sets = nominal.target_sets
    reps_low, reps_high = low, high
    rest = nominal.rest_seconds
    note = ""
    absolute_weight: Optional[float] = None
    relative_change: Optional[str] = None

    if scheme in _WEIGHTED_SCHEMES:
        if has_baseline:
            multiplier = 1 + WEIGHT_INCREASE_PER_WEEK * weeks_elapsed
            absolute_weight = round_to_increment(starting_weight * multiplier)
        else:
            total_percent = round(WEIGHT_INCREASE_PER_WEEK * weeks_elapsed * 100, 1)
            if total_percent > 0:
                relative_change = f"+{total_percent:g}%"

    if scheme == ProgressionScheme.STRENGTH:
        rep_drop = _round_half_up((high - STRENGTH_REP_FLOOR) / span * weeks_elapsed)
        reps_low = max(STRENGTH_REP_FLOOR, low - rep_drop)
        reps_high = max(STRENGTH_REP_FLOOR, high - rep_drop)
        rest = nominal.rest_seconds + (weeks_elapsed // 2) * STRENGTH_REST_BUMP_SECONDS
        note = "Base week" if week == 1 else f"Wk {week}: heavier weight, fewer reps"

    elif scheme == ProgressionScheme.HYPERTROPHY:
        if week > halfway_week:
            sets = nominal.target_sets + 1
            note = f"Wk {week}: +1 set, pushing intensity"
        else:
            note = f"Wk {week}: building volume"

    elif scheme == ProgressionScheme.ENDURANCE:
        rep_gain = _round_half_up(ENDURANCE_REP_GAIN / span * weeks_elapsed)
        reps_low = low + rep_gain
        reps_high = high + rep_gain
        if has_baseline:
            absolute_weight = round_to_increment(
                starting_weight * (1 + ENDURANCE_WEIGHT_INCREASE_PER_WEEK * weeks_elapsed)
            )
        rest_drop = _round_half_up(ENDURANCE_REST_DROP_SECONDS / span * weeks_elapsed)
        rest = max(ENDURANCE_REST_FLOOR_SECONDS, nominal.rest_seconds - rest_drop)
        note = "Base week" if week == 1 else f"Wk {week}: more reps, shorter rest"

    elif scheme == ProgressionScheme.LINEAR:
        percent = WEIGHT_INCREASE_PER_WEEK * weeks_elapsed * 100
        note = "Base week" if week == 1 else f"Wk {week}: +{percent:.1f}% weight"

    display_weight = nominal.target_weight
    if absolute_weight is not None:
        display_weight = f"{absolute_weight:g} kg"
    elif relative_change:
        display_weight = (
            f"{nominal.target_weight} ({relative_change})"
            if nominal.target_weight
            else relative_change
        )

    return ProgressedTargets(
        target_sets=sets,
        target_reps=format_rep_range(reps_low, reps_high),
        target_weight=display_weight,
        rest_seconds=rest,
        progression_note=note,
        target_weight_kg=absolute_weight,
        suggested_weight_change=relative_change,
        target_rpe=_target_rpe(scheme, week, total_weeks),
    )


def generate_progression_preview(
    nominal: NominalTargets,
    scheme: ProgressionScheme,
    total_weeks: int,
    starting_weight: Optional[float] = None,
) -> List[WeekTargets]:
    """Targets for every week of a program, week 1 first."""
    preview: List[WeekTargets] = []
    for week in range(1, max(total_weeks, 0) + 1):
        targets = apply_progression(nominal, week, scheme, total_weeks, starting_weight)
        preview.append(WeekTargets(week=week, **targets.model_dump()))
    return preview
