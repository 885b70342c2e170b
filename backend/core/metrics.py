"""
Training metrics.

Pure functions used by the progression, personal-record and session code:
- Estimated 1RM (Epley for low reps, Brzycki above five reps)
- Set and session volume
- Overload and intensity helpers
"""
from typing import Iterable, Optional, Protocol


# Past this many reps Brzycki's denominator goes to zero
BRZYCKI_REP_LIMIT = 37
# Highest multiple of the working weight an estimate may reach
E1RM_CAP_MULTIPLIER = 2.5
EPLEY_MAX_REPS = 5


class SetLike(Protocol):
    """Anything with the fields volume math needs."""

    weight: Optional[float]
    reps: Optional[int]
    completed: bool


# =============================================================================
# 1RM Calculation Formulas
# =============================================================================


def calculate_1rm_epley(weight: float, reps: int) -> float:
    """
    Epley estimate: weight * (1 + 0.0333 * reps).

    Better suited to low rep ranges.
    """
    return weight * (1 + 0.0333 * reps)


def calculate_1rm_brzycki(weight: float, reps: int) -> float:
    """
    Brzycki estimate: weight / (1.0278 - 0.0278 * reps).

    Better suited to higher rep ranges. Capped at E1RM_CAP_MULTIPLIER times
    the weight, which also covers reps at or beyond the formula's asymptote.
    """
    cap = weight * E1RM_CAP_MULTIPLIER
    if reps >= BRZYCKI_REP_LIMIT:
        return cap
    return min(weight / (1.0278 - 0.0278 * reps), cap)


def estimated_one_rep_max(weight: Optional[float], reps: Optional[int]) -> float:
    """
    Estimate a one-rep max from a single set.

    Uses Epley up to five reps and Brzycki above that. The Brzycki branch is
    floored at the five-rep Epley value so the estimate never drops as reps
    increase at a fixed weight.

    Args:
        weight: Load lifted (kg)
        reps: Reps completed

    Returns:
        Unrounded estimate, or 0.0 when either input is missing or not
        positive. Use round_metric() before storing or displaying.
    """
    if not weight or not reps or weight <= 0 or reps <= 0:
        return 0.0
    if reps == 1:
        return float(weight)
    if reps <= EPLEY_MAX_REPS:
        return calculate_1rm_epley(weight, reps)
    return max(
        calculate_1rm_brzycki(weight, reps),
        calculate_1rm_epley(weight, EPLEY_MAX_REPS),
    )


def round_metric(value: float) -> float:
    """Round a derived metric to 1 decimal place."""
    return round(value, 1)


# =============================================================================
# Volume
# =============================================================================


def set_volume(weight: float, reps: int) -> float:
    """Volume load for a single set."""
    return weight * reps


def total_volume(sets: Iterable[SetLike]) -> float:
    """
    Sum weight * reps over completed sets.

    Sets missing weight or reps (or with a zero value) contribute nothing.
    """
    total = 0.0
    for s in sets:
        if s.completed and s.weight and s.reps:
            total += set_volume(s.weight, s.reps)
    return total


# =============================================================================
# Derived Metrics
# =============================================================================


def progressive_overload(current_volume: float, previous_volume: float) -> float:
    """Percentage change in volume between two sessions."""
    if previous_volume == 0:
        return 0.0
    return ((current_volume - previous_volume) / previous_volume) * 100


def intensity_percentage(weight: float, e1rm: float) -> int:
    """Weight as a whole-number percentage of an estimated 1RM."""
    if e1rm == 0:
        return 0
    return round((weight / e1rm) * 100)


def format_weight(weight: float) -> str:
    """Render a weight without a trailing .0 (100 -> "100", 102.5 -> "102.5")."""
    return f"{weight:g}"


def format_e1rm(weight: float, reps: int) -> str:
    """Display string for an estimated 1RM, e.g. "116.7kg"."""
    return f"{format_weight(round_metric(estimated_one_rep_max(weight, reps)))}kg"
