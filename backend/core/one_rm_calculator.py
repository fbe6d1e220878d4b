"""
1RM estimation and record helpers.

This module provides:
- 1RM estimation using Epley, Brzycki and Lombardi formulas
- Effective load for bodyweight exercises
- Recommended 1RM increments and reverse-Epley working weights
- Non-mutating helpers for user-controlled 1RM records

Estimates only ever suggest values; records change solely through
create_one_rm_record / update_one_rm_record on explicit user confirmation.
"""
import math
from datetime import datetime, timezone
from typing import Dict, Optional

from domain.models import (
    Exercise,
    OneRMHistoryEntry,
    OneRMRecord,
    OneRMSource,
    SetEntry,
)

# Estimates above this rep count are not reliable; the weight itself is used
MAX_RELIABLE_REPS = 10

DEFAULT_BODYWEIGHT_KG = 70.0
MIN_INCREMENT_KG = 2.5
PLATE_INCREMENT_KG = 2.5


def round_half_up(value: float, step: float = 1.0) -> float:
    """Round to the nearest multiple of step, halves away from zero."""
    return math.floor(value / step + 0.5) * step


# =============================================================================
# 1RM Estimation Formulas
# =============================================================================


def estimate_one_rm_epley(weight: float, reps: int) -> float:
    """
    Estimate 1RM using the Epley formula.

    Formula: 1RM = weight * (1 + reps/30)

    Args:
        weight: Weight lifted (kg)
        reps: Number of reps completed

    Returns:
        Estimated 1RM rounded to whole kg, 0 for invalid input
    """
    if reps <= 0 or weight <= 0:
        return 0.0
    if reps == 1 or reps > MAX_RELIABLE_REPS:
        return float(weight)

    return round_half_up(weight * (1.0 + reps / 30.0))


def estimate_one_rm_brzycki(weight: float, reps: int) -> float:
    """
    Estimate 1RM using the Brzycki formula.

    Formula: 1RM = weight * 36 / (37 - reps)

    Slightly more conservative than Epley. The formula breaks down at 37 reps.

    Args:
        weight: Weight lifted (kg)
        reps: Number of reps completed

    Returns:
        Estimated 1RM rounded to whole kg, 0 for invalid input
    """
    if reps <= 0 or weight <= 0:
        return 0.0
    if reps == 1 or reps >= 37 or reps > MAX_RELIABLE_REPS:
        return float(weight)

    return round_half_up(weight * 36.0 / (37.0 - reps))


def estimate_one_rm_lombardi(weight: float, reps: int) -> float:
    """
    Estimate 1RM using the Lombardi formula.

    Formula: 1RM = weight * reps^0.10

    Args:
        weight: Weight lifted (kg)
        reps: Number of reps completed

    Returns:
        Estimated 1RM rounded to whole kg, 0 for invalid input
    """
    if reps <= 0 or weight <= 0:
        return 0.0
    if reps == 1 or reps > MAX_RELIABLE_REPS:
        return float(weight)

    return round_half_up(weight * math.pow(reps, 0.10))


def estimate_one_rm(weight: float, reps: int) -> float:
    """
    Estimate 1RM as the more conservative of Epley and Brzycki.

    This is the estimate used for suggestions.
    """
    if reps <= 0 or weight <= 0:
        return 0.0
    if reps == 1 or reps > MAX_RELIABLE_REPS:
        return float(weight)

    return min(estimate_one_rm_epley(weight, reps), estimate_one_rm_brzycki(weight, reps))


def estimate_one_rm_average(weight: float, reps: int) -> Dict[str, float]:
    """
    Estimate 1RM with all three formulas.

    Returns:
        Dict with "epley", "brzycki", "lombardi" and their rounded "average"
    """
    if reps <= 0 or weight <= 0:
        return {"epley": 0.0, "brzycki": 0.0, "lombardi": 0.0, "average": 0.0}

    epley = estimate_one_rm_epley(weight, reps)
    brzycki = estimate_one_rm_brzycki(weight, reps)
    lombardi = estimate_one_rm_lombardi(weight, reps)

    return {
        "epley": epley,
        "brzycki": brzycki,
        "lombardi": lombardi,
        "average": round_half_up((epley + brzycki + lombardi) / 3),
    }


# =============================================================================
# Effective Load (bodyweight + added weight)
# =============================================================================


def effective_load(
    weight_kg: float,
    is_bodyweight: bool,
    athlete_weight_kg: Optional[float] = None,
    *,
    default_bodyweight_kg: float = DEFAULT_BODYWEIGHT_KG,
) -> float:
    """
    Calculate the load actually moved in a set.

    For bodyweight exercises (pull-ups, dips) the athlete's bodyweight is
    added to any extra weight; otherwise the weight is returned unchanged.

    Args:
        weight_kg: Bar/machine weight, or added weight for bodyweight exercises
        is_bodyweight: Whether the exercise is a bodyweight exercise
        athlete_weight_kg: Athlete bodyweight; default_bodyweight_kg if unknown
        default_bodyweight_kg: Fallback bodyweight

    Returns:
        Effective load in kg
    """
    if not is_bodyweight:
        return weight_kg

    bodyweight = athlete_weight_kg or default_bodyweight_kg
    return bodyweight + (weight_kg or 0)


def estimate_one_rm_from_set(
    set_entry: SetEntry,
    exercise: Optional[Exercise] = None,
    athlete_weight_kg: Optional[float] = None,
    *,
    default_bodyweight_kg: float = DEFAULT_BODYWEIGHT_KG,
) -> float:
    """Estimate 1RM from a set, preferring performed values over targets."""
    weight = set_entry.actual_weight or set_entry.target_weight or 0
    reps = set_entry.actual_reps or set_entry.target_reps or 0

    if reps <= 0:
        return 0.0

    load = effective_load(
        weight,
        exercise.is_bodyweight if exercise else False,
        athlete_weight_kg,
        default_bodyweight_kg=default_bodyweight_kg,
    )
    return estimate_one_rm(load, reps)


# =============================================================================
# Recommended Increments
# =============================================================================


def recommended_increment(current_one_rm: float) -> float:
    """
    Recommended 1RM progression step.

    Rule: max(2.5 kg, 2.5% of current 1RM rounded to the nearest 0.5 kg)
    """
    if current_one_rm <= 0:
        return MIN_INCREMENT_KG

    percent_based = round_half_up(current_one_rm * 0.025, 0.5)
    return max(MIN_INCREMENT_KG, percent_based)


def weight_for_reps(
    one_rm: float,
    target_reps: int,
    intensity_percent: float = 100,
    *,
    rounding: float = PLATE_INCREMENT_KG,
) -> float:
    """
    Working weight for a rep target, using the reverse Epley formula.

    Formula: weight = 1RM / (1 + reps/30), scaled by intensity_percent

    Args:
        one_rm: 1RM in kg
        target_reps: Reps to perform
        intensity_percent: Scaling applied to the reverse-Epley weight
        rounding: Plate increment the result is rounded to

    Returns:
        Weight in kg, 0 for invalid input. Singles are rounded to whole kg.
    """
    if one_rm <= 0 or target_reps <= 0:
        return 0.0
    if target_reps == 1:
        return round_half_up(one_rm * (intensity_percent / 100))

    base_weight = one_rm / (1 + target_reps / 30)
    adjusted = base_weight * (intensity_percent / 100)
    return round_half_up(adjusted, rounding)


# =============================================================================
# 1RM Record Helpers
# =============================================================================


def create_one_rm_record(
    exercise_id: str,
    one_rm: float,
    source: OneRMSource,
    session_id: Optional[str] = None,
) -> OneRMRecord:
    """Create a new record whose history starts with this value."""
    now = datetime.now(timezone.utc)
    return OneRMRecord(
        exercise_id=exercise_id,
        current_one_rm=one_rm,
        source=source,
        last_update=now,
        history=[
            OneRMHistoryEntry(date=now, value=one_rm, source=source, session_id=session_id)
        ],
        strength_focus_sessions=None if source == OneRMSource.MANUAL else 0,
    )


def update_one_rm_record(
    record: OneRMRecord,
    new_one_rm: float,
    source: OneRMSource,
    session_id: Optional[str] = None,
) -> OneRMRecord:
    """Return a copy of record with a new current value appended to its history."""
    now = datetime.now(timezone.utc)
    entry = OneRMHistoryEntry(date=now, value=new_one_rm, source=source, session_id=session_id)
    return record.model_copy(update={
        "current_one_rm": new_one_rm,
        "source": source,
        "last_update": now,
        "history": [*record.history, entry],
    })


def can_recommend_one_rm(record: Optional[OneRMRecord]) -> bool:
    """Recommendations need an existing record and one strength-focus session."""
    if record is None:
        return False
    return (record.strength_focus_sessions or 0) >= 1


def increment_strength_focus_sessions(record: OneRMRecord) -> OneRMRecord:
    """Return a copy of record with one more strength-focus session counted."""
    return record.model_copy(update={
        "strength_focus_sessions": (record.strength_focus_sessions or 0) + 1,
    })
