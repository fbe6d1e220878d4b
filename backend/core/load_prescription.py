"""
Percentage-based load prescription from a resolved 1RM.

Turns a ResolveResult into a suggested working load for a rep target, and
into the short labels shown next to an exercise ("1RM: 100kg",
"Ref: Bench Press 100kg").
"""
from dataclasses import dataclass
from typing import Iterable, Optional

from backend.core.one_rm_calculator import PLATE_INCREMENT_KG, round_half_up
from domain.models import Exercise, Load, ResolveResult, ResolveSource

# Approximate %1RM for a rep target (standard table)
REP_PERCENTAGES = {
    1: 100, 2: 95, 3: 93, 4: 90, 5: 87,
    6: 85, 7: 83, 8: 80, 9: 77, 10: 75,
    12: 70, 15: 65, 20: 60,
}
DEFAULT_PERCENTAGE = 70


@dataclass
class LoadSuggestion:
    """Suggested working load for a rep target."""
    target_reps: int
    percentage: int
    load: Load
    is_reference: bool
    text: str


@dataclass
class ReferenceContext:
    """UI-facing description of where a 1RM came from."""
    has_reference: bool
    reference_type: str  # "own", "priority", "region", "group", "none"
    display_text: str = ""
    short_text: str = ""
    one_rm: Optional[float] = None
    source_exercise_id: Optional[str] = None
    source_exercise_name: Optional[str] = None


def relative_load(
    one_rm: float,
    percentage: float,
    rounding: float = PLATE_INCREMENT_KG,
) -> float:
    """Percentage of a 1RM rounded to the nearest plate increment."""
    if one_rm <= 0 or percentage <= 0:
        return 0.0
    return round_half_up(one_rm * (percentage / 100), rounding)


def percentage_for_reps(target_reps: int) -> int:
    """%1RM for the first rep bracket that covers target_reps."""
    for reps in sorted(REP_PERCENTAGES):
        if target_reps <= reps:
            return REP_PERCENTAGES[reps]
    return DEFAULT_PERCENTAGE


def _format_kg(value: float) -> str:
    return f"{value:g}kg"


def suggest_load(
    result: Optional[ResolveResult],
    target_reps: int,
    *,
    rounding: float = PLATE_INCREMENT_KG,
) -> Optional[LoadSuggestion]:
    """
    Suggest a working load for a rep target from a resolved 1RM.

    Args:
        result: Resolution from resolve_one_rm (None means no data)
        target_reps: Reps per set to prescribe for
        rounding: Plate increment in kg

    Returns:
        LoadSuggestion, or None when there is no 1RM, no valid rep target,
        or the load rounds to nothing
    """
    if result is None or target_reps <= 0:
        return None

    percentage = percentage_for_reps(target_reps)
    value = relative_load(result.value, percentage, rounding)
    if value <= 0:
        return None

    prefix = "≈" if result.is_reference else ""
    return LoadSuggestion(
        target_reps=target_reps,
        percentage=percentage,
        load=Load(value=value, unit="kg"),
        is_reference=result.is_reference,
        text=f"{prefix}{percentage}% → {_format_kg(value)}",
    )


def describe_resolution(
    result: Optional[ResolveResult],
    exercise: Exercise,
    catalog: Iterable[Exercise] = (),
) -> ReferenceContext:
    """
    Build the labels shown for a resolved 1RM.

    Args:
        result: Resolution for exercise (None means no data)
        exercise: The resolved exercise
        catalog: Exercises used to look up the source exercise's name

    Returns:
        ReferenceContext; has_reference is False when result is None
    """
    if result is None:
        return ReferenceContext(has_reference=False, reference_type="none")

    if result.source == ResolveSource.OWN:
        return ReferenceContext(
            has_reference=True,
            reference_type=result.source.value,
            one_rm=result.value,
            display_text=f"1RM: {_format_kg(result.value)}",
            short_text=_format_kg(result.value),
        )

    source_name = None
    for candidate in catalog:
        if candidate.id == result.source_exercise_id:
            source_name = candidate.name or None
            break

    label = "Ref"
    if result.source == ResolveSource.REGION and exercise.body_region:
        label = f"Ref ({exercise.body_region})"
    elif result.source == ResolveSource.GROUP and exercise.one_rm_group_id:
        label = f"Ref ({exercise.one_rm_group_id})"

    return ReferenceContext(
        has_reference=True,
        reference_type=result.source.value,
        one_rm=result.value,
        source_exercise_id=result.source_exercise_id,
        source_exercise_name=source_name,
        display_text=f"{label}: {source_name or result.source_exercise_id} {_format_kg(result.value)}",
        short_text=f"↗{_format_kg(result.value)}",
    )
