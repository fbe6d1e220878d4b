"""
1RM progression advisor.

Analyses recently performed sets and proposes a change to an athlete's 1RM.
It never applies anything: recommendations must be confirmed by the user,
which goes through OneRMService.record_one_rm.

Decision rules:
- No current 1RM: suggest the best estimate as an initial value
- Current 1RM but no strength-focus session yet: keep
- Best estimate more than 5% above current: increase by the recommended step
- Very high effort (>= 9/10) and best estimate more than 5% below: decrease 5%
- Otherwise: keep
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence

from backend.core.one_rm_calculator import (
    DEFAULT_BODYWEIGHT_KG,
    PLATE_INCREMENT_KG,
    effective_load,
    estimate_one_rm,
    recommended_increment,
    round_half_up,
)
from domain.models import OneRMRecord, SetEntry, WorkoutSession

DEFAULT_INTENSITY = 7.0


class OneRMAction(str, Enum):
    KEEP = "keep"
    INCREASE = "increase"
    DECREASE = "decrease"
    SET_INITIAL = "set_initial"


@dataclass
class OneRMRecommendation:
    """A proposed 1RM change for one exercise."""
    exercise_id: str
    suggested_one_rm: float
    action: OneRMAction
    rationale: str
    confidence: float  # 0-1
    based_on_sets: int
    average_intensity: float
    change_percent: float = 0.0
    change_absolute: float = 0.0
    current_one_rm: Optional[float] = None
    exercise_name: Optional[str] = None


@dataclass
class OneRMAnalysisInput:
    """Everything the advisor needs for one exercise."""
    exercise_id: str
    recent_sets: Sequence[SetEntry]
    current_record: Optional[OneRMRecord] = None
    strength_focus_sessions: int = 0
    exercise_name: Optional[str] = None
    athlete_weight_kg: Optional[float] = None
    is_bodyweight: bool = False


def set_intensity(set_entry: SetEntry) -> float:
    """Effort of a set: intensity, else RPE, else the default of 7."""
    if set_entry.intensity is not None:
        return set_entry.intensity
    if set_entry.rpe is not None:
        return set_entry.rpe
    return DEFAULT_INTENSITY


def average_intensity(sets: Sequence[SetEntry]) -> float:
    """Mean effort of completed sets, rounded to 0.1."""
    completed = [s for s in sets if s.is_completed]
    if not completed:
        return DEFAULT_INTENSITY
    mean = sum(set_intensity(s) for s in completed) / len(completed)
    return round(mean, 1)


def _no_data(
    exercise_id: str,
    exercise_name: Optional[str],
    current_one_rm: Optional[float],
) -> OneRMRecommendation:
    return OneRMRecommendation(
        exercise_id=exercise_id,
        exercise_name=exercise_name,
        suggested_one_rm=current_one_rm or 0.0,
        current_one_rm=current_one_rm,
        action=OneRMAction.KEEP,
        rationale=(
            "Not enough recent data for a recommendation. "
            "Log more sets with weight and reps."
        ),
        confidence=0.0,
        based_on_sets=0,
        average_intensity=0.0,
    )


def analyze_one_rm_progression(
    data: OneRMAnalysisInput,
    *,
    default_bodyweight_kg: float = DEFAULT_BODYWEIGHT_KG,
) -> OneRMRecommendation:
    """
    Analyse recent sets and recommend a 1RM action.

    Args:
        data: Sets and current record for one exercise
        default_bodyweight_kg: Bodyweight assumed for bodyweight exercises
            when the athlete's weight is unknown

    Returns:
        OneRMRecommendation (action "keep" with zero confidence when no set
        is usable)
    """
    completed = [
        s for s in data.recent_sets
        if s.is_completed and s.actual_reps and s.actual_weight
    ]

    estimates: List[float] = []
    for set_entry in completed:
        load = effective_load(
            set_entry.actual_weight or 0,
            data.is_bodyweight,
            data.athlete_weight_kg,
            default_bodyweight_kg=default_bodyweight_kg,
        )
        estimate = estimate_one_rm(load, set_entry.actual_reps or 0)
        if estimate > 0:
            estimates.append(estimate)

    current = data.current_record.current_one_rm if data.current_record else None
    if current is not None and current <= 0:
        current = None

    if not estimates:
        return _no_data(data.exercise_id, data.exercise_name, current)

    best = max(estimates)
    avg_intensity = average_intensity(completed)

    common = dict(
        exercise_id=data.exercise_id,
        exercise_name=data.exercise_name,
        based_on_sets=len(estimates),
        average_intensity=avg_intensity,
    )

    if current is None:
        return OneRMRecommendation(
            suggested_one_rm=best,
            action=OneRMAction.SET_INITIAL,
            rationale=(
                f"Based on {len(estimates)} recent sets. Highest estimate: {best:g}kg. "
                "Confirm to set it as your initial 1RM."
            ),
            confidence=0.8 if len(estimates) >= 3 else 0.6,
            **common,
        )

    if data.strength_focus_sessions < 1:
        return OneRMRecommendation(
            suggested_one_rm=current,
            current_one_rm=current,
            action=OneRMAction.KEEP,
            rationale=(
                "Keep the current 1RM. At least one strength-focus session is "
                "needed before progression can be recommended."
            ),
            confidence=0.5,
            **common,
        )

    if best > current * 1.05:
        increment = recommended_increment(current)
        return OneRMRecommendation(
            suggested_one_rm=current + increment,
            current_one_rm=current,
            action=OneRMAction.INCREASE,
            rationale=(
                f"Recent performance ({best:g}kg estimated) exceeds your current 1RM. "
                f"Average intensity: {avg_intensity:.1f}/10. Suggested change: +{increment:g}kg."
            ),
            confidence=0.85 if avg_intensity >= 7 else 0.7,
            change_percent=increment / current * 100,
            change_absolute=increment,
            **common,
        )

    if avg_intensity >= 9 and best < current * 0.95:
        decrease = round_half_up(current * 0.05, PLATE_INCREMENT_KG)
        return OneRMRecommendation(
            suggested_one_rm=current - decrease,
            current_one_rm=current,
            action=OneRMAction.DECREASE,
            rationale=(
                f"Very high intensity ({avg_intensity:.1f}/10) with performance below "
                f"expectations. Consider -{decrease:g}kg to improve training quality."
            ),
            confidence=0.6,
            change_percent=-(decrease / current * 100),
            change_absolute=-decrease,
            **common,
        )

    advice = (
        "Consider raising intensity in upcoming sessions."
        if avg_intensity < 7
        else "Keep it up."
    )
    return OneRMRecommendation(
        suggested_one_rm=current,
        current_one_rm=current,
        action=OneRMAction.KEEP,
        rationale=f"Performance is consistent with your current 1RM. {advice}",
        confidence=0.75,
        **common,
    )


def analyze_session_for_one_rm(
    session: WorkoutSession,
    one_rm_records: Dict[str, OneRMRecord],
    athlete_weight_kg: Optional[float] = None,
    *,
    default_bodyweight_kg: float = DEFAULT_BODYWEIGHT_KG,
) -> List[OneRMRecommendation]:
    """
    Recommendations for every strength-focus exercise of a session.

    Entries without strength focus are skipped, as are entries that produced
    no usable set and no change.
    """
    recommendations: List[OneRMRecommendation] = []

    for entry in session.exercises:
        if not entry.strength_focus:
            continue

        record = one_rm_records.get(entry.exercise_id)
        recommendation = analyze_one_rm_progression(
            OneRMAnalysisInput(
                exercise_id=entry.exercise_id,
                exercise_name=entry.exercise.name if entry.exercise else None,
                current_record=record,
                recent_sets=entry.sets,
                strength_focus_sessions=(record.strength_focus_sessions or 0) if record else 0,
                athlete_weight_kg=athlete_weight_kg,
                is_bodyweight=entry.exercise.is_bodyweight if entry.exercise else False,
            ),
            default_bodyweight_kg=default_bodyweight_kg,
        )

        if recommendation.action != OneRMAction.KEEP or recommendation.based_on_sets > 0:
            recommendations.append(recommendation)

    return recommendations
