"""
1RM reference resolution.

Decides which one-rep max to use for load prescription of an exercise,
following a strict fallback chain:

1. own       - the athlete's own record for the exercise
2. priority  - the first exercise in the rule's priority list with a record
3. region    - the first anchor in the catalog sharing the body region
4. group     - the first anchor in the catalog sharing the 1RM group
5. None      - no usable data

The first tier producing a positive value wins. Everything here is a pure
function over read-only snapshots: nothing is logged, cached or mutated, and
missing or invalid data never raises.
"""
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from domain.models import (
    Athlete,
    Exercise,
    ReferenceRule,
    ReferenceRuleSet,
    ResolveResult,
    ResolveSource,
)

AthleteLike = Union[Athlete, Mapping[str, Any]]
ExerciseLike = Union[Exercise, Mapping[str, Any]]
RuleLike = Union[ReferenceRule, Mapping[str, Any]]


# =============================================================================
# Input normalisation
# =============================================================================


def _as_athlete(athlete: AthleteLike) -> Athlete:
    if isinstance(athlete, Athlete):
        return athlete
    return Athlete.model_validate(athlete)


def _as_exercise(exercise: ExerciseLike) -> Exercise:
    if isinstance(exercise, Exercise):
        return exercise
    return Exercise.model_validate(exercise)


def _as_rule(rule: Optional[RuleLike]) -> Optional[ReferenceRule]:
    if rule is None or isinstance(rule, ReferenceRule):
        return rule
    return ReferenceRule.model_validate(rule)


# =============================================================================
# Effective 1RM map
# =============================================================================


def effective_one_rm_map(athlete: AthleteLike) -> Dict[str, float]:
    """
    Merge an athlete's structured records and legacy flat map.

    Structured records win on key collision; the legacy map only supplies
    exercise IDs the structured form lacks. Null and non-positive values are
    dropped, so every value in the result is usable. A structured record
    without a positive value counts as missing and may be filled from the
    legacy map.

    Args:
        athlete: Athlete model or store snapshot

    Returns:
        Fresh mapping exercise ID -> 1RM in kg
    """
    athlete = _as_athlete(athlete)
    result: Dict[str, float] = {}

    for exercise_id, record in athlete.one_rm_records.items():
        if record.current_one_rm is not None and record.current_one_rm > 0:
            result[exercise_id] = record.current_one_rm

    for exercise_id, value in athlete.one_rm.items():
        if exercise_id not in result and value is not None and value > 0:
            result[exercise_id] = float(value)

    return result


# =============================================================================
# Anchor search
# =============================================================================


def _find_anchor(
    catalog: Iterable[Exercise],
    one_rm_map: Mapping[str, float],
    exclude_id: str,
    *,
    body_region: Optional[str] = None,
    one_rm_group_id: Optional[str] = None,
) -> Optional[Exercise]:
    """First anchor in catalog order matching the given grouping with a value."""
    for candidate in catalog:
        if candidate.id == exclude_id or not candidate.is_anchor:
            continue
        if body_region is not None and candidate.body_region != body_region:
            continue
        if one_rm_group_id is not None and candidate.one_rm_group_id != one_rm_group_id:
            continue
        if one_rm_map.get(candidate.id, 0) > 0:
            return candidate
    return None


# =============================================================================
# Resolution
# =============================================================================


def resolve_one_rm(
    exercise: ExerciseLike,
    athlete: AthleteLike,
    rules: Mapping[str, RuleLike],
    all_exercises: Iterable[ExerciseLike],
) -> Optional[ResolveResult]:
    """
    Resolve the 1RM to use for an exercise.

    Args:
        exercise: Exercise to resolve a working max for
        athlete: Source of recorded maxima
        rules: Exercise ID -> ReferenceRule; a missing entry disables every
            tier after "own"
        all_exercises: Full catalog, scanned in order for anchor search

    Returns:
        ResolveResult, or None when no tier yields a positive value
    """
    exercise = _as_exercise(exercise)
    one_rm_map = effective_one_rm_map(athlete)

    own_value = one_rm_map.get(exercise.id)
    if own_value is not None:
        return ResolveResult(value=own_value, source=ResolveSource.OWN)

    rule = _as_rule(rules.get(exercise.id))
    if rule is None:
        return None

    for ref_id in rule.priority:
        ref_value = one_rm_map.get(ref_id)
        if ref_value is not None:
            return ResolveResult(
                value=ref_value,
                source=ResolveSource.PRIORITY,
                source_exercise_id=ref_id,
            )

    if not (rule.fallback_to_region or rule.fallback_to_group):
        return None

    catalog: List[Exercise] = [_as_exercise(ex) for ex in all_exercises]

    if rule.fallback_to_region and exercise.body_region:
        anchor = _find_anchor(
            catalog, one_rm_map, exercise.id, body_region=exercise.body_region
        )
        if anchor is not None:
            return ResolveResult(
                value=one_rm_map[anchor.id],
                source=ResolveSource.REGION,
                source_exercise_id=anchor.id,
            )

    if rule.fallback_to_group and exercise.one_rm_group_id:
        anchor = _find_anchor(
            catalog, one_rm_map, exercise.id, one_rm_group_id=exercise.one_rm_group_id
        )
        if anchor is not None:
            return ResolveResult(
                value=one_rm_map[anchor.id],
                source=ResolveSource.GROUP,
                source_exercise_id=anchor.id,
            )

    return None


# =============================================================================
# Rule set helpers
# =============================================================================


def create_empty_rules() -> ReferenceRuleSet:
    """Create an empty rule set."""
    return {}


def set_rule(
    rules: Mapping[str, ReferenceRule],
    exercise_id: str,
    rule: RuleLike,
) -> ReferenceRuleSet:
    """Return a new rule set with the rule for exercise_id inserted or replaced."""
    updated = dict(rules)
    updated[exercise_id] = _as_rule(rule)
    return updated


def remove_rule(
    rules: Mapping[str, ReferenceRule],
    exercise_id: str,
) -> ReferenceRuleSet:
    """Return a new rule set without the rule for exercise_id."""
    return {key: rule for key, rule in rules.items() if key != exercise_id}
