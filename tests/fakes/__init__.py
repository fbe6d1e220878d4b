"""
Fake Repository Implementations for Testing.

This package provides in-memory fake implementations of repository interfaces
for fast, isolated testing. No database or external dependencies required.

Features:
- All fakes implement the same Protocol interfaces as real implementations
- Supports seeding with test data
- Supports reset() for test isolation
- Factory functions for common test scenarios

Usage:
    from tests.fakes import FakeAthleteRepository, create_athletes_repo

    # Direct instantiation
    repo = FakeAthleteRepository()
    repo.seed("athlete-1", one_rm_records={"barbell-bench-press": 100})

    # Factory function with a typical athlete
    repo = create_athletes_repo(athlete_id="athlete-1")
"""
from typing import Optional, Dict

from tests.fakes.exercises_repository import FakeExercisesRepository
from tests.fakes.athlete_repository import FakeAthleteRepository
from tests.fakes.reference_rule_repository import FakeReferenceRuleRepository


# =============================================================================
# Factory Functions
# =============================================================================


def create_athletes_repo(
    *,
    athlete_id: str = "athlete-1",
    one_rm_records: Optional[Dict[str, float]] = None,
    one_rm: Optional[Dict[str, float]] = None,
    strength_focus_sessions: Optional[int] = None,
) -> FakeAthleteRepository:
    """
    Create a FakeAthleteRepository with one athlete.

    By default the athlete has structured records for squat and bench press.

    Args:
        athlete_id: ID of the seeded athlete
        one_rm_records: Structured records exercise ID -> kg
        one_rm: Legacy flat map exercise ID -> kg
        strength_focus_sessions: Session count stored on every record

    Returns:
        Seeded FakeAthleteRepository
    """
    repo = FakeAthleteRepository()
    if one_rm_records is None:
        one_rm_records = {"barbell-back-squat": 140.0, "barbell-bench-press": 100.0}
    repo.seed(
        athlete_id,
        one_rm_records=one_rm_records,
        one_rm=one_rm,
        current_weight_kg=80.0,
        strength_focus_sessions=strength_focus_sessions,
    )
    return repo


def create_rules_repo(**rules: Dict) -> FakeReferenceRuleRepository:
    """
    Create a FakeReferenceRuleRepository from keyword rules.

    Keyword names use underscores in place of hyphens, so
    create_rules_repo(front_squat={...}) configures "front-squat".
    """
    return FakeReferenceRuleRepository(
        {name.replace("_", "-"): rule for name, rule in rules.items()}
    )


__all__ = [
    "FakeExercisesRepository",
    "FakeAthleteRepository",
    "FakeReferenceRuleRepository",
    "create_athletes_repo",
    "create_rules_repo",
]
