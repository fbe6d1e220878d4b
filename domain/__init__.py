"""
Domain layer for the Coach Strength API.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services).
"""

from domain.models import (
    Athlete,
    Exercise,
    ExerciseEntry,
    Load,
    OneRMHistoryEntry,
    OneRMRecord,
    OneRMSource,
    ReferenceRule,
    ReferenceRuleSet,
    ResolveResult,
    ResolveSource,
    SetEntry,
    WorkoutSession,
)

__all__ = [
    "Athlete",
    "Exercise",
    "ExerciseEntry",
    "Load",
    "OneRMHistoryEntry",
    "OneRMRecord",
    "OneRMSource",
    "ReferenceRule",
    "ReferenceRuleSet",
    "ResolveResult",
    "ResolveSource",
    "SetEntry",
    "WorkoutSession",
]
