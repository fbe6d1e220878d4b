"""
Domain models for the Coach Strength API.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services).

These models represent the core business concepts:
- Exercise: Catalog exercise with its 1RM anchor groupings
- Athlete: Athlete snapshot with structured and legacy 1RM records
- ReferenceRule: Fallback policy used when an athlete has no own 1RM
- ResolveResult: Resolved 1RM value and the tier that produced it
- Load: Prescribed weight value object
- WorkoutSession / ExerciseEntry / SetEntry: Logged work for the advisor

Usage:
    >>> from domain.models import Athlete, Exercise, ReferenceRule

    >>> rule = ReferenceRule(priority=[], fallback_to_region=True)
    >>> exercise = Exercise(id="incline-press", body_region="chest")
"""

from domain.models.athlete import Athlete, OneRMHistoryEntry, OneRMRecord, OneRMSource
from domain.models.exercise import Exercise
from domain.models.load import Load
from domain.models.reference_rule import (
    ReferenceRule,
    ReferenceRuleSet,
    ResolveResult,
    ResolveSource,
)
from domain.models.session import ExerciseEntry, SetEntry, WorkoutSession

__all__ = [
    # Reference data
    "Exercise",
    "ReferenceRule",
    "ReferenceRuleSet",
    # Athlete data
    "Athlete",
    "OneRMRecord",
    "OneRMHistoryEntry",
    # Results
    "ResolveResult",
    "Load",
    # Logged work
    "WorkoutSession",
    "ExerciseEntry",
    "SetEntry",
    # Enums
    "OneRMSource",
    "ResolveSource",
]
