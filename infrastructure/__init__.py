"""
Infrastructure Layer for the Coach Strength API.

This package contains concrete implementations of repository interfaces:
- db/: Supabase database implementations
"""

# Re-export database repositories for convenient access
from infrastructure.db import (
    SupabaseExercisesRepository,
    SupabaseAthleteRepository,
    SupabaseReferenceRuleRepository,
)

__all__ = [
    "SupabaseExercisesRepository",
    "SupabaseAthleteRepository",
    "SupabaseReferenceRuleRepository",
]
