"""
Infrastructure Database Layer.

This package provides Supabase-backed implementations of the repository interfaces
defined in application.ports. These implementations can be injected into services
and routers for clean separation of concerns and testability.

Usage:
    from supabase import create_client
    from infrastructure.db import (
        SupabaseExercisesRepository,
        SupabaseAthleteRepository,
        SupabaseReferenceRuleRepository,
    )

    # Create Supabase client
    client = create_client(SUPABASE_URL, SUPABASE_KEY)

    # Instantiate repositories with injected client
    exercises_repo = SupabaseExercisesRepository(client)
    athletes_repo = SupabaseAthleteRepository(client)
    rules_repo = SupabaseReferenceRuleRepository(client)
"""

from infrastructure.db.exercises_repository import SupabaseExercisesRepository
from infrastructure.db.athlete_repository import SupabaseAthleteRepository
from infrastructure.db.reference_rule_repository import SupabaseReferenceRuleRepository

__all__ = [
    # Exercise catalog
    "SupabaseExercisesRepository",

    # Athletes and 1RM records
    "SupabaseAthleteRepository",

    # 1RM reference rules
    "SupabaseReferenceRuleRepository",
]
