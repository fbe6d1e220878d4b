"""
Repository Interfaces (Ports) for the Coach Strength API.

This package defines abstract interfaces that decouple domain logic from
infrastructure (database, external services). Implementations are provided
in the infrastructure layer.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the domain needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import AthleteRepository, ExercisesRepository

    class OneRMService:
        def __init__(self, athletes_repo: AthleteRepository, ...):
            self._athletes_repo = athletes_repo
"""

# Exercise catalog
from application.ports.exercises_repository import ExercisesRepository

# Athletes and recorded 1RMs
from application.ports.athlete_repository import AthleteRepository

# 1RM reference rules
from application.ports.reference_rule_repository import ReferenceRuleRepository

__all__ = [
    "ExercisesRepository",
    "AthleteRepository",
    "ReferenceRuleRepository",
]
