"""Backend services for the Coach Strength API."""

from backend.services.one_rm_service import (
    AthleteNotFoundError,
    ExerciseNotFoundError,
    OneRMService,
    OneRMServiceError,
)

__all__ = [
    "OneRMService",
    "OneRMServiceError",
    "AthleteNotFoundError",
    "ExerciseNotFoundError",
]
