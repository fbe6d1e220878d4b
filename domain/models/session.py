"""
Logged workout data consumed by the 1RM progression advisor.
"""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from domain.models.exercise import Exercise


class SetEntry(BaseModel):
    """A single set, planned and/or performed."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    target_weight: Optional[float] = Field(default=None, ge=0, alias="targetWeight")
    target_reps: Optional[int] = Field(default=None, ge=0, alias="targetReps")
    actual_weight: Optional[float] = Field(default=None, ge=0, alias="actualWeight")
    actual_reps: Optional[int] = Field(default=None, ge=0, alias="actualReps")

    # Effort on a 1-10 scale; intensity takes precedence over rpe
    intensity: Optional[float] = Field(default=None, ge=1, le=10)
    rpe: Optional[float] = Field(default=None, ge=1, le=10)

    is_completed: bool = Field(default=False, alias="isCompleted")


class ExerciseEntry(BaseModel):
    """An exercise performed within a session."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    exercise_id: str = Field(..., alias="exerciseId")
    exercise: Optional[Exercise] = None
    strength_focus: bool = Field(default=False, alias="strengthFocus")
    sets: List[SetEntry] = Field(default_factory=list)


class WorkoutSession(BaseModel):
    """A logged workout session."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    athlete_id: Optional[str] = Field(default=None, alias="athleteId")
    date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    exercises: List[ExerciseEntry] = Field(default_factory=list)
