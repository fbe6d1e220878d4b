"""
Athlete and recorded 1RM models.

An athlete exposes recorded maxima in two shapes:

- one_rm_records: structured records (current value, source, history)
- one_rm: legacy flat mapping exercise ID -> kg, still present in older
  store snapshots

The two are merged by backend.core.one_rm_resolver.effective_one_rm_map.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OneRMSource(str, Enum):
    """Where a recorded 1RM value came from."""

    MANUAL = "manual"
    ESTIMATED = "estimated"
    AI_SUGGESTED = "ai_suggested"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OneRMHistoryEntry(BaseModel):
    """A single past value of a 1RM record."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    date: datetime = Field(default_factory=_utcnow)
    value: float
    source: OneRMSource = OneRMSource.MANUAL
    session_id: Optional[str] = Field(default=None, alias="sessionId")


class OneRMRecord(BaseModel):
    """
    User-controlled 1RM record for one exercise.

    current_one_rm is kept as supplied; missing or non-positive values are
    treated as absent when resolving, not rejected here.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    exercise_id: str = Field(..., alias="exerciseId")
    current_one_rm: Optional[float] = Field(
        default=None, alias="currentOneRM", description="Kilograms"
    )
    source: OneRMSource = OneRMSource.MANUAL
    last_update: datetime = Field(default_factory=_utcnow, alias="lastUpdate")
    history: List[OneRMHistoryEntry] = Field(default_factory=list)
    strength_focus_sessions: Optional[int] = Field(
        default=None,
        ge=0,
        alias="strengthFocusSessions",
        description="Number of sessions logged with strength focus",
    )

    @field_validator("history", mode="before")
    @classmethod
    def none_history_as_empty(cls, v):
        return [] if v is None else v


class Athlete(BaseModel):
    """
    Athlete snapshot as needed for load prescription.

    Store snapshots may carry null for either 1RM mapping, or for single
    entries of it; those are read as absent.

    Examples:
        >>> athlete = Athlete(
        ...     id="a1",
        ...     one_rm_records={"bench-press": {"exercise_id": "bench-press", "current_one_rm": 100}},
        ...     one_rm={"squat": 140},
        ... )
        >>> athlete.one_rm_records["bench-press"].current_one_rm
        100.0
        >>> Athlete(id="a1", one_rm=None, one_rm_records={"squat": None}).one_rm_records
        {}
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(..., min_length=1)
    name: str = ""
    current_weight_kg: Optional[float] = Field(
        default=None, gt=0, alias="currentWeightKg"
    )

    one_rm_records: Dict[str, OneRMRecord] = Field(
        default_factory=dict, alias="oneRMRecords"
    )
    one_rm: Dict[str, Optional[float]] = Field(
        default_factory=dict,
        alias="oneRM",
        description="Legacy flat mapping exercise ID -> kg",
    )

    @field_validator("one_rm_records", "one_rm", mode="before")
    @classmethod
    def drop_null_entries(cls, v):
        """Null mappings become empty; null entries are dropped."""
        if v is None:
            return {}
        if isinstance(v, dict):
            return {key: value for key, value in v.items() if value is not None}
        return v

    @field_validator("name", mode="before")
    @classmethod
    def none_name_as_empty(cls, v):
        return "" if v is None else v
