"""
Reference rules and resolution results for 1RM lookup.

A rule set maps an exercise ID to the policy used when the athlete has no
own record for that exercise.
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ReferenceRule(BaseModel):
    """
    Fallback policy for one exercise.

    Examples:
        >>> rule = ReferenceRule(priority=["bench-press"], fallback_to_region=True)
        >>> rule.priority
        ['bench-press']
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    priority: List[str] = Field(
        default_factory=list,
        description="Exercise IDs checked in order before anchor search",
    )
    fallback_to_region: bool = Field(default=False, alias="fallbackToRegion")
    fallback_to_group: bool = Field(default=False, alias="fallbackToGroup")

    @field_validator("priority", mode="before")
    @classmethod
    def none_priority_as_empty(cls, v):
        return [] if v is None else v

    @field_validator("fallback_to_region", "fallback_to_group", mode="before")
    @classmethod
    def none_flag_as_false(cls, v):
        return False if v is None else v


# exercise ID -> rule
ReferenceRuleSet = Dict[str, ReferenceRule]


class ResolveSource(str, Enum):
    """Tier that produced a resolved 1RM."""

    OWN = "own"
    PRIORITY = "priority"
    REGION = "region"
    GROUP = "group"


class ResolveResult(BaseModel):
    """Resolved 1RM value and where it came from."""

    model_config = ConfigDict(frozen=True)

    value: float = Field(..., gt=0, description="Resolved 1RM in kg")
    source: ResolveSource
    source_exercise_id: Optional[str] = Field(
        default=None,
        description="Exercise that supplied the value when not the exercise's own record",
    )

    @model_validator(mode="after")
    def validate_source_exercise(self) -> "ResolveResult":
        """Borrowed values must name the exercise they came from."""
        if self.source != ResolveSource.OWN and not self.source_exercise_id:
            raise ValueError(f"source_exercise_id is required for source '{self.source.value}'")
        return self

    @property
    def is_reference(self) -> bool:
        """True if the value was borrowed from another exercise."""
        return self.source != ResolveSource.OWN
