"""
Exercise reference data for the 1RM reference system.

Catalog exercises are immutable snapshots supplied by the store. Besides the
identity fields they carry the groupings used by anchor fallback:

- body_region: coarse anatomical grouping ("upper", "lower", "legs", ...)
- one_rm_group_id: fine grouping of interchangeable lifts ("squat_pattern")
- is_primary_one_rm: marks an anchor whose recorded max can stand in for others
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Exercise(BaseModel):
    """
    Value object representing a catalog exercise.

    Store snapshots use camelCase keys, so both spellings are accepted.

    Examples:
        >>> bench = Exercise(id="bench-press", body_region="chest", is_primary_one_rm=True)
        >>> bench.is_anchor
        True

        >>> Exercise.model_validate({"id": "incline-press", "bodyRegion": "chest"}).body_region
        'chest'
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
        json_schema_extra={
            "examples": [
                {
                    "id": "barbell-back-squat",
                    "name": "Barbell Back Squat",
                    "body_region": "lower",
                    "one_rm_group_id": "squat_pattern",
                    "is_primary_one_rm": True,
                },
            ]
        },
    )

    id: str = Field(..., min_length=1, description="Opaque exercise ID")
    name: str = Field(default="", description="Display name")

    body_region: Optional[str] = Field(
        default=None,
        alias="bodyRegion",
        description="Coarse anatomical grouping used by region fallback",
    )
    one_rm_group_id: Optional[str] = Field(
        default=None,
        alias="oneRMGroupId",
        description="Fine grouping of interchangeable lifts used by group fallback",
    )
    is_primary_one_rm: bool = Field(
        default=False,
        alias="isPrimaryOneRM",
        description="True if this exercise is a 1RM anchor",
    )

    # Bodyweight handling
    is_bodyweight: bool = Field(default=False, alias="isBodyweight")
    allows_loaded_weight: bool = Field(default=False, alias="allowsLoadedWeight")

    @field_validator("is_primary_one_rm", "is_bodyweight", "allows_loaded_weight", mode="before")
    @classmethod
    def none_flag_as_false(cls, v):
        return False if v is None else v

    @property
    def is_anchor(self) -> bool:
        """True if this exercise may stand in for related exercises."""
        return self.is_primary_one_rm

    def __str__(self) -> str:
        return self.name or self.id
