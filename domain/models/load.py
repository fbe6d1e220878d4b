"""
Load value object for prescribed weights.
"""

from typing import Literal

from pydantic import BaseModel, Field, field_validator


# Conversion constants
LB_TO_KG = 0.45359237


class Load(BaseModel):
    """
    Value object representing a prescribed weight.

    Loads derived from a 1RM are always expressed in kilograms; lb input is
    accepted and converted with to_kg().

    Examples:
        >>> Load(value=80).to_kg()
        80.0

        >>> Load(value=100, unit="lb").to_kg()
        45.36
    """

    value: float = Field(..., gt=0, description="Weight value")
    unit: Literal["kg", "lb"] = Field(default="kg", description="Unit of measurement")

    @field_validator("value")
    @classmethod
    def validate_value(cls, v: float) -> float:
        """Ensure value is positive and reasonable."""
        if v <= 0:
            raise ValueError("Load value must be positive")
        if v > 1000:
            raise ValueError("Load value exceeds reasonable maximum (1000)")
        return round(v, 2)

    def to_kg(self) -> float:
        """Load value in kilograms, rounded to 2 decimal places."""
        if self.unit == "kg":
            return self.value
        return round(self.value * LB_TO_KG, 2)

    def __str__(self) -> str:
        return f"{self.value}{self.unit}"

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {"value": 80, "unit": "kg"},
                {"value": 185, "unit": "lb"},
            ]
        },
    }
