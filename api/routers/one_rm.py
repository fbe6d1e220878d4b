"""
1RM router for reference rules and estimation.

This router provides endpoints for:
- Listing, setting and deleting 1RM reference rules
- Estimating a 1RM from weight x reps
"""
import re
from typing import Dict, List

from fastapi import APIRouter, Depends, HTTPException, Path
from pydantic import BaseModel, Field

from api.deps import get_current_user, get_one_rm_service
from backend.core.one_rm_calculator import (
    estimate_one_rm,
    estimate_one_rm_average,
    recommended_increment,
)
from backend.services import OneRMService, ExerciseNotFoundError
from domain.models import ReferenceRule

router = APIRouter(
    prefix="/one-rm",
    tags=["1RM"],
)


# =============================================================================
# Request / Response Models
# =============================================================================


class ReferenceRuleBody(BaseModel):
    """A 1RM reference rule."""
    priority: List[str] = Field(default_factory=list, max_length=20)
    fallback_to_region: bool = False
    fallback_to_group: bool = False


class RulesResponse(BaseModel):
    """All configured reference rules."""
    rules: Dict[str, ReferenceRuleBody]
    total: int


class EstimateRequest(BaseModel):
    """Weight and reps of a performed set."""
    weight: float = Field(..., gt=0, le=1000, description="Weight in kg")
    reps: int = Field(..., ge=1, le=100)


class EstimateResponse(BaseModel):
    """1RM estimates for a set."""
    weight: float
    reps: int
    estimated_one_rm: float
    epley: float
    brzycki: float
    lombardi: float
    average: float
    recommended_increment: float


# =============================================================================
# Endpoints
# =============================================================================


# Valid exercise ID pattern: lowercase letters, numbers, hyphens and underscores
EXERCISE_ID_PATTERN = re.compile(r"^[a-z0-9][a-z0-9_-]*[a-z0-9]$|^[a-z0-9]$")


def _validate_exercise_id(exercise_id: str) -> None:
    """Validate exercise ID format."""
    if not EXERCISE_ID_PATTERN.match(exercise_id):
        raise HTTPException(
            status_code=400,
            detail="Invalid exercise_id format. Use lowercase letters, numbers, hyphens and underscores only."
        )


@router.get("/rules", response_model=RulesResponse)
async def list_rules(
    user_id: str = Depends(get_current_user),
    service: OneRMService = Depends(get_one_rm_service),
) -> RulesResponse:
    """Get every configured 1RM reference rule."""
    rules = service.get_rules()
    return RulesResponse(
        rules={
            exercise_id: ReferenceRuleBody(**rule.model_dump())
            for exercise_id, rule in rules.items()
        },
        total=len(rules),
    )


@router.put("/rules/{exercise_id}", response_model=ReferenceRuleBody)
async def put_rule(
    body: ReferenceRuleBody,
    exercise_id: str = Path(..., description="Exercise the rule applies to"),
    user_id: str = Depends(get_current_user),
    service: OneRMService = Depends(get_one_rm_service),
) -> ReferenceRuleBody:
    """Insert or replace the reference rule for an exercise."""
    _validate_exercise_id(exercise_id)
    for ref_id in body.priority:
        _validate_exercise_id(ref_id)

    try:
        saved = service.set_rule(exercise_id, ReferenceRule(**body.model_dump()))
    except ExerciseNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return ReferenceRuleBody(**saved.model_dump())


@router.delete("/rules/{exercise_id}")
async def delete_rule(
    exercise_id: str = Path(..., description="Exercise the rule applies to"),
    user_id: str = Depends(get_current_user),
    service: OneRMService = Depends(get_one_rm_service),
) -> dict:
    """Delete the reference rule for an exercise."""
    _validate_exercise_id(exercise_id)

    if not service.delete_rule(exercise_id):
        raise HTTPException(status_code=404, detail=f"No rule for exercise '{exercise_id}'")
    return {"deleted": True, "exercise_id": exercise_id}


@router.post("/estimate", response_model=EstimateResponse)
async def estimate(
    body: EstimateRequest,
    user_id: str = Depends(get_current_user),
) -> EstimateResponse:
    """Estimate a 1RM from a performed set."""
    estimated = estimate_one_rm(body.weight, body.reps)
    formulas = estimate_one_rm_average(body.weight, body.reps)
    return EstimateResponse(
        weight=body.weight,
        reps=body.reps,
        estimated_one_rm=estimated,
        recommended_increment=recommended_increment(estimated),
        **formulas,
    )
