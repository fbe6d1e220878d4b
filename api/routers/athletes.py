"""
Athlete 1RM router.

This router provides endpoints for:
- Resolving the 1RM used for an athlete and exercise
- Load suggestions for a rep target
- Reference labels ("Ref: Bench Press 100kg")
- Recording user-confirmed 1RM values
- 1RM recommendations for a logged session
"""
import re
from dataclasses import asdict
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from pydantic import BaseModel, Field

from api.deps import get_current_user, get_one_rm_service
from backend.services import OneRMService, OneRMServiceError, AthleteNotFoundError
from domain.models import OneRMSource, ResolveResult, WorkoutSession

router = APIRouter(
    prefix="/athletes",
    tags=["Athlete 1RM"],
)


# =============================================================================
# Request / Response Models
# =============================================================================


class ResolutionResponse(BaseModel):
    """Resolved 1RM for an athlete and exercise."""
    athlete_id: str
    exercise_id: str
    resolved: bool
    value: Optional[float] = None
    source: Optional[str] = None  # "own", "priority", "region", "group"
    source_exercise_id: Optional[str] = None


class LoadSuggestionResponse(BaseModel):
    """Suggested working load for a rep target."""
    athlete_id: str
    exercise_id: str
    target_reps: int
    resolved: bool
    one_rm: Optional[float] = None
    source: Optional[str] = None
    percentage: Optional[int] = None
    load_kg: Optional[float] = None
    is_reference: bool = False
    text: str = ""


class ReferenceContextResponse(BaseModel):
    """UI labels describing a resolved 1RM."""
    has_reference: bool
    reference_type: str
    display_text: str = ""
    short_text: str = ""
    one_rm: Optional[float] = None
    source_exercise_id: Optional[str] = None
    source_exercise_name: Optional[str] = None


class RecordOneRMRequest(BaseModel):
    """User-confirmed 1RM value."""
    value: float = Field(..., gt=0, le=1000, description="1RM in kg")
    source: OneRMSource = OneRMSource.MANUAL
    session_id: Optional[str] = None


class HistoryEntryResponse(BaseModel):
    date: datetime
    value: float
    source: str
    session_id: Optional[str] = None


class OneRMRecordResponse(BaseModel):
    """A stored 1RM record."""
    exercise_id: str
    current_one_rm: float
    source: str
    last_update: datetime
    history: List[HistoryEntryResponse] = Field(default_factory=list)
    strength_focus_sessions: Optional[int] = None


class RecommendationResponse(BaseModel):
    """A proposed 1RM change."""
    exercise_id: str
    exercise_name: Optional[str] = None
    action: str
    suggested_one_rm: float
    current_one_rm: Optional[float] = None
    change_percent: float
    change_absolute: float
    rationale: str
    confidence: float
    based_on_sets: int
    average_intensity: float


class SessionAnalysisResponse(BaseModel):
    """1RM recommendations for a session."""
    athlete_id: str
    session_id: str
    recommendations: List[RecommendationResponse]
    total: int


# =============================================================================
# Helpers
# =============================================================================


# Valid ID pattern: lowercase letters, numbers, hyphens and underscores
ID_PATTERN = re.compile(r"^[a-z0-9][a-z0-9_-]*[a-z0-9]$|^[a-z0-9]$")


def _validate_id(value: str, name: str) -> None:
    """Validate an athlete or exercise ID."""
    if not ID_PATTERN.match(value):
        raise HTTPException(
            status_code=400,
            detail=f"Invalid {name} format. Use lowercase letters, numbers, hyphens and underscores only."
        )


def _not_found(error: OneRMServiceError) -> HTTPException:
    return HTTPException(status_code=404, detail=str(error))


def _resolution_fields(result: Optional[ResolveResult]) -> dict:
    if result is None:
        return {"resolved": False}
    return {
        "resolved": True,
        "value": result.value,
        "source": result.source.value,
        "source_exercise_id": result.source_exercise_id,
    }


# =============================================================================
# Endpoints
# =============================================================================


@router.get("/{athlete_id}/one-rm/{exercise_id}", response_model=ResolutionResponse)
async def resolve_one_rm(
    athlete_id: str = Path(..., description="Athlete ID"),
    exercise_id: str = Path(..., description="Exercise ID"),
    user_id: str = Depends(get_current_user),
    service: OneRMService = Depends(get_one_rm_service),
) -> ResolutionResponse:
    """
    Resolve the 1RM to use for an exercise.

    Returns resolved=false when the athlete has no usable data; that is a
    normal outcome, not an error.
    """
    _validate_id(athlete_id, "athlete_id")
    _validate_id(exercise_id, "exercise_id")

    try:
        result = service.resolve(athlete_id, exercise_id)
    except OneRMServiceError as e:
        raise _not_found(e)

    return ResolutionResponse(
        athlete_id=athlete_id,
        exercise_id=exercise_id,
        **_resolution_fields(result),
    )


@router.get("/{athlete_id}/one-rm/{exercise_id}/suggestion", response_model=LoadSuggestionResponse)
async def get_load_suggestion(
    athlete_id: str = Path(..., description="Athlete ID"),
    exercise_id: str = Path(..., description="Exercise ID"),
    reps: int = Query(..., ge=1, le=50, description="Target reps per set"),
    user_id: str = Depends(get_current_user),
    service: OneRMService = Depends(get_one_rm_service),
) -> LoadSuggestionResponse:
    """Suggest a working load for a rep target from the resolved 1RM."""
    _validate_id(athlete_id, "athlete_id")
    _validate_id(exercise_id, "exercise_id")

    try:
        result, suggestion = service.suggest_load(athlete_id, exercise_id, reps)
    except OneRMServiceError as e:
        raise _not_found(e)

    response = LoadSuggestionResponse(
        athlete_id=athlete_id,
        exercise_id=exercise_id,
        target_reps=reps,
        resolved=result is not None,
        one_rm=result.value if result else None,
        source=result.source.value if result else None,
    )
    if suggestion is not None:
        response.percentage = suggestion.percentage
        response.load_kg = suggestion.load.to_kg()
        response.is_reference = suggestion.is_reference
        response.text = suggestion.text
    return response


@router.get("/{athlete_id}/one-rm/{exercise_id}/context", response_model=ReferenceContextResponse)
async def get_reference_context(
    athlete_id: str = Path(..., description="Athlete ID"),
    exercise_id: str = Path(..., description="Exercise ID"),
    user_id: str = Depends(get_current_user),
    service: OneRMService = Depends(get_one_rm_service),
) -> ReferenceContextResponse:
    """Describe where the resolved 1RM comes from, for display."""
    _validate_id(athlete_id, "athlete_id")
    _validate_id(exercise_id, "exercise_id")

    try:
        context = service.get_reference_context(athlete_id, exercise_id)
    except OneRMServiceError as e:
        raise _not_found(e)

    return ReferenceContextResponse(**asdict(context))


@router.put("/{athlete_id}/one-rm/{exercise_id}", response_model=OneRMRecordResponse)
async def record_one_rm(
    body: RecordOneRMRequest,
    athlete_id: str = Path(..., description="Athlete ID"),
    exercise_id: str = Path(..., description="Exercise ID"),
    user_id: str = Depends(get_current_user),
    service: OneRMService = Depends(get_one_rm_service),
) -> OneRMRecordResponse:
    """
    Record a user-confirmed 1RM.

    This is the only way a 1RM changes; recommendations are never applied
    automatically.
    """
    _validate_id(athlete_id, "athlete_id")
    _validate_id(exercise_id, "exercise_id")

    try:
        record = service.record_one_rm(
            athlete_id,
            exercise_id,
            body.value,
            source=body.source,
            session_id=body.session_id,
        )
    except OneRMServiceError as e:
        raise _not_found(e)

    return OneRMRecordResponse.model_validate(record.model_dump(mode="json"))


@router.post("/{athlete_id}/one-rm/analysis", response_model=SessionAnalysisResponse)
async def analyze_session(
    session: WorkoutSession,
    athlete_id: str = Path(..., description="Athlete ID"),
    user_id: str = Depends(get_current_user),
    service: OneRMService = Depends(get_one_rm_service),
) -> SessionAnalysisResponse:
    """Recommend 1RM changes from a logged session. Nothing is saved."""
    _validate_id(athlete_id, "athlete_id")

    try:
        recommendations = service.analyze_session(athlete_id, session)
    except AthleteNotFoundError as e:
        raise _not_found(e)

    items = []
    for rec in recommendations:
        data = asdict(rec)
        data["action"] = rec.action.value
        items.append(RecommendationResponse(**data))

    return SessionAnalysisResponse(
        athlete_id=athlete_id,
        session_id=session.id,
        recommendations=items,
        total=len(items),
    )
