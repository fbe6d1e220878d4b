"""
FastAPI Dependency Providers for the Coach Strength API.

This module provides FastAPI dependency injection functions that return
interface types (Protocols) rather than concrete implementations. This
enables clean separation of concerns and easy testing with fake implementations.

Architecture:
- Settings and Supabase client are cached per-process (lru_cache)
- Repository and service providers create new instances per-request
- Auth providers wrap backend.auth

Usage in routers:
    from api.deps import get_current_user, get_one_rm_service
    from backend.services import OneRMService

    @router.get("/athletes/{athlete_id}/one-rm/{exercise_id}")
    def resolve(
        athlete_id: str,
        exercise_id: str,
        service: OneRMService = Depends(get_one_rm_service),
    ):
        return service.resolve(athlete_id, exercise_id)

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_athletes_repo] = lambda: FakeAthleteRepository()
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, HTTPException
from supabase import Client, create_client

# Protocol types (interfaces)
from application.ports import (
    AthleteRepository,
    ExercisesRepository,
    ReferenceRuleRepository,
)

# Concrete implementations
from infrastructure import (
    SupabaseAthleteRepository,
    SupabaseExercisesRepository,
    SupabaseReferenceRuleRepository,
)

from backend.settings import Settings, get_settings as _get_settings
from backend.auth import get_current_user as _get_current_user
from backend.services import OneRMService


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings() -> Settings:
    """
    Get application settings.

    Returns cached Settings instance from backend.settings.
    Use this as a FastAPI dependency for settings access.

    Returns:
        Settings: Application settings instance
    """
    return _get_settings()


# =============================================================================
# Supabase Client Provider
# =============================================================================


@lru_cache
def get_supabase_client() -> Optional[Client]:
    """
    Get Supabase client instance (cached).

    Creates a Supabase client using credentials from settings.
    Returns None if credentials are not configured.

    Returns:
        Client: Supabase client instance, or None if not configured
    """
    settings = _get_settings()

    if not settings.supabase_url or not settings.supabase_key:
        return None

    return create_client(settings.supabase_url, settings.supabase_key)


def get_supabase_client_required() -> Client:
    """
    Get Supabase client instance, raising if not configured.

    Use this dependency when the endpoint requires database access.

    Returns:
        Client: Supabase client instance

    Raises:
        HTTPException: 503 if Supabase is not configured
    """
    client = get_supabase_client()
    if client is None:
        raise HTTPException(
            status_code=503,
            detail="Database not available. Supabase credentials not configured.",
        )
    return client


# =============================================================================
# Repository Providers
# =============================================================================


def get_exercises_repo(
    client: Client = Depends(get_supabase_client_required),
) -> ExercisesRepository:
    """
    Get ExercisesRepository implementation.

    Args:
        client: Supabase client (injected)

    Returns:
        ExercisesRepository: Repository for the exercise catalog
    """
    return SupabaseExercisesRepository(client)


def get_athletes_repo(
    client: Client = Depends(get_supabase_client_required),
) -> AthleteRepository:
    """
    Get AthleteRepository implementation.

    Args:
        client: Supabase client (injected)

    Returns:
        AthleteRepository: Repository for athletes and 1RM records
    """
    return SupabaseAthleteRepository(client)


def get_rules_repo(
    client: Client = Depends(get_supabase_client_required),
) -> ReferenceRuleRepository:
    """
    Get ReferenceRuleRepository implementation.

    Args:
        client: Supabase client (injected)

    Returns:
        ReferenceRuleRepository: Repository for 1RM reference rules
    """
    return SupabaseReferenceRuleRepository(client)


# =============================================================================
# Service Providers
# =============================================================================


def get_one_rm_service(
    exercises_repo: ExercisesRepository = Depends(get_exercises_repo),
    athletes_repo: AthleteRepository = Depends(get_athletes_repo),
    rules_repo: ReferenceRuleRepository = Depends(get_rules_repo),
    settings: Settings = Depends(get_settings),
) -> OneRMService:
    """
    Get OneRMService with injected repositories.

    Returns:
        OneRMService: Service for 1RM resolution and records
    """
    return OneRMService(
        exercises_repo=exercises_repo,
        athletes_repo=athletes_repo,
        rules_repo=rules_repo,
        settings=settings,
    )


# =============================================================================
# Authentication Providers
# =============================================================================


async def get_current_user(
    authorization: Optional[str] = Header(None),
    x_api_key: Optional[str] = Header(None, alias="X-API-Key"),
) -> str:
    """
    Get the current authenticated user ID.

    Wraps backend.auth.get_current_user for dependency injection.

    Raises:
        HTTPException: 401 if authentication fails
    """
    return await _get_current_user(
        authorization=authorization,
        x_api_key=x_api_key,
    )


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    # Settings
    "get_settings",
    # Database
    "get_supabase_client",
    "get_supabase_client_required",
    # Repositories
    "get_exercises_repo",
    "get_athletes_repo",
    "get_rules_repo",
    # Services
    "get_one_rm_service",
    # Authentication
    "get_current_user",
]
