"""
API package for the Coach Strength API.

This package contains:
- deps.py: FastAPI dependency providers for DI
- routers/: API route handlers
"""

# Re-export dependency providers for convenient access
from api.deps import (
    get_settings,
    get_supabase_client,
    get_supabase_client_required,
    get_exercises_repo,
    get_athletes_repo,
    get_rules_repo,
    get_one_rm_service,
    get_current_user,
)

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
