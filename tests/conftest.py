"""
Shared pytest fixtures.

Provides fake repositories, a OneRMService wired to them, and a TestClient
whose dependencies are overridden with the same fakes.
"""
import pytest
from fastapi.testclient import TestClient

from api.deps import (
    get_athletes_repo,
    get_current_user,
    get_exercises_repo,
    get_rules_repo,
    get_settings as get_deps_settings,
)
from backend.main import create_app
from backend.services import OneRMService
from backend.settings import Settings, get_settings
from tests.fakes import (
    FakeExercisesRepository,
    FakeReferenceRuleRepository,
    create_athletes_repo,
)


@pytest.fixture
def settings():
    """Test settings that ignore any local .env file."""
    return Settings(
        environment="test",
        supabase_url=None,
        supabase_service_role_key=None,
        supabase_anon_key=None,
        _env_file=None,
    )


@pytest.fixture
def exercises_repo():
    """Fake catalog with the default anchors and accessories."""
    return FakeExercisesRepository()


@pytest.fixture
def athletes_repo():
    """Fake athlete store with athlete-1 (squat 140, bench 100)."""
    return create_athletes_repo()


@pytest.fixture
def rules_repo():
    """Empty fake rule store."""
    return FakeReferenceRuleRepository()


@pytest.fixture
def service(exercises_repo, athletes_repo, rules_repo, settings):
    """OneRMService wired to the fake repositories."""
    return OneRMService(
        exercises_repo=exercises_repo,
        athletes_repo=athletes_repo,
        rules_repo=rules_repo,
        settings=settings,
    )


@pytest.fixture
def client(exercises_repo, athletes_repo, rules_repo, settings):
    """Create a test client with fake dependencies."""
    app = create_app(settings=settings)

    async def mock_user():
        return "coach-1"

    app.dependency_overrides[get_current_user] = mock_user
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_deps_settings] = lambda: settings
    app.dependency_overrides[get_exercises_repo] = lambda: exercises_repo
    app.dependency_overrides[get_athletes_repo] = lambda: athletes_repo
    app.dependency_overrides[get_rules_repo] = lambda: rules_repo

    yield TestClient(app)

    app.dependency_overrides.clear()
