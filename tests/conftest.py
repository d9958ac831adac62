"""
Shared fixtures: linked fake repositories and a TestClient wired to them.
"""
import pytest
from fastapi.testclient import TestClient

from api import deps
from backend.main import create_app
from backend.settings import Settings
from tests.fakes import create_linked_repos


@pytest.fixture
def repos():
    """Fresh, linked in-memory repositories with the default catalog."""
    return create_linked_repos()


@pytest.fixture
def test_settings():
    return Settings(environment="test", _env_file=None)


@pytest.fixture
def app(repos, test_settings):
    """App instance whose repositories are the fakes."""
    application = create_app(settings=test_settings)
    application.dependency_overrides[deps.get_settings] = lambda: test_settings
    application.dependency_overrides[deps.get_workout_repo] = lambda: repos.workouts
    application.dependency_overrides[deps.get_exercises_repo] = lambda: repos.exercises
    application.dependency_overrides[deps.get_template_repo] = lambda: repos.templates
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    return TestClient(app)
