"""
Shared fixtures.

Router tests get an app built with test settings whose repositories are
replaced by in-memory fakes through ``app.dependency_overrides``.
"""

import pytest
from fastapi.testclient import TestClient

from api import deps
from application.save_gate import SaveGate
from application.services import WorkoutService
from backend.main import create_app
from backend.settings import Settings
from tests.fakes import (
    FakeTemplateRepository,
    FakeWeightHistoryRepository,
    FakeWorkoutRepository,
    create_template_repo,
)


@pytest.fixture
def template_repo() -> FakeTemplateRepository:
    return create_template_repo()


@pytest.fixture
def workout_repo() -> FakeWorkoutRepository:
    return FakeWorkoutRepository()


@pytest.fixture
def weight_repo() -> FakeWeightHistoryRepository:
    return FakeWeightHistoryRepository()


@pytest.fixture
def service(template_repo, workout_repo, weight_repo) -> WorkoutService:
    return WorkoutService(template_repo, workout_repo, weight_repo)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(environment="test", _env_file=None)


@pytest.fixture
def save_gate() -> SaveGate:
    return SaveGate()


@pytest.fixture
def app(test_settings, template_repo, workout_repo, weight_repo, save_gate):
    """App wired to fakes; settings come from ``test_settings``."""
    app = create_app(settings=test_settings)
    app.dependency_overrides[deps.get_settings] = lambda: test_settings
    app.dependency_overrides[deps.get_template_repo] = lambda: template_repo
    app.dependency_overrides[deps.get_workout_repo] = lambda: workout_repo
    app.dependency_overrides[deps.get_weight_history_repo] = lambda: weight_repo
    app.dependency_overrides[deps.get_save_gate] = lambda: save_gate
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)
