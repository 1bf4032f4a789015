"""
@file: conftest.py
@description:
This module provides pytest fixtures and configuration for the PickResults API test suite.
It sets up common test fixtures that can be reused across test modules.

Fixtures include:
- Mock authentication tokens
- An in-memory SQLite pick store
- A fake game state client
- Test client setup with dependency overrides
- Environment configuration for testing

@dependencies:
- pytest: For test framework and fixtures
- fastapi.testclient: For testing FastAPI applications
- sqlalchemy: For the in-memory test database
- app.main: The main FastAPI application
- app.core.auth: Authentication utilities

@notes:
- Fixtures are automatically available to all test modules in the package
- Environment variables are set before the app is imported, since settings
  are read once at import time
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("TESTING", "True")

from typing import Dict, List, Tuple, Union

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from app.api.deps import get_pick_store
from app.core.auth import create_access_token
from app.core.config import settings
from app.db.init_db import init_db
from app.db.models import Pick
from app.db.session import create_db_engine, create_session_factory
from app.main import app
from app.schemas.games import GameResult
from app.services.pick_store import PickStore
from app.services.sportradar_api import BaseGameStateClient, GameNotFoundError, get_game_state_client


class FakeGameClient(BaseGameStateClient):
    """
    In-memory game state client.

    Games are registered per (league, game id); a registered exception is
    raised instead of returning a game. Unknown games raise GameNotFoundError.
    """

    def __init__(self):
        self.games: Dict[Tuple[str, str], Union[GameResult, Exception]] = {}
        self.calls: List[Tuple[str, str]] = []

    def add(self, sport: str, game_id: str, result: Union[GameResult, Exception]) -> None:
        self.games[(sport.upper(), game_id)] = result

    async def fetch_game(self, sport: str, external_game_id: str) -> GameResult:
        key = (sport.upper(), external_game_id)
        self.calls.append(key)
        result = self.games.get(key)
        if result is None:
            raise GameNotFoundError(f"Game not found: {external_game_id}")
        if isinstance(result, Exception):
            raise result
        return result


def _make_game(
    game_id: str = "game-1",
    home_team: str = "Los Angeles Lakers",
    away_team: str = "Boston Celtics",
    home_score=110,
    away_score=105,
    status: str = "closed",
    league: str = "NBA",
) -> GameResult:
    """Build a GameResult with sensible defaults (a finished Lakers win)."""
    return GameResult(
        game_id=game_id,
        league=league,
        home_team=home_team,
        away_team=away_team,
        home_score=home_score,
        away_score=away_score,
        status=status,
    )


@pytest.fixture
def make_game():
    return _make_game


@pytest.fixture
def db_engine():
    """In-memory SQLite engine shared across threads, with the schema created."""
    engine = create_db_engine("sqlite://", poolclass=StaticPool)
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return create_session_factory(db_engine)


@pytest.fixture
def pick_store(session_factory):
    return PickStore(session_factory)


@pytest.fixture
def add_pick(session_factory):
    """
    Factory fixture inserting a pick row and returning its id.

    Defaults to an ungraded WINNER pick on NBA game "game-1".
    """
    def _add_pick(**fields) -> str:
        values = {
            "sport": "NBA",
            "external_game_id": "game-1",
            "prediction_type": "WINNER",
            "predicted_winner": "Lakers",
        }
        values.update(fields)
        with session_factory() as session, session.begin():
            pick = Pick(**values)
            session.add(pick)
            session.flush()
            pick_id = pick.id
        return pick_id

    return _add_pick


@pytest.fixture
def load_pick(session_factory):
    """Read a pick row back by id."""
    def _load_pick(pick_id: str) -> Pick:
        with session_factory() as session:
            return session.get(Pick, pick_id)

    return _load_pick


@pytest.fixture
def fake_client():
    return FakeGameClient()


@pytest.fixture
def test_client():
    """
    Fixture that returns a TestClient instance for the FastAPI app.
    This allows tests to make requests to the application.
    """
    with TestClient(app) as client:
        yield client


@pytest.fixture
def api_client(pick_store, fake_client):
    """
    TestClient with the pick store and game client swapped for test doubles.
    """
    app.dependency_overrides[get_pick_store] = lambda: pick_store
    app.dependency_overrides[get_game_state_client] = lambda: fake_client
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def user_token():
    """
    Fixture that returns a valid user JWT token for testing.
    This token has standard user permissions.
    """
    return create_access_token(
        data={"sub": "user", "scopes": ["picks"]},
        expires_delta=None
    )


@pytest.fixture
def admin_token():
    """
    Fixture that returns a valid admin JWT token for testing.
    This token has admin permissions.
    """
    return create_access_token(
        data={"sub": "admin", "scopes": ["picks", "admin"]},
        expires_delta=None
    )


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """
    Fixture that sets up the test environment.
    This fixture runs automatically for each test.
    """
    monkeypatch.setattr(settings, "APP_ENV", "test")
    monkeypatch.setattr(settings, "JWT_SECRET", "test-secret")
    monkeypatch.setattr(settings, "CRON_SECRET", None)
    monkeypatch.setattr(settings, "SPORTRADAR_API_KEY", "test-key")
    # The in-memory test database is a single shared connection
    monkeypatch.setattr(settings, "SYNC_MAX_CONCURRENCY", 1)
    yield
