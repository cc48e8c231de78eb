"""Pytest configuration for backend tests.

Every test gets its own SQLite file, connection registry and stub catalog
resolver, wired in through FastAPI dependency overrides.
"""

from typing import Callable, Optional

import pytest
from fastapi.testclient import TestClient

from songlink.core.config import Config
from songlink.core.database import get_db_connection, init_database
from songlink.domain import accounts
from songlink.domain.catalog import Provider, TrackDescriptor
from songlink.domain.dispatch import ConnectionRegistry
from web.backend.deps import get_config, get_registry, get_resolver
from web.backend.main import app

SPECTATOR_BASE = "http://spectator.test"


class StubResolver:
    """Stands in for CatalogResolver; records every resolve() call."""

    def __init__(self, track: Optional[TrackDescriptor] = None, error: Exception = None):
        self.track = track
        self.error = error
        self.calls: list[tuple[Provider, str]] = []

    async def resolve(self, provider, query: str) -> Optional[TrackDescriptor]:
        self.calls.append((provider, query))
        if self.error:
            raise self.error
        return self.track


@pytest.fixture
def config(tmp_path) -> Config:
    config = Config()
    config.database.path = str(tmp_path / "songlink.db")
    config.auth.jwt_secret = "test-secret"
    config.auth.bcrypt_rounds = 4  # Fast hashing for tests
    config.server.spectator_url = SPECTATOR_BASE
    return config


@pytest.fixture
def registry(config: Config) -> ConnectionRegistry:
    def account_exists(username: str) -> bool:
        with get_db_connection(config.database.path) as conn:
            return accounts.username_exists(conn, username)

    return ConnectionRegistry(account_exists)


@pytest.fixture
def resolver() -> StubResolver:
    return StubResolver(TrackDescriptor(id="abc", name="Yesterday", artist="The Beatles"))


@pytest.fixture
def client(config: Config, registry: ConnectionRegistry, resolver: StubResolver):
    init_database(config.database.path)
    app.dependency_overrides[get_config] = lambda: config
    app.dependency_overrides[get_registry] = lambda: registry
    app.dependency_overrides[get_resolver] = lambda: resolver
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def register_user(client: TestClient) -> Callable[..., dict]:
    """Register an account through the API and return the response JSON."""

    def _register(
        username: str = "alice",
        email: Optional[str] = None,
        password: str = "secret123",
    ) -> dict:
        response = client.post(
            "/api/auth/register",
            json={
                "email": email or f"{username}@example.com",
                "password": password,
                "username": username,
            },
        )
        assert response.status_code == 200, response.text
        return response.json()

    return _register


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers() -> Callable[[str], dict]:
    return auth_headers
