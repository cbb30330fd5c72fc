"""
Shared pytest fixtures for the GameZone test suite.

This module provides fixtures that are automatically available to all test files:
- Temporary durable stores (one SQLite file per test)
- Fully wired application containers, with and without the seeded admin
- Registered test accounts
- FastAPI TestClient instances

Every fixture is function-scoped so tests never share persisted state.
"""

import asyncio
from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from gamezone.api.server import create_app
from gamezone.app import GameZoneApp
from gamezone.config import AppConfig, StoreSettings
from gamezone.identity import User
from gamezone.security import DigestService
from gamezone.store import DurableStore

# Import shared test constants
from tests.constants import TEST_PASSWORD, TEST_RECOVERY


def run_sync(coro):
    """Run a coroutine on a private loop without touching the current event loop."""
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.run_until_complete(loop.shutdown_default_executor())
        loop.close()


# ============================================================================
# STORE FIXTURES
# ============================================================================


@pytest.fixture(scope="function")
def store_path(tmp_path: Path) -> Path:
    """Path of a fresh, not-yet-created store file."""
    return tmp_path / "data" / "gamezone.db"


@pytest.fixture(scope="function")
def store(store_path: Path) -> DurableStore:
    """Empty durable store with the default ``gz_`` prefix."""
    return DurableStore(store_path)


@pytest.fixture(scope="function")
def digest() -> DigestService:
    """Digest service using the platform's strong primitives."""
    return DigestService()


# ============================================================================
# APPLICATION FIXTURES
# ============================================================================


@pytest.fixture(scope="function")
def app_config(store_path: Path) -> AppConfig:
    """Default configuration pointed at the temporary store."""
    return AppConfig(store=StoreSettings(path=str(store_path)))


@pytest.fixture(scope="function")
def zone(app_config: AppConfig) -> GameZoneApp:
    """Application container with an empty store (admin not yet seeded)."""
    return GameZoneApp.from_config(app_config)


@pytest.fixture(scope="function")
def seeded_zone(zone: GameZoneApp) -> GameZoneApp:
    """Application container after startup (admin account seeded)."""
    run_sync(zone.startup())
    return zone


def register_user(zone: GameZoneApp, name: str, email: str) -> User:
    """Register an account with the shared test password and recovery phrase."""
    result = run_sync(zone.users.register(name, email, TEST_PASSWORD, TEST_RECOVERY))
    return result.unwrap()


@pytest.fixture(scope="function")
def alice(seeded_zone: GameZoneApp) -> User:
    """Regular account ``alice@example.com``."""
    return register_user(seeded_zone, "Alice", "alice@example.com")


@pytest.fixture(scope="function")
def bob(seeded_zone: GameZoneApp) -> User:
    """Regular account ``bob@example.com``."""
    return register_user(seeded_zone, "Bob", "bob@example.com")


# ============================================================================
# FASTAPI TEST CLIENT FIXTURES
# ============================================================================


@pytest.fixture(scope="function")
def test_client(zone: GameZoneApp) -> Generator[TestClient, None, None]:
    """
    TestClient for the HTTP API.

    Entering the client runs the application lifespan, which seeds the
    administrator account.
    """
    with TestClient(create_app(zone)) as client:
        yield client
