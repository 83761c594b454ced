from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

import devcred.workers.fetcher as fetcher_module
from devcred.main import app


class FakeClock:
    """Manually advanced stand-in for ``time.monotonic``."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture(autouse=True)
def _fresh_http_client():
    """Never let a shared httpx client leak between tests."""
    fetcher_module._http_client = None
    yield
    fetcher_module._http_client = None


@pytest.fixture
def client():
    """TestClient with lifespan startup/shutdown hooks fully mocked."""
    with (
        patch(
            "devcred.core.database.DatabaseManager.connect",
            new_callable=AsyncMock,
        ),
        patch(
            "devcred.core.database.DatabaseManager.disconnect",
            new_callable=AsyncMock,
        ),
        patch(
            "devcred.core.database.DatabaseManager.get_collection",
            return_value=MagicMock(),
        ),
        patch(
            "devcred.repositories.grove.repository.GroveUriRepository.ensure_indexes",
            new_callable=AsyncMock,
        ),
        patch(
            "devcred.main.close_http_client",
            new_callable=AsyncMock,
        ),
    ):
        with TestClient(app) as c:
            yield c
