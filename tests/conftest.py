"""Pytest configuration and fixtures."""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from maze_runner.config import get_settings
from maze_runner.main import app

# Entrance at (0, 1), exit at (2, 2), everything else open
CONNECTED_MAZE = "3 3\nxex\nxxx\nxxs"

# A wall column separates entrance and exit
WALLED_MAZE = "3 3\nx#x\ne#s\nx#x"


@pytest.fixture
def connected_maze() -> str:
    return CONNECTED_MAZE


@pytest.fixture
def walled_maze() -> str:
    return WALLED_MAZE


@pytest.fixture
def clean_settings(monkeypatch):
    """Reload settings from a clean environment, without visualization."""
    monkeypatch.setenv("MAZE_RUNNER_DISPLAY_ENABLED", "false")
    monkeypatch.setenv("MAZE_RUNNER_STEP_DELAY_MS", "0")
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


@pytest_asyncio.fixture(scope="function")
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
