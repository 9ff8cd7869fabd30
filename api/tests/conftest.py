"""Pytest configuration and fixtures."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from top_contributors.config import Settings
from top_contributors.models.contributor import RawContributor
from top_contributors.models.repository import RepositoryRef
from top_contributors.services.github_client import GitHubFetchError

_ENV_KEYS = (
    "GITHUB_API_TOKEN",
    "GITHUB_API_URL",
    "GITHUB_API_TIMEOUT_SECONDS",
    "TOP_CONTRIBUTORS_REPOS",
    "API_SLOW_REQUEST_MS",
    "API_LOG_ALL_REQUESTS",
)


class FakeContributorSource:
    """In-memory stand-in for GitHubClient.

    ``batches`` maps ``owner/name`` to a list of (login, contributions) tuples or an
    exception to raise; ``delays`` maps ``owner/name`` to seconds to sleep first.
    """

    def __init__(self, batches=None, delays=None) -> None:
        self.batches = dict(batches or {})
        self.delays = dict(delays or {})
        self.calls: list[tuple[str, int]] = []
        self.completed: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.authenticated = True

    async def list_contributors(self, owner: str, repo: str, per_page: int = 30) -> list[RawContributor]:
        full_name = f"{owner}/{repo}"
        self.calls.append((full_name, per_page))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(full_name, 0))
            batch = self.batches.get(full_name, [])
            if isinstance(batch, BaseException):
                raise batch
            return [RawContributor(login=login, contributions=count) for login, count in batch]
        finally:
            self.in_flight -= 1
            self.completed.append(full_name)


def repos(*names: str) -> tuple[RepositoryRef, ...]:
    return tuple(RepositoryRef.parse(name) for name in names)


def fetch_error(full_name: str, status_code: int | None = 401) -> GitHubFetchError:
    return GitHubFetchError(full_name, f"HTTP {status_code}: Bad credentials", status_code=status_code)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def configured_app():
    """The FastAPI app with state restored after the test."""
    from top_contributors.main import app

    saved = {key: getattr(app.state, key, None) for key in ("settings", "github_client", "ranking_policy")}
    try:
        yield app
    finally:
        for key, value in saved.items():
            setattr(app.state, key, value)


@pytest.fixture
def install(configured_app):
    """Install a contributor source and repository list on the app."""

    def _install(source, repositories=(), **settings_overrides):
        configured_app.state.settings = Settings(repositories=tuple(repositories), **settings_overrides)
        configured_app.state.github_client = source
        return configured_app

    return _install


@pytest_asyncio.fixture
async def client(configured_app):
    transport = ASGITransport(app=configured_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
