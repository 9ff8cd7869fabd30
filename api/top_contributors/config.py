"""Service configuration read from the process environment (and an optional .env file)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from top_contributors.models.repository import RepositoryRef
from top_contributors.services.github_client import DEFAULT_BASE_URL

DEFAULT_REPOSITORIES = (
    "vercel/next.js",
    "remix-run/remix",
    "withastro/astro",
    "sveltejs/kit",
    "angular/angular",
    "nuxt/framework",
    "gatsbyjs/gatsby",
    "solidjs/solid-start",
    "redwoodjs/redwood",
    "facebook/react",
    "preactjs/preact",
    "sveltejs/svelte",
    "solidjs/solid",
    "QwikDev/qwik",
)

_API_DIR = Path(__file__).resolve().parents[1]


def load_env_file(path: Path | None = None) -> None:
    """Load ``api/.env`` into the environment without overriding exported values."""
    load_dotenv(path or _API_DIR / ".env", override=False)


def env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name, "1" if default else "").strip().lower()
    return raw in {"1", "true", "yes", "on"}


def _env_float(name: str, default: float, minimum: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return max(minimum, float(raw))
    except ValueError:
        return default


def parse_repositories(raw: str | None) -> tuple[RepositoryRef, ...]:
    """Comma-separated ``owner/name`` list; blank -> the default framework list."""
    chunks = [chunk.strip() for chunk in (raw or "").split(",") if chunk.strip()]
    if not chunks:
        chunks = list(DEFAULT_REPOSITORIES)
    return tuple(RepositoryRef.parse(chunk) for chunk in chunks)


@dataclass(frozen=True)
class Settings:
    github_token: str = ""
    github_api_url: str = DEFAULT_BASE_URL
    github_timeout_seconds: float = 20.0
    repositories: tuple[RepositoryRef, ...] = field(
        default_factory=lambda: parse_repositories(None)
    )
    slow_request_ms: float = 1500.0
    log_all_requests: bool = False

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            github_token=(os.getenv("GITHUB_API_TOKEN") or "").strip(),
            github_api_url=(os.getenv("GITHUB_API_URL") or DEFAULT_BASE_URL).strip(),
            github_timeout_seconds=_env_float("GITHUB_API_TIMEOUT_SECONDS", 20.0, minimum=1.0),
            repositories=parse_repositories(os.getenv("TOP_CONTRIBUTORS_REPOS")),
            slow_request_ms=_env_float("API_SLOW_REQUEST_MS", 1500.0, minimum=25.0),
            log_all_requests=env_flag("API_LOG_ALL_REQUESTS", False),
        )
