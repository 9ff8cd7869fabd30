"""GitHub API client for contributor listings.

Async REST wrapper with:
- explicit token auth (the caller supplies the token; no environment lookup)
- one attempt per call: no retry, no rate-limit sleeping, no response cache
- every failure surfaced as GitHubFetchError
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from top_contributors.models.contributor import RawContributor

DEFAULT_BASE_URL = "https://api.github.com"
DEFAULT_PAGE_SIZE = 30
log = logging.getLogger(__name__)


class GitHubFetchError(RuntimeError):
    """Contributor fetch failed: network, auth, rate limit or unexpected payload."""

    def __init__(self, repo: str, message: str, status_code: int | None = None) -> None:
        super().__init__(f"GitHub API error for {repo}: {message}")
        self.repo = repo
        self.status_code = status_code
        self.message = message


class GitHubClient:
    def __init__(
        self,
        token: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        user_agent: str = "framework-top-contributors/1.0",
        timeout: float = 20.0,
    ) -> None:
        self._token = (token or "").strip() or None
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": user_agent,
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self._token:
            self._headers["Authorization"] = f"Bearer {self._token}"

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def authenticated(self) -> bool:
        return self._token is not None

    async def _get(self, url: str, params: dict[str, Any], repo: str) -> httpx.Response:
        try:
            async with httpx.AsyncClient(timeout=self._timeout, headers=self._headers) as client:
                return await client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise GitHubFetchError(repo, f"{exc.__class__.__name__}: {exc}") from exc

    async def list_contributors(self, owner: str, repo: str, per_page: int = DEFAULT_PAGE_SIZE) -> list[RawContributor]:
        """Fetch one page of the repository's contributors, most active first (API order kept)."""
        full_name = f"{owner}/{repo}"
        url = f"{self._base_url}/repos/{owner}/{repo}/contributors"
        r = await self._get(url, {"per_page": per_page, "anon": "false"}, full_name)

        if r.status_code == 204:
            # Empty repository: GitHub answers 204 with no body.
            return []
        if r.status_code >= 400:
            raise GitHubFetchError(full_name, f"HTTP {r.status_code}: {r.text[:200]}", status_code=r.status_code)

        try:
            data = r.json()
        except ValueError as exc:
            raise GitHubFetchError(full_name, "response body is not JSON", status_code=r.status_code) from exc
        if not isinstance(data, list):
            raise GitHubFetchError(full_name, "expected a JSON list of contributors", status_code=r.status_code)

        try:
            rows = [RawContributor.model_validate(item) for item in data]
        except ValidationError as exc:
            raise GitHubFetchError(full_name, f"malformed contributor entry: {exc.errors()[0]['msg']}") from exc
        log.debug("github_contributors_fetched repo=%s count=%s", full_name, len(rows))
        return rows
