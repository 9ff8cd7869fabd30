"""Per-repository ranking results and the aggregate leaderboard."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel, Field

from top_contributors.models.contributor import ScoredContributor
from top_contributors.models.repository import RepositoryRef


class RepositoryContributors(BaseModel):
    """Successful ranking for one repository."""

    repo: RepositoryRef
    contributors: list[ScoredContributor] = Field(default_factory=list)


class RepositoryRanking(BaseModel):
    """Outcome of ranking one repository: ``ok`` with contributors or ``error`` with a cause.

    An ``ok`` ranking may legitimately hold zero contributors; that is distinct
    from an ``error`` ranking, whose fetch never produced a batch.
    """

    status: Literal["ok", "error"]
    repo: RepositoryRef
    contributors: list[ScoredContributor] = Field(default_factory=list)
    error: Optional[str] = None
    status_code: Optional[int] = None

    @classmethod
    def success(cls, result: RepositoryContributors) -> RepositoryRanking:
        return cls(status="ok", repo=result.repo, contributors=list(result.contributors))

    @classmethod
    def failure(cls, repo: RepositoryRef, error: str, status_code: int | None = None) -> RepositoryRanking:
        return cls(status="error", repo=repo, error=error, status_code=status_code)

    @property
    def ok(self) -> bool:
        return self.status == "ok"


class LeaderboardResponse(BaseModel):
    """GET /api/contributors response."""

    repositories: list[RepositoryRanking]
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
