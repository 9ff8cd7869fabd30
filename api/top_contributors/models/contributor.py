"""Contributor models: raw API rows and scored ranking entries."""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field

GITHUB_PROFILE_BASE = "https://github.com"


class RawContributor(BaseModel):
    """One row of GET /repos/{owner}/{repo}/contributors. Extra API fields are ignored."""

    model_config = ConfigDict(extra="ignore")

    login: str
    contributions: int = Field(..., ge=0)


class ScoredContributor(BaseModel):
    """Contributor with its share of the fetched batch's contributions."""

    login: str
    contributions: int
    contributor_score: float

    @property
    def percent(self) -> int:
        # Half-up, not banker's rounding: 0.125 -> 13.
        return int(math.floor(self.contributor_score * 100 + 0.5))

    @property
    def profile_url(self) -> str:
        return f"{GITHUB_PROFILE_BASE}/{self.login}"
