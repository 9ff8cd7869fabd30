"""Pydantic models."""

from top_contributors.models.contributor import RawContributor, ScoredContributor
from top_contributors.models.error import ErrorDetail
from top_contributors.models.ranking import (
    LeaderboardResponse,
    RepositoryContributors,
    RepositoryRanking,
)
from top_contributors.models.repository import RepositoryRef

__all__ = [
    "ErrorDetail",
    "LeaderboardResponse",
    "RawContributor",
    "RepositoryContributors",
    "RepositoryRanking",
    "RepositoryRef",
    "ScoredContributor",
]
