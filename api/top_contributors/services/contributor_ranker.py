"""Contributor scoring and filtering for one repository."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence

from top_contributors.models.contributor import RawContributor, ScoredContributor
from top_contributors.models.ranking import RepositoryContributors
from top_contributors.models.repository import RepositoryRef

BOT_MARKER = "[bot]"
DASH_BOT = "-bot"
BOT_DASH = "bot-"


class ContributorSource(Protocol):
    async def list_contributors(self, owner: str, repo: str, per_page: int = ...) -> list[RawContributor]: ...


@dataclass(frozen=True)
class RankingPolicy:
    page_size: int = 30
    min_contributions: int = 50
    min_contributor_score: float = 0.05
    max_contributors: int = 10


def is_bot_login(login: str) -> bool:
    """Heuristic classifier for automated accounts (case-sensitive substring checks).

    Known limitation: human logins such as ``robot-fan`` or ``jane-bot`` match too.
    """
    return BOT_MARKER in login or DASH_BOT in login or BOT_DASH in login


def score_contributors(raw: Sequence[RawContributor]) -> list[ScoredContributor]:
    """Score each contributor as its share of the batch total. Empty or all-zero batch -> []."""
    total = sum(row.contributions for row in raw)
    if total <= 0:
        return []
    return [
        ScoredContributor(
            login=row.login,
            contributions=row.contributions,
            contributor_score=row.contributions / total,
        )
        for row in raw
    ]


def filter_ranked(scored: Sequence[ScoredContributor], policy: RankingPolicy) -> list[ScoredContributor]:
    kept = [
        row
        for row in scored
        if not is_bot_login(row.login)
        and row.contributions > policy.min_contributions
        and row.contributor_score > policy.min_contributor_score
    ]
    return kept[: policy.max_contributors]


class ContributorRanker:
    def __init__(self, source: ContributorSource, policy: RankingPolicy | None = None) -> None:
        self._source = source
        self._policy = policy or RankingPolicy()

    @property
    def policy(self) -> RankingPolicy:
        return self._policy

    async def rank(self, repo: RepositoryRef) -> list[ScoredContributor]:
        """Fetch one batch and return at most ``max_contributors`` qualifying humans, in API order.

        Fetch failures propagate as GitHubFetchError.
        """
        raw = await self._source.list_contributors(repo.owner, repo.name, per_page=self._policy.page_size)
        return filter_ranked(score_contributors(raw), self._policy)

    async def rank_repository(self, repo: RepositoryRef) -> RepositoryContributors:
        return RepositoryContributors(repo=repo, contributors=await self.rank(repo))
