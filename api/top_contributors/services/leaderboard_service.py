"""Concurrent fan-out over the configured repositories."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Optional, Sequence

from top_contributors.models.ranking import RepositoryRanking
from top_contributors.models.repository import RepositoryRef
from top_contributors.services.contributor_ranker import ContributorRanker, RankingPolicy
from top_contributors.services.github_client import GitHubFetchError

log = logging.getLogger(__name__)


class LeaderboardService:
    """Ranks every configured repository concurrently; output follows configuration order."""

    def __init__(self, ranker: ContributorRanker, repositories: Sequence[RepositoryRef]) -> None:
        self._ranker = ranker
        self._repositories = tuple(repositories)

    @property
    def policy(self) -> RankingPolicy:
        return self._ranker.policy

    async def _rank_one(self, repo: RepositoryRef) -> RepositoryRanking:
        try:
            result = await self._ranker.rank_repository(repo)
        except GitHubFetchError as exc:
            log.warning(
                "contributor_fetch_failed repo=%s status=%s error=%s",
                repo.full_name,
                exc.status_code if exc.status_code is not None else "none",
                exc.message,
            )
            return RepositoryRanking.failure(repo, exc.message, status_code=exc.status_code)
        return RepositoryRanking.success(result)

    async def collect(self) -> list[RepositoryRanking]:
        started = time.perf_counter()
        slots: list[Optional[RepositoryRanking]] = [None] * len(self._repositories)

        async def fill(index: int, repo: RepositoryRef) -> None:
            slots[index] = await self._rank_one(repo)

        tasks = [asyncio.ensure_future(fill(i, repo)) for i, repo in enumerate(self._repositories)]
        try:
            await asyncio.gather(*tasks)
        except BaseException:
            # No fetch outlives collect(): cancel the rest and wait for them to unwind.
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        rankings = [slot for slot in slots if slot is not None]
        failed = sum(1 for row in rankings if not row.ok)
        log.info(
            "leaderboard_collected repositories=%s failed=%s elapsed_ms=%.2f",
            len(rankings),
            failed,
            (time.perf_counter() - started) * 1000.0,
        )
        return rankings
