#!/usr/bin/env python3
"""Print the ranked top contributors for the configured repositories.

Usage:
  python scripts/print_top_contributors.py [--repo owner/name ...] [-v]

Notes:
- Reads GITHUB_API_TOKEN / TOP_CONTRIBUTORS_REPOS from the environment or api/.env
- --repo (repeatable) replaces the configured repository list
- Exits 1 when any repository could not be fetched
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from dataclasses import replace
from typing import Optional, Sequence, TextIO

_api_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _api_dir not in sys.path:
    sys.path.insert(0, _api_dir)

from top_contributors.config import Settings, load_env_file
from top_contributors.models.ranking import RepositoryRanking
from top_contributors.models.repository import RepositoryRef
from top_contributors.services.contributor_ranker import ContributorRanker, ContributorSource
from top_contributors.services.github_client import GitHubClient
from top_contributors.services.leaderboard_service import LeaderboardService

log = logging.getLogger(__name__)


def format_ranking(ranking: RepositoryRanking) -> list[str]:
    lines = [ranking.repo.full_name]
    if not ranking.ok:
        lines.append(f"  error: {ranking.error}")
    elif not ranking.contributors:
        lines.append("  (no contributors above the thresholds)")
    else:
        for index, contributor in enumerate(ranking.contributors, start=1):
            lines.append(
                f"  {index}. {contributor.login}: {contributor.contributions} contributions ({contributor.percent}%)"
            )
    return lines


def run(
    argv: Optional[Sequence[str]] = None,
    source: Optional[ContributorSource] = None,
    out: TextIO = sys.stdout,
) -> int:
    ap = argparse.ArgumentParser(description="Print top contributors per repository")
    ap.add_argument(
        "--repo",
        action="append",
        default=None,
        help="Repository as owner/name; repeat for several. Default: TOP_CONTRIBUTORS_REPOS or the framework list.",
    )
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    settings = Settings.from_env()
    if args.repo:
        try:
            settings = replace(settings, repositories=tuple(RepositoryRef.parse(value) for value in args.repo))
        except ValueError as exc:
            ap.error(str(exc))

    if source is None:
        source = GitHubClient(
            token=settings.github_token,
            base_url=settings.github_api_url,
            timeout=settings.github_timeout_seconds,
        )
    leaderboard = LeaderboardService(ContributorRanker(source), settings.repositories)
    rankings = asyncio.run(leaderboard.collect())

    for ranking in rankings:
        for line in format_ranking(ranking):
            print(line, file=out)

    failed = [ranking for ranking in rankings if not ranking.ok]
    if failed:
        log.warning("Top contributors: %d/%d repositories failed", len(failed), len(rankings))
        return 1
    return 0


def main() -> None:
    load_env_file()
    sys.exit(run())


if __name__ == "__main__":
    main()
