"""Contributor leaderboard routes: the HTML page and its JSON equivalents."""

from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from top_contributors.models.error import ErrorDetail
from top_contributors.models.ranking import LeaderboardResponse, RepositoryContributors
from top_contributors.models.repository import RepositoryRef
from top_contributors.services.contributor_ranker import ContributorRanker
from top_contributors.services.github_client import GitHubFetchError
from top_contributors.services.leaderboard_service import LeaderboardService

router = APIRouter()
page_router = APIRouter()

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parents[1] / "templates"))


def get_ranker(request: Request) -> ContributorRanker:
    client = getattr(request.app.state, "github_client", None)
    if client is None:
        raise HTTPException(status_code=503, detail="GitHub client not configured")
    return ContributorRanker(client, getattr(request.app.state, "ranking_policy", None))


def get_leaderboard(request: Request, ranker: ContributorRanker = Depends(get_ranker)) -> LeaderboardService:
    settings = request.app.state.settings
    return LeaderboardService(ranker, settings.repositories)


@page_router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def contributors_page(request: Request, leaderboard: LeaderboardService = Depends(get_leaderboard)):
    """Render the Framework Top Contributors page."""
    rankings = await leaderboard.collect()
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "title": "Framework Top Contributors",
            "rankings": rankings,
            "policy": leaderboard.policy,
        },
    )


@router.get("/contributors", response_model=LeaderboardResponse)
async def list_contributors(leaderboard: LeaderboardService = Depends(get_leaderboard)) -> LeaderboardResponse:
    """Ranked contributors for every configured repository, in configuration order."""
    return LeaderboardResponse(repositories=await leaderboard.collect())


@router.get(
    "/contributors/{owner}/{repo}",
    response_model=RepositoryContributors,
    responses={502: {"model": ErrorDetail}},
)
async def get_repository_contributors(
    owner: str, repo: str, ranker: ContributorRanker = Depends(get_ranker)
) -> RepositoryContributors:
    """Rank a single repository, configured or not."""
    try:
        return await ranker.rank_repository(RepositoryRef(owner=owner, name=repo))
    except GitHubFetchError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
