from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request, Response

from top_contributors import __version__
from top_contributors.config import Settings, load_env_file
from top_contributors.routers import contributors, health
from top_contributors.services.contributor_ranker import RankingPolicy
from top_contributors.services.github_client import GitHubClient

app = FastAPI(title="Framework Top Contributors", version=__version__)

logger = logging.getLogger("top_contributors")
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    logger.addHandler(handler)
logger.propagate = False
logger.setLevel(logging.INFO)
request_log = logging.getLogger("top_contributors.requests")


def build_github_client(settings: Settings) -> GitHubClient:
    return GitHubClient(
        token=settings.github_token,
        base_url=settings.github_api_url,
        timeout=settings.github_timeout_seconds,
    )


def configure(target: FastAPI, settings: Settings) -> None:
    """Wire settings and collaborators onto app.state."""
    target.state.settings = settings
    target.state.github_client = build_github_client(settings)
    target.state.ranking_policy = RankingPolicy()
    if not settings.github_token:
        logger.warning("github_token_missing env=GITHUB_API_TOKEN requests will be unauthenticated")


load_env_file()
configure(app, Settings.from_env())


def _correlation_id(request: Request) -> str:
    for key in ("x-request-id", "x-amzn-trace-id", "cf-ray"):
        value = request.headers.get(key)
        if value:
            return value
    return "none"


def _apply_runtime_header(response: Response, elapsed_ms: float) -> None:
    response.headers["x-top-contributors-runtime-ms"] = f"{max(0.1, elapsed_ms):.4f}"


@app.middleware("http")
async def log_request_timing(request: Request, call_next):
    settings: Settings = request.app.state.settings
    start = time.perf_counter()
    status_code: int | None = None
    exc_name: str | None = None
    response = None
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    except Exception as exc:
        status_code = 500
        exc_name = exc.__class__.__name__
        raise
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        if response is not None:
            _apply_runtime_header(response, elapsed_ms)
        if elapsed_ms >= settings.slow_request_ms or settings.log_all_requests or (status_code or 500) >= 500:
            request_log.warning(
                "slow_request method=%s path=%s status=%s elapsed_ms=%.2f correlation=%s exception=%s",
                request.method,
                request.url.path,
                status_code,
                elapsed_ms,
                _correlation_id(request),
                exc_name or "none",
            )


app.include_router(contributors.page_router, tags=["page"])
app.include_router(contributors.router, prefix="/api", tags=["contributors"])
app.include_router(health.router, prefix="/api", tags=["health"])
