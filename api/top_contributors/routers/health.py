"""Health, readiness and version endpoints."""

from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, ConfigDict, Field

from top_contributors import __version__

router = APIRouter()

SERVICE_STARTED_AT = datetime.now(timezone.utc)


def _iso_utc(ts: datetime) -> str:
    return ts.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _uptime_seconds(now: datetime) -> int:
    return max(0, int((now - SERVICE_STARTED_AT).total_seconds()))


class HealthResponse(BaseModel):
    """GET /api/health response."""

    model_config = ConfigDict(extra="forbid")
    status: Annotated[str, Field(description="Always 'ok'")]
    version: Annotated[str, Field(description="Semver MAJOR.MINOR.PATCH")]
    timestamp: Annotated[str, Field(description="ISO8601 UTC")]
    started_at: Annotated[str, Field(description="ISO8601 UTC when service process started")]
    uptime_seconds: Annotated[int, Field(description="Seconds service has been up")]


class ReadyResponse(BaseModel):
    """GET /api/ready response."""

    model_config = ConfigDict(extra="forbid")
    status: Annotated[str, Field(description="Always 'ready'")]
    repositories: Annotated[int, Field(description="Number of configured repositories")]
    authenticated: Annotated[bool, Field(description="Whether a GitHub token is configured")]


@router.get("/version")
async def version():
    """Return service version."""
    return {"version": __version__}


@router.get("/ready", response_model=ReadyResponse)
async def ready(request: Request):
    """Readiness probe. 503 until the GitHub client is wired."""
    client = getattr(request.app.state, "github_client", None)
    if client is None:
        raise HTTPException(status_code=503, detail="not ready")
    settings = request.app.state.settings
    return ReadyResponse(
        status="ready",
        repositories=len(settings.repositories),
        authenticated=client.authenticated,
    )


@router.get("/health", response_model=HealthResponse)
async def health():
    """Return service health status."""
    now = datetime.now(timezone.utc)
    return HealthResponse(
        status="ok",
        version=__version__,
        timestamp=_iso_utc(now),
        started_at=_iso_utc(SERVICE_STARTED_AT),
        uptime_seconds=_uptime_seconds(now),
    )
