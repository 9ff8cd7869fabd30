"""Error body returned by the contributors and readiness routes."""

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """``{"detail": "..."}`` for a 502 when GitHub could not be read, or a 503 when no client is configured.

    Request validation errors keep FastAPI's own 422 body.
    """

    detail: str
