"""Pydantic response schemas for the upload service.

The successful ``/watermark`` response is the raw PNG, so only the
health check and error bodies are modelled here.
"""

from __future__ import annotations

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Returned by ``GET /health``.

    Attributes:
        status: Always ``"ok"`` while the service is up.
        service: Service name.
        version: Package version.
        target_width: Width every composed image is fitted to.
        target_height: Height every composed image is fitted to.
    """

    status: str = "ok"
    service: str = "tilemark"
    version: str
    target_width: int
    target_height: int


class ErrorResponse(BaseModel):
    """Body of a failed request, matching FastAPI's ``HTTPException`` shape."""

    detail: str
