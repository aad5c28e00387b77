"""Health check endpoints."""

from pathlib import Path
from typing import Literal

from fastapi import APIRouter
from pydantic import BaseModel

from app.core.config import get_settings
from app.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: Literal["ok", "degraded", "unhealthy"]
    export_dir: Literal["writable", "unwritable"] | None = None


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic liveness check."""
    logger.debug("health.check_started")
    return HealthResponse(status="ok")


@router.get("/health/ready", response_model=HealthResponse)
async def readiness_check() -> HealthResponse:
    """Readiness check: exports need a writable export directory.

    Downloads still work without it, so an unwritable directory
    only degrades the service.
    """
    logger.debug("health.readiness_check_started")
    export_dir = Path(get_settings().export_dir)

    try:
        export_dir.mkdir(parents=True, exist_ok=True)
        probe = export_dir / ".ready"
        probe.write_bytes(b"")
        probe.unlink()
    except OSError as e:
        logger.warning(
            "health.export_dir_unwritable",
            export_dir=str(export_dir),
            error=str(e),
            error_type=type(e).__name__,
        )
        return HealthResponse(status="degraded", export_dir="unwritable")

    return HealthResponse(status="ok", export_dir="writable")
