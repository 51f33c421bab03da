"""Liveness, readiness and metadata endpoints.

Mounted at the root, outside ``/api/v1``, and never require an identity.
"""

import time
from typing import Any

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from orgguard import __version__
from orgguard.api.dependencies import DBSession
from orgguard.config import settings


router = APIRouter(tags=["health"])


class LivenessResponse(BaseModel):
    status: str


class ReadinessResponse(BaseModel):
    status: str
    checks: dict[str, str]
    database_ms: float | None = None


@router.get("/health/live", response_model=LivenessResponse, summary="Liveness probe")
async def liveness() -> LivenessResponse:
    return LivenessResponse(status="alive")


@router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
    description="Ready once the membership database answers; 503 otherwise.",
)
async def readiness(db: DBSession) -> JSONResponse:
    started = time.perf_counter()
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        body = ReadinessResponse(status="degraded", checks={"database": str(exc)})
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=body.model_dump(exclude_none=True),
        )

    body = ReadinessResponse(
        status="ready",
        checks={"database": "ok"},
        database_ms=round((time.perf_counter() - started) * 1000, 2),
    )
    return JSONResponse(status_code=status.HTTP_200_OK, content=body.model_dump())


@router.get("/info", summary="Application info")
async def info() -> dict[str, Any]:
    return {
        "app": settings.app_name,
        "version": __version__,
        "environment": settings.environment,
        "debug": settings.debug,
        "identity_header": settings.identity_header,
    }
