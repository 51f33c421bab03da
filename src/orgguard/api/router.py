"""Root API router.

Health endpoints sit at the root; every feature module's router is
mounted under ``/api/v1``.
"""

from fastapi import APIRouter

from orgguard.api import health
from orgguard.modules import discover_modules


API_V1_PREFIX = "/api/v1"


def build_api_router() -> APIRouter:
    """Assemble the health router and the versioned module routers."""
    v1_router = APIRouter(prefix=API_V1_PREFIX)
    for module_router in discover_modules():
        v1_router.include_router(module_router)

    api_router = APIRouter()
    api_router.include_router(health.router)
    api_router.include_router(v1_router)
    return api_router


api_router = build_api_router()
