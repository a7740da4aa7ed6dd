# ==============================================================================
# MAIN API ROUTER - Route Aggregation
# ==============================================================================

from __future__ import annotations

from fastapi import APIRouter

from quotecalc.api.v1 import (
    catalog_router,
    estimates_router,
    install_router,
    quotes_router,
)
from quotecalc.core.settings import settings

api_router = APIRouter()

api_router.include_router(catalog_router, prefix=settings.API_V1_PREFIX)
api_router.include_router(estimates_router, prefix=settings.API_V1_PREFIX)
api_router.include_router(quotes_router, prefix=settings.API_V1_PREFIX)
api_router.include_router(install_router, prefix=settings.API_V1_PREFIX)
