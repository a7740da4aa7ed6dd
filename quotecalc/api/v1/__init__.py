# ==============================================================================
# API V1 PACKAGE
# ==============================================================================

from quotecalc.api.v1.catalog import router as catalog_router
from quotecalc.api.v1.estimates import router as estimates_router
from quotecalc.api.v1.install import router as install_router
from quotecalc.api.v1.quotes import router as quotes_router

__all__ = [
    "catalog_router",
    "estimates_router",
    "install_router",
    "quotes_router",
]
