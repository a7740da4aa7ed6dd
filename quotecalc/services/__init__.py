# ==============================================================================
# SERVICES PACKAGE
# ==============================================================================

from quotecalc.services.catalog_service import CatalogService
from quotecalc.services.installation_service import InstallationService
from quotecalc.services.quote_service import QuoteService

__all__ = [
    "CatalogService",
    "InstallationService",
    "QuoteService",
]
