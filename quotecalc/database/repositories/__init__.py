# ==============================================================================
# REPOSITORIES PACKAGE
# ==============================================================================

from quotecalc.database.repositories.base_repository import BaseRepository
from quotecalc.database.repositories.catalog_repository import CatalogRepository
from quotecalc.database.repositories.quote_repository import QuoteRepository

__all__ = [
    "BaseRepository",
    "CatalogRepository",
    "QuoteRepository",
]
