# ==============================================================================
# API DEPENDENCIES - Dependency Injection
# ==============================================================================
# FastAPI dependencies for database and service access
# ==============================================================================

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from quotecalc.database.service import DatabaseService
from quotecalc.services.catalog_service import CatalogService
from quotecalc.services.installation_service import InstallationService
from quotecalc.services.quote_service import QuoteService


# ==============================================================================
# DATABASE DEPENDENCIES
# ==============================================================================

async def get_database_service() -> DatabaseService:
    """
    Get database service dependency.

    Returns the process-wide service configured at startup.
    """
    return DatabaseService.get_instance()


DatabaseDep = Annotated[DatabaseService, Depends(get_database_service)]


# ==============================================================================
# SERVICE DEPENDENCIES
# ==============================================================================

async def get_quote_service(db: DatabaseDep) -> QuoteService:
    """Get quote service instance."""
    return QuoteService(db)


async def get_catalog_service(db: DatabaseDep) -> CatalogService:
    """Get catalog service instance."""
    return CatalogService(db)


async def get_installation_service() -> InstallationService:
    """
    Get installation service instance.

    Reads the config file at ``settings.CONFIG_PATH`` on every request so
    the install state is never stale.
    """
    return InstallationService()


QuoteServiceDep = Annotated[QuoteService, Depends(get_quote_service)]
CatalogServiceDep = Annotated[CatalogService, Depends(get_catalog_service)]
InstallationServiceDep = Annotated[InstallationService, Depends(get_installation_service)]
