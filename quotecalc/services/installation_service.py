# ==============================================================================
# INSTALLATION SERVICE - Schema and Demo Data Setup
# ==============================================================================
# Tests the chosen database, creates the tables, optionally seeds demo
# data and records the installation in the config store
# ==============================================================================

from __future__ import annotations

import logging
from typing import Optional

from quotecalc.core.config_store import ConfigStore
from quotecalc.core.constants import DemoData
from quotecalc.core.exceptions import AppException
from quotecalc.core.settings import DatabaseConfig
from quotecalc.database.factory import create_adapter
from quotecalc.database.repositories.catalog_repository import CatalogRepository
from quotecalc.database.schema import create_table_statements
from quotecalc.database.service import DatabaseService

logger = logging.getLogger(__name__)


class InstallationService:
    """
    First-run setup of a database.

    Every step is idempotent: tables are created with IF NOT EXISTS and
    demo data is skipped when project types already exist.

    Example:
        >>> installer = InstallationService(ConfigStore("config.json"))
        >>> await installer.install(config, app_name="Acme Quotes",
        ...                         include_demo_data=True)
        True
    """

    def __init__(self, config_store: Optional[ConfigStore] = None) -> None:
        self._store = config_store or ConfigStore()

    @property
    def config_store(self) -> ConfigStore:
        return self._store

    async def test_database_connection(self, config: DatabaseConfig) -> bool:
        """
        Check that ``config`` reaches a database. Never raises.
        """
        try:
            service = DatabaseService(create_adapter(config))
        except AppException as e:
            logger.warning(f"Cannot test database connection: {e.message}")
            return False

        try:
            return await service.test_connection()
        finally:
            await service.adapter.disconnect()

    async def create_schema(self, service: DatabaseService) -> None:
        """
        Create all tables for the service's backend, parents first.

        Raises:
            QueryError: If a statement is rejected
        """
        statements = create_table_statements(service.adapter.dialect)
        for statement in statements:
            await service.query(statement)
        logger.info(f"Schema ready ({len(statements)} tables)")

    async def seed_demo_data(self, service: DatabaseService) -> bool:
        """
        Add the demo project types, pages and features.

        Returns:
            False when the catalog already had project types
        """
        catalog = CatalogRepository(service)
        if await catalog.list_project_types():
            logger.info("Catalog already populated, skipping demo data")
            return False

        for project_type in DemoData.PROJECT_TYPES:
            await catalog.create_project_type(**project_type)
        for page in DemoData.PAGES:
            await catalog.create_page(page)
        for feature in DemoData.FEATURES:
            await catalog.create_feature(feature)

        logger.info(
            f"Seeded demo data: {len(DemoData.PROJECT_TYPES)} project types, "
            f"{len(DemoData.PAGES)} pages, {len(DemoData.FEATURES)} features"
        )
        return True

    async def install(
        self,
        config: DatabaseConfig,
        app_name: Optional[str] = None,
        include_demo_data: bool = False,
        service: Optional[DatabaseService] = None,
    ) -> bool:
        """
        Run the full installation.

        Args:
            config: Database to install into
            app_name: Display name stored in the config file
            include_demo_data: Seed the demo catalog
            service: Existing service for ``config``; built when omitted

        Returns:
            True on success; failures are logged and return False
        """
        own_service = service is None
        try:
            if service is None:
                service = DatabaseService(create_adapter(config))

            if not await service.test_connection():
                logger.error("Installation aborted: database connection failed")
                return False

            await self.create_schema(service)
            if include_demo_data:
                await self.seed_demo_data(service)

        except AppException as e:
            logger.error(f"Installation failed: {e.message}")
            return False
        finally:
            if own_service and service is not None:
                await service.adapter.disconnect()

        self._store.update_database_config(config)
        if app_name:
            self._store.update_app_name(app_name)
        self._store.set_installed(True)
        logger.info(f"Installation complete ({config.type} at {config.host})")
        return True

    async def activate(self, config: DatabaseConfig) -> DatabaseService:
        """
        Make ``config`` the process-wide database.

        The previous shared service, if any, is disconnected first. The
        new one connects lazily on first use.
        """
        if DatabaseService.is_initialized():
            await DatabaseService.get_instance().disconnect()
        service = DatabaseService.init_with_adapter(create_adapter(config))
        logger.info(f"Switched to installed database ({config.type} at {config.host})")
        return service
