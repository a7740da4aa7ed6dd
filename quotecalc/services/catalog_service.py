# ==============================================================================
# CATALOG SERVICE - Calculator Catalog Reads
# ==============================================================================
# Project types, features and pages offered to the calculator
# ==============================================================================

from __future__ import annotations

from typing import List

from quotecalc.core.exceptions import NotFoundError
from quotecalc.database.repositories.catalog_repository import CatalogRepository
from quotecalc.database.service import DatabaseService
from quotecalc.schemas.catalog import Feature, Page, ProjectType


class CatalogService:
    """
    Read-only catalog operations.

    Lookups by id raise ``NotFoundError`` instead of returning ``None``.

    Example:
        >>> catalog = CatalogService(DatabaseService.get_instance())
        >>> features = await catalog.features_for_project_type(1)
    """

    def __init__(self, db: DatabaseService) -> None:
        self._catalog = CatalogRepository(db)

    async def list_project_types(self) -> List[ProjectType]:
        return await self._catalog.list_project_types()

    async def get_project_type(self, project_type_id: int) -> ProjectType:
        project_type = await self._catalog.get_project_type(project_type_id)
        if project_type is None:
            raise NotFoundError(
                f"Project type {project_type_id} not found",
                resource_type="project_type",
                resource_id=project_type_id,
            )
        return project_type

    async def features_for_project_type(self, project_type_id: int) -> List[Feature]:
        """
        Features the calculator offers for a project type.

        Raises:
            NotFoundError: Unknown project type
        """
        await self.get_project_type(project_type_id)
        return await self._catalog.get_features_for_project_type(project_type_id)

    async def pages_for_project_type(self, project_type_id: int) -> List[Page]:
        """
        Active pages for a project type, including pages shared by all types.

        Raises:
            NotFoundError: Unknown project type
        """
        await self.get_project_type(project_type_id)
        return await self._catalog.get_pages_for_project_type(project_type_id)

    async def active_pages(self) -> List[Page]:
        return await self._catalog.get_active_pages()

    async def get_feature(self, feature_id: int) -> Feature:
        feature = await self._catalog.get_feature(feature_id)
        if feature is None:
            raise NotFoundError(
                f"Feature {feature_id} not found",
                resource_type="feature",
                resource_id=feature_id,
            )
        return feature

    async def get_page(self, page_id: int) -> Page:
        page = await self._catalog.get_page(page_id)
        if page is None:
            raise NotFoundError(
                f"Page {page_id} not found",
                resource_type="page",
                resource_id=page_id,
            )
        return page
