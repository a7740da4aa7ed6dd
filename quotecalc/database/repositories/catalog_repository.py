# ==============================================================================
# CATALOG REPOSITORY - Project Types, Features, Pages
# ==============================================================================
# Reads catalog rows into the pricing schemas; inserts are used by the
# installer's demo data
# ==============================================================================

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from quotecalc.core.constants import DatabaseConstants
from quotecalc.database.repositories.base_repository import (
    BaseRepository,
    placeholders,
)
from quotecalc.schemas.catalog import Feature, Page, ProjectType
from quotecalc.utils.helpers import dedupe

logger = logging.getLogger(__name__)

PROJECT_TYPES = DatabaseConstants.PROJECT_TYPES_TABLE
FEATURES = DatabaseConstants.FEATURES_TABLE
FEATURE_PROJECT_TYPES = DatabaseConstants.FEATURE_PROJECT_TYPES_TABLE
PAGES = DatabaseConstants.PAGES_TABLE

PROJECT_TYPE_COLUMNS = ("name", "base_price", "description")
FEATURE_COLUMNS = (
    "project_type_id",
    "name",
    "description",
    "category",
    "pricing_type",
    "flat_price",
    "hourly_rate",
    "estimated_hours",
    "supports_quantity",
    "for_all_project_types",
)
PAGE_COLUMNS = (
    "project_type_id",
    "name",
    "description",
    "price_per_page",
    "default_quantity",
    "is_active",
    "supports_quantity",
)


class CatalogRepository(BaseRepository):
    """
    Data access for the administrator-maintained catalog.

    Features are returned with ``project_type_ids`` filled from the
    ``feature_project_types`` link table.

    Example:
        >>> catalog = CatalogRepository(service)
        >>> project_type = await catalog.get_project_type(1)
        >>> features = await catalog.get_features([3, 5])
    """

    # ==========================================================================
    # PROJECT TYPES
    # ==========================================================================

    async def get_project_type(self, project_type_id: int) -> Optional[ProjectType]:
        row = await self._db.query_one(
            f"SELECT * FROM {PROJECT_TYPES} WHERE id = $1", [project_type_id]
        )
        return ProjectType.model_validate(row) if row else None

    async def list_project_types(self) -> List[ProjectType]:
        rows = await self._db.query(f"SELECT * FROM {PROJECT_TYPES} ORDER BY id")
        return [ProjectType.model_validate(r) for r in rows]

    async def create_project_type(
        self,
        name: str,
        base_price: float,
        description: Optional[str] = None,
    ) -> int:
        return await self._insert_row(
            PROJECT_TYPES,
            {"name": name, "base_price": base_price, "description": description},
            PROJECT_TYPE_COLUMNS,
        )

    # ==========================================================================
    # FEATURES
    # ==========================================================================

    async def get_feature(self, feature_id: int) -> Optional[Feature]:
        features = await self.get_features([feature_id])
        return features[0] if features else None

    async def get_features(self, feature_ids: Iterable[int]) -> List[Feature]:
        """
        Load features by id.

        Returns:
            Features in the order of the first occurrence of each id;
            ids with no row are left out
        """
        ids = dedupe(feature_ids)
        if not ids:
            return []

        rows = await self._db.query(
            f"SELECT * FROM {FEATURES} WHERE id IN ({placeholders(len(ids))})",
            ids,
        )
        return self._order_by_ids(await self._with_links(rows), ids)

    async def get_features_for_project_type(
        self,
        project_type_id: int,
    ) -> List[Feature]:
        """
        Features offered for a project type.

        A feature applies through its own ``project_type_id``, a row in
        ``feature_project_types``, or ``for_all_project_types``.
        """
        rows = await self._db.query(
            f"SELECT DISTINCT f.* FROM {FEATURES} f "
            f"LEFT JOIN {FEATURE_PROJECT_TYPES} fpt ON fpt.feature_id = f.id "
            f"WHERE f.project_type_id = $1 "
            f"OR fpt.project_type_id = $1 "
            f"OR f.for_all_project_types = $2 "
            f"ORDER BY f.id",
            [project_type_id, True],
        )
        return await self._with_links(rows)

    async def create_feature(self, data: Mapping[str, Any]) -> int:
        return await self._insert_row(FEATURES, data, FEATURE_COLUMNS)

    async def link_feature_to_project_type(
        self,
        feature_id: int,
        project_type_id: int,
    ) -> int:
        return await self._insert_row(
            FEATURE_PROJECT_TYPES,
            {"feature_id": feature_id, "project_type_id": project_type_id},
            ("feature_id", "project_type_id"),
        )

    async def _with_links(self, rows: List[Dict[str, Any]]) -> List[Feature]:
        if not rows:
            return []

        ids = [row["id"] for row in rows]
        links = await self._db.query(
            f"SELECT feature_id, project_type_id FROM {FEATURE_PROJECT_TYPES} "
            f"WHERE feature_id IN ({placeholders(len(ids))}) "
            f"ORDER BY project_type_id",
            ids,
        )
        linked: Dict[int, List[int]] = {}
        for link in links:
            linked.setdefault(link["feature_id"], []).append(link["project_type_id"])

        return [
            Feature.model_validate({**row, "project_type_ids": linked.get(row["id"], [])})
            for row in rows
        ]

    # ==========================================================================
    # PAGES
    # ==========================================================================

    async def get_page(self, page_id: int) -> Optional[Page]:
        row = await self._db.query_one(
            f"SELECT * FROM {PAGES} WHERE id = $1", [page_id]
        )
        return Page.model_validate(row) if row else None

    async def get_pages(self, page_ids: Iterable[int]) -> List[Page]:
        """Load pages by id, in the order of the first occurrence of each id."""
        ids = dedupe(page_ids)
        if not ids:
            return []

        rows = await self._db.query(
            f"SELECT * FROM {PAGES} WHERE id IN ({placeholders(len(ids))})",
            ids,
        )
        return self._order_by_ids([Page.model_validate(r) for r in rows], ids)

    async def get_active_pages(self) -> List[Page]:
        rows = await self._db.query(
            f"SELECT * FROM {PAGES} WHERE is_active = $1 ORDER BY id", [True]
        )
        return [Page.model_validate(r) for r in rows]

    async def get_pages_for_project_type(self, project_type_id: int) -> List[Page]:
        """Active pages that belong to the project type or to none."""
        rows = await self._db.query(
            f"SELECT * FROM {PAGES} WHERE is_active = $1 "
            f"AND (project_type_id = $2 OR project_type_id IS NULL) "
            f"ORDER BY id",
            [True, project_type_id],
        )
        return [Page.model_validate(r) for r in rows]

    async def create_page(self, data: Mapping[str, Any]) -> int:
        return await self._insert_row(PAGES, data, PAGE_COLUMNS)

    # ==========================================================================
    # HELPERS
    # ==========================================================================

    @staticmethod
    def _order_by_ids(items: List[Any], ids: List[int]) -> List[Any]:
        by_id = {item.id: item for item in items}
        return [by_id[i] for i in ids if i in by_id]
