# ==============================================================================
# CATALOG REPOSITORY TESTS
# ==============================================================================

import pytest

from quotecalc.database.repositories.catalog_repository import CatalogRepository
from quotecalc.schemas.catalog import FixedPricing, HourlyPricing


@pytest.fixture
def catalog(db_service):
    return CatalogRepository(db_service)


class TestProjectTypes:

    @pytest.mark.asyncio
    async def test_get_and_list(self, catalog, catalog_ids):
        project_type = await catalog.get_project_type(catalog_ids["project_type"])
        assert project_type.name == "New Website"
        assert project_type.base_price == 2000.0

        names = [p.name for p in await catalog.list_project_types()]
        assert names == ["New Website", "Redesign"]

    @pytest.mark.asyncio
    async def test_missing(self, catalog):
        assert await catalog.get_project_type(404) is None


class TestFeatures:

    @pytest.mark.asyncio
    async def test_pricing_folded_from_columns(self, catalog, catalog_ids):
        design = await catalog.get_feature(catalog_ids["design"])
        development = await catalog.get_feature(catalog_ids["development"])

        assert isinstance(design.pricing, FixedPricing)
        assert design.pricing.flat_price == 500.0
        assert design.for_all_project_types is True
        assert isinstance(development.pricing, HourlyPricing)
        assert development.pricing.hourly_rate == 100.0
        assert development.supports_quantity is True

    @pytest.mark.asyncio
    async def test_links_loaded(self, catalog, catalog_ids):
        development = await catalog.get_feature(catalog_ids["development"])
        assert development.project_type_ids == [catalog_ids["project_type"]]

    @pytest.mark.asyncio
    async def test_get_features_keeps_request_order(self, catalog, catalog_ids):
        ids = [catalog_ids["development"], 404, catalog_ids["design"], catalog_ids["development"]]
        features = await catalog.get_features(ids)
        assert [f.id for f in features] == [catalog_ids["development"], catalog_ids["design"]]

    @pytest.mark.asyncio
    async def test_get_features_empty(self, catalog):
        assert await catalog.get_features([]) == []

    @pytest.mark.asyncio
    async def test_features_for_project_type(self, catalog, catalog_ids):
        direct_id = await catalog.create_feature({
            "project_type_id": catalog_ids["other_project_type"],
            "name": "Content Migration",
            "pricing_type": "fixed",
            "flat_price": 300.0,
        })

        for_new = {f.id for f in await catalog.get_features_for_project_type(
            catalog_ids["project_type"])}
        for_redesign = {f.id for f in await catalog.get_features_for_project_type(
            catalog_ids["other_project_type"])}

        assert for_new == {catalog_ids["design"], catalog_ids["development"]}
        assert for_redesign == {catalog_ids["design"], direct_id}


class TestPages:

    @pytest.mark.asyncio
    async def test_get_page(self, catalog, catalog_ids):
        page = await catalog.get_page(catalog_ids["page"])
        assert page.price_per_page == 50.0
        assert page.is_active is True
        assert await catalog.get_page(404) is None

    @pytest.mark.asyncio
    async def test_active_pages_and_project_type_filter(self, catalog, catalog_ids):
        hidden_id = await catalog.create_page({
            "name": "Retired Page", "price_per_page": 10.0, "is_active": False,
        })
        scoped_id = await catalog.create_page({
            "name": "Portfolio", "price_per_page": 80.0,
            "project_type_id": catalog_ids["other_project_type"],
        })

        active = [p.id for p in await catalog.get_active_pages()]
        assert hidden_id not in active
        assert catalog_ids["page"] in active

        for_new = [p.id for p in await catalog.get_pages_for_project_type(
            catalog_ids["project_type"])]
        assert for_new == [catalog_ids["page"]]

        for_redesign = [p.id for p in await catalog.get_pages_for_project_type(
            catalog_ids["other_project_type"])]
        assert for_redesign == [catalog_ids["page"], scoped_id]

    @pytest.mark.asyncio
    async def test_get_pages(self, catalog, catalog_ids):
        pages = await catalog.get_pages([catalog_ids["page"], 404])
        assert [p.id for p in pages] == [catalog_ids["page"]]
