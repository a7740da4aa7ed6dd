# ==============================================================================
# CATALOG ENDPOINTS - Calculator Catalog Routes
# ==============================================================================
# Read-only access to project types, features and pages
# ==============================================================================

from __future__ import annotations

from typing import List

from fastapi import APIRouter

from quotecalc.api.dependencies import CatalogServiceDep
from quotecalc.schemas.base import APIResponse
from quotecalc.schemas.catalog import Feature, Page, ProjectType

router = APIRouter(tags=["Catalog"])


# ==============================================================================
# PROJECT TYPES
# ==============================================================================

@router.get(
    "/project-types",
    response_model=APIResponse[List[ProjectType]],
    summary="List project types",
)
async def list_project_types(
    service: CatalogServiceDep,
) -> APIResponse[List[ProjectType]]:
    project_types = await service.list_project_types()
    return APIResponse.ok(data=project_types)


@router.get(
    "/project-types/{project_type_id}",
    response_model=APIResponse[ProjectType],
    summary="Get project type",
)
async def get_project_type(
    project_type_id: int,
    service: CatalogServiceDep,
) -> APIResponse[ProjectType]:
    project_type = await service.get_project_type(project_type_id)
    return APIResponse.ok(data=project_type)


@router.get(
    "/project-types/{project_type_id}/features",
    response_model=APIResponse[List[Feature]],
    summary="Features for a project type",
    description="Features linked to the project type plus those offered for all types.",
)
async def list_project_type_features(
    project_type_id: int,
    service: CatalogServiceDep,
) -> APIResponse[List[Feature]]:
    """List the features a project type can select."""
    features = await service.features_for_project_type(project_type_id)
    return APIResponse.ok(data=features)


@router.get(
    "/project-types/{project_type_id}/pages",
    response_model=APIResponse[List[Page]],
    summary="Pages for a project type",
    description="Active pages linked to the project type plus those offered for all types.",
)
async def list_project_type_pages(
    project_type_id: int,
    service: CatalogServiceDep,
) -> APIResponse[List[Page]]:
    """List the pages a project type can select."""
    pages = await service.pages_for_project_type(project_type_id)
    return APIResponse.ok(data=pages)


# ==============================================================================
# FEATURES AND PAGES
# ==============================================================================

@router.get(
    "/features/{feature_id}",
    response_model=APIResponse[Feature],
    summary="Get feature",
)
async def get_feature(
    feature_id: int,
    service: CatalogServiceDep,
) -> APIResponse[Feature]:
    feature = await service.get_feature(feature_id)
    return APIResponse.ok(data=feature)


# Declared before /pages/{page_id} so "active" is not parsed as an id
@router.get(
    "/pages/active",
    response_model=APIResponse[List[Page]],
    summary="List active pages",
)
async def list_active_pages(
    service: CatalogServiceDep,
) -> APIResponse[List[Page]]:
    pages = await service.active_pages()
    return APIResponse.ok(data=pages)


@router.get(
    "/pages/{page_id}",
    response_model=APIResponse[Page],
    summary="Get page",
)
async def get_page(
    page_id: int,
    service: CatalogServiceDep,
) -> APIResponse[Page]:
    page = await service.get_page(page_id)
    return APIResponse.ok(data=page)
