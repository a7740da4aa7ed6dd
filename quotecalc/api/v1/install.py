# ==============================================================================
# INSTALL ENDPOINTS - First-Run Setup Routes
# ==============================================================================
# Install status, connection checks and installation into a chosen database
# ==============================================================================

from __future__ import annotations

from fastapi import APIRouter

from quotecalc.api.dependencies import InstallationServiceDep
from quotecalc.core.exceptions import (
    AlreadyExistsError,
    DatabaseConnectionError,
    InstallationFailedError,
)
from quotecalc.core.settings import DatabaseConfig
from quotecalc.schemas.base import APIResponse
from quotecalc.schemas.install import InstallRequest, InstallStatus
from quotecalc.services.installation_service import InstallationService

router = APIRouter(prefix="/install", tags=["Install"])


def _status(installer: InstallationService) -> InstallStatus:
    config = installer.config_store.config
    return InstallStatus(
        is_installed=config.is_installed,
        app_name=config.app_name,
        version=config.version,
        install_date=config.install_date,
    )


@router.get(
    "/status",
    response_model=APIResponse[InstallStatus],
    summary="Installation status",
)
async def get_status(
    installer: InstallationServiceDep,
) -> APIResponse[InstallStatus]:
    return APIResponse.ok(data=_status(installer))


@router.post(
    "/test-connection",
    response_model=APIResponse[None],
    summary="Test database connection",
    description="Check that the given parameters reach a database. Nothing is written.",
)
async def test_connection(
    config: DatabaseConfig,
    installer: InstallationServiceDep,
) -> APIResponse[None]:
    """Test a candidate database config."""
    if not await installer.test_database_connection(config):
        raise DatabaseConnectionError(
            f"Could not connect to {config.type} database at {config.host}:{config.port}"
        )
    return APIResponse.ok(data=None, message="Connection successful")


@router.post(
    "",
    response_model=APIResponse[InstallStatus],
    summary="Install",
    description=(
        "Create the tables, optionally seed demo data, record the config "
        "and switch the running application to the new database."
    ),
)
async def install(
    request: InstallRequest,
    installer: InstallationServiceDep,
) -> APIResponse[InstallStatus]:
    """
    Install into the requested database.

    Raises:
        AlreadyExistsError: The application is already installed
        InstallationFailedError: The database could not be prepared
    """
    if installer.config_store.is_installed():
        raise AlreadyExistsError(
            "Application is already installed", resource_type="installation"
        )

    installed = await installer.install(
        request.database,
        app_name=request.app_name,
        include_demo_data=request.include_demo_data,
    )
    if not installed:
        raise InstallationFailedError(
            f"Could not install into {request.database.type} database "
            f"at {request.database.host}"
        )

    await installer.activate(request.database)
    return APIResponse.ok(data=_status(installer), message="Installation complete")
