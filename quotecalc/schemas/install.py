# ==============================================================================
# INSTALL SCHEMAS - First-Run Setup
# ==============================================================================

from __future__ import annotations

from typing import Optional

from pydantic import Field

from quotecalc.core.settings import DatabaseConfig
from quotecalc.schemas.base import BaseSchema


class InstallStatus(BaseSchema):
    """What the config file says about the installation."""

    is_installed: bool
    app_name: str
    version: str
    install_date: Optional[str] = None


class InstallRequest(BaseSchema):
    """Database to install into plus display options."""

    database: DatabaseConfig
    app_name: Optional[str] = Field(None, min_length=1, max_length=255)
    include_demo_data: bool = Field(
        default=True,
        description="Seed demo project types, pages and features"
    )
