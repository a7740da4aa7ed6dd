# ==============================================================================
# CONFIG STORE - Installation State on Disk
# ==============================================================================
# JSON file holding the database config chosen at install time
# ==============================================================================

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, Field, ValidationError

from quotecalc.core.settings import DatabaseConfig, settings
from quotecalc.utils.helpers import utc_now_iso

logger = logging.getLogger(__name__)


class AppConfig(BaseModel):
    """Contents of the installer's config file."""

    database: DatabaseConfig = Field(
        default_factory=lambda: DatabaseConfig(
            type="postgres",
            host="localhost",
            port=5432,
            database="web_design_calculator",
            user="postgres",
            password="",
            ssl=False,
        )
    )
    app_name: str = "Web Design Price Calculator"
    is_installed: bool = False
    install_date: Optional[str] = None
    version: str = "1.0.0"


class ConfigStore:
    """
    Reads and writes the installer config file.

    A missing file is created with defaults; an unreadable one is
    logged and replaced in memory by the defaults so the application
    can still start and offer installation.

    Example:
        >>> store = ConfigStore("config.json")
        >>> store.is_installed()
        False
        >>> store.update_database_config(config)
        >>> store.set_installed(True)
    """

    def __init__(self, config_path: Optional[Union[str, Path]] = None) -> None:
        self._path = Path(config_path or settings.CONFIG_PATH)
        self._config = self._load()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def config(self) -> AppConfig:
        return self._config

    def is_installed(self) -> bool:
        return self._config.is_installed

    def get_database_config(self) -> DatabaseConfig:
        return self._config.database

    def update_database_config(self, db_config: DatabaseConfig) -> None:
        self._config.database = db_config
        self._save()

    def set_installed(self, installed: bool) -> None:
        self._config.is_installed = installed
        if installed:
            self._config.install_date = utc_now_iso()
        self._save()

    def update_app_name(self, app_name: str) -> None:
        self._config.app_name = app_name
        self._save()

    def _load(self) -> AppConfig:
        if not self._path.exists():
            config = AppConfig()
            self._config = config
            self._save()
            return config

        try:
            return AppConfig.model_validate_json(
                self._path.read_text(encoding="utf-8")
            )
        except (OSError, ValidationError) as e:
            logger.error(f"Error loading configuration from {self._path}: {e}")
            return AppConfig()

    def _save(self) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(
                self._config.model_dump_json(indent=2),
                encoding="utf-8",
            )
        except OSError as e:
            logger.error(f"Error saving configuration to {self._path}: {e}")
