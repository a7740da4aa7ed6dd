# ==============================================================================
# SETTINGS CONFIGURATION - Environment Management
# ==============================================================================
# Pydantic Settings for type-safe environment variable management
# Database selection follows the DB_* variables read by the installer
# ==============================================================================

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseType(str, Enum):
    """
    Supported relational backends.

    The set is closed: the adapter factory matches on these members and
    any other value is rejected before an adapter is built.

    Attributes:
        POSTGRES: PostgreSQL through asyncpg
        MYSQL: MySQL through mysql-connector prepared cursors
    """
    POSTGRES = "postgres"
    MYSQL = "mysql"


class Environment(str, Enum):
    """Application environment types."""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class DatabaseConfig(BaseModel):
    """
    Connection parameters for one relational backend.

    ``type`` is kept as a plain string so that an unknown engine name
    survives validation and is rejected by the adapter factory with
    ``UnsupportedDatabaseTypeError`` instead of a generic validation error.

    Example:
        >>> DatabaseConfig(type="mysql", host="db", port=3306,
        ...                database="quotes", user="app", password="secret")
    """

    type: str = Field(
        default=DatabaseType.POSTGRES.value,
        description="Backend engine (postgres, mysql)"
    )
    host: str = Field(default="localhost", description="Database server hostname")
    port: int = Field(default=5432, ge=1, le=65535, description="Database server port")
    database: str = Field(default="", description="Database name")
    user: str = Field(default="", description="Database username")
    password: str = Field(default="", description="Database password")
    ssl: bool = Field(default=False, description="Use an encrypted connection")

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, v):
        """Accept enum members as well as raw strings."""
        if isinstance(v, DatabaseType):
            return v.value
        return str(v).strip().lower()

    def safe_dict(self) -> dict:
        """Dump the config without the password, for logs."""
        data = self.model_dump()
        data["password"] = "***" if self.password else ""
        return data


class Settings(BaseSettings):
    """
    Application Settings Configuration.

    Loads environment variables (and an optional ``.env`` file) with type
    validation and defaults.

    Example:
        >>> from quotecalc.core.settings import settings
        >>> settings.database_config.type
        'postgres'
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # --------------------------------------------------------------------------
    # APPLICATION SETTINGS
    # --------------------------------------------------------------------------
    APP_NAME: str = Field(
        default="Web Design Price Calculator",
        description="Application display name"
    )
    APP_VERSION: str = Field(
        default="1.0.0",
        description="Application semantic version"
    )
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (logs, stack traces)"
    )
    ENVIRONMENT: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Current deployment environment"
    )

    # --------------------------------------------------------------------------
    # API CONFIGURATION
    # --------------------------------------------------------------------------
    API_V1_PREFIX: str = Field(
        default="/api/v1",
        description="API version 1 route prefix"
    )
    API_TITLE: str = Field(
        default="QuoteCalc API",
        description="OpenAPI documentation title"
    )

    # --------------------------------------------------------------------------
    # DATABASE CONNECTION
    # --------------------------------------------------------------------------
    DB_TYPE: str = Field(
        default=DatabaseType.POSTGRES.value,
        description="Active database backend (postgres, mysql)"
    )
    DB_HOST: str = Field(default="localhost", description="Database server hostname")
    DB_PORT: int = Field(default=5432, ge=1, le=65535, description="Database server port")
    DB_NAME: str = Field(default="", description="Database name")
    DB_USER: str = Field(default="", description="Database username")
    DB_PASSWORD: str = Field(default="", description="Database password")
    DB_SSL: bool = Field(default=False, description="Use an encrypted connection")

    # --------------------------------------------------------------------------
    # CONNECTION POOL SETTINGS
    # --------------------------------------------------------------------------
    DB_POOL_SIZE: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Database connection pool size"
    )
    DB_MAX_OVERFLOW: int = Field(
        default=20,
        ge=0,
        le=100,
        description="Maximum overflow connections beyond pool size"
    )
    DB_POOL_TIMEOUT: int = Field(
        default=30,
        ge=1,
        le=300,
        description="Connection pool timeout in seconds"
    )
    DB_POOL_RECYCLE: int = Field(
        default=3600,
        ge=60,
        description="Connection recycle time in seconds"
    )
    DB_COMMAND_TIMEOUT: int = Field(
        default=60,
        ge=1,
        description="Per-statement timeout in seconds (PostgreSQL)"
    )

    # --------------------------------------------------------------------------
    # INSTALLATION
    # --------------------------------------------------------------------------
    CONFIG_PATH: str = Field(
        default="config.json",
        description="Path of the JSON file written by the installer"
    )

    # --------------------------------------------------------------------------
    # LOGGING CONFIGURATION
    # --------------------------------------------------------------------------
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    LOG_FILE: Optional[str] = Field(
        default=None,
        description="Optional file to mirror log output into"
    )

    # --------------------------------------------------------------------------
    # COMPUTED PROPERTIES
    # --------------------------------------------------------------------------
    @property
    def database_config(self) -> DatabaseConfig:
        """
        Build the connection config from the DB_* variables.

        Returns:
            DatabaseConfig for the adapter factory
        """
        return DatabaseConfig(
            type=self.DB_TYPE,
            host=self.DB_HOST,
            port=self.DB_PORT,
            database=self.DB_NAME,
            user=self.DB_USER,
            password=self.DB_PASSWORD,
            ssl=self.DB_SSL,
        )

    @computed_field
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT == Environment.PRODUCTION

    # --------------------------------------------------------------------------
    # VALIDATORS
    # --------------------------------------------------------------------------
    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize the log level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}")
        return level


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Returns:
        Settings: Cached settings instance
    """
    return Settings()


# Module-level settings instance for convenient imports
settings = get_settings()
