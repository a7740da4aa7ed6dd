# ==============================================================================
# CORE PACKAGE INITIALIZATION
# ==============================================================================
# Core utilities: Settings, Exceptions, Constants, Config Store
# ==============================================================================

"""
Core Module
===========

- settings: Environment configuration management
- exceptions: Custom exception classes
- constants: Application-wide constants
- config_store: Installer config file
"""

from quotecalc.core.exceptions import (
    AlreadyExistsError,
    AppException,
    ConfigurationError,
    DatabaseConnectionError,
    DatabaseError,
    IncompletePricingDefinitionError,
    InstallationFailedError,
    InvalidBasePriceError,
    InvalidQuantityError,
    NotFoundError,
    QueryError,
    QuoteWriteFailedError,
    TransactionError,
    UnsupportedDatabaseTypeError,
    ValidationError,
)
from quotecalc.core.settings import DatabaseConfig, DatabaseType, get_settings, settings

__all__ = [
    "settings",
    "get_settings",
    "DatabaseConfig",
    "DatabaseType",
    "AlreadyExistsError",
    "AppException",
    "ConfigurationError",
    "DatabaseConnectionError",
    "DatabaseError",
    "IncompletePricingDefinitionError",
    "InstallationFailedError",
    "InvalidBasePriceError",
    "InvalidQuantityError",
    "NotFoundError",
    "QueryError",
    "QuoteWriteFailedError",
    "TransactionError",
    "UnsupportedDatabaseTypeError",
    "ValidationError",
]
