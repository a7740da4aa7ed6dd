# ==============================================================================
# CUSTOM EXCEPTIONS - Application Error Hierarchy
# ==============================================================================
# Structured exception classes for consistent error handling
# Each exception maps to an HTTP status code for the API layer
# ==============================================================================

from __future__ import annotations

from typing import Any, Dict, Optional


class AppException(Exception):
    """
    Base exception for all application errors.

    Provides a consistent interface for error handling with:
    - Error code for programmatic identification
    - HTTP status code mapping
    - Detailed message and optional context

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable error identifier
        status_code: HTTP status code to return
        details: Additional context dictionary
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        error_code: str = "INTERNAL_ERROR",
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary format for JSON response.

        Returns:
            Dictionary containing error details
        """
        return {
            "success": False,
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            }
        }

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message='{self.message}', "
            f"error_code='{self.error_code}', "
            f"status_code={self.status_code})"
        )


# ==============================================================================
# CONFIGURATION EXCEPTIONS
# ==============================================================================

class ConfigurationError(AppException):
    """
    Raised when the application configuration cannot be used.

    These are fatal at startup: nothing downstream can recover from
    a backend that cannot be selected.
    """

    def __init__(
        self,
        message: str = "Invalid configuration",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="CONFIGURATION_ERROR",
            status_code=500,
            details=details,
        )


class UnsupportedDatabaseTypeError(ConfigurationError):
    """
    Raised by the adapter factory for an engine outside the supported set.
    """

    def __init__(self, db_type: Any) -> None:
        from quotecalc.core.settings import DatabaseType

        super().__init__(
            message=f"Unsupported database type: {db_type}",
            details={
                "database_type": str(db_type),
                "supported_types": [t.value for t in DatabaseType],
            },
        )
        self.error_code = "UNSUPPORTED_DATABASE_TYPE"
        self.db_type = db_type


# ==============================================================================
# DATABASE EXCEPTIONS
# ==============================================================================

class DatabaseError(AppException):
    """
    Base exception for database-related errors.

    Raised when database operations fail due to:
    - Connection issues
    - Query execution failures
    - Transaction errors
    """

    def __init__(
        self,
        message: str = "Database operation failed",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="DATABASE_ERROR",
            status_code=503,
            details=details,
        )


class DatabaseConnectionError(DatabaseError):
    """
    Raised when a pooled connection cannot be acquired.

    The underlying driver message is kept in ``details["driver_message"]``.
    """

    def __init__(
        self,
        message: str = "Failed to connect to database",
        driver_message: Optional[str] = None,
    ) -> None:
        details = {}
        if driver_message:
            details["driver_message"] = driver_message
        super().__init__(message=message, details=details)
        self.error_code = "DATABASE_CONNECTION_ERROR"
        self.driver_message = driver_message


class QueryError(DatabaseError):
    """
    Raised when a statement fails (syntax, constraint, type errors).

    Attributes:
        sql: Statement as submitted by the caller
        driver_message: Message reported by the driver
    """

    def __init__(
        self,
        message: str = "Query failed",
        sql: Optional[str] = None,
        driver_message: Optional[str] = None,
    ) -> None:
        details = {}
        if driver_message:
            details["driver_message"] = driver_message
        super().__init__(message=message, details=details)
        self.error_code = "QUERY_ERROR"
        self.status_code = 500
        self.sql = sql
        self.driver_message = driver_message


class TransactionError(DatabaseError):
    """
    Raised when database transaction fails.

    Indicates that a transaction could not be committed
    and has been rolled back.
    """

    def __init__(
        self,
        message: str = "Transaction failed",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, details=details)
        self.error_code = "TRANSACTION_ERROR"
        self.status_code = 500


class QuoteWriteFailedError(TransactionError):
    """
    Raised when saving a quote was rolled back.

    No quote row and no line item rows exist for the attempted write.
    """

    def __init__(
        self,
        message: str = "Quote could not be saved; no changes were written",
        cause: Optional[BaseException] = None,
    ) -> None:
        details = {}
        if cause is not None:
            details["cause"] = str(cause)
        super().__init__(message=message, details=details)
        self.error_code = "QUOTE_WRITE_FAILED"


# ==============================================================================
# RESOURCE EXCEPTIONS
# ==============================================================================

class NotFoundError(AppException):
    """
    Raised when a requested resource does not exist.

    Maps to HTTP 404 Not Found.

    Attributes:
        resource_type: Type of resource that was not found
        resource_id: Identifier of the missing resource
    """

    def __init__(
        self,
        message: str = "Resource not found",
        resource_type: Optional[str] = None,
        resource_id: Optional[Any] = None,
    ) -> None:
        details = {}
        if resource_type:
            details["resource_type"] = resource_type
        if resource_id is not None:
            details["resource_id"] = str(resource_id)

        super().__init__(
            message=message,
            error_code="NOT_FOUND",
            status_code=404,
            details=details,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class AlreadyExistsError(AppException):
    """
    Raised when attempting to create a resource that already exists.

    Maps to HTTP 409 Conflict.
    """

    def __init__(
        self,
        message: str = "Resource already exists",
        resource_type: Optional[str] = None,
    ) -> None:
        details = {}
        if resource_type:
            details["resource_type"] = resource_type

        super().__init__(
            message=message,
            error_code="ALREADY_EXISTS",
            status_code=409,
            details=details,
        )


class InstallationFailedError(AppException):
    """
    Raised when the installer could not prepare the chosen database.

    The reason is in the application log; the config file is unchanged.
    """

    def __init__(self, message: str = "Installation failed") -> None:
        super().__init__(
            message=message,
            error_code="INSTALLATION_FAILED",
            status_code=500,
        )


# ==============================================================================
# VALIDATION EXCEPTIONS
# ==============================================================================

class ValidationError(AppException):
    """
    Raised when input validation fails.

    Maps to HTTP 422 Unprocessable Entity.
    Contains field-level validation errors.
    """

    def __init__(
        self,
        message: str = "Validation error",
        errors: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            status_code=422,
            details={"validation_errors": errors or {}},
        )
        self.errors = errors or {}


class InvalidQuantityError(ValidationError):
    """
    Raised when a selected feature or page has a quantity below one.
    """

    def __init__(self, item_type: str, item_id: Any, quantity: Any) -> None:
        super().__init__(
            message=(
                f"Quantity for {item_type} {item_id} must be a whole number "
                f"of at least 1 (got {quantity!r})"
            ),
            errors={"item_type": item_type, "item_id": item_id, "quantity": quantity},
        )
        self.error_code = "INVALID_QUANTITY"


class IncompletePricingDefinitionError(ValidationError):
    """
    Raised when a catalog row lacks the price fields its pricing type needs.

    A fixed feature needs ``flat_price``; an hourly feature needs
    ``hourly_rate`` and ``estimated_hours``; a page needs ``price_per_page``.
    """

    def __init__(
        self,
        item_type: str,
        item_id: Any,
        missing_fields: Optional[list] = None,
        pricing_type: Optional[str] = None,
    ) -> None:
        missing = list(missing_fields or [])
        if missing:
            reason = f"missing {', '.join(missing)}"
        else:
            reason = f"unknown pricing type {pricing_type!r}"
        super().__init__(
            message=f"Pricing for {item_type} {item_id} is incomplete: {reason}",
            errors={
                "item_type": item_type,
                "item_id": item_id,
                "pricing_type": pricing_type,
                "missing_fields": missing,
            },
        )
        self.error_code = "INCOMPLETE_PRICING_DEFINITION"


class InvalidBasePriceError(ValidationError):
    """Raised when a project type's base price is negative."""

    def __init__(self, base_price: Any) -> None:
        super().__init__(
            message=f"Base price must be zero or greater (got {base_price!r})",
            errors={"base_price": base_price},
        )
        self.error_code = "INVALID_BASE_PRICE"
