"""
Exceptions raised by the progress analytics engine.

Only caller mistakes are raised, such as an unsupported parameter or a value
outside its plausible range. Insufficient data is reported as ``None`` or an
empty collection, and malformed records are skipped at the normalization
boundary. Every exception knows the error code and HTTP status the API
renders it with.
"""

from enum import Enum
from typing import Any, Dict, Iterable, Optional


class ErrorCode(str, Enum):
    """Machine-readable codes rendered in API error bodies."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    INVALID_PARAMETER = "INVALID_PARAMETER"

    # Measurement catalog
    MEASUREMENT_VALIDATION_ERROR = "MEASUREMENT_VALIDATION_ERROR"
    UNKNOWN_MEASUREMENT_TYPE = "UNKNOWN_MEASUREMENT_TYPE"


class ProgressAnalyticsError(Exception):
    """Base class; ``details`` holds structured context for the error body."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = dict(details) if details else {}

    def to_dict(self) -> Dict[str, Any]:
        """Render as the ``{"error": {...}}`` envelope used by the API."""
        error: Dict[str, Any] = {"code": self.code.value, "message": self.message}
        if self.details:
            error["details"] = self.details
        return {"error": error}


# ============================================================================
# Validation Errors (400)
# ============================================================================

class ValidationError(ProgressAnalyticsError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if field:
            error_details["field"] = field
        super().__init__(
            message=message,
            code=ErrorCode.VALIDATION_ERROR,
            status_code=400,
            details=error_details,
        )


class InvalidParameterError(ValidationError):
    """Raised when a calculation is called with an unsupported parameter."""

    def __init__(
        self,
        parameter: str,
        value: Any,
        allowed: Optional[Iterable[Any]] = None,
        message: Optional[str] = None,
    ) -> None:
        details: Dict[str, Any] = {"value": value}
        if allowed is not None:
            details["allowed"] = list(allowed)
        super().__init__(
            message=message or f"Unsupported value for {parameter}: {value!r}",
            field=parameter,
            details=details,
        )
        self.code = ErrorCode.INVALID_PARAMETER
        self.parameter = parameter


class MeasurementValidationError(ValidationError):
    """Raised when a measurement value is rejected by the catalog."""

    def __init__(
        self,
        message: str,
        measurement_type: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, field="value", details=details)
        if measurement_type:
            self.details["measurement_type"] = measurement_type
        self.code = ErrorCode.MEASUREMENT_VALIDATION_ERROR


# ============================================================================
# Not Found Errors (404)
# ============================================================================

class NotFoundError(ProgressAnalyticsError):
    """Raised when a requested resource does not exist."""

    def __init__(
        self,
        resource: str,
        identifier: Any,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        error_details["resource"] = resource
        error_details["id"] = identifier
        super().__init__(
            message=f"{resource} not found: {identifier}",
            code=ErrorCode.NOT_FOUND,
            status_code=404,
            details=error_details,
        )
