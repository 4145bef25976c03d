"""Error types and classification for rule engine failures."""

from enum import Enum

from pydantic import BaseModel


class ErrorCategory(Enum):
    """Categories of errors raised by the rule engine."""

    INVALID_RECURRENCE_PATTERN = "invalid_recurrence_pattern"
    INVALID_INTERVAL = "invalid_interval"
    INVALID_CONFIGURATION = "invalid_configuration"
    INVALID_TIMESTAMP = "invalid_timestamp"
    INVALID_ARGUMENT = "invalid_argument"
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """Severity levels for errors."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCode:
    """Error codes for specific error conditions."""

    # Recurrence errors
    ERR_INVALID_RECURRENCE_PATTERN = "ERR_INVALID_RECURRENCE_PATTERN"
    ERR_INVALID_INTERVAL = "ERR_INVALID_INTERVAL"

    # Evaluation errors
    ERR_INVALID_CONFIGURATION = "ERR_INVALID_CONFIGURATION"
    ERR_INVALID_TIMESTAMP = "ERR_INVALID_TIMESTAMP"
    ERR_INVALID_ARGUMENT = "ERR_INVALID_ARGUMENT"

    # Generic errors
    ERR_UNKNOWN = "ERR_UNKNOWN"


_CODE_CATEGORIES: dict[str, ErrorCategory] = {
    ErrorCode.ERR_INVALID_RECURRENCE_PATTERN: ErrorCategory.INVALID_RECURRENCE_PATTERN,
    ErrorCode.ERR_INVALID_INTERVAL: ErrorCategory.INVALID_INTERVAL,
    ErrorCode.ERR_INVALID_CONFIGURATION: ErrorCategory.INVALID_CONFIGURATION,
    ErrorCode.ERR_INVALID_TIMESTAMP: ErrorCategory.INVALID_TIMESTAMP,
    ErrorCode.ERR_INVALID_ARGUMENT: ErrorCategory.INVALID_ARGUMENT,
}


class InvalidArgumentError(ValueError):
    """Malformed input handed to the engine by its caller.

    These are programming or validation errors: they are never coerced into a
    default and must surface to whoever built the input.
    """

    def __init__(self, message: str, *, code: str, field: str | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.field = field

    @property
    def category(self) -> ErrorCategory:
        """Category matching this error's code."""
        return _CODE_CATEGORIES.get(self.code, ErrorCategory.UNKNOWN)


class ErrorResponse(BaseModel):
    """Structured error response with user-friendly messaging."""

    code: str
    message: str
    suggestion: str
    severity: ErrorSeverity


def classify_error_with_response(exception: Exception) -> ErrorResponse:
    """Classify an error and return a structured response with recovery suggestions.

    Args:
        exception: The exception raised while invoking the engine

    Returns:
        ErrorResponse with code, message, suggestion, and severity
    """
    code = exception.code if isinstance(exception, InvalidArgumentError) else ErrorCode.ERR_UNKNOWN

    if code == ErrorCode.ERR_INVALID_RECURRENCE_PATTERN:
        return ErrorResponse(
            code=code,
            message="Invalid recurrence pattern.",
            suggestion="Use one of DAILY, WEEKLY or MONTHLY.",
            severity=ErrorSeverity.LOW,
        )

    if code == ErrorCode.ERR_INVALID_INTERVAL:
        return ErrorResponse(
            code=code,
            message="Invalid recurrence interval.",
            suggestion="The interval must be a whole number of at least 1.",
            severity=ErrorSeverity.LOW,
        )

    if code == ErrorCode.ERR_INVALID_CONFIGURATION:
        return ErrorResponse(
            code=code,
            message="Invalid notification configuration.",
            suggestion="Thresholds, expiry windows and cooldowns must not be negative.",
            severity=ErrorSeverity.HIGH,
        )

    if code == ErrorCode.ERR_INVALID_TIMESTAMP:
        return ErrorResponse(
            code=code,
            message="Inconsistent timestamps.",
            suggestion="Pass either timezone-aware or naive datetimes, not a mix of both.",
            severity=ErrorSeverity.MEDIUM,
        )

    if code == ErrorCode.ERR_INVALID_ARGUMENT:
        return ErrorResponse(
            code=code,
            message="Invalid argument.",
            suggestion="Check the values passed to the rule engine.",
            severity=ErrorSeverity.LOW,
        )

    return ErrorResponse(
        code=ErrorCode.ERR_UNKNOWN,
        message="An unexpected error occurred.",
        suggestion="Please try again later. If the problem persists, contact support.",
        severity=ErrorSeverity.MEDIUM,
    )
