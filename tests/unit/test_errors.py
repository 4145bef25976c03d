"""Unit tests for error types and classification."""

import pytest

from src.core.errors import (
    ErrorCategory,
    ErrorCode,
    ErrorSeverity,
    InvalidArgumentError,
    classify_error_with_response,
)


@pytest.mark.unit
class TestInvalidArgumentError:
    """Tests for InvalidArgumentError."""

    def test_is_value_error(self):
        """Test that the error can be caught as a ValueError."""
        error = InvalidArgumentError("bad", code=ErrorCode.ERR_INVALID_INTERVAL, field="interval")

        assert isinstance(error, ValueError)
        assert str(error) == "bad"
        assert error.field == "interval"

    @pytest.mark.parametrize(
        ("code", "category"),
        [
            (ErrorCode.ERR_INVALID_RECURRENCE_PATTERN, ErrorCategory.INVALID_RECURRENCE_PATTERN),
            (ErrorCode.ERR_INVALID_INTERVAL, ErrorCategory.INVALID_INTERVAL),
            (ErrorCode.ERR_INVALID_CONFIGURATION, ErrorCategory.INVALID_CONFIGURATION),
            (ErrorCode.ERR_INVALID_TIMESTAMP, ErrorCategory.INVALID_TIMESTAMP),
            (ErrorCode.ERR_INVALID_ARGUMENT, ErrorCategory.INVALID_ARGUMENT),
            ("ERR_SOMETHING_ELSE", ErrorCategory.UNKNOWN),
        ],
    )
    def test_category_from_code(self, code, category):
        """Test mapping error codes to categories."""
        assert InvalidArgumentError("x", code=code).category == category


@pytest.mark.unit
class TestClassifyErrorWithResponse:
    """Tests for classify_error_with_response function."""

    def test_invalid_pattern(self):
        """Test response for an unknown recurrence pattern."""
        error = InvalidArgumentError(
            "Invalid recurrence pattern: 'YEARLY'",
            code=ErrorCode.ERR_INVALID_RECURRENCE_PATTERN,
        )

        response = classify_error_with_response(error)

        assert response.code == ErrorCode.ERR_INVALID_RECURRENCE_PATTERN
        assert "DAILY" in response.suggestion
        assert response.severity == ErrorSeverity.LOW

    def test_invalid_interval(self):
        """Test response for an interval below 1."""
        response = classify_error_with_response(InvalidArgumentError("x", code=ErrorCode.ERR_INVALID_INTERVAL))

        assert response.code == ErrorCode.ERR_INVALID_INTERVAL
        assert "at least 1" in response.suggestion

    def test_invalid_configuration_is_high_severity(self):
        """Test that misconfigured thresholds are flagged as high severity."""
        response = classify_error_with_response(InvalidArgumentError("x", code=ErrorCode.ERR_INVALID_CONFIGURATION))

        assert response.severity == ErrorSeverity.HIGH

    def test_invalid_timestamp(self):
        """Test response for mixed naive and aware datetimes."""
        response = classify_error_with_response(InvalidArgumentError("x", code=ErrorCode.ERR_INVALID_TIMESTAMP))

        assert response.code == ErrorCode.ERR_INVALID_TIMESTAMP
        assert "timezone" in response.suggestion

    def test_invalid_argument(self):
        """Test response for a malformed call such as a missing iteration bound."""
        response = classify_error_with_response(InvalidArgumentError("x", code=ErrorCode.ERR_INVALID_ARGUMENT))

        assert response.code == ErrorCode.ERR_INVALID_ARGUMENT
        assert response.severity == ErrorSeverity.LOW

    def test_other_exceptions_are_unknown(self):
        """Test that unrelated exceptions fall back to a generic response."""
        response = classify_error_with_response(RuntimeError("boom"))

        assert response.code == ErrorCode.ERR_UNKNOWN
        assert response.severity == ErrorSeverity.MEDIUM
