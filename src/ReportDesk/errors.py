# ============================================================================
# ReportDesk - Error Classes
#
# Purpose: Custom exception hierarchy for the package
# Inputs: Error messages and context
# Outputs: Structured exceptions
# Dependencies: pydantic (conversion of model validation errors)
# Usage: raise StoreError("Failed to save report")
#
# Changelog:
#   2026-09-02: Initial error classes
#   2026-09-21: ValidationError carries field-level messages; added UploadError,
#               StoreError, ReconstructionError, RoutingError
# ============================================================================

from typing import Dict, Optional

import pydantic


class ReportDeskError(Exception):
    """Base exception for all ReportDesk errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        """
        Initialize error.

        Args:
            message: Error message
            details: Optional detailed error information
        """
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        """String representation."""
        if self.details:
            return f"{self.message}\nDetails: {self.details}"
        return self.message


class ConfigurationError(ReportDeskError):
    """Raised when configuration is invalid or missing."""

    pass


class RoutingError(ReportDeskError):
    """Raised when an explicitly requested template does not exist."""

    pass


class ValidationError(ReportDeskError):
    """Raised when report input fails validation.

    ``field_errors`` maps a dotted field path (``revenue.otherRevenue``,
    ``tasks.0.taskForWeek``) to a user-facing message.
    """

    def __init__(
        self,
        message: str,
        field_errors: Optional[Dict[str, str]] = None,
        details: Optional[str] = None,
    ):
        super().__init__(message, details=details)
        self.field_errors: Dict[str, str] = dict(field_errors or {})

    def __str__(self) -> str:
        if not self.field_errors:
            return super().__str__()
        lines = "\n".join(f"  - {path}: {msg}" for path, msg in self.field_errors.items())
        return f"{self.message}\n{lines}"

    @classmethod
    def from_pydantic(cls, exc: pydantic.ValidationError) -> "ValidationError":
        """Convert a pydantic validation error into field-level messages."""
        field_errors: Dict[str, str] = {}
        for err in exc.errors():
            path = ".".join(str(part) for part in err.get("loc", ())) or "__root__"
            field_errors.setdefault(path, err.get("msg", "Invalid value"))
        return cls("Report input is invalid", field_errors=field_errors)


class UploadError(ReportDeskError):
    """Raised when the upload collaborator fails to store a file."""

    pass


class StoreError(ReportDeskError):
    """Raised when the report store rejects a create or update."""

    pass


class ReconstructionError(ReportDeskError):
    """Raised when persisted content cannot be parsed back into an instance."""

    pass
