"""
Custom exception hierarchy for the ticket generator.

Fatal run conditions only. Degraded form lookups are never raised,
they are absorbed by the form estimator and logged as warnings.
"""

from typing import Optional, Dict, Any


class GenerationError(Exception):
    """Base exception for all generation-run errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.message,
            "error_code": self.error_code,
            "details": self.details
        }


class DataSourceUnavailable(GenerationError):
    """Raised when the draw/odds provider cannot deliver the draw."""

    def __init__(self, message: str, cause: Optional[str] = None, **kwargs):
        super().__init__(message, error_code="DATA_SOURCE_UNAVAILABLE", **kwargs)
        if cause:
            self.details["cause"] = cause


class InsufficientMatches(GenerationError):
    """Raised when fewer usable events than required are available."""

    def __init__(self, found: int, required: int, **kwargs):
        if found == 0:
            message = "No matches found for the Stryktipset draw. Check the draw."
        else:
            message = f"Found only {found} matches, {required} required."
        super().__init__(message, error_code="INSUFFICIENT_MATCHES", **kwargs)
        self.found = found
        self.required = required
        self.details.update({
            "found": found,
            "required": required
        })
