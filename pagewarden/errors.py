"""
Error types for page sessions and pacing.

Errors raised by caller-supplied work are not wrapped; they reach the
caller as raised, after the page has been released.
"""

from typing import Any


class PageWardenError(Exception):
    """Base exception for pagewarden.

    Carries a message and optional details for logging.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(PageWardenError):
    """Raised when configuration cannot be used (empty user agent pool, bad pacing bounds)."""


class AcquisitionError(PageWardenError):
    """Raised when the browser fails to open a new page."""


class NavigationError(PageWardenError):
    """Raised when navigation times out or the target is unreachable."""

    def __init__(self, message: str, *, url: str, details: dict[str, Any] | None = None):
        super().__init__(message, details=details)
        self.url = url


class ReleaseError(PageWardenError):
    """Raised when closing a page or tearing down its blocker fails."""
