"""
Domain exceptions for Webmaker.

Only a few of these ever reach a caller: storage, deserialization,
synthesis and remote-service failures are absorbed at the component
boundary that owns them and degrade to a safe default. Routers map the
remaining ones to HTTP status codes.
"""

from typing import Any, Optional


class WebmakerError(Exception):
    """Base exception for all Webmaker errors."""
    pass


class ValidationFailure(WebmakerError):
    """Raised when a local precondition blocks a user action (e.g. empty brief)."""
    pass


class StorageFault(WebmakerError):
    """Raised by a storage backend when a read or write fails."""

    def __init__(self, message: str, operation: str = "", key: Optional[str] = None):
        super().__init__(message)
        self.operation = operation
        self.key = key


class DeserializationFailure(WebmakerError):
    """Raised when persisted JSON cannot be turned back into a model."""
    pass


class RemoteServiceError(WebmakerError):
    """Raised when the remote generation service cannot be reached or answers garbage."""

    def __init__(self, message: str, status_code: Optional[int] = None, response: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class SynthesisFault(WebmakerError):
    """Raised internally by the synthesizer helpers; never escapes synthesize()."""
    pass


class NothingToExport(WebmakerError):
    """Raised when an export is requested before anything was generated."""
    pass


class UnknownTemplate(WebmakerError):
    """Raised when a template id is not part of the catalog."""
    pass


class UnknownFeatureFlag(WebmakerError):
    """Raised when toggling a feature flag the Specification does not have."""
    pass
