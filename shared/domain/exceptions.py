"""
Domain Errors

Every failure the booking core reports to a caller is one of these. Each
carries a plain-language ``message`` that is safe to show to a guest.
"""


class DomainError(Exception):
    """Base class for expected failures of domain operations."""

    default_message = "Request could not be processed"

    def __init__(self, message: str | None = None, *, details: dict | None = None):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(DomainError):
    """A required field is missing or malformed."""

    default_message = "All required fields must be filled"


class NotFoundError(DomainError):
    """A referenced apartment, booking or blocked date does not exist."""

    default_message = "Not found"


class ConflictError(DomainError):
    """Requested dates overlap an existing confirmed booking."""

    default_message = "Selected dates are not available"


class PermissionDeniedError(DomainError):
    """The actor lacks the admin capability for a back-office operation."""

    default_message = "Authentication required"


class StorageError(DomainError):
    """
    The data store failed.

    The message is deliberately generic; the underlying database error is
    chained as ``__cause__`` and logged, never returned to the client.
    """

    default_message = "Internal server error"
