"""
Domain exceptions for the ledger app.

Exception Hierarchy:
    LedgerServiceError (base)
    ├── ValidationError
    │   └── DuplicateClientError
    ├── TransportError
    ├── ParseError
    ├── NotFoundError
    └── CapitalLockedError

Propagation:
    ValidationError stops an operation before any state changes and is
    shown to the user. TransportError is raised by the gateway only; the
    sync layer absorbs it and reports a "saved locally" outcome instead.
    ParseError is absorbed by the cache, which then serves an empty
    collection.
"""


class LedgerServiceError(Exception):
    """Base exception for ledger errors."""
    pass


class ValidationError(LedgerServiceError):
    """
    Raised when a field is missing or fails a positivity/range check.

    Example:
        raise ValidationError("Count must be a positive whole number")
    """

    def __init__(self, message, field=None):
        super().__init__(message)
        self.field = field


class DuplicateClientError(ValidationError):
    """Raised when adding a client whose name is already registered."""
    pass


class TransportError(LedgerServiceError):
    """Raised on network failure, non-2xx status or malformed payload."""
    pass


class ParseError(LedgerServiceError):
    """Raised when cached or received data cannot be decoded into records."""
    pass


class NotFoundError(LedgerServiceError):
    """Raised when editing a record id that is not in the in-memory set."""
    pass


class CapitalLockedError(LedgerServiceError):
    """Raised when reading or editing capital while the panel is locked."""
    pass
