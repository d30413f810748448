"""Shared exceptions for service layer operations."""


class BackendError(Exception):
    """
    Raised when a remote data operation fails.

    Wraps transport and authorization failures reported by the backend client so
    callers handle a single exception type. The original error is chained.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)


class LinkValidationError(ValueError):
    """Raised when link input fails client-side validation (e.g. empty URL)."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
