"""Custom exception hierarchy for listsource."""

from __future__ import annotations


class ListSourceError(Exception):
    """Base class for all custom errors raised by listsource."""


class FetchError(ListSourceError):
    """Raised when a ``fetch_initial`` or ``fetch_more`` hook fails.

    The original exception is chained as ``__cause__``.
    """

    def __init__(self, message: str, kind: object = None) -> None:
        super().__init__(message)
        self.kind = kind


class InvalidStateError(ListSourceError):
    """Raised when an operation is invoked in a state that cannot support it."""


class SupersededError(ListSourceError):
    """Raised internally when a newer operation has replaced the running one.

    Never escapes :class:`~listsource.source.PaginatedListSource`.
    """


class SettingsError(ListSourceError):
    """Base class for option related failures."""


class SettingsValidationError(SettingsError):
    """Raised when source options fail schema validation."""


__all__ = [
    "FetchError",
    "InvalidStateError",
    "ListSourceError",
    "SettingsError",
    "SettingsValidationError",
    "SupersededError",
]
