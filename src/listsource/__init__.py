"""Asynchronous, paginated, sortable data sources for list and table views."""

from .collection import CollectionStore, SectionedCollection
from .domain import IndexPath, LoadKind, SortDescriptor, SortOrder
from .errors import (
    FetchError,
    InvalidStateError,
    ListSourceError,
    SettingsValidationError,
)
from .source import FetchHooks, OffsetPager, PaginatedListSource

__all__ = [
    "CollectionStore",
    "FetchError",
    "FetchHooks",
    "IndexPath",
    "InvalidStateError",
    "ListSourceError",
    "LoadKind",
    "OffsetPager",
    "PaginatedListSource",
    "SectionedCollection",
    "SettingsValidationError",
    "SortDescriptor",
    "SortOrder",
]
