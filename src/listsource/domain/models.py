"""Value types shared by the collection store and the list source."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class LoadKind(Enum):
    """The load-family operations a list source can have in flight."""

    INITIAL_LOAD = "initial_load"
    LOAD_MORE = "load_more"
    SORT = "sort"


class SortOrder(Enum):
    ASC = "ASC"
    DESC = "DESC"


@dataclass(frozen=True)
class IndexPath:
    """Address of an item: ``section`` index plus ``index`` within it."""

    section: int
    index: int

    def __post_init__(self) -> None:
        if self.section < 0 or self.index < 0:
            raise ValueError(f"IndexPath components must be non-negative: {self!r}")


@dataclass(frozen=True)
class SortDescriptor:
    """Column plus direction, as a table header hands it over.

    List sources never inspect descriptors; any object can be used instead.
    """

    column: str
    order: SortOrder = SortOrder.ASC
