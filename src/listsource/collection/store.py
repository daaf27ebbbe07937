"""Ordered, sectioned item storage.

``CollectionStore`` is the narrow surface a list source mutates through.
``SectionedCollection`` is the in-memory implementation used by default.
"""

from __future__ import annotations

from typing import Any, List, Protocol, Sequence, Tuple, runtime_checkable

from listsource.domain.models import IndexPath
from listsource.viewmodels.signal import Signal

Section = Tuple[Any, ...]


@runtime_checkable
class CollectionStore(Protocol):
    """Minimal protocol for the storage side of a list source."""

    @property
    def sections(self) -> Tuple[Section, ...]: ...

    def clear(self, notify: bool = True) -> None: ...

    def insert_section(self, index: int, items: Sequence[Any], notify: bool = True) -> None: ...

    def insert_items(self, index_path: IndexPath, items: Sequence[Any], notify: bool = True) -> None: ...


class SectionedCollection:
    """In-memory list of sections, each an ordered list of items.

    Readers only ever see immutable snapshots through :attr:`sections`.
    Change signals fire after the mutation has been applied and only when
    the caller passes ``notify=True``.
    """

    def __init__(self, sections: Sequence[Sequence[Any]] = ()) -> None:
        self._sections: List[List[Any]] = [list(section) for section in sections]

        self.reset = Signal("reset")
        self.sections_inserted = Signal("sections_inserted")  # (index, count)
        self.sections_removed = Signal("sections_removed")  # (index, count)
        self.items_inserted = Signal("items_inserted")  # (index_path, count)
        self.items_removed = Signal("items_removed")  # (index_path, count)

    # -- read access -------------------------------------------------------

    @property
    def sections(self) -> Tuple[Section, ...]:
        return tuple(tuple(section) for section in self._sections)

    @property
    def section_count(self) -> int:
        return len(self._sections)

    def item_count(self, section: int) -> int:
        return len(self._section(section))

    def item_at(self, index_path: IndexPath) -> Any:
        items = self._section(index_path.section)
        if index_path.index >= len(items):
            raise IndexError(f"item index out of range: {index_path!r}")
        return items[index_path.index]

    def __len__(self) -> int:
        return sum(len(section) for section in self._sections)

    def __iter__(self):
        for section in self._sections:
            yield from section

    # -- mutation ----------------------------------------------------------

    def clear(self, notify: bool = True) -> None:
        self._sections = []
        if notify:
            self.reset.emit()

    def insert_section(self, index: int, items: Sequence[Any], notify: bool = True) -> None:
        if not 0 <= index <= len(self._sections):
            raise IndexError(f"section index out of range: {index}")
        self._sections.insert(index, list(items))
        if notify:
            self.sections_inserted.emit(index, 1)

    def insert_items(self, index_path: IndexPath, items: Sequence[Any], notify: bool = True) -> None:
        section = self._section(index_path.section)
        if index_path.index > len(section):
            raise IndexError(f"item index out of range: {index_path!r}")
        batch = list(items)
        section[index_path.index:index_path.index] = batch
        if notify and batch:
            self.items_inserted.emit(index_path, len(batch))

    def remove_section(self, index: int, notify: bool = True) -> None:
        self._section(index)
        del self._sections[index]
        if notify:
            self.sections_removed.emit(index, 1)

    def remove_items(self, index_path: IndexPath, count: int = 1, notify: bool = True) -> None:
        section = self._section(index_path.section)
        if count < 0 or index_path.index + count > len(section):
            raise IndexError(f"cannot remove {count} item(s) at {index_path!r}")
        del section[index_path.index:index_path.index + count]
        if notify and count:
            self.items_removed.emit(index_path, count)

    # -- internal ----------------------------------------------------------

    def _section(self, index: int) -> List[Any]:
        if not 0 <= index < len(self._sections):
            raise IndexError(f"section index out of range: {index}")
        return self._sections[index]
