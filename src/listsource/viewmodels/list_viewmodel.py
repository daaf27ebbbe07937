"""Pure Python list ViewModel (MVVM), no Qt dependency.

Binds a :class:`PaginatedListSource` to observable state a list, grid or
table view can render: the current rows, a loading flag and whether more
pages can be requested.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

from listsource.domain.models import LoadKind
from listsource.errors import ListSourceError
from listsource.errors.handler import ErrorHandler, ErrorSeverity
from listsource.events.bus import EventBus
from listsource.source.paginated import PaginatedListSource
from listsource.viewmodels.base import BaseViewModel
from listsource.viewmodels.signal import ObservableProperty, Signal


class ListViewModel(BaseViewModel):
    """List ViewModel, pure Python, no Qt dependency.

    State is refreshed from the source's own signals, so only the operation
    the source actually applied is ever reflected here; calls that were
    superseded leave no trace.
    """

    def __init__(
        self,
        source: PaginatedListSource,
        event_bus: Optional[EventBus] = None,
        error_handler: Optional[ErrorHandler] = None,
    ) -> None:
        super().__init__()
        self._source = source
        self._logger = logging.getLogger(__name__)
        self._error_handler = error_handler or ErrorHandler(self._logger, event_bus)
        self._refresh_task: Optional[asyncio.Task] = None

        # Observable properties
        self.rows = ObservableProperty(source.sections)
        self.loading = ObservableProperty(source.is_loading)
        self.has_more = ObservableProperty(False)
        self.sort_descriptor = ObservableProperty(source.sort_descriptor)

        # Signals
        self.rows_changed = Signal("rows_changed")  # emits (sections,)
        self.error_occurred = Signal("error_occurred")  # emits (message,)

        self.connect_signal(source.reload_requested, self._on_reload_requested)
        self.connect_signal(source.load_started, self._on_load_started)
        self.connect_signal(source.load_finished, self._on_load_finished)
        self.connect_signal(source.load_failed, self._on_load_failed)

    @property
    def source(self) -> PaginatedListSource:
        return self._source

    @property
    def row_count(self) -> int:
        return sum(len(section) for section in self.rows.value)

    async def refresh(self) -> None:
        """Reload from the first page under the current sort descriptor."""
        try:
            await self._source.perform_load(self.sort_descriptor.value)
        except ListSourceError as exc:
            self._report(exc, "refresh")

    async def sort(self, sort_descriptor: Any) -> None:
        """Re-fetch everything ordered by *sort_descriptor*."""
        self.sort_descriptor.value = sort_descriptor
        try:
            await self._source.perform_sort(sort_descriptor)
        except ListSourceError as exc:
            self._report(exc, "sort")

    async def load_more(self) -> bool:
        """Fetch the next page; no-op once exhausted or while loading."""
        if not self.has_more.value or self._source.is_loading:
            return False
        try:
            return await self._source.perform_load_more()
        except ListSourceError as exc:
            self._report(exc, "load_more")
            return False

    def request_reload(self) -> None:
        """Let the source announce a reload; see :meth:`_on_reload_requested`."""
        self._source.reload_data()

    def dispose(self) -> None:
        super().dispose()
        if self._refresh_task is not None and not self._refresh_task.done():
            self._refresh_task.cancel()
        self._refresh_task = None

    # -- source handlers ---------------------------------------------------

    def _on_reload_requested(self) -> None:
        self.loading.value = True
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._logger.debug("No running event loop; refresh() must be awaited by the caller")
            return
        self._refresh_task = loop.create_task(self.refresh())

    def _on_load_started(self, kind: LoadKind) -> None:
        self.loading.value = True

    def _on_load_finished(self, kind: LoadKind, count: int) -> None:
        self.has_more.value = count > 0
        self._sync_rows()
        self.loading.value = self._source.is_loading

    def _on_load_failed(self, kind: LoadKind, error: Exception) -> None:
        if kind is not LoadKind.LOAD_MORE:
            self.has_more.value = False
        self._sync_rows()
        self.loading.value = self._source.is_loading

    # -- internal ----------------------------------------------------------

    def _sync_rows(self) -> None:
        sections = self._source.sections
        if sections != self.rows.value:
            self.rows.value = sections
            self.rows_changed.emit(sections)

    def _report(self, exc: ListSourceError, operation: str) -> None:
        context = {"operation": operation, "source_id": self._source.source_id}
        self._error_handler.handle(exc, ErrorSeverity.ERROR, context)
        self.error_occurred.emit(str(exc))
