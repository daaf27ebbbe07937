"""QtListSourceBridge, forwards list source notifications as Qt signals.

Qt views connect to these signals with queued connections when the source
lives on a different thread than the widgets.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from PySide6.QtCore import QObject, Signal

from listsource.domain.models import LoadKind
from listsource.source.paginated import PaginatedListSource
from listsource.viewmodels.signal import Signal as PySignal

_logger = logging.getLogger(__name__)


class QtListSourceBridge(QObject):
    """Re-emit a :class:`PaginatedListSource`'s pure-Python signals in Qt.

    Typical usage::

        bridge = QtListSourceBridge(source)
        bridge.reloadRequested.connect(view.show_spinner)
        # ... later ...
        bridge.dispose()
    """

    reloadRequested = Signal()
    loadStarted = Signal(str)
    loadFinished = Signal(str, int)
    loadFailed = Signal(str, str)

    def __init__(self, source: PaginatedListSource, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._source = source
        self._connections: list[tuple[PySignal, Callable]] = []

        self._link(source.reload_requested, self._forward_reload)
        self._link(source.load_started, self._forward_started)
        self._link(source.load_finished, self._forward_finished)
        self._link(source.load_failed, self._forward_failed)

    def dispose(self) -> None:
        """Disconnect from the source; the Qt signals stop firing."""
        for signal, handler in self._connections:
            try:
                signal.disconnect(handler)
            except ValueError:
                pass
        self._connections.clear()

    def _link(self, signal: PySignal, handler: Callable) -> None:
        signal.connect(handler)
        self._connections.append((signal, handler))

    def _forward_reload(self) -> None:
        self.reloadRequested.emit()

    def _forward_started(self, kind: LoadKind) -> None:
        self.loadStarted.emit(kind.value)

    def _forward_finished(self, kind: LoadKind, count: int) -> None:
        self.loadFinished.emit(kind.value, count)

    def _forward_failed(self, kind: LoadKind, error: Exception) -> None:
        _logger.debug("Forwarding %s failure to Qt: %s", kind.value, error)
        self.loadFailed.emit(kind.value, str(error))
