"""Asynchronous, sortable, incrementally loaded list source.

``PaginatedListSource`` sits between a :class:`CollectionStore` and whatever
view renders it.  It owns the store, drives the injected fetch hooks and
guarantees that overlapping load operations never leave the store holding a
mix of results.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Callable, Mapping, Optional, Tuple

from listsource.collection.store import CollectionStore, Section, SectionedCollection
from listsource.config import DEFAULT_POLICY, POLICIES, POLICY_QUEUE
from listsource.domain.models import IndexPath, LoadKind
from listsource.errors import (
    FetchError,
    InvalidStateError,
    SettingsValidationError,
    SupersededError,
)
from listsource.events.bus import EventBus
from listsource.events.source_events import (
    LoadCompletedEvent,
    LoadFailedEvent,
    ReloadRequestedEvent,
)
from listsource.settings.schema import merge_with_defaults
from listsource.source.hooks import FetchResult, Fetcher
from listsource.viewmodels.signal import Signal

LOGGER = logging.getLogger(__name__)


class PaginatedListSource:
    """Load, page and re-sort a sectioned collection through fetch hooks.

    Only one load-family operation (:meth:`perform_load`,
    :meth:`perform_load_more`, :meth:`perform_sort`) mutates the store at a
    time.  With the ``"supersede"`` policy a new operation cancels the
    pending fetch of the running one and the older result is dropped.  With
    ``"queue"`` operations wait for each other and run in call order.

    Signals:

    * ``reload_requested()``: emitted by :meth:`reload_data`.
    * ``load_started(kind)``: a load-family operation began.
    * ``load_finished(kind, count)``: it settled and its *count* fetched
      items were applied.
    * ``load_failed(kind, error)``: its fetch hook raised.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        store: Optional[CollectionStore] = None,
        *,
        policy: str = DEFAULT_POLICY,
        event_bus: Optional[EventBus] = None,
        source_id: str = "",
    ) -> None:
        if policy not in POLICIES:
            raise SettingsValidationError(f"unknown concurrency policy: {policy!r}")
        self._fetcher = fetcher
        self._store: CollectionStore = store if store is not None else SectionedCollection()
        self._policy = policy
        self._event_bus = event_bus
        self._source_id = source_id

        # State
        self._generation: int = 0
        self._in_flight: Optional[LoadKind] = None
        self._pending_fetch: Optional[asyncio.Future] = None
        self._queue_lock: Optional[asyncio.Lock] = None
        self._queue_loop: Optional[asyncio.AbstractEventLoop] = None
        self._sort_descriptor: Any = None

        # Signals
        self.reload_requested = Signal("reload_requested")
        self.load_started = Signal("load_started")
        self.load_finished = Signal("load_finished")
        self.load_failed = Signal("load_failed")

    @classmethod
    def from_options(
        cls,
        fetcher: Fetcher,
        options: Optional[Mapping[str, Any]] = None,
        *,
        store: Optional[CollectionStore] = None,
        event_bus: Optional[EventBus] = None,
    ) -> "PaginatedListSource":
        """Build a source from an options mapping validated against the schema."""
        opts = merge_with_defaults(options)
        return cls(
            fetcher,
            store,
            policy=opts["policy"],
            event_bus=event_bus if opts["publish_events"] else None,
            source_id=opts["source_id"],
        )

    # -- properties --------------------------------------------------------

    @property
    def store(self) -> CollectionStore:
        return self._store

    @property
    def sections(self) -> Tuple[Section, ...]:
        return self._store.sections

    @property
    def source_id(self) -> str:
        return self._source_id

    @property
    def policy(self) -> str:
        return self._policy

    @property
    def in_flight(self) -> Optional[LoadKind]:
        return self._in_flight

    @property
    def is_loading(self) -> bool:
        return self._in_flight is not None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def sort_descriptor(self) -> Any:
        return self._sort_descriptor

    # -- public API --------------------------------------------------------

    async def perform_load(self, sort_descriptor: Any = None) -> None:
        """Replace the collection with the first page from ``fetch_initial``.

        The store is cleared before the fetch starts.  If the fetch fails the
        store stays empty and :class:`FetchError` propagates.
        """
        await self._run(LoadKind.INITIAL_LOAD, sort_descriptor)

    async def perform_sort(self, sort_descriptor: Any) -> None:
        """Reload the collection from scratch under *sort_descriptor*."""
        await self._run(LoadKind.SORT, sort_descriptor)

    async def perform_load_more(self) -> bool:
        """Append the next batch to the last section.

        Returns ``True`` when items were appended.  ``False`` means the
        collection is unchanged: either the fetcher is exhausted or this call
        was superseded by a later operation.  The two cases are not told apart
        by the return value; callers that need to know listen to
        ``load_finished``, which fires only for applied results and carries
        the appended count (``0`` when exhausted).
        """
        return await self._run(LoadKind.LOAD_MORE)

    def reload_data(self) -> None:
        """Ask observers to reload; does not touch the collection."""
        LOGGER.debug("Reload requested for source %r", self._source_id)
        self.reload_requested.emit()
        if self._event_bus is not None:
            self._event_bus.publish(ReloadRequestedEvent(source_id=self._source_id))

    def cancel(self) -> None:
        """Drop whatever operation is in flight without applying its result."""
        if self._in_flight is None:
            return
        LOGGER.debug("Cancelling %s on source %r", self._in_flight.value, self._source_id)
        self._invalidate()
        self._in_flight = None

    # -- orchestration -----------------------------------------------------

    async def _run(self, kind: LoadKind, sort_descriptor: Any = None):
        if self._policy == POLICY_QUEUE:
            async with self._lock_for_running_loop():
                return await self._execute(kind, sort_descriptor)
        return await self._execute(kind, sort_descriptor)

    def _lock_for_running_loop(self) -> asyncio.Lock:
        # asyncio.Lock binds to the first loop that waits on it.
        loop = asyncio.get_running_loop()
        if self._queue_lock is None or self._queue_loop is not loop:
            self._queue_lock = asyncio.Lock()
            self._queue_loop = loop
        return self._queue_lock

    async def _execute(self, kind: LoadKind, sort_descriptor: Any):
        if kind is LoadKind.LOAD_MORE and not self._store.sections:
            raise InvalidStateError("perform_load_more() requires at least one loaded section")

        generation = self._begin(kind)
        try:
            if kind is LoadKind.LOAD_MORE:
                return await self._load_more(generation)
            await self._load_initial(generation, kind, sort_descriptor)
            return None
        except SupersededError:
            LOGGER.debug(
                "Discarding %s result of generation %d (current %d)",
                kind.value, generation, self._generation,
            )
            return False if kind is LoadKind.LOAD_MORE else None
        except FetchError as exc:
            self._report_failure(kind, generation, exc)
            raise
        finally:
            self._settle(generation)

    async def _load_initial(self, generation: int, kind: LoadKind, sort_descriptor: Any) -> None:
        self._store.clear(notify=False)
        self._sort_descriptor = sort_descriptor

        items = await self._fetch(generation, kind, self._fetcher.fetch_initial, sort_descriptor)
        batch = list(items or ())
        if batch:
            self._store.insert_section(0, batch, notify=False)
        self._report_success(kind, generation, len(batch))

    async def _load_more(self, generation: int) -> bool:
        items = await self._fetch(generation, LoadKind.LOAD_MORE, self._fetcher.fetch_more)
        batch = list(items or ())
        if not batch:
            self._report_success(LoadKind.LOAD_MORE, generation, 0)
            return False

        sections = self._store.sections
        if not sections:
            raise InvalidStateError("collection was emptied while loading more items")
        last = len(sections) - 1
        self._store.insert_items(IndexPath(last, len(sections[last])), batch, notify=False)
        self._report_success(LoadKind.LOAD_MORE, generation, len(batch))
        return True

    async def _fetch(
        self,
        generation: int,
        kind: LoadKind,
        hook: Callable[..., Any],
        *args: Any,
    ) -> FetchResult:
        """Await *hook* as the current generation's pending fetch.

        Raises :class:`SupersededError` when a newer operation started while
        the hook was running, whether the hook was cancelled, failed or
        completed.
        """
        try:
            result = hook(*args)
            if inspect.isawaitable(result):
                task = asyncio.ensure_future(result)
                self._pending_fetch = task
                result = await task
        except asyncio.CancelledError:
            if generation != self._generation:
                raise SupersededError(kind.value) from None
            raise
        except Exception as exc:
            if generation != self._generation:
                raise SupersededError(kind.value) from None
            LOGGER.warning("%s fetch failed on source %r: %s", kind.value, self._source_id, exc)
            raise FetchError(f"{kind.value} fetch failed: {exc}", kind) from exc

        if generation != self._generation:
            raise SupersededError(kind.value)
        return result

    # -- state machine -----------------------------------------------------

    def _begin(self, kind: LoadKind) -> int:
        if self._in_flight is not None:
            LOGGER.debug(
                "%s supersedes in-flight %s on source %r",
                kind.value, self._in_flight.value, self._source_id,
            )
        self._invalidate()
        self._in_flight = kind
        LOGGER.debug("Starting %s (generation %d)", kind.value, self._generation)
        self.load_started.emit(kind)
        return self._generation

    def _invalidate(self) -> None:
        self._generation += 1
        pending, self._pending_fetch = self._pending_fetch, None
        if pending is not None and not pending.done():
            pending.cancel()

    def _settle(self, generation: int) -> None:
        if generation == self._generation:
            self._in_flight = None
            self._pending_fetch = None

    def _report_success(self, kind: LoadKind, generation: int, count: int) -> None:
        self._settle(generation)
        self.load_finished.emit(kind, count)
        if self._event_bus is not None:
            self._event_bus.publish(
                LoadCompletedEvent(
                    source_id=self._source_id,
                    kind=kind,
                    item_count=count,
                    generation=generation,
                )
            )

    def _report_failure(self, kind: LoadKind, generation: int, error: Exception) -> None:
        self._settle(generation)
        self.load_failed.emit(kind, error)
        if self._event_bus is not None:
            self._event_bus.publish(
                LoadFailedEvent(
                    source_id=self._source_id,
                    kind=kind,
                    error=error,
                    generation=generation,
                )
            )
