"""Offset/limit pagination adapter.

Turns a single ``fetch_page(sort_descriptor, offset, limit)`` coroutine into
the ``fetch_initial`` / ``fetch_more`` pair a list source expects.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, List, Mapping, Optional, Sequence

from listsource.config import DEFAULT_PAGE_SIZE
from listsource.settings.schema import merge_with_defaults

LOGGER = logging.getLogger(__name__)

PageFetcher = Callable[[Any, int, int], Awaitable[Optional[Sequence[Any]]]]


class OffsetPager:
    """Stateful offset pager.

    Every ``fetch_initial`` restarts from offset 0 under the new sort
    descriptor.  A page shorter than ``page_size`` marks the query as
    exhausted, after which ``fetch_more`` returns ``[]`` without calling
    ``fetch_page`` again.
    """

    def __init__(self, fetch_page: PageFetcher, page_size: int = DEFAULT_PAGE_SIZE) -> None:
        if page_size <= 0:
            raise ValueError(f"page_size must be positive, got {page_size}")
        self._fetch_page = fetch_page
        self._page_size = page_size

        # State
        self._offset: int = 0
        self._exhausted: bool = False
        self._sort_descriptor: Any = None
        # Bumped on every restart so that pages of an older query that
        # arrive late leave the cursor alone.
        self._epoch: int = 0

    @classmethod
    def from_options(
        cls,
        fetch_page: PageFetcher,
        options: Optional[Mapping[str, Any]] = None,
    ) -> "OffsetPager":
        opts = merge_with_defaults(options)
        return cls(fetch_page, page_size=opts["page_size"])

    # -- properties --------------------------------------------------------

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def has_more(self) -> bool:
        return not self._exhausted

    @property
    def sort_descriptor(self) -> Any:
        return self._sort_descriptor

    # -- fetch hooks -------------------------------------------------------

    async def fetch_initial(self, sort_descriptor: Any = None) -> List[Any]:
        self._epoch += 1
        self._offset = 0
        self._exhausted = False
        self._sort_descriptor = sort_descriptor
        return await self._fetch_next()

    async def fetch_more(self) -> List[Any]:
        if self._exhausted:
            return []
        return await self._fetch_next()

    # -- internal ----------------------------------------------------------

    async def _fetch_next(self) -> List[Any]:
        epoch = self._epoch
        offset = self._offset
        rows = list(await self._fetch_page(self._sort_descriptor, offset, self._page_size) or ())

        if epoch != self._epoch:
            LOGGER.debug("Ignoring stale page at offset %d", offset)
            return rows
        self._offset = offset + len(rows)
        if len(rows) < self._page_size:
            self._exhausted = True
        return rows
