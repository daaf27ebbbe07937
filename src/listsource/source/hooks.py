"""Fetch capabilities a list source is built from."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Protocol, Sequence

FetchResult = Optional[Sequence[Any]]


class Fetcher(Protocol):
    """Anything with the two fetch coroutines can back a list source."""

    def fetch_initial(self, sort_descriptor: Any = None) -> Awaitable[FetchResult]: ...

    def fetch_more(self) -> Awaitable[FetchResult]: ...


@dataclass(frozen=True)
class FetchHooks:
    """Bundle two plain callables into a :class:`Fetcher`.

    ``fetch_initial`` receives the sort descriptor (or ``None``) and returns
    the first page.  ``fetch_more`` returns the next batch; an empty or
    ``None`` result means the source is exhausted.
    """

    fetch_initial: Callable[[Any], Awaitable[FetchResult]]
    fetch_more: Callable[[], Awaitable[FetchResult]]
