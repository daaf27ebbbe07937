from .hooks import FetchHooks, FetchResult, Fetcher
from .paginated import PaginatedListSource
from .paging import OffsetPager

__all__ = [
    "FetchHooks",
    "FetchResult",
    "Fetcher",
    "OffsetPager",
    "PaginatedListSource",
]
