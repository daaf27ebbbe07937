"""Default configuration values for listsource."""

from __future__ import annotations

from typing import Final

# Starting a load-family operation cancels the pending one; only the most
# recently started operation ever mutates the collection.
POLICY_SUPERSEDE: Final[str] = "supersede"
# Load-family operations wait for each other and run in call order.
POLICY_QUEUE: Final[str] = "queue"
POLICIES: Final[tuple[str, ...]] = (POLICY_SUPERSEDE, POLICY_QUEUE)
DEFAULT_POLICY: Final[str] = POLICY_SUPERSEDE

# Number of items ``OffsetPager`` asks for per request.
DEFAULT_PAGE_SIZE: Final[int] = 50
MAX_PAGE_SIZE: Final[int] = 10_000

OPTIONS_SCHEMA_ID: Final[str] = "listsource/options@1"
