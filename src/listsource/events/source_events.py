from dataclasses import dataclass
from typing import Any, Optional

from .bus import Event


@dataclass(kw_only=True)
class ReloadRequestedEvent(Event):
    source_id: str = ""


@dataclass(kw_only=True)
class LoadCompletedEvent(Event):
    source_id: str = ""
    kind: Any = None
    item_count: int = 0
    generation: int = 0


@dataclass(kw_only=True)
class LoadFailedEvent(Event):
    source_id: str = ""
    kind: Any = None
    error: Optional[Exception] = None
    generation: int = 0
