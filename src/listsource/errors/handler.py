import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from listsource.events.bus import Event, EventBus


class ErrorSeverity(Enum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


@dataclass(kw_only=True)
class ErrorOccurredEvent(Event):
    """Published for every handled error.

    ``context`` names the failing list operation (``operation``), the source
    it ran on (``source_id``) and, for fetch failures, the load kind
    (``kind``).
    """

    error: Exception
    severity: ErrorSeverity
    context: dict = field(default_factory=dict)


class ErrorHandler:
    def __init__(self, logger: logging.Logger, event_bus: Optional[EventBus] = None):
        self._logger = logger
        self._events = event_bus
        self._ui_callback: Optional[Callable[[str, ErrorSeverity], None]] = None

    def register_ui_callback(self, callback: Callable[[str, ErrorSeverity], None]):
        self._ui_callback = callback

    def handle(self, error: Exception, severity: ErrorSeverity = ErrorSeverity.ERROR, context: dict = None):
        context = self._with_load_kind(error, context)
        log_method = getattr(self._logger, severity.value, self._logger.error)
        log_method(
            "%s failed on source %r: %s: %s",
            context.get("operation", "operation"),
            context.get("source_id", ""),
            error.__class__.__name__,
            error,
            extra={"context": context},
        )

        if self._events is not None:
            self._events.publish(ErrorOccurredEvent(
                error=error,
                severity=severity,
                context=context,
            ))

        if self._ui_callback and severity in (ErrorSeverity.ERROR, ErrorSeverity.CRITICAL):
            self._ui_callback(str(error), severity)

    @staticmethod
    def _with_load_kind(error: Exception, context: Optional[dict]) -> dict:
        context = dict(context or {})
        kind = getattr(error, "kind", None)
        if kind is not None and "kind" not in context:
            context["kind"] = getattr(kind, "value", kind)
        return context
