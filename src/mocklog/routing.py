"""
Method routing.

Turns one (level, event_id, error, message, args) call into exactly one
call on a MockableLogger, or none for LogLevel.NONE.

Decision logic:
1. NONE → no call
2. Call shape from two presence tests, independent of level:
     event id present and error present → WITH_BOTH
     event id present only              → WITH_EVENT_ID
     error present only                 → WITH_ERROR
     neither                            → PLAIN
3. Level picks the method family, shape picks the member:
     log_<level>{"", "_error", "_event", "_event_error"}
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Sequence

from mocklog.contract import MockableLogger
from mocklog.diagnostics import Diagnostics, ROUTE_TAG
from mocklog.records import EventId, LogLevel, ROUTABLE_LEVELS


class CallShape(Enum):
    """Which of the four overload-shaped members a call lands on."""
    PLAIN = ""
    WITH_ERROR = "_error"
    WITH_EVENT_ID = "_event"
    WITH_BOTH = "_event_error"

    @property
    def suffix(self) -> str:
        return self.value

    @classmethod
    def classify(cls, event_id: EventId | None, error: BaseException | None) -> "CallShape":
        has_event_id = event_id is not None and event_id.is_present
        has_error = error is not None
        if has_event_id and has_error:
            return cls.WITH_BOTH
        if has_event_id:
            return cls.WITH_EVENT_ID
        if has_error:
            return cls.WITH_ERROR
        return cls.PLAIN


# (level, shape) → method name, computed once at import, never mutated
METHOD_NAMES: dict[tuple[LogLevel, CallShape], str] = {
    (level, shape): f"log_{level.method_stem}{shape.suffix}"
    for level in ROUTABLE_LEVELS
    for shape in CallShape
}


class MethodRouter:
    """
    Dispatches to one member of a MockableLogger.

    Any exception raised by the sink propagates unchanged.
    """

    def __init__(self, sink: MockableLogger):
        self.sink = sink

    @staticmethod
    def method_name(level: LogLevel, shape: CallShape) -> str:
        try:
            return METHOD_NAMES[(level, shape)]
        except KeyError:
            raise ValueError(f"Level {level!r} is not routable")

    def route(
        self,
        level: LogLevel,
        event_id: EventId,
        error: BaseException | None,
        message: str | None,
        args: Sequence[Any] | None,
    ) -> None:
        if level == LogLevel.NONE:
            return

        level = LogLevel.from_value(level)
        shape = CallShape.classify(event_id, error)
        name = self.method_name(level, shape)
        args = tuple(args) if args is not None else ()

        Diagnostics.instance().trace(
            "dispatch", tags={ROUTE_TAG}, method=name, arg_count=len(args)
        )

        method = getattr(self.sink, name)
        if shape is CallShape.WITH_BOTH:
            method(event_id, error, message, *args)
        elif shape is CallShape.WITH_EVENT_ID:
            method(event_id, message, *args)
        elif shape is CallShape.WITH_ERROR:
            method(error, message, *args)
        else:
            method(message, *args)

    def describe(self) -> dict:
        """Routing table, keyed by level name then shape name."""
        table: dict[str, dict[str, str]] = {}
        for (level, shape), name in METHOD_NAMES.items():
            table.setdefault(level.name, {})[shape.name] = name
        return {
            "sink": type(self.sink).__name__,
            "methods": table,
        }
