"""
RecordingLogger: an in-memory MockableLogger.

For tests that would rather inspect a list of calls than configure a mock.
Calls land in a bounded ring buffer, oldest dropped first.

    recorder = RecordingLogger()
    OrderService(MockableLoggerAdapter(recorder)).ship(42)
    assert recorder.messages(LogLevel.INFORMATION) == ["Shipped {OrderId}"]
"""

from __future__ import annotations

import threading
from collections import deque
from typing import TYPE_CHECKING, Any

from mocklog.contract import MockableLogger
from mocklog.diagnostics import Diagnostics
from mocklog.records import EventId, LogLevel, LoggedCall
from mocklog.routing import CallShape

if TYPE_CHECKING:
    from mocklog.config import AdapterConfig


class RecordingScope:
    """Handle returned by RecordingLogger.begin_scope. close() is idempotent."""

    def __init__(self, owner: "RecordingLogger", state: Any):
        self._owner = owner
        self.state = state
        self.closed = False

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self._owner._end_scope(self)

    def __enter__(self) -> "RecordingScope":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"RecordingScope({self.state!r}, closed={self.closed})"


class RecordingLogger(MockableLogger):

    def __init__(self, min_level: LogLevel = LogLevel.TRACE, ring_buffer_size: int = 10000):
        self.min_level = LogLevel.from_value(min_level)
        self._buffer: deque[LoggedCall] = deque(maxlen=ring_buffer_size)
        self._scopes: list[RecordingScope] = []
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: "AdapterConfig") -> "RecordingLogger":
        Diagnostics.instance().configure(config.diagnostics)
        return cls(min_level=config.min_level, ring_buffer_size=config.ring_buffer_size)

    # ── Recording ─────────────────────────────────────────────────

    def _record(
        self,
        level: LogLevel,
        shape: CallShape,
        message: str | None,
        args: tuple,
        event_id: EventId | None = None,
        error: BaseException | None = None,
    ) -> None:
        call = LoggedCall(
            level=level,
            shape=shape.name,
            message=message,
            args=args,
            event_id=event_id,
            error=error,
        )
        with self._lock:
            self._buffer.append(call)

    def log_trace(self, message, *args):
        self._record(LogLevel.TRACE, CallShape.PLAIN, message, args)

    def log_trace_error(self, error, message, *args):
        self._record(LogLevel.TRACE, CallShape.WITH_ERROR, message, args, error=error)

    def log_trace_event(self, event_id, message, *args):
        self._record(LogLevel.TRACE, CallShape.WITH_EVENT_ID, message, args, event_id=event_id)

    def log_trace_event_error(self, event_id, error, message, *args):
        self._record(LogLevel.TRACE, CallShape.WITH_BOTH, message, args, event_id, error)

    def log_debug(self, message, *args):
        self._record(LogLevel.DEBUG, CallShape.PLAIN, message, args)

    def log_debug_error(self, error, message, *args):
        self._record(LogLevel.DEBUG, CallShape.WITH_ERROR, message, args, error=error)

    def log_debug_event(self, event_id, message, *args):
        self._record(LogLevel.DEBUG, CallShape.WITH_EVENT_ID, message, args, event_id=event_id)

    def log_debug_event_error(self, event_id, error, message, *args):
        self._record(LogLevel.DEBUG, CallShape.WITH_BOTH, message, args, event_id, error)

    def log_information(self, message, *args):
        self._record(LogLevel.INFORMATION, CallShape.PLAIN, message, args)

    def log_information_error(self, error, message, *args):
        self._record(LogLevel.INFORMATION, CallShape.WITH_ERROR, message, args, error=error)

    def log_information_event(self, event_id, message, *args):
        self._record(LogLevel.INFORMATION, CallShape.WITH_EVENT_ID, message, args, event_id=event_id)

    def log_information_event_error(self, event_id, error, message, *args):
        self._record(LogLevel.INFORMATION, CallShape.WITH_BOTH, message, args, event_id, error)

    def log_warning(self, message, *args):
        self._record(LogLevel.WARNING, CallShape.PLAIN, message, args)

    def log_warning_error(self, error, message, *args):
        self._record(LogLevel.WARNING, CallShape.WITH_ERROR, message, args, error=error)

    def log_warning_event(self, event_id, message, *args):
        self._record(LogLevel.WARNING, CallShape.WITH_EVENT_ID, message, args, event_id=event_id)

    def log_warning_event_error(self, event_id, error, message, *args):
        self._record(LogLevel.WARNING, CallShape.WITH_BOTH, message, args, event_id, error)

    def log_error(self, message, *args):
        self._record(LogLevel.ERROR, CallShape.PLAIN, message, args)

    def log_error_error(self, error, message, *args):
        self._record(LogLevel.ERROR, CallShape.WITH_ERROR, message, args, error=error)

    def log_error_event(self, event_id, message, *args):
        self._record(LogLevel.ERROR, CallShape.WITH_EVENT_ID, message, args, event_id=event_id)

    def log_error_event_error(self, event_id, error, message, *args):
        self._record(LogLevel.ERROR, CallShape.WITH_BOTH, message, args, event_id, error)

    def log_critical(self, message, *args):
        self._record(LogLevel.CRITICAL, CallShape.PLAIN, message, args)

    def log_critical_error(self, error, message, *args):
        self._record(LogLevel.CRITICAL, CallShape.WITH_ERROR, message, args, error=error)

    def log_critical_event(self, event_id, message, *args):
        self._record(LogLevel.CRITICAL, CallShape.WITH_EVENT_ID, message, args, event_id=event_id)

    def log_critical_event_error(self, event_id, error, message, *args):
        self._record(LogLevel.CRITICAL, CallShape.WITH_BOTH, message, args, event_id, error)

    # ── Scope and level query ─────────────────────────────────────

    def begin_scope(self, state: Any) -> RecordingScope:
        scope = RecordingScope(self, state)
        with self._lock:
            self._scopes.append(scope)
        return scope

    def _end_scope(self, scope: RecordingScope) -> None:
        with self._lock:
            if scope in self._scopes:
                self._scopes.remove(scope)

    @property
    def active_scopes(self) -> list[Any]:
        """States of scopes not yet closed, outermost first."""
        with self._lock:
            return [scope.state for scope in self._scopes]

    def is_enabled(self, level: LogLevel) -> bool:
        return level != LogLevel.NONE and level >= self.min_level

    # ── Reading ───────────────────────────────────────────────────

    @property
    def calls(self) -> list[LoggedCall]:
        with self._lock:
            return list(self._buffer)

    def get_calls(
        self,
        level: LogLevel | None = None,
        shape: CallShape | None = None,
    ) -> list[LoggedCall]:
        calls = self.calls
        if level is not None:
            calls = [c for c in calls if c.level == level]
        if shape is not None:
            calls = [c for c in calls if c.shape == shape.name]
        return calls

    def messages(self, level: LogLevel | None = None) -> list[str | None]:
        return [c.message for c in self.get_calls(level)]

    def clear(self) -> None:
        with self._lock:
            self._buffer.clear()

    @property
    def count(self) -> int:
        return len(self._buffer)
