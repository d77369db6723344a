"""
Generic structured-logging interface used by application code.

Application code depends on StructuredLogger and calls the level helpers:

    log.information("Order {OrderId} shipped", order_id)
    log.warning("Retrying {Attempt}", n, event_id=EventId(4, "Retry"))
    log.error("Payment failed", exc=err)

Each helper packs the template and args into FormattedLogValues and hands
it to the single generic entry point, log(level, event_id, state, error,
formatter). Implementations only need log, begin_scope and is_enabled.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Callable, Iterator

from mocklog.formatted import FormattedLogValues
from mocklog.records import EventId, LogLevel

Formatter = Callable[[Any, "BaseException | None"], str]


class StructuredLogger(ABC):
    """Generic logging entry point plus per-level convenience helpers."""

    @abstractmethod
    def log(
        self,
        level: LogLevel,
        event_id: EventId,
        state: Any,
        error: BaseException | None,
        formatter: Formatter,
    ) -> None: ...

    @abstractmethod
    def begin_scope(self, state: Any) -> Any: ...

    @abstractmethod
    def is_enabled(self, level: LogLevel) -> bool: ...

    # ── Convenience Methods ───────────────────────────────────────

    def log_message(
        self,
        level: LogLevel,
        message: str | None,
        *args: Any,
        event_id: EventId | int | tuple | None = None,
        exc: BaseException | None = None,
    ) -> None:
        state = FormattedLogValues(message, args)
        self.log(level, EventId.coerce(event_id), state, exc, FormattedLogValues.formatter)

    def trace(self, message: str | None, *args: Any, event_id=None, exc=None) -> None:
        self.log_message(LogLevel.TRACE, message, *args, event_id=event_id, exc=exc)

    def debug(self, message: str | None, *args: Any, event_id=None, exc=None) -> None:
        self.log_message(LogLevel.DEBUG, message, *args, event_id=event_id, exc=exc)

    def information(self, message: str | None, *args: Any, event_id=None, exc=None) -> None:
        self.log_message(LogLevel.INFORMATION, message, *args, event_id=event_id, exc=exc)

    info = information

    def warning(self, message: str | None, *args: Any, event_id=None, exc=None) -> None:
        self.log_message(LogLevel.WARNING, message, *args, event_id=event_id, exc=exc)

    def error(self, message: str | None, *args: Any, event_id=None, exc=None) -> None:
        self.log_message(LogLevel.ERROR, message, *args, event_id=event_id, exc=exc)

    def critical(self, message: str | None, *args: Any, event_id=None, exc=None) -> None:
        self.log_message(LogLevel.CRITICAL, message, *args, event_id=event_id, exc=exc)

    # ── Scopes ────────────────────────────────────────────────────

    @contextmanager
    def scope(self, state: Any) -> Iterator[Any]:
        """
        `with log.scope("Checkout"):` calls begin_scope on entry and disposes on exit.

        The handle is entered as a context manager when it is one, otherwise
        its close() is called on exit. A None handle is fine.
        """
        handle = self.begin_scope(state)
        if handle is None:
            yield None
        elif hasattr(handle, "__enter__") and hasattr(handle, "__exit__"):
            with handle:
                yield handle
        else:
            try:
                yield handle
            finally:
                close = getattr(handle, "close", None)
                if close is not None:
                    close()
