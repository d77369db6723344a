"""
The mockable logging contract.

Narrow, strongly-shaped target for MockableLoggerAdapter. Tests mock it
(MagicMock(spec=MockableLogger)) and assert on exactly one method per
logged call.

Every level family has four call shapes:
    log_<level>(message, *args)
    log_<level>_error(error, message, *args)
    log_<level>_event(event_id, message, *args)
    log_<level>_event_error(event_id, error, message, *args)
"""

from abc import ABC, abstractmethod
from typing import Any

from mocklog.records import EventId, LogLevel


class MockableLogger(ABC):
    """Target contract. Six level families by four call shapes."""

    # ── Trace ─────────────────────────────────────────────────────

    @abstractmethod
    def log_trace(self, message: str | None, *args: Any) -> None: ...

    @abstractmethod
    def log_trace_error(self, error: BaseException, message: str | None, *args: Any) -> None: ...

    @abstractmethod
    def log_trace_event(self, event_id: EventId, message: str | None, *args: Any) -> None: ...

    @abstractmethod
    def log_trace_event_error(
        self, event_id: EventId, error: BaseException, message: str | None, *args: Any
    ) -> None: ...

    # ── Debug ─────────────────────────────────────────────────────

    @abstractmethod
    def log_debug(self, message: str | None, *args: Any) -> None: ...

    @abstractmethod
    def log_debug_error(self, error: BaseException, message: str | None, *args: Any) -> None: ...

    @abstractmethod
    def log_debug_event(self, event_id: EventId, message: str | None, *args: Any) -> None: ...

    @abstractmethod
    def log_debug_event_error(
        self, event_id: EventId, error: BaseException, message: str | None, *args: Any
    ) -> None: ...

    # ── Information ───────────────────────────────────────────────

    @abstractmethod
    def log_information(self, message: str | None, *args: Any) -> None: ...

    @abstractmethod
    def log_information_error(self, error: BaseException, message: str | None, *args: Any) -> None: ...

    @abstractmethod
    def log_information_event(self, event_id: EventId, message: str | None, *args: Any) -> None: ...

    @abstractmethod
    def log_information_event_error(
        self, event_id: EventId, error: BaseException, message: str | None, *args: Any
    ) -> None: ...

    # ── Warning ───────────────────────────────────────────────────

    @abstractmethod
    def log_warning(self, message: str | None, *args: Any) -> None: ...

    @abstractmethod
    def log_warning_error(self, error: BaseException, message: str | None, *args: Any) -> None: ...

    @abstractmethod
    def log_warning_event(self, event_id: EventId, message: str | None, *args: Any) -> None: ...

    @abstractmethod
    def log_warning_event_error(
        self, event_id: EventId, error: BaseException, message: str | None, *args: Any
    ) -> None: ...

    # ── Error ─────────────────────────────────────────────────────

    @abstractmethod
    def log_error(self, message: str | None, *args: Any) -> None: ...

    @abstractmethod
    def log_error_error(self, error: BaseException, message: str | None, *args: Any) -> None: ...

    @abstractmethod
    def log_error_event(self, event_id: EventId, message: str | None, *args: Any) -> None: ...

    @abstractmethod
    def log_error_event_error(
        self, event_id: EventId, error: BaseException, message: str | None, *args: Any
    ) -> None: ...

    # ── Critical ──────────────────────────────────────────────────

    @abstractmethod
    def log_critical(self, message: str | None, *args: Any) -> None: ...

    @abstractmethod
    def log_critical_error(self, error: BaseException, message: str | None, *args: Any) -> None: ...

    @abstractmethod
    def log_critical_event(self, event_id: EventId, message: str | None, *args: Any) -> None: ...

    @abstractmethod
    def log_critical_event_error(
        self, event_id: EventId, error: BaseException, message: str | None, *args: Any
    ) -> None: ...

    # ── Scope and level query ─────────────────────────────────────

    @abstractmethod
    def begin_scope(self, state: Any) -> Any:
        """Start a logical scope. Returns a disposable handle or None."""
        ...

    @abstractmethod
    def is_enabled(self, level: LogLevel) -> bool: ...
