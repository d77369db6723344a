"""
MockableLoggerAdapter: StructuredLogger in front of a MockableLogger.

Hand it to the code under test as its logger; hand the mock to the
assertions.

    sink = MagicMock(spec=MockableLogger)
    service = OrderService(MockableLoggerAdapter(sink))
    service.ship(42)
    sink.log_information.assert_called_once_with("Shipped {OrderId}", 42)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from mocklog.contract import MockableLogger
from mocklog.diagnostics import Diagnostics, EXTRACT_TAG, SCOPE_TAG
from mocklog.extract import StateExtractor
from mocklog.logger import Formatter, StructuredLogger
from mocklog.records import EventId, LogLevel
from mocklog.routing import MethodRouter

if TYPE_CHECKING:
    from mocklog.config import AdapterConfig


class MockableLoggerAdapter(StructuredLogger):
    """
    Routes each generic log call to one member of the wrapped contract.

    Flow: NONE gate → state extraction (formatter fallback) → MethodRouter.
    Sink exceptions propagate to the caller untouched.
    """

    def __init__(
        self,
        sink: MockableLogger,
        extractor: StateExtractor | None = None,
    ):
        self._sink = sink
        self._extractor = extractor or StateExtractor()
        self._router = MethodRouter(sink)

    @classmethod
    def from_config(cls, sink: MockableLogger, config: "AdapterConfig") -> "MockableLoggerAdapter":
        """Build from AdapterConfig. Also applies its diagnostics section."""
        Diagnostics.instance().configure(config.diagnostics)
        return cls(sink, StateExtractor(config.original_format_key))

    @property
    def sink(self) -> MockableLogger:
        return self._sink

    @property
    def router(self) -> MethodRouter:
        return self._router

    def log(
        self,
        level: LogLevel | int | str,
        event_id: EventId | int | tuple | None,
        state: Any,
        error: BaseException | None,
        formatter: Formatter,
    ) -> None:
        level = LogLevel.from_value(level)
        if level == LogLevel.NONE:
            return

        event_id = EventId.coerce(event_id)

        found, message, args = self._extractor.extract(state)
        if not found:
            Diagnostics.instance().trace(
                "state not recognized, using formatter",
                tags={EXTRACT_TAG},
                state_type=type(state).__name__,
            )
            message = formatter(state, error)
            args = None

        self._router.route(level, event_id, error, message, args)

    def begin_scope(self, state: Any) -> Any:
        Diagnostics.instance().trace(
            "begin scope", tags={SCOPE_TAG}, state_type=type(state).__name__
        )
        return self._sink.begin_scope(state)

    def is_enabled(self, level: LogLevel) -> bool:
        return self._sink.is_enabled(level)
