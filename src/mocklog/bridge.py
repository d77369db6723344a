"""
Bridge from the standard library's `logging` module.

Code that logs through `logging.getLogger(...)` can be asserted against
the mockable contract by attaching a MockableLogHandler:

    sink = MagicMock(spec=MockableLogger)
    handler = MockableLogHandler(MockableLoggerAdapter(sink))
    logging.getLogger("orders").addHandler(handler)

    logging.getLogger("orders").warning("Retry %d", 3, extra={"event_id": EventId(4, "Retry")})
    sink.log_warning_event.assert_called_once_with(EventId(4, "Retry"), "Retry %d", 3)

The template is the record's unformatted msg and args are its positional
args. exc_info supplies the error.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from mocklog.formatted import FormattedLogValues
from mocklog.logger import StructuredLogger
from mocklog.records import EventId, LogLevel


class MockableLogHandler(logging.Handler):
    """
    logging.Handler that forwards each record to a StructuredLogger.

    Unlike most handlers, emit() does not route failures to handleError():
    a sink exception reaches the code that logged, so tests see it.
    """

    def __init__(self, logger: StructuredLogger, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.target = logger

    def emit(self, record: logging.LogRecord) -> None:
        level = LogLevel.from_stdlib(record.levelno)
        event_id = EventId.coerce(getattr(record, "event_id", None))

        error = None
        if record.exc_info and record.exc_info[1] is not None:
            error = record.exc_info[1]

        template = record.msg if isinstance(record.msg, str) else str(record.msg)
        state = FormattedLogValues(template, _record_args(record))

        self.target.log(level, event_id, state, error, lambda _state, _error: record.getMessage())


def _record_args(record: logging.LogRecord) -> tuple[Any, ...]:
    args = record.args
    if not args:
        return ()
    if isinstance(args, Mapping):
        return (args,)
    return tuple(args)
