"""
mocklog: structured logging that tests can assert on.

Application code logs through StructuredLogger. In tests, a
MockableLoggerAdapter turns every generic log call into exactly one call
on the narrow MockableLogger contract, which is easy to mock.
"""

from mocklog.records import EventId, LogLevel, LoggedCall
from mocklog.formatted import FormattedLogValues, ORIGINAL_FORMAT_KEY, format_template
from mocklog.contract import MockableLogger
from mocklog.extract import ExtractionResult, StateExtractor, extract_state
from mocklog.routing import CallShape, MethodRouter
from mocklog.logger import StructuredLogger
from mocklog.adapter import MockableLoggerAdapter
from mocklog.recording import RecordingLogger, RecordingScope
from mocklog.bridge import MockableLogHandler
from mocklog.config import AdapterConfig, DiagnosticsConfig
from mocklog.diagnostics import Diagnostics, DiagnosticRecord

__all__ = [
    "EventId",
    "LogLevel",
    "LoggedCall",
    "FormattedLogValues",
    "ORIGINAL_FORMAT_KEY",
    "format_template",
    "MockableLogger",
    "ExtractionResult",
    "StateExtractor",
    "extract_state",
    "CallShape",
    "MethodRouter",
    "StructuredLogger",
    "MockableLoggerAdapter",
    "RecordingLogger",
    "RecordingScope",
    "MockableLogHandler",
    "AdapterConfig",
    "DiagnosticsConfig",
    "Diagnostics",
    "DiagnosticRecord",
]
