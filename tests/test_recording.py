"""
Tests for RecordingLogger behind a MockableLoggerAdapter.

Covers:
- One LoggedCall per routed call, with level, shape, args, event id, error
- Filtering by level and shape
- Ring buffer bound
- Scopes (context manager, idempotent close, active_scopes)
- is_enabled against min_level
- from_config
"""

import threading

import pytest

from mocklog.adapter import MockableLoggerAdapter
from mocklog.config import AdapterConfig
from mocklog.diagnostics import Diagnostics
from mocklog.recording import RecordingLogger, RecordingScope
from mocklog.records import EventId, LogLevel
from mocklog.routing import CallShape


@pytest.fixture(autouse=True)
def reset_diagnostics():
    Diagnostics.reset()
    yield
    Diagnostics.reset()


@pytest.fixture
def recorder():
    return RecordingLogger()


@pytest.fixture
def adapter(recorder):
    return MockableLoggerAdapter(recorder)


# ═══════════════════════════════════════════════════════════════════
#  Recording
# ═══════════════════════════════════════════════════════════════════

class TestRecording:
    def test_one_call_per_log(self, adapter, recorder):
        adapter.information("Info with {Name}", "value")
        assert recorder.count == 1
        logged = recorder.calls[0]
        assert logged.level == LogLevel.INFORMATION
        assert logged.shape == "PLAIN"
        assert logged.message == "Info with {Name}"
        assert logged.args == ("value",)
        assert logged.formatted == "Info with value"
        assert logged.event_id is None
        assert logged.error is None

    def test_event_and_error_recorded(self, adapter, recorder):
        err = Exception("critical")
        adapter.critical("Critical with EventId and exception", event_id=EventId(6, "CriticalEvent"), exc=err)
        logged = recorder.calls[0]
        assert logged.shape == "WITH_BOTH"
        assert logged.event_id == EventId(6, "CriticalEvent")
        assert logged.error is err

    def test_level_none_not_recorded(self, adapter, recorder):
        adapter.log(LogLevel.NONE, EventId(1), "Test", None, lambda s, e: s)
        assert recorder.count == 0

    def test_filter_by_level_and_shape(self, adapter, recorder):
        adapter.information("Information logged")
        adapter.warning("Warning logged")
        adapter.warning("Warning with exception", exc=ValueError("w"))
        adapter.error("Error logged")

        assert recorder.messages(LogLevel.WARNING) == ["Warning logged", "Warning with exception"]
        with_error = recorder.get_calls(LogLevel.WARNING, CallShape.WITH_ERROR)
        assert [c.message for c in with_error] == ["Warning with exception"]
        assert recorder.messages() == [
            "Information logged", "Warning logged", "Warning with exception", "Error logged",
        ]

    def test_every_contract_member_records(self, recorder):
        err = ValueError("x")
        event_id = EventId(9, "E")
        for level in (LogLevel.TRACE, LogLevel.DEBUG, LogLevel.INFORMATION,
                      LogLevel.WARNING, LogLevel.ERROR, LogLevel.CRITICAL):
            stem = level.method_stem
            getattr(recorder, f"log_{stem}")("m")
            getattr(recorder, f"log_{stem}_error")(err, "m")
            getattr(recorder, f"log_{stem}_event")(event_id, "m")
            getattr(recorder, f"log_{stem}_event_error")(event_id, err, "m")
        assert recorder.count == 24
        for level in (LogLevel.TRACE, LogLevel.CRITICAL):
            shapes = [c.shape for c in recorder.get_calls(level)]
            assert shapes == ["PLAIN", "WITH_ERROR", "WITH_EVENT_ID", "WITH_BOTH"]

    def test_ring_buffer_bound(self):
        recorder = RecordingLogger(ring_buffer_size=3)
        adapter = MockableLoggerAdapter(recorder)
        for i in range(5):
            adapter.debug("msg {I}", i)
        assert recorder.count == 3
        assert [c.args for c in recorder.calls] == [(2,), (3,), (4,)]

    def test_clear(self, adapter, recorder):
        adapter.debug("m")
        recorder.clear()
        assert recorder.count == 0

    def test_concurrent_logging(self, adapter, recorder):
        def worker(n):
            for i in range(50):
                adapter.information("worker {N} step {I}", n, i)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert recorder.count == 400


# ═══════════════════════════════════════════════════════════════════
#  Scopes
# ═══════════════════════════════════════════════════════════════════

class TestScopes:
    def test_begin_scope_returns_recording_scope(self, adapter, recorder):
        scope = adapter.begin_scope("Scope1")
        assert isinstance(scope, RecordingScope)
        assert recorder.active_scopes == ["Scope1"]
        scope.close()
        assert recorder.active_scopes == []

    def test_nested_scopes(self, adapter, recorder):
        with adapter.scope("outer"):
            with adapter.scope({"RequestId": "abc-123"}):
                assert recorder.active_scopes == ["outer", {"RequestId": "abc-123"}]
            assert recorder.active_scopes == ["outer"]
        assert recorder.active_scopes == []

    def test_close_idempotent(self, recorder):
        scope = recorder.begin_scope("s")
        scope.close()
        scope.close()
        assert scope.closed
        assert recorder.active_scopes == []


# ═══════════════════════════════════════════════════════════════════
#  is_enabled / config
# ═══════════════════════════════════════════════════════════════════

class TestIsEnabled:
    def test_min_level(self):
        recorder = RecordingLogger(min_level=LogLevel.WARNING)
        adapter = MockableLoggerAdapter(recorder)
        assert not adapter.is_enabled(LogLevel.INFORMATION)
        assert adapter.is_enabled(LogLevel.WARNING)
        assert adapter.is_enabled(LogLevel.CRITICAL)

    def test_none_never_enabled(self, recorder):
        assert not recorder.is_enabled(LogLevel.NONE)

    def test_min_level_by_name(self):
        assert RecordingLogger(min_level="error").min_level == LogLevel.ERROR


class TestFromConfig:
    def test_from_config(self):
        config = AdapterConfig.from_yaml_string("min_level: debug\nring_buffer_size: 2\n")
        recorder = RecordingLogger.from_config(config)
        assert recorder.min_level == LogLevel.DEBUG
        assert not recorder.is_enabled(LogLevel.TRACE)
        adapter = MockableLoggerAdapter.from_config(recorder, config)
        for i in range(3):
            adapter.information("{I}", i)
        assert recorder.count == 2
