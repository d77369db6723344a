"""
Tests for the method router.

Covers:
- CallShape classification (event id presence, error presence)
- Method-name table
- route(): one call per invocation, args normalization, NONE gate
- Error propagation
- describe()
"""

from unittest.mock import MagicMock, call

import pytest

from mocklog.contract import MockableLogger
from mocklog.diagnostics import Diagnostics, ROUTE_TAG
from mocklog.records import EventId, LogLevel, ROUTABLE_LEVELS
from mocklog.routing import CallShape, METHOD_NAMES, MethodRouter


@pytest.fixture(autouse=True)
def reset_diagnostics():
    Diagnostics.reset()
    yield
    Diagnostics.reset()


@pytest.fixture
def sink():
    return MagicMock(spec=MockableLogger)


@pytest.fixture
def router(sink):
    return MethodRouter(sink)


# ═══════════════════════════════════════════════════════════════════
#  CallShape
# ═══════════════════════════════════════════════════════════════════

class TestCallShape:
    def test_plain(self):
        assert CallShape.classify(EventId(), None) is CallShape.PLAIN

    def test_error_only(self):
        assert CallShape.classify(EventId(), ValueError()) is CallShape.WITH_ERROR

    def test_event_only(self):
        assert CallShape.classify(EventId(3), None) is CallShape.WITH_EVENT_ID

    def test_both(self):
        assert CallShape.classify(EventId(3, "E"), ValueError()) is CallShape.WITH_BOTH

    def test_name_without_id_counts(self):
        assert CallShape.classify(EventId(0, "Named"), None) is CallShape.WITH_EVENT_ID

    def test_empty_name_and_zero_id_absent(self):
        assert CallShape.classify(EventId(0, ""), None) is CallShape.PLAIN

    def test_negative_id_counts(self):
        assert CallShape.classify(EventId(-1), None) is CallShape.WITH_EVENT_ID

    def test_none_event_id_absent(self):
        assert CallShape.classify(None, KeyError()) is CallShape.WITH_ERROR


# ═══════════════════════════════════════════════════════════════════
#  Method names
# ═══════════════════════════════════════════════════════════════════

class TestMethodNames:
    def test_table_covers_every_routable_level_and_shape(self):
        assert len(METHOD_NAMES) == 6 * 4

    def test_every_name_exists_on_contract(self):
        for name in METHOD_NAMES.values():
            assert callable(getattr(MockableLogger, name))

    @pytest.mark.parametrize("shape,expected", [
        (CallShape.PLAIN, "log_warning"),
        (CallShape.WITH_ERROR, "log_warning_error"),
        (CallShape.WITH_EVENT_ID, "log_warning_event"),
        (CallShape.WITH_BOTH, "log_warning_event_error"),
    ])
    def test_warning_family(self, shape, expected):
        assert MethodRouter.method_name(LogLevel.WARNING, shape) == expected

    def test_none_not_routable(self):
        with pytest.raises(ValueError, match="not routable"):
            MethodRouter.method_name(LogLevel.NONE, CallShape.PLAIN)


# ═══════════════════════════════════════════════════════════════════
#  route()
# ═══════════════════════════════════════════════════════════════════

class TestRoute:
    @pytest.mark.parametrize("level", ROUTABLE_LEVELS, ids=lambda l: l.name)
    def test_exactly_one_call(self, router, sink, level):
        router.route(level, EventId(), None, "m", None)
        assert sink.method_calls == [getattr(call, f"log_{level.method_stem}")("m")]

    def test_none_args_normalized_to_empty(self, router, sink):
        router.route(LogLevel.DEBUG, EventId(), None, "hello", None)
        sink.log_debug.assert_called_once_with("hello")

    def test_args_expanded_positionally(self, router, sink):
        router.route(LogLevel.INFORMATION, EventId(), None, "{A} {B}", [1, 2])
        sink.log_information.assert_called_once_with("{A} {B}", 1, 2)

    def test_error_shape(self, router, sink):
        err = ValueError("bad")
        router.route(LogLevel.ERROR, EventId(), err, "m", ("x",))
        sink.log_error_error.assert_called_once_with(err, "m", "x")

    def test_event_shape(self, router, sink):
        router.route(LogLevel.WARNING, EventId(4, "WarningEvent"), None, "Warning with EventId", ())
        sink.log_warning_event.assert_called_once_with(EventId(4, "WarningEvent"), "Warning with EventId")

    def test_both_shape(self, router, sink):
        err = RuntimeError("crash")
        router.route(LogLevel.CRITICAL, EventId(6, "CriticalEvent"), err, "m", None)
        sink.log_critical_event_error.assert_called_once_with(EventId(6, "CriticalEvent"), err, "m")

    def test_null_message_passed_through(self, router, sink):
        router.route(LogLevel.TRACE, EventId(), None, None, None)
        sink.log_trace.assert_called_once_with(None)

    def test_level_none_no_calls(self, router, sink):
        router.route(LogLevel.NONE, EventId(1, "E"), ValueError(), "m", [1])
        assert sink.method_calls == []

    def test_int_level_accepted(self, router, sink):
        router.route(3, EventId(), None, "m", None)
        sink.log_warning.assert_called_once_with("m")

    def test_sink_error_propagates(self, router, sink):
        sink.log_information.side_effect = ConnectionError("sink gone")
        with pytest.raises(ConnectionError, match="sink gone"):
            router.route(LogLevel.INFORMATION, EventId(), None, "m", None)

    def test_dispatch_recorded_when_tag_active(self, router, sink):
        Diagnostics.instance().activate_tag(ROUTE_TAG)
        router.route(LogLevel.INFORMATION, EventId(), None, "m", [1, 2])
        record = Diagnostics.instance().get_recent(tags={ROUTE_TAG})[-1]
        assert record.context == {"method": "log_information", "arg_count": 2}

    def test_dispatch_not_recorded_by_default(self, router, sink):
        router.route(LogLevel.INFORMATION, EventId(), None, "m", None)
        assert Diagnostics.instance().count == 0


class TestDescribe:
    def test_describe(self, router):
        desc = router.describe()
        assert desc["methods"]["CRITICAL"]["WITH_BOTH"] == "log_critical_event_error"
        assert desc["methods"]["TRACE"]["PLAIN"] == "log_trace"
        assert "NONE" not in desc["methods"]
