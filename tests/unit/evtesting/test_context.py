#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Tests for TestContext construction, fields, logging and failures."""

from __future__ import annotations

import pytest
from provide.testkit.mocking import Mock

from inttest.evtesting import (
    FAIL_EVENT,
    LogLevel,
    NativeBackend,
    PytestHandle,
    StandaloneBackend,
    TestContext,
    default_registry,
    new_context,
)


class TestNewContext:
    """Tests for new_context()."""

    def test_wraps_live_handle_in_native_mode(self, handle):
        ctx = new_context(handle)

        assert ctx.origin is handle
        assert ctx.use_standalone_logger is False
        assert isinstance(ctx.backend, NativeBackend)
        assert ctx.log_level == LogLevel.DEBUG
        assert ctx.fields == {}

    def test_without_handle_uses_standalone_logger(self, struct_logger):
        ctx = new_context(None, logger=struct_logger)

        assert ctx.use_standalone_logger is True
        assert isinstance(ctx.backend, StandaloneBackend)
        assert isinstance(ctx.origin, PytestHandle)
        assert ctx.log_level == LogLevel.TRACE

    def test_uses_process_registry_by_default(self, handle):
        assert new_context(handle).registry is default_registry

    def test_accepts_isolated_registry(self, handle, registry):
        assert new_context(handle, registry=registry).registry is registry

    def test_log_level_override(self, handle):
        ctx = new_context(handle, log_level=LogLevel.WARN)
        assert ctx.log_level == LogLevel.WARN

    def test_context_is_immutable(self, handle):
        ctx = new_context(handle)
        with pytest.raises(AttributeError):
            ctx.log_level = LogLevel.TRACE  # type: ignore[misc]


class TestWithFields:
    """Tests for field derivation."""

    def test_does_not_mutate_parent(self, handle):
        parent = new_context(handle).with_fields({"account": "alice"})

        child = parent.with_fields({"recipe": "r1"})

        assert parent.fields == {"account": "alice"}
        assert child.fields == {"account": "alice", "recipe": "r1"}

    def test_new_entries_win_on_collision(self, handle):
        parent = new_context(handle).with_fields({"account": "alice", "step": 1})

        child = parent.with_fields({"step": 2})

        assert child.fields == {"account": "alice", "step": 2}
        assert parent.fields["step"] == 1

    def test_shares_handle_backend_and_level(self, handle, registry):
        parent = new_context(handle, registry=registry)

        child = parent.with_fields({"k": "v"})

        assert child.origin is parent.origin
        assert child.backend is parent.backend
        assert child.log_level == parent.log_level
        assert child.registry is registry

    def test_input_mapping_is_copied(self, handle):
        fields = {"a": 1}
        ctx = new_context(handle).with_fields(fields)

        fields["b"] = 2

        assert ctx.fields == {"a": 1}

    def test_fields_cannot_be_changed_in_place(self, handle):
        parent = new_context(handle).with_fields({"account": "alice"})
        child = parent.with_fields({"recipe": "r1"})

        with pytest.raises(TypeError):
            parent.fields["account"] = "bob"
        with pytest.raises(TypeError):
            del child.fields["recipe"]

        assert parent.fields == {"account": "alice"}
        assert child.fields == {"account": "alice", "recipe": "r1"}

    def test_format_fields_uses_insertion_order(self, handle):
        ctx = new_context(handle).with_fields({"zeta": 1, "alpha": "two", "mid": None})

        assert ctx.format_fields() == " zeta=1 alpha=two mid=None"


class TestNativeLogging:
    """Tests for logging through the native handle."""

    def test_info_logs_fields_then_message(self, handle):
        ctx = new_context(handle).with_fields({"account": "alice"})

        ctx.info("creating cookbook", 3)

        assert handle.output == [" account=alice", "creating cookbook 3"]

    def test_log_and_info_do_not_capture_caller(self, handle):
        ctx = new_context(handle)

        ctx.log("plain")
        ctx.info("info")

        assert handle.output == ["plain", "info"]

    def test_warn_captures_caller(self, handle):
        ctx = new_context(handle)

        ctx.warn("careful")

        assert len(handle.output) == 2
        assert handle.output[0].startswith(" file_line=")
        assert " func=" in handle.output[0]
        assert handle.output[1] == "careful"

    def test_debug_emitted_at_default_level(self, handle):
        new_context(handle).debug("details")

        assert handle.output[-1] == "details"

    def test_trace_suppressed_at_default_level(self, handle):
        new_context(handle).trace("very verbose")

        assert handle.output == []

    @pytest.mark.parametrize(
        ("level", "method"),
        [
            (LogLevel.ERROR, "warn"),
            (LogLevel.WARN, "info"),
            (LogLevel.INFO, "debug"),
            (LogLevel.FATAL, "error"),
        ],
    )
    def test_below_threshold_produces_no_output(self, handle, level, method):
        ctx = new_context(handle, log_level=level)

        getattr(ctx, method)("suppressed")

        assert handle.output == []

    def test_log_ignores_threshold(self, handle):
        new_context(handle, log_level=LogLevel.PANIC).log("always")

        assert handle.output == ["always"]


class TestStandaloneLogging:
    """Tests for logging through the structured logger."""

    def test_info_goes_to_logger_with_fields(self, struct_logger):
        ctx = new_context(None, logger=struct_logger).with_fields({"account": "alice"})

        ctx.info("created", "cookbook")

        struct_logger.info.assert_called_once_with("created cookbook", account="alice")
        struct_logger.trace.assert_not_called()

    def test_warn_traces_caller_then_warns(self, struct_logger):
        ctx = new_context(None, logger=struct_logger)

        ctx.warn("careful")

        struct_logger.trace.assert_called_once()
        _, kwargs = struct_logger.trace.call_args
        assert set(kwargs) == {"file_line", "func"}
        struct_logger.warning.assert_called_once_with("careful")

    def test_trace_emitted_at_trace_level(self, struct_logger):
        ctx = new_context(None, logger=struct_logger).with_fields({"n": 1})

        ctx.trace("step")

        # One trace call for the caller location, one for the record itself.
        assert struct_logger.trace.call_count == 2
        struct_logger.trace.assert_called_with("step", n=1)

    def test_event_field_is_renamed_not_passed_twice(self, struct_logger):
        ctx = new_context(None, logger=struct_logger).with_fields({"event": "create_cookbook", "account": "alice"})

        ctx.info("tx sent")

        struct_logger.info.assert_called_once_with(
            "tx sent", **{"fields.event": "create_cookbook", "account": "alice"}
        )

    def test_failure_keeps_user_error_and_reason_fields(self, struct_logger, registry):
        error = ValueError("bad signature")
        ctx = new_context(None, logger=struct_logger, registry=registry).with_fields(
            {"error": "stale", "reason": "retry", "event": "sign"}
        )

        with pytest.raises(SystemExit):
            ctx.must_be_none(error, "sign failed")

        struct_logger.critical.assert_called_once_with(
            "validation failure",
            **{
                "fields.error": "stale",
                "fields.reason": "retry",
                "fields.event": "sign",
                "error": error,
                "reason": "sign failed",
            },
        )

    def test_suppressed_call_reaches_no_logger_method(self):
        struct_logger = Mock()
        ctx = new_context(None, logger=struct_logger, log_level=LogLevel.INFO)

        ctx.debug("hidden")

        assert struct_logger.method_calls == []


class TestFatal:
    """Tests for fatal and fatalf."""

    def test_native_fatal_dispatches_then_fails(self, handle, registry):
        listener = Mock()
        registry.register(FAIL_EVENT, listener)
        ctx = new_context(handle, registry=registry).with_fields({"tx": "abc"})

        with pytest.raises(pytest.fail.Exception, match="broadcast failed"):
            ctx.fatal("broadcast", "failed")

        listener.assert_called_once_with()
        assert handle.failed is True
        assert " tx=abc" in handle.output
        assert handle.output[0].startswith(" file_line=")

    def test_native_fatalf_formats_message(self, handle, registry):
        ctx = new_context(handle, registry=registry)

        with pytest.raises(pytest.fail.Exception, match="height 7 < 9"):
            ctx.fatalf("height %d < %d", 7, 9)

    def test_standalone_fatal_logs_critical_and_exits(self, struct_logger, registry):
        listener = Mock()
        registry.register(FAIL_EVENT, listener)
        ctx = new_context(None, logger=struct_logger, registry=registry).with_fields({"tx": "abc"})

        with pytest.raises(SystemExit) as exc_info:
            ctx.fatal("gave up")

        assert exc_info.value.code == 1
        listener.assert_called_once_with()
        struct_logger.trace.assert_called_once()
        struct_logger.critical.assert_called_once_with("gave up", tx="abc")


class TestAssertions:
    """Tests for must_be_true and must_be_none."""

    def test_must_be_true_passes_silently(self, handle, registry):
        listener = Mock()
        registry.register(FAIL_EVENT, listener)

        new_context(handle, registry=registry).must_be_true(True)

        listener.assert_not_called()
        assert handle.output == []

    def test_must_be_true_native_failure(self, handle, registry):
        listener = Mock()
        registry.register(FAIL_EVENT, listener)

        with pytest.raises(pytest.fail.Exception):
            new_context(handle, registry=registry).must_be_true(False)

        listener.assert_called_once_with()

    def test_must_be_none_native_failure_reports_error(self, handle, registry):
        ctx = new_context(handle, registry=registry)

        with pytest.raises(pytest.fail.Exception, match="key not found"):
            ctx.must_be_none(KeyError("key not found"), "error getting account address")

    def test_must_be_none_accepts_none(self, handle, registry):
        new_context(handle, registry=registry).must_be_none(None)

        assert handle.failed is False

    def test_must_be_true_standalone_failure(self, struct_logger, registry):
        ctx = new_context(None, logger=struct_logger, registry=registry)

        with pytest.raises(SystemExit):
            ctx.must_be_true(False)

        struct_logger.trace.assert_called_once()
        struct_logger.critical.assert_called_once_with("validation failure")

    def test_must_be_none_standalone_attaches_error(self, struct_logger, registry):
        error = RuntimeError("boom")
        ctx = new_context(None, logger=struct_logger, registry=registry).with_fields({"account": "bob"})

        with pytest.raises(SystemExit):
            ctx.must_be_none(error)

        struct_logger.critical.assert_called_once_with("validation failure", account="bob", error=error)

    def test_failure_dispatched_once_per_call(self, handle, registry):
        listener = Mock()
        registry.register(FAIL_EVENT, listener)
        ctx = new_context(handle, registry=registry)

        for _ in range(2):
            with pytest.raises(pytest.fail.Exception):
                ctx.must_be_none(ValueError("bad"))

        assert listener.call_count == 2


class TestParallel:
    def test_delegates_to_handle(self, handle):
        new_context(handle).parallel()

        assert handle.is_parallel is True


def test_test_context_is_not_collected():
    assert TestContext.__test__ is False

# 🔼⚙️🔚
