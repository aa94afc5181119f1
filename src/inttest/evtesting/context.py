#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Test context wrapper with structured fields and failure dispatch.

Usage:
    def test_create_cookbook(evt):
        ctx = evt.with_fields({"account": "alice"})
        ctx.info("creating cookbook")

        def check_recipe(sub):
            sub.must_be_true(recipe_exists())

        evt.run("recipe", check_recipe)
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any, NoReturn

from attrs import evolve, field, frozen

from inttest.evtesting.backends import Backend, NativeBackend, StandaloneBackend
from inttest.evtesting.events import FAIL_EVENT, EventRegistry, default_registry
from inttest.evtesting.fields import find_caller, join_args, render_fields
from inttest.evtesting.handles import NativeHandle, PytestHandle
from inttest.evtesting.levels import LogLevel


def _frozen_fields(fields: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(fields))


@frozen
class TestContext:
    """A native test handle decorated with fields, a log level and a backend.

    Instances are immutable; :meth:`with_fields` and :meth:`run` derive new
    contexts that share the handle (or bind a sub-test's handle), backend,
    level and registry.
    """

    __test__ = False

    origin: NativeHandle
    backend: Backend
    fields: Mapping[str, Any] = field(factory=dict, converter=_frozen_fields)
    log_level: LogLevel = field(default=LogLevel.DEBUG, converter=LogLevel)
    registry: EventRegistry = field(default=default_registry)

    @property
    def use_standalone_logger(self) -> bool:
        return self.backend.use_standalone_logger

    def with_fields(self, fields: Mapping[str, Any]) -> TestContext:
        """Return a copy of this context with ``fields`` merged into its own."""
        return evolve(self, fields={**self.fields, **fields})

    def run(self, name: str, body: Callable[[TestContext], None]) -> bool:
        """Run ``body`` as a named sub-test and report whether it passed."""

        def _subtest(handle: NativeHandle) -> None:
            body(evolve(self, origin=handle))

        return self.origin.run(name, _subtest)

    def dispatch_event(self, event: str) -> None:
        self.registry.dispatch(event)

    def format_fields(self) -> str:
        return render_fields(self.fields)

    def parallel(self) -> None:
        self.origin.parallel()

    def _print_caller_line(self) -> None:
        self.backend.emit_caller(self.origin, find_caller())

    def _emit(self, level: LogLevel, args: tuple[Any, ...], *, with_caller: bool) -> None:
        if self.log_level < level:
            return
        if with_caller:
            self._print_caller_line()
        self.backend.emit(self.origin, level, self.fields, args)

    def log(self, *args: Any) -> None:
        self.backend.emit(self.origin, LogLevel.INFO, self.fields, args)

    def info(self, *args: Any) -> None:
        self._emit(LogLevel.INFO, args, with_caller=False)

    def warn(self, *args: Any) -> None:
        self._emit(LogLevel.WARN, args, with_caller=True)

    def error(self, *args: Any) -> None:
        self._emit(LogLevel.ERROR, args, with_caller=True)

    def debug(self, *args: Any) -> None:
        self._emit(LogLevel.DEBUG, args, with_caller=True)

    def trace(self, *args: Any) -> None:
        self._emit(LogLevel.TRACE, args, with_caller=True)

    def fatal(self, *args: Any) -> NoReturn:
        self.dispatch_event(FAIL_EVENT)
        self._print_caller_line()
        self.backend.fatal(self.origin, self.fields, join_args(args))

    def fatalf(self, fmt: str, *args: Any) -> NoReturn:
        self.dispatch_event(FAIL_EVENT)
        self._print_caller_line()
        self.backend.fatal(self.origin, self.fields, fmt % args if args else fmt)

    def must_be_true(self, value: bool, message: str = "") -> None:
        """Fail the current test unless ``value`` is true."""
        if value:
            return
        self.dispatch_event(FAIL_EVENT)
        if self.use_standalone_logger:
            self._print_caller_line()
        self.backend.validation_failure(self.origin, self.fields, message)

    def must_be_none(self, err: BaseException | None, message: str = "") -> None:
        """Fail the current test if ``err`` is an error."""
        if err is None:
            return
        self.dispatch_event(FAIL_EVENT)
        if self.use_standalone_logger:
            self._print_caller_line()
        self.backend.validation_failure(self.origin, self.fields, message, error=err)


def new_context(
    origin: NativeHandle | None = None,
    *,
    logger: Any = None,
    registry: EventRegistry | None = None,
    log_level: LogLevel | None = None,
) -> TestContext:
    """Wrap ``origin`` in a :class:`TestContext`.

    With a live handle the context logs through it at DEBUG level. Without
    one, a detached handle is created and every record goes to the
    standalone structured logger at TRACE level.

    Args:
        origin: Native handle of the running test, or None outside a test
        logger: Structured logger for standalone mode (defaults to the
            foundation logger)
        registry: Event registry for failure dispatch (defaults to the
            process-wide registry)
        log_level: Override for the default threshold

    Returns:
        The new context
    """
    if origin is None:
        backend: Backend = StandaloneBackend(logger)
        handle: NativeHandle = PytestHandle("detached")
        level = LogLevel.TRACE
    else:
        backend = NativeBackend()
        handle = origin
        level = LogLevel.DEBUG
    return TestContext(
        origin=handle,
        backend=backend,
        log_level=log_level if log_level is not None else level,
        registry=registry if registry is not None else default_registry,
    )

# 🔼⚙️🔚
