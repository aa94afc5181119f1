#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Output backends for :class:`TestContext`.

A context picks exactly one backend when it is created:

- :class:`NativeBackend` writes through the wrapped test handle, so output is
  attached to the test report and failures stop only the current test.
- :class:`StandaloneBackend` writes through a structured logger. It is used
  when no test handle exists (scripts, fixtures set up outside a test), and
  its fatal paths exit the process.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, NoReturn, Protocol

from provide.foundation.logger import get_logger

from inttest.evtesting.fields import CallerLocation, join_args, render_fields
from inttest.evtesting.handles import NativeHandle
from inttest.evtesting.levels import LOGGER_METHODS, LogLevel

VALIDATION_FAILURE = "validation failure"

# Keys the structured logger or the failure record already uses.
RESERVED_LOG_KEYS = frozenset({"event"})
FAILURE_LOG_KEYS = RESERVED_LOG_KEYS | {"error", "reason"}
RENAMED_KEY_PREFIX = "fields."


def log_kwargs(fields: Mapping[str, Any], reserved: frozenset[str] = RESERVED_LOG_KEYS) -> dict[str, Any]:
    """Fields as logger keyword arguments, with reserved keys moved under ``fields.``."""
    return {(RENAMED_KEY_PREFIX + key if key in reserved else key): value for key, value in fields.items()}


class Backend(Protocol):
    use_standalone_logger: bool

    def emit(
        self, origin: NativeHandle, level: LogLevel, fields: Mapping[str, Any], args: tuple[Any, ...]
    ) -> None: ...

    def emit_caller(self, origin: NativeHandle, location: CallerLocation) -> None: ...

    def fatal(self, origin: NativeHandle, fields: Mapping[str, Any], message: str) -> NoReturn: ...

    def validation_failure(
        self,
        origin: NativeHandle,
        fields: Mapping[str, Any],
        message: str,
        error: BaseException | None = None,
    ) -> NoReturn: ...


class NativeBackend:
    use_standalone_logger = False

    def emit(
        self, origin: NativeHandle, level: LogLevel, fields: Mapping[str, Any], args: tuple[Any, ...]
    ) -> None:
        if fields:
            origin.log(render_fields(fields))
        origin.log(*args)

    def emit_caller(self, origin: NativeHandle, location: CallerLocation) -> None:
        origin.log(render_fields(location.as_fields()))

    def fatal(self, origin: NativeHandle, fields: Mapping[str, Any], message: str) -> NoReturn:
        if fields:
            origin.log(render_fields(fields))
        origin.fatal(message)

    def validation_failure(
        self,
        origin: NativeHandle,
        fields: Mapping[str, Any],
        message: str,
        error: BaseException | None = None,
    ) -> NoReturn:
        if fields:
            origin.log(render_fields(fields))
        if error is not None:
            detail = f"Expected no error, got {error!r}"
            message = f"{message}: {detail}" if message else detail
        origin.require_true(False, message)
        # Handles must not return from a failed requirement.
        raise AssertionError(message or VALIDATION_FAILURE)

    def __repr__(self) -> str:
        return "NativeBackend()"


class StandaloneBackend:
    """Backend that routes every record through a structured logger."""

    use_standalone_logger = True

    def __init__(self, logger: Any = None) -> None:
        self.logger = logger if logger is not None else get_logger("inttest.evtesting")

    def emit(
        self, origin: NativeHandle, level: LogLevel, fields: Mapping[str, Any], args: tuple[Any, ...]
    ) -> None:
        method = getattr(self.logger, LOGGER_METHODS[level])
        method(join_args(args), **log_kwargs(fields))

    def emit_caller(self, origin: NativeHandle, location: CallerLocation) -> None:
        self.logger.trace(location.text, **location.as_fields())

    def fatal(self, origin: NativeHandle, fields: Mapping[str, Any], message: str) -> NoReturn:
        self.logger.critical(message, **log_kwargs(fields))
        raise SystemExit(1)

    def validation_failure(
        self,
        origin: NativeHandle,
        fields: Mapping[str, Any],
        message: str,
        error: BaseException | None = None,
    ) -> NoReturn:
        extra = log_kwargs(fields, FAILURE_LOG_KEYS)
        if error is not None:
            extra["error"] = error
        if message:
            extra["reason"] = message
        self.logger.critical(VALIDATION_FAILURE, **extra)
        raise SystemExit(1)

    def __repr__(self) -> str:
        return f"StandaloneBackend(logger={self.logger!r})"

# 🔼⚙️🔚
