#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Severity levels for test context logging."""

from __future__ import annotations

from enum import IntEnum


class LogLevel(IntEnum):
    """Ordinal severity threshold.

    A context emits a record of severity ``S`` only when its configured level
    is at least ``S``; ``TRACE`` is the most verbose setting.
    """

    PANIC = 0
    FATAL = 1
    ERROR = 2
    WARN = 3
    INFO = 4
    DEBUG = 5
    TRACE = 6


# Structured logger method used for each severity in standalone mode.
LOGGER_METHODS = {
    LogLevel.PANIC: "critical",
    LogLevel.FATAL: "critical",
    LogLevel.ERROR: "error",
    LogLevel.WARN: "warning",
    LogLevel.INFO: "info",
    LogLevel.DEBUG: "debug",
    LogLevel.TRACE: "trace",
}

# 🔼⚙️🔚
