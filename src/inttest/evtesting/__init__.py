#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Structured, leveled test contexts with cross-test failure dispatch."""

from inttest.evtesting.backends import NativeBackend, StandaloneBackend
from inttest.evtesting.context import TestContext, new_context
from inttest.evtesting.events import FAIL_EVENT, EventRegistry, default_registry
from inttest.evtesting.fields import CallerLocation, Fields, render_fields
from inttest.evtesting.handles import NativeHandle, PytestHandle
from inttest.evtesting.levels import LogLevel

__all__ = [
    "FAIL_EVENT",
    "CallerLocation",
    "EventRegistry",
    "Fields",
    "LogLevel",
    "NativeBackend",
    "NativeHandle",
    "PytestHandle",
    "StandaloneBackend",
    "TestContext",
    "default_registry",
    "new_context",
    "render_fields",
]

# 🔼⚙️🔚
