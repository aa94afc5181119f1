#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Field rendering and caller-location capture."""

from __future__ import annotations

from collections.abc import Mapping
import sys
from typing import Any

from attrs import frozen

# Frames from modules under this prefix belong to the wrapper itself and are
# never reported as the caller.
INTERNAL_MODULE_PREFIX = "inttest.evtesting"

Fields = dict[str, Any]


def render_fields(fields: Mapping[str, Any]) -> str:
    """Render fields as ``" key=value"`` pairs in insertion order."""
    return "".join(f" {key}={value}" for key, value in fields.items())


def join_args(args: tuple[Any, ...]) -> str:
    return " ".join(str(arg) for arg in args)


@frozen
class CallerLocation:
    """Source location of the code that called into the context."""

    file: str
    line: int
    function: str

    @property
    def file_line(self) -> str:
        return f"{self.file}:{self.line}"

    @property
    def text(self) -> str:
        return f"{self.file_line} {self.function}"

    def as_fields(self) -> Fields:
        return {"file_line": self.file_line, "func": self.function}


def _is_internal(module_name: str) -> bool:
    return module_name == INTERNAL_MODULE_PREFIX or module_name.startswith(INTERNAL_MODULE_PREFIX + ".")


def find_caller() -> CallerLocation:
    """Return the first frame on the stack outside the evtesting package.

    Every frame belonging to ``inttest.evtesting`` is skipped, so the result is
    the same however many context methods are nested between the test code
    and this call.
    """
    frame = sys._getframe(1)
    while frame is not None and _is_internal(frame.f_globals.get("__name__", "")):
        frame = frame.f_back
    if frame is None:
        return CallerLocation(file="unknown", line=0, function="unknown")
    code = frame.f_code
    module = frame.f_globals.get("__name__", "")
    function = f"{module}.{code.co_qualname}" if module else code.co_qualname
    return CallerLocation(file=code.co_filename, line=frame.f_lineno, function=function)

# 🔼⚙️🔚
