#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Native per-test handles wrapped by :class:`TestContext`."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, NoReturn, Protocol

from provide.foundation.logger import get_logger
import pytest

from inttest.evtesting.fields import join_args

log = get_logger(__name__)


class NativeHandle(Protocol):
    """Capabilities the context needs from the underlying test framework."""

    name: str

    def run(self, name: str, body: Callable[[NativeHandle], None]) -> bool: ...

    def log(self, *args: Any) -> None: ...

    def fatal(self, *args: Any) -> NoReturn: ...

    def parallel(self) -> None: ...

    def require_true(self, value: bool, message: str = "") -> None: ...


class PytestHandle:
    """A :class:`NativeHandle` backed by pytest.

    Log lines are printed, so pytest captures them per test and shows them
    with the failure report. Fatal calls go through ``pytest.fail`` and halt
    the current test or sub-test. Sub-tests run inline; a failed sub-test
    marks its parent failed but lets the parent continue.
    """

    def __init__(self, name: str, parent: PytestHandle | None = None) -> None:
        self.name = name
        self.parent = parent
        self.output: list[str] = []
        self.failed = False
        self.is_parallel = False
        self.failed_subtests: list[str] = []

    def log(self, *args: Any) -> None:
        line = join_args(args)
        self.output.append(line)
        print(f"{self.name}: {line}")

    def fatal(self, *args: Any) -> NoReturn:
        message = join_args(args)
        self.log(message)
        self.failed = True
        pytest.fail(message)

    def require_true(self, value: bool, message: str = "") -> None:
        if value:
            return
        self.failed = True
        pytest.fail(message or "Should be true")

    def parallel(self) -> None:
        """Mark the test as safe to run in parallel.

        pytest itself runs tests one at a time; the plugin reports the mark as
        the ``("parallel", True)`` user property of the test report.
        """
        self.is_parallel = True

    def run(self, name: str, body: Callable[[NativeHandle], None]) -> bool:
        child = PytestHandle(f"{self.name}/{name}", parent=self)
        log.debug("Running sub-test", subtest=child.name)
        try:
            body(child)
        except pytest.skip.Exception as e:
            child.log(f"SKIP: {e}")
        except (pytest.fail.Exception, AssertionError) as e:
            child.failed = True
            child.output.append(str(e))
        if child.failed:
            self.failed = True
            self.failed_subtests.append(child.name)
            self.failed_subtests.extend(child.failed_subtests)
            log.debug("Sub-test failed", subtest=child.name)
        return not child.failed

    def __repr__(self) -> str:
        return f"PytestHandle({self.name!r})"

# 🔼⚙️🔚
