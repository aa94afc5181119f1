#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Shared pytest configuration and fixtures for the harness tests."""

from __future__ import annotations

import pytest
from provide.testkit.common.fixtures import (  # noqa: F401
    captured_stderr_for_foundation,
    setup_foundation_telemetry_for_test,
)
from provide.testkit.mocking import Mock

from inttest.config import CLIOptions
from inttest.evtesting import EventRegistry, PytestHandle
from inttest.node import PylonsdRunner
from tests.helpers.node_testing import SequenceRandom

pytest_plugins = ["inttest.pytest_plugin"]


@pytest.fixture
def registry() -> EventRegistry:
    """An isolated event registry so tests never touch the process-wide one."""
    return EventRegistry()


@pytest.fixture
def handle() -> PytestHandle:
    """A native handle whose output can be inspected."""
    return PytestHandle("test")


@pytest.fixture
def struct_logger() -> Mock:
    """Stand-in for the structured logger used in standalone mode."""
    return Mock()


@pytest.fixture
def cli_opts(tmp_path) -> CLIOptions:
    return CLIOptions(
        custom_node="tcp://node-a:26657,tcp://node-b:26657",
        daemon_path=tmp_path / "bin" / "pylonsd",
    )


@pytest.fixture
def runner(cli_opts: CLIOptions) -> PylonsdRunner:
    """A runner whose node choice always picks the first configured node."""
    return PylonsdRunner(cli_opts, rng=SequenceRandom([0]))

# 🔼⚙️🔚
