#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""pytest plugin providing test contexts and pylonsd fixtures.

Enable it from a ``conftest.py``:

    pytest_plugins = ["inttest.pytest_plugin"]

With ``--evt-fail-fast`` the first fatal failure dispatched by any context
skips every test that has not started yet.
"""

from __future__ import annotations

from collections.abc import Generator
import threading
from typing import Any

from provide.foundation.logger import get_logger
import pytest

from inttest.config import CLIOptions, ConfigurationError
from inttest.evtesting import FAIL_EVENT, PytestHandle, TestContext, default_registry, new_context
from inttest.node import PylonsdRunner

log = get_logger(__name__)


class AbortSwitch:
    """Set once by the ``FAIL`` listener; checked before each test starts."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def trip(self) -> None:
        if not self._event.is_set():
            log.warning("Failure dispatched, remaining tests will be skipped")
        self._event.set()

    @property
    def tripped(self) -> bool:
        return self._event.is_set()


_handle_key = pytest.StashKey[PytestHandle]()
_abort_key = pytest.StashKey[AbortSwitch]()


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("inttest", "pylonsd integration testing")
    group.addoption("--pylons-node", dest="pylons_node", default=None, help="Comma-separated node URLs.")
    group.addoption("--pylons-max-wait-block", dest="pylons_max_wait_block", type=int, default=None)
    group.addoption("--pylons-max-broadcast", dest="pylons_max_broadcast", type=int, default=None)
    group.addoption("--pylonsd-bin", dest="pylonsd_bin", default=None, help="Path to the pylonsd binary.")
    group.addoption(
        "--evt-fail-fast",
        dest="evt_fail_fast",
        action="store_true",
        default=False,
        help="Skip remaining tests after the first dispatched FAIL event.",
    )


def pytest_configure(config: pytest.Config) -> None:
    if config.getoption("evt_fail_fast"):
        switch = AbortSwitch()
        config.stash[_abort_key] = switch
        default_registry.register(FAIL_EVENT, switch.trip)


def pytest_unconfigure(config: pytest.Config) -> None:
    if _abort_key in config.stash:
        default_registry.unregister(FAIL_EVENT)


def pytest_runtest_setup(item: pytest.Item) -> None:
    switch = item.config.stash.get(_abort_key, None)
    if switch is not None and switch.tripped:
        pytest.skip("skipped after an earlier test dispatched FAIL")


@pytest.hookimpl(wrapper=True)
def pytest_runtest_call(item: pytest.Item) -> Generator[None, Any, Any]:
    try:
        result = yield
    finally:
        handle = item.stash.get(_handle_key, None)
        if handle is not None and handle.is_parallel:
            item.user_properties.append(("parallel", True))
    if handle is not None and handle.failed_subtests:
        pytest.fail(f"sub-tests failed: {', '.join(handle.failed_subtests)}", pytrace=False)
    return result


def options_from_config(config: pytest.Config) -> CLIOptions:
    """Environment options overridden by any ``--pylons-*`` command-line flags."""
    options = CLIOptions.from_env()
    overrides = {
        "custom_node": config.getoption("pylons_node"),
        "max_wait_block": config.getoption("pylons_max_wait_block"),
        "max_broadcast": config.getoption("pylons_max_broadcast"),
        "daemon_path": config.getoption("pylonsd_bin"),
    }
    for name, value in overrides.items():
        if value is None:
            continue
        try:
            setattr(options, name, value)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e
    return options


@pytest.fixture(scope="session")
def cli_options(pytestconfig: pytest.Config) -> CLIOptions:
    return options_from_config(pytestconfig)


@pytest.fixture(scope="session")
def pylonsd(cli_options: CLIOptions) -> PylonsdRunner:
    return PylonsdRunner(cli_options)


@pytest.fixture
def evt(request: pytest.FixtureRequest) -> TestContext:
    """A :class:`TestContext` bound to the running test."""
    handle = PytestHandle(request.node.name)
    request.node.stash[_handle_key] = handle
    return new_context(handle)

# 🔼⚙️🔚
