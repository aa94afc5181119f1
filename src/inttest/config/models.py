#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Configuration models for the pylonsd integration harness."""

from __future__ import annotations

from collections.abc import Mapping
import os
from pathlib import Path

from attrs import define, field
from provide.foundation.logger import get_logger

log = get_logger(__name__)

DEFAULT_NODE = "tcp://localhost:26657"
DEFAULT_MAX_WAIT_BLOCK = 3
DEFAULT_MAX_BROADCAST_RETRY = 50

ENV_NODE = "INTTEST_NODE"
ENV_REST_ENDPOINT = "INTTEST_REST_ENDPOINT"
ENV_MAX_WAIT_BLOCK = "INTTEST_MAX_WAIT_BLOCK"
ENV_MAX_BROADCAST = "INTTEST_MAX_BROADCAST"
ENV_PYLONSD_BIN = "PYLONSD_BIN"


class ConfigurationError(ValueError):
    """Raised when harness options are invalid."""


def _non_negative(instance: object, attribute: object, value: int) -> None:
    if value < 0:
        raise ValueError(f"{attribute.name} must be non-negative, got {value}")  # type: ignore[attr-defined]


def default_daemon_path(environ: Mapping[str, str] | None = None) -> Path:
    """Location of the pylonsd binary installed by ``go install``."""
    env = os.environ if environ is None else environ
    gopath = env.get("GOPATH") or str(Path.home() / "go")
    return Path(gopath) / "bin" / "pylonsd"


@define
class CLIOptions:
    """Options controlling how pylonsd is invoked.

    ``max_wait_block`` and ``max_broadcast`` of 0 mean "use the default".
    """

    custom_node: str = field(default=DEFAULT_NODE)
    rest_endpoint: str = field(default="")
    max_wait_block: int = field(default=0, validator=_non_negative)
    max_broadcast: int = field(default=0, validator=_non_negative)
    daemon_path: Path = field(factory=default_daemon_path, converter=Path)

    @property
    def nodes(self) -> list[str]:
        """Configured node endpoints, in declaration order."""
        return [node.strip() for node in self.custom_node.split(",") if node.strip()]

    def get_max_wait_block(self) -> int:
        return self.max_wait_block or DEFAULT_MAX_WAIT_BLOCK

    def get_max_broadcast_retry(self) -> int:
        return self.max_broadcast or DEFAULT_MAX_BROADCAST_RETRY

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> CLIOptions:
        """Build options from environment variables, falling back to defaults.

        Raises:
            ConfigurationError: If a numeric variable is not a non-negative integer
        """
        env = os.environ if environ is None else environ
        max_wait_block = _int_from_env(env, ENV_MAX_WAIT_BLOCK)
        max_broadcast = _int_from_env(env, ENV_MAX_BROADCAST)
        try:
            options = cls(
                custom_node=env.get(ENV_NODE, DEFAULT_NODE),
                rest_endpoint=env.get(ENV_REST_ENDPOINT, ""),
                max_wait_block=max_wait_block,
                max_broadcast=max_broadcast,
                daemon_path=env.get(ENV_PYLONSD_BIN) or default_daemon_path(env),
            )
        except ValueError as e:
            raise ConfigurationError(str(e)) from e
        log.debug(
            "Loaded CLI options from environment",
            nodes=options.nodes,
            max_wait_block=options.get_max_wait_block(),
            max_broadcast=options.get_max_broadcast_retry(),
        )
        return options


def _int_from_env(env: Mapping[str, str], name: str) -> int:
    raw = env.get(name, "").strip()
    if not raw:
        return 0
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e

# 🔼⚙️🔚
