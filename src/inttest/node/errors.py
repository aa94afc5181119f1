#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Errors raised by the pylonsd helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from inttest.node.pylonsd import CommandResult


class InttestError(Exception):
    """Base exception for harness errors."""


class CommandError(InttestError):
    """Raised when a pylonsd invocation exits non-zero or cannot be started."""

    def __init__(self, message: str, result: CommandResult | None = None):
        self.result = result
        super().__init__(message)


class NodeStatusError(InttestError):
    """Raised when the node status cannot be retrieved or decoded."""


class BlockWaitTimeoutError(InttestError):
    """Raised when block height does not advance within the polling cap."""

    def __init__(self, interval: int, start_height: int, last_height: int, attempts: int):
        self.interval = interval
        self.start_height = start_height
        self.last_height = last_height
        self.attempts = attempts
        message = (
            f"Waited too long for {interval} block(s): height stayed at {last_height} "
            f"(started at {start_height}) after {attempts} status checks"
        )
        super().__init__(message)


class DecodeError(InttestError):
    """Raised when command output is not the JSON document expected."""

    def __init__(self, message: str, payload: bytes | str):
        self.payload = payload
        super().__init__(message)

# 🔼⚙️🔚
