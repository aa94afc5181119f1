#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Node status queries and block height polling."""

from __future__ import annotations

from collections.abc import Callable
import json
import time
from typing import Any

from attrs import frozen
from provide.foundation.logger import get_logger

from inttest.node.errors import BlockWaitTimeoutError, CommandError, DecodeError, NodeStatusError
from inttest.node.pylonsd import PylonsdRunner

log = get_logger(__name__)

POLL_INTERVAL_SECONDS = 0.1
POLLS_PER_BLOCK = 300


@frozen
class DaemonStatus:
    """The part of ``pylonsd status`` the harness relies on."""

    latest_block_height: int
    raw: dict[str, Any]


def parse_status(payload: bytes | str) -> DaemonStatus:
    """Decode ``pylonsd status`` JSON output.

    Raises:
        DecodeError: If the payload is not JSON or has no block height
    """
    try:
        data = json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DecodeError(f"status output is not valid JSON: {e}", payload) from e
    if not isinstance(data, dict):
        raise DecodeError("status output is not a JSON object", payload)

    sync_info = data.get("sync_info") or data.get("SyncInfo") or {}
    height = sync_info.get("latest_block_height") if isinstance(sync_info, dict) else None
    try:
        return DaemonStatus(latest_block_height=int(height), raw=data)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"status output has no usable latest_block_height: {height!r}", payload) from e


def get_daemon_status(runner: PylonsdRunner | None = None) -> DaemonStatus:
    """Query the node status.

    Raises:
        NodeStatusError: If pylonsd fails or its output cannot be decoded
    """
    result = (runner or PylonsdRunner()).run(["status"])
    try:
        result.check()
        return parse_status(result.output)
    except (CommandError, DecodeError) as e:
        log.debug("Could not get daemon status", error=str(e), output=result.text)
        raise NodeStatusError(f"could not get daemon status: {e}") from e


StatusSource = Callable[[], DaemonStatus]


def wait_for_block_height_advance(
    min_interval_blocks: int,
    *,
    status_source: StatusSource | None = None,
    runner: PylonsdRunner | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """Block until the chain has advanced by ``min_interval_blocks``.

    The status is polled every 100ms, at most ``300 * min_interval_blocks``
    times after the starting height is read.

    Args:
        min_interval_blocks: Number of blocks to wait for
        status_source: Callable returning the current status (defaults to
            querying pylonsd through ``runner``)
        runner: Runner used by the default status source
        sleep: Sleep function between polls

    Returns:
        The observed block height that satisfied the wait

    Raises:
        NodeStatusError: If the status cannot be retrieved
        BlockWaitTimeoutError: If the height does not advance in time
    """
    if min_interval_blocks < 1:
        raise ValueError(f"min_interval_blocks must be positive, got {min_interval_blocks}")
    if status_source is None:
        status_runner = runner or PylonsdRunner()

        def status_source() -> DaemonStatus:
            return get_daemon_status(status_runner)

    start_height = status_source().latest_block_height
    target = start_height + min_interval_blocks
    last_height = start_height
    log.debug("Waiting for block height", start_height=start_height, target_height=target)

    counter = 1
    while counter < POLLS_PER_BLOCK * min_interval_blocks:
        last_height = status_source().latest_block_height
        if last_height >= target:
            log.debug("Block height reached", height=last_height, polls=counter)
            return last_height
        sleep(POLL_INTERVAL_SECONDS)
        counter += 1

    raise BlockWaitTimeoutError(min_interval_blocks, start_height, last_height, counter)


def wait_for_next_block(**kwargs: Any) -> int:
    return wait_for_block_height_advance(1, **kwargs)

# 🔼⚙️🔚
