#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Helpers for driving a pylons node through the pylonsd client."""

from inttest.node.accounts import (
    get_account_addr,
    get_account_balance_from_addr,
    get_account_info_from_addr,
    get_account_info_from_name,
)
from inttest.node.errors import (
    BlockWaitTimeoutError,
    CommandError,
    DecodeError,
    InttestError,
    NodeStatusError,
)
from inttest.node.pylonsd import (
    CommandResult,
    PylonsdRunner,
    keyring_backend_setup,
    node_flag_setup,
    run_pylonsd,
)
from inttest.node.status import (
    DaemonStatus,
    get_daemon_status,
    parse_status,
    wait_for_block_height_advance,
    wait_for_next_block,
)
from inttest.node.txlog import extract_tx_hash, json_formatter

__all__ = [
    "BlockWaitTimeoutError",
    "CommandError",
    "CommandResult",
    "DaemonStatus",
    "DecodeError",
    "InttestError",
    "NodeStatusError",
    "PylonsdRunner",
    "extract_tx_hash",
    "get_account_addr",
    "get_account_balance_from_addr",
    "get_account_info_from_addr",
    "get_account_info_from_name",
    "get_daemon_status",
    "json_formatter",
    "keyring_backend_setup",
    "node_flag_setup",
    "parse_status",
    "run_pylonsd",
    "wait_for_block_height_advance",
    "wait_for_next_block",
]

# 🔼⚙️🔚
