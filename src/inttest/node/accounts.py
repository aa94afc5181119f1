#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Account lookups through pylonsd, reporting failures on a test context."""

from __future__ import annotations

import json
from typing import Any

from inttest.evtesting import TestContext
from inttest.node.errors import DecodeError
from inttest.node.pylonsd import PylonsdRunner


def _runner(runner: PylonsdRunner | None) -> PylonsdRunner:
    return runner if runner is not None else PylonsdRunner()


def _decode_json(ctx: TestContext, payload: bytes) -> dict[str, Any]:
    try:
        data = json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        error = DecodeError(f"invalid JSON: {e}", payload)
        ctx.with_fields({"acc_bytes": payload.decode("utf-8", errors="replace")}).must_be_none(
            error, "error decoding raw json"
        )
        return {}
    if not isinstance(data, dict):
        ctx.with_fields({"acc_bytes": payload.decode("utf-8", errors="replace")}).must_be_none(
            DecodeError("expected a JSON object", payload), "error decoding raw json"
        )
        return {}
    return data


def get_account_addr(account: str, ctx: TestContext, runner: PylonsdRunner | None = None) -> str:
    """Return the bech32 address of the key named ``account``."""
    result = _runner(runner).run(["keys", "show", account, "-a"])
    ctx.with_fields({"account": account, "log": result.log_text}).must_be_none(
        result.error, "error getting account address"
    )
    return result.text.strip("\n ")


def get_account_info_from_addr(addr: str, ctx: TestContext, runner: PylonsdRunner | None = None) -> dict[str, Any]:
    result = _runner(runner).run(["query", "account", addr])
    ctx.with_fields({"address": addr, "log": result.log_text}).must_be_none(
        result.error, "error getting account info"
    )
    if result.error is not None:
        return {}
    return _decode_json(ctx, result.output)


def get_account_balance_from_addr(
    addr: str, ctx: TestContext, runner: PylonsdRunner | None = None
) -> dict[str, Any]:
    result = _runner(runner).run(["query", "bank", "balances", addr])
    ctx.with_fields({"address": addr, "log": result.log_text}).must_be_none(
        result.error, "error getting account balance"
    )
    if result.error is not None:
        return {}
    return _decode_json(ctx, result.output)


def get_account_info_from_name(account: str, ctx: TestContext, runner: PylonsdRunner | None = None) -> dict[str, Any]:
    runner = _runner(runner)
    return get_account_info_from_addr(get_account_addr(account, ctx, runner), ctx, runner)

# 🔼⚙️🔚
