#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Helpers for reading values out of pylonsd command output."""

from __future__ import annotations

import json
import re
from typing import Any

TX_HASH_PATTERN = re.compile(r'"txhash":\s*"([^"]*)"')


def extract_tx_hash(output: str) -> str:
    """Return the transaction hash from broadcast output, or ``""`` if absent."""
    match = TX_HASH_PATTERN.search(output)
    if match is None:
        return ""
    return match.group(1)


def json_formatter(value: Any) -> str:
    """Render ``value`` as JSON for log fields, falling back to ``repr``."""
    try:
        return json.dumps(value, default=_json_default)
    except (TypeError, ValueError) as e:
        return f"{value!r};jsonMarshalErr={e}"


def _json_default(value: Any) -> Any:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, set | frozenset):
        return sorted(value, key=str)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")

# 🔼⚙️🔚
