#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""File helpers for integration tests."""

from __future__ import annotations

from pathlib import Path

from inttest.evtesting import TestContext


def read_file(path: str | Path, ctx: TestContext) -> bytes:
    """Read a fixture file, failing the test if it cannot be read."""
    try:
        return Path(path).read_bytes()
    except OSError as e:
        ctx.with_fields({"file_path": str(path)}).must_be_none(e, "error reading file")
        return b""


def clean_file(path: str | Path, ctx: TestContext) -> None:
    """Remove a temporary file, logging (not failing) when removal fails."""
    try:
        Path(path).unlink()
    except OSError as e:
        ctx.with_fields({"error": e, "file_path": str(path)}).error("error removing file")

# 🔼⚙️🔚
