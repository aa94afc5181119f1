#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Configuration module for the pylonsd integration harness."""

from __future__ import annotations

from inttest.config.models import (
    DEFAULT_MAX_BROADCAST_RETRY,
    DEFAULT_MAX_WAIT_BLOCK,
    DEFAULT_NODE,
    CLIOptions,
    ConfigurationError,
    default_daemon_path,
)

__all__ = [
    "DEFAULT_MAX_BROADCAST_RETRY",
    "DEFAULT_MAX_WAIT_BLOCK",
    "DEFAULT_NODE",
    "CLIOptions",
    "ConfigurationError",
    "default_daemon_path",
]

# 🔼⚙️🔚
