#
# SPDX-FileCopyrightText: Copyright (c) provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Test helper modules for the pylonsd integration harness.

This package contains fakes for node status sources, subprocess results
and deterministic random choice."""

from __future__ import annotations

# 🔼⚙️🔚
