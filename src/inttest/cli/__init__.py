#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Command-line interface for the pylonsd integration harness."""

# 🔼⚙️🔚
