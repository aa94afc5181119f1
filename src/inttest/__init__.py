#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Integration test harness for the pylonsd command-line client."""

from provide.foundation.utils.versioning import get_version

__version__ = get_version("pylons-inttest", caller_file=__file__)

__all__ = [
    "__version__",
]

# 🔼⚙️🔚
