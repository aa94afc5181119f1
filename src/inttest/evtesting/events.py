#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Cross-test event dispatch.

A failure in one test can be made to affect others (for example, skipping
the rest of a run) by registering a listener for ``FAIL_EVENT``. Listeners
are registered once at process start-up and read on every failure:

    default_registry.register(FAIL_EVENT, abort_switch.trip)
"""

from __future__ import annotations

from collections.abc import Callable
import threading

from provide.foundation.logger import get_logger

log = get_logger(__name__)

FAIL_EVENT = "FAIL"

Listener = Callable[[], None]


class EventRegistry:
    """Thread-safe mapping from event name to a zero-argument callback."""

    def __init__(self) -> None:
        self._listeners: dict[str, Listener] = {}
        self._lock = threading.Lock()

    def register(self, event: str, listener: Listener) -> None:
        """Register ``listener`` for ``event``, replacing any previous one."""
        with self._lock:
            self._listeners[event] = listener
        log.debug("Event listener registered", event_name=event)

    def unregister(self, event: str) -> None:
        with self._lock:
            self._listeners.pop(event, None)

    def dispatch(self, event: str) -> bool:
        """Invoke the listener for ``event`` if one is registered.

        Returns:
            True if a listener was called, False if none was registered
        """
        with self._lock:
            listener = self._listeners.get(event)
        if listener is None:
            return False
        # Called outside the lock so a listener may itself register listeners.
        listener()
        return True

    def __contains__(self, event: object) -> bool:
        with self._lock:
            return event in self._listeners

    def __len__(self) -> int:
        with self._lock:
            return len(self._listeners)


default_registry = EventRegistry()

# 🔼⚙️🔚
