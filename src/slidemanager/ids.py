"""Object ID generation for newly created presentation elements.

Google Slides lets the client choose the objectId of anything it creates.
IDs must be 5-50 characters from ``[a-zA-Z0-9_-:]`` and must not collide
with an existing object, so each ID combines a nanosecond wall-clock
reading with a per-generator sequence number.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, field


@dataclass
class ObjectIdGenerator:
    """Generates unique object IDs of the form ``<prefix>_<time_ns>_<seq>``.

    The sequence number makes two IDs from the same generator distinct even
    when the clock returns the same reading twice (or goes backwards). If the
    clock itself fails, the last good reading is reused and the sequence
    number alone keeps IDs unique.
    """

    clock: Callable[[], int] = time.time_ns

    _sequence: int = 0
    _last_timestamp: int = 0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def _timestamp(self) -> int:
        try:
            now = int(self.clock())
        except (OSError, OverflowError, ValueError):
            return self._last_timestamp
        if now > self._last_timestamp:
            self._last_timestamp = now
        return self._last_timestamp

    def new_id(self, prefix: str) -> str:
        """Return a fresh object ID for an element of the given category."""
        with self._lock:
            self._sequence += 1
            return f"{prefix}_{self._timestamp()}_{self._sequence}"


_default_generator = ObjectIdGenerator()


def new_object_id(prefix: str) -> str:
    """Generate an object ID using the process-wide generator."""
    return _default_generator.new_id(prefix)
