"""Time-derived identifiers that stay unique under rapid creation."""

import threading
import time

_lock = threading.Lock()
_last = 0


def next_id() -> str:
    """Return the current epoch milliseconds, bumped past the previous id if needed.

    Ids are strictly increasing within a process, so two records created in the
    same millisecond never share an id.
    """
    global _last
    with _lock:
        now = time.time_ns() // 1_000_000
        _last = max(now, _last + 1)
        return str(_last)
