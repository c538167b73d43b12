from __future__ import annotations

import time


def now_ms() -> int:
    """Epoch milliseconds; record timestamps use this so that listings order stably."""
    return int(time.time() * 1000)
