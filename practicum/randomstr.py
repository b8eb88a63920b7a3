"""Random alphanumeric strings."""

from __future__ import annotations

import random
import time

CHARS = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"


def new_random_string(size: int) -> str:
    """Return a random string of ``size`` letters and digits."""
    if size < 0:
        raise ValueError("size must be non-negative")
    rnd = random.Random(time.time_ns())
    return "".join(rnd.choice(CHARS) for _ in range(size))