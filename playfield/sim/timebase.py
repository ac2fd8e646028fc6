"""
Clock abstraction.

The frame driver and the RNG read time through this module so that:
- tests and replays can drive time from a fixed value instead of the wall clock
- every frame delta comes from one monotonic, high-resolution source
"""

from __future__ import annotations

import time
from typing import Optional

_SIM_NOW: Optional[float] = None


def set_sim_now(seconds: Optional[float]) -> None:
    """
    Set the current simulated time in seconds.

    If set to None, `now()` falls back to the monotonic clock.
    """
    global _SIM_NOW
    _SIM_NOW = None if seconds is None else float(seconds)


def clock_ns() -> int:
    """Raw monotonic high-resolution reading in nanoseconds (never overridden)."""
    return time.perf_counter_ns()


def now() -> float:
    """Return simulated time (if provided), otherwise monotonic seconds."""
    if _SIM_NOW is not None:
        return float(_SIM_NOW)
    return clock_ns() / 1e9
