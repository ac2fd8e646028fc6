"""
Determinism helpers.

Goals:
- Provide a single seeded RNG shared by every world, so a program always yields the same results
- Serialize every draw on one lock so worlds may call in from any thread

Non-goals:
- Cryptographic security
- Perfect cross-language reproducibility (this is Python's Mersenne Twister)

Re-seeding is a destructive reset: it affects all outstanding callers immediately.
Use `seed()` with no argument at the start of a program to randomize a run.
"""

from __future__ import annotations

import random
import threading
from typing import MutableSequence, Optional

from config import SIM_SEED

from .timebase import clock_ns

_INT_BITS = 32
_INT_MIN = -(1 << (_INT_BITS - 1))
# Seeds are taken as 64-bit two's complement so negative values keep their own stream.
_SEED_MASK = 0xFFFFFFFFFFFFFFFF

_SEED: int = SIM_SEED
_GLOBAL_RNG: random.Random = random.Random(_SEED & _SEED_MASK)
_RNG_LOCK = threading.Lock()


def seed(value: Optional[int] = None) -> None:
    """Set the global seed. With no value, seed from the high-resolution clock."""
    global _SEED
    if value is None:
        value = clock_ns()
    with _RNG_LOCK:
        _SEED = int(value)
        _GLOBAL_RNG.seed(_SEED & _SEED_MASK)


def get_seed() -> int:
    """Return the seed most recently applied."""
    with _RNG_LOCK:
        return _SEED


def random_int(upto: Optional[int] = None) -> int:
    """
    Draw an integer from the global RNG.

    - `random_int()` returns any signed 32-bit value.
    - `random_int(3)` returns one of 0, 1 or 2.
    - `upto < 1` returns 0 (not an error).
    """
    if upto is None:
        with _RNG_LOCK:
            return _GLOBAL_RNG.getrandbits(_INT_BITS) + _INT_MIN
    upto = int(upto)
    if upto < 1:
        return 0
    with _RNG_LOCK:
        return _GLOBAL_RNG.randrange(upto)


def random_range(low: int, high: int) -> int:
    """Draw from [low, high); returns `low` when high <= low."""
    return random_int(int(high) - int(low)) + int(low)


def shuffle(seq: MutableSequence) -> None:
    """
    Shuffle `seq` in place (Fisher-Yates) using the global RNG.

    Works for lists, bytearrays, array.array and any other indexable mutable sequence.
    The lock is held for the whole shuffle so its draws stay contiguous in the global order.
    """
    with _RNG_LOCK:
        for i in range(len(seq) - 1, 0, -1):
            j = _GLOBAL_RNG.randrange(i + 1)
            if i != j:
                seq[i], seq[j] = seq[j], seq[i]
