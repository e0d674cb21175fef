"""Surrogate identifier generation for new products and variants."""

import itertools
import random
import threading
import time
from typing import Callable, Optional, Protocol

__all__ = [
    "IdGenerator",
    "ClockRandomIdGenerator",
    "SequentialIdGenerator",
]


class IdGenerator(Protocol):
    """Anything that hands out fresh 64-bit row identifiers."""

    def next_id(self) -> int: ...


class ClockRandomIdGenerator:
    """Wall-clock milliseconds scaled by 1000 plus a random offset in [0, 999].

    Ids are strictly increasing per generator: a candidate that does not
    exceed the last id handed out is bumped to last + 1. Thread-safe.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.time,
        rng: Optional[random.Random] = None,
    ):
        self._clock = clock
        self._rng = rng or random.Random()
        self._last = 0
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._lock:
            candidate = int(self._clock() * 1000) * 1000 + self._rng.randint(0, 999)
            self._last = max(self._last + 1, candidate)
            return self._last


class SequentialIdGenerator:
    """Strictly increasing ids starting at ``start``. Thread-safe."""

    def __init__(self, start: int = 1):
        if start <= 0:
            raise ValueError(f"start must be positive, got {start}")
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._lock:
            return next(self._counter)
