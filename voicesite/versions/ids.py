"""Snapshot id generation that stays unique under rapid successive calls."""

from __future__ import annotations

import time
from collections.abc import Callable


class MonotonicIdGenerator:
    """Millisecond timestamps disambiguated by a tie-breaking increment.

    Ids are strictly increasing even when the clock repeats a value or runs
    backwards: a candidate not above the last issued id becomes ``last + 1``.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._last = 0

    @property
    def last(self) -> int:
        return self._last

    def observe(self, issued: int) -> None:
        """Record an id issued elsewhere so future ids stay above it."""
        self._last = max(self._last, issued)

    def next_id(self) -> int:
        candidate = int(self._clock() * 1000)
        if candidate <= self._last:
            candidate = self._last + 1
        self._last = candidate
        return candidate
