"""
Deterministic random source for reproducible puzzles.

Every player must see the same puzzle on the same UTC day, so nothing in
the generation pipeline may touch the ``random`` module or the clock. The
source is seeded from a SHA-256 digest and advanced with xorshift64; all
shuffles and choices are derived from ``next()`` alone.
"""

import hashlib
from datetime import date, datetime, timezone
from typing import List, Sequence, TypeVar


T = TypeVar("T")

MASK64 = (1 << 64) - 1

# Replaces an all-zero state, which xorshift would never leave
ZERO_STATE_SUBSTITUTE = 0x9E3779B97F4A7C15


def format_day_key(day: date | datetime | str) -> str:
    """
    Render a day as ``YYYY-MM-DD`` in UTC.

    Aware datetimes are converted to UTC; naive datetimes are taken to be
    UTC already. Strings must be ISO dates.

    Raises:
        ValueError: If a string is not a valid ISO date
    """
    if isinstance(day, datetime):
        if day.tzinfo is not None:
            day = day.astimezone(timezone.utc)
        return day.date().isoformat()
    if isinstance(day, date):
        return day.isoformat()
    return date.fromisoformat(day.strip()).isoformat()


class DeterministicRandomSource:
    """
    xorshift64 generator over an explicit 64-bit state.

    A source must be owned by a single generation run: the output of a run
    depends on the exact sequence of ``next()`` calls made on it.
    """

    def __init__(self, state: int):
        state &= MASK64
        self._state = state or ZERO_STATE_SUBSTITUTE

    @classmethod
    def from_seed_bytes(cls, data: bytes) -> "DeterministicRandomSource":
        """Seed from the first 8 bytes (little-endian) of SHA-256(data)."""
        digest = hashlib.sha256(data).digest()
        return cls(int.from_bytes(digest[:8], "little"))

    @classmethod
    def from_seed(cls, seed: int) -> "DeterministicRandomSource":
        """Seed from an integer, hashed as 8 little-endian bytes."""
        return cls.from_seed_bytes((seed & MASK64).to_bytes(8, "little"))

    @classmethod
    def from_string(cls, text: str) -> "DeterministicRandomSource":
        return cls.from_seed_bytes(text.encode("utf-8"))

    @classmethod
    def from_day_key(cls, version: str, day: date | datetime | str) -> "DeterministicRandomSource":
        """
        Daily seed: ``version`` followed by the UTC day as ``YYYY-MM-DD``.

        Args:
            version: Version tag, e.g. "TETRAD_v1"
            day: Calendar day (date, datetime or ISO string)
        """
        return cls.from_seed_bytes((version + format_day_key(day)).encode("utf-8"))

    @property
    def state(self) -> int:
        return self._state

    def clone(self) -> "DeterministicRandomSource":
        """Independent copy at the same point of the trajectory."""
        return DeterministicRandomSource(self._state)

    def next(self) -> int:
        """Advance the state and return it."""
        x = self._state
        x ^= (x << 13) & MASK64
        x ^= x >> 7
        x ^= (x << 17) & MASK64
        self._state = x
        return x

    def next_below(self, bound: int) -> int:
        """Uniform integer in ``[0, bound)``, by rejection sampling."""
        if bound <= 0:
            raise ValueError(f"Bound must be positive, got {bound}")

        span = MASK64 + 1
        limit = span - span % bound
        while True:
            x = self.next()
            if x < limit:
                return x % bound

    def shuffle(self, items: Sequence[T]) -> List[T]:
        """Return a Fisher-Yates shuffled copy of ``items``."""
        result = list(items)
        for i in range(len(result) - 1, 0, -1):
            j = self.next_below(i + 1)
            result[i], result[j] = result[j], result[i]
        return result

    def choice(self, items: Sequence[T]) -> T:
        """
        Pick one element uniformly.

        Raises:
            IndexError: If ``items`` is empty
        """
        if not items:
            raise IndexError("Cannot choose from an empty sequence")
        return items[self.next_below(len(items))]

    def __repr__(self) -> str:
        return f"DeterministicRandomSource(state={self._state:#018x})"
