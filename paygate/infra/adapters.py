"""Clock and RandomSource implementations.

System* adapters are what production wiring uses. FixedClock and
ScriptedRandomSource are deterministic doubles for tests and replays.
"""

from __future__ import annotations

import random
from collections.abc import Iterable
from datetime import UTC, date, datetime
from typing import final


@final
class SystemClock:
    """Today's date in UTC."""

    def today(self) -> date:
        return datetime.now(tz=UTC).date()


@final
class FixedClock:
    """Always returns the same date. Mutable only through advance_to()."""

    def __init__(self, fixed: date) -> None:
        self._today = fixed

    def today(self) -> date:
        return self._today

    def advance_to(self, new_today: date) -> None:
        self._today = new_today


@final
class SystemRandomSource:
    """Wraps a private random.Random instance (never the module-level one)."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)

    def randbelow(self, n: int) -> int:
        if n <= 0:
            raise ValueError(f"randbelow requires n > 0, got {n}")
        return self._rng.randrange(n)


@final
class ScriptedRandomSource:
    """Replays a fixed sequence of draws.

    Each draw is reduced modulo n so a script can be shared across calls
    with different bounds. Running out of values raises IndexError.
    """

    def __init__(self, values: Iterable[int]) -> None:
        self._values = list(values)
        self._position = 0

    def randbelow(self, n: int) -> int:
        if n <= 0:
            raise ValueError(f"randbelow requires n > 0, got {n}")
        if self._position >= len(self._values):
            raise IndexError(
                f"ScriptedRandomSource exhausted after {self._position} draws"
            )
        value = self._values[self._position]
        self._position += 1
        return value % n

    @property
    def draws(self) -> int:
        """Number of values consumed so far."""
        return self._position
