"""Environment protocols consumed by the processing engine.

Domain code depends on these abstractions; adapters.py implements them.
The current date and every random draw reach the engine only through
these seams, so tests can pin both.
"""

from __future__ import annotations

from datetime import date
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Source of the current calendar date (card expiry, slip due dates)."""

    def today(self) -> date: ...


@runtime_checkable
class RandomSource(Protocol):
    """Source of uniform integers in [0, n).

    Used for the instant-key transient-failure simulation and for
    transaction-id generation.
    """

    def randbelow(self, n: int) -> int: ...
