"""Core types: UtcDatetime, FrozenMap, ProcessingStage."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Any, ClassVar, final

from paygate.core.result import Err, Ok


@final
@dataclass(frozen=True, slots=True)
class UtcDatetime:
    """Timezone-aware UTC datetime. Naive datetimes are rejected."""

    value: datetime

    def __post_init__(self) -> None:
        if self.value.tzinfo is None:
            raise TypeError("UtcDatetime requires timezone-aware datetime, got naive")

    @staticmethod
    def parse(raw: datetime) -> Ok[UtcDatetime] | Err[str]:
        """Parse a datetime, rejecting naive (no tzinfo) datetimes."""
        if raw.tzinfo is None:
            return Err("UtcDatetime requires timezone-aware datetime, got naive")
        return Ok(UtcDatetime(value=raw.astimezone(UTC)))

    @staticmethod
    def now() -> UtcDatetime:
        return UtcDatetime(value=datetime.now(tz=UTC))


@final
@dataclass(frozen=True, slots=True)
class FrozenMap[K, V]:
    """Immutable sorted mapping used for error details and settlement metadata.

    Entries are stored as a sorted tuple of (key, value) pairs, so two maps
    built from the same items compare and hash equal regardless of insertion
    order.
    """

    _entries: tuple[tuple[K, V], ...]

    EMPTY: ClassVar[FrozenMap[Any, Any]]  # Assigned after class definition

    @staticmethod
    def create(items: dict[K, V] | Iterable[tuple[K, V]]) -> Ok[FrozenMap[K, V]] | Err[str]:
        """Create a FrozenMap. Duplicate keys: last value wins."""
        d = items if isinstance(items, dict) else dict(items)
        try:
            entries = tuple(sorted(d.items(), key=lambda kv: kv[0]))
        except TypeError as e:
            return Err(f"FrozenMap keys must be comparable: {e}")
        return Ok(FrozenMap(_entries=entries))

    @staticmethod
    def of(**items: V) -> FrozenMap[str, V]:
        """Build a string-keyed map from keyword arguments (keys always comparable)."""
        return FrozenMap(_entries=tuple(sorted(items.items())))

    def get(self, key: K, default: V | None = None) -> V | None:
        for k, v in self._entries:
            if k == key:
                return v
        return default

    def __getitem__(self, key: K) -> V:
        for k, v in self._entries:
            if k == key:
                return v
        raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        return any(k == key for k, _ in self._entries)

    def __iter__(self) -> Iterator[K]:
        return (k for k, _ in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def items(self) -> tuple[tuple[K, V], ...]:
        return self._entries

    def to_dict(self) -> dict[K, V]:
        """Convert to a regular dict (for serialization boundaries)."""
        return dict(self._entries)


FrozenMap.EMPTY = FrozenMap(_entries=())


class ProcessingStage(Enum):
    """Stages of one process_payment call.

    CREATED -> AMOUNT_VALIDATED -> INSTRUMENT_VALIDATED -> EXECUTED, with a
    direct edge to FAILED from every non-terminal stage.
    """

    CREATED = "CREATED"
    AMOUNT_VALIDATED = "AMOUNT_VALIDATED"
    INSTRUMENT_VALIDATED = "INSTRUMENT_VALIDATED"
    EXECUTED = "EXECUTED"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        return self in (ProcessingStage.EXECUTED, ProcessingStage.FAILED)
