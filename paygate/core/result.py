"""Result[T, E] — success-or-failure values for paygate.

Validation and settlement functions return Ok[T] or Err[E] instead of
raising. Callers branch with ``match`` or ``isinstance``; multi-step Money
arithmetic chains with ``bind`` so that the first Err short-circuits.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, NoReturn, final


@final
@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Success variant of Result."""

    value: T

    def map[U](self, f: Callable[[T], U]) -> Ok[U]:
        """Apply f to the value, returning Ok(f(value))."""
        return Ok(f(self.value))

    def bind[U, E](self, f: Callable[[T], Ok[U] | Err[E]]) -> Ok[U] | Err[E]:
        """Feed the value to the next fallible step."""
        return f(self.value)

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:  # noqa: ARG002
        return self.value

    def map_err(self, f: Callable[[Any], Any]) -> Ok[T]:  # noqa: ARG002
        """No-op on Ok."""
        return self


@final
@dataclass(frozen=True, slots=True)
class Err[E]:
    """Failure variant of Result."""

    error: E

    def map(self, f: Callable[[Any], Any]) -> Err[E]:  # noqa: ARG002
        """No-op on Err."""
        return self

    def bind(self, f: Callable[[Any], Any]) -> Err[E]:  # noqa: ARG002
        """Short-circuit: the next step never runs."""
        return self

    def unwrap(self) -> NoReturn:
        raise RuntimeError(f"Called unwrap on Err: {self.error}")

    def unwrap_or[T](self, default: T) -> T:
        return default

    def map_err[F](self, f: Callable[[E], F]) -> Err[F]:
        """Apply f to the error, returning Err(f(error))."""
        return Err(f(self.error))


type Result[T, E] = Ok[T] | Err[E]


def unwrap[T](result: Ok[T] | Err[Any]) -> T:
    """Extract the Ok value or raise RuntimeError. Tests and boundaries only."""
    if isinstance(result, Ok):
        return result.value
    if isinstance(result, Err):
        raise RuntimeError(f"unwrap on Err: {result.error}")
    raise TypeError(f"Expected Ok or Err, got {type(result).__name__}")


def unwrap_err[E](result: Ok[Any] | Err[E]) -> E:
    """Extract the Err payload or raise RuntimeError. Tests and boundaries only."""
    if isinstance(result, Err):
        return result.error
    if isinstance(result, Ok):
        raise RuntimeError(f"unwrap_err on Ok: {result.value!r}")
    raise TypeError(f"Expected Ok or Err, got {type(result).__name__}")
