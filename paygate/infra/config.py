"""Engine configuration.

Pure configuration data. Every rate and limit the engine applies lives
here so that none of them is a literal buried in settlement code.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import final

from paygate.core.money import Currency, representable_in_cents

ENV_PREFIX = "PAYGATE_"

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


@final
@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Limits and rates for one processing engine.

    max_amount is inclusive. Rates are fractions: 0.02 is 2%.
    transient_failure_rate is the probability that an instant-key
    settlement reports TRANSIENT_UNAVAILABLE. log_level is what the host
    passes to setup_logging().
    """

    currency: Currency = Currency.BRL
    max_amount: Decimal = Decimal("999999.99")
    late_penalty_rate: Decimal = Decimal("0.02")
    daily_interest_rate: Decimal = Decimal("0.001")
    transient_failure_rate: Decimal = Decimal("0.05")
    transaction_id_prefix: str = "PIX"
    transaction_id_digits: int = 8
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not representable_in_cents(self.max_amount) or self.max_amount <= 0:
            raise TypeError(f"max_amount must be > 0 and hold in cents, got {self.max_amount}")
        for name in ("late_penalty_rate", "daily_interest_rate"):
            value = getattr(self, name)
            if value < 0:
                raise TypeError(f"{name} must be >= 0, got {value}")
        if not (0 <= self.transient_failure_rate <= 1):
            raise TypeError(
                f"transient_failure_rate must be within [0, 1], got {self.transient_failure_rate}"
            )
        if not (1 <= self.transaction_id_digits <= 18):
            raise TypeError(
                f"transaction_id_digits must be within [1, 18], got {self.transaction_id_digits}"
            )
        if self.log_level.upper() not in _LOG_LEVELS:
            raise TypeError(f"Unknown log_level: {self.log_level!r}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> EngineConfig:
        """Build a config from PAYGATE_* variables, falling back to defaults.

        Raises TypeError on malformed values: a bad deployment setting is a
        startup failure, not a payment rejection.
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        def _decimal(name: str, default: Decimal) -> Decimal:
            raw = env.get(ENV_PREFIX + name)
            if raw is None:
                return default
            try:
                return Decimal(raw)
            except InvalidOperation as e:
                raise TypeError(f"{ENV_PREFIX}{name} must be a decimal, got {raw!r}") from e

        raw_currency = env.get(ENV_PREFIX + "CURRENCY", defaults.currency.value)
        try:
            currency = Currency(raw_currency.upper())
        except ValueError as e:
            raise TypeError(f"{ENV_PREFIX}CURRENCY unknown: {raw_currency!r}") from e

        raw_digits = env.get(ENV_PREFIX + "TRANSACTION_ID_DIGITS")
        try:
            digits = int(raw_digits) if raw_digits is not None else defaults.transaction_id_digits
        except ValueError as e:
            raise TypeError(
                f"{ENV_PREFIX}TRANSACTION_ID_DIGITS must be an integer, got {raw_digits!r}"
            ) from e

        return cls(
            currency=currency,
            max_amount=_decimal("MAX_AMOUNT", defaults.max_amount),
            late_penalty_rate=_decimal("LATE_PENALTY_RATE", defaults.late_penalty_rate),
            daily_interest_rate=_decimal("DAILY_INTEREST_RATE", defaults.daily_interest_rate),
            transient_failure_rate=_decimal(
                "TRANSIENT_FAILURE_RATE", defaults.transient_failure_rate,
            ),
            transaction_id_prefix=env.get(
                ENV_PREFIX + "TRANSACTION_ID_PREFIX", defaults.transaction_id_prefix,
            ),
            transaction_id_digits=digits,
            log_level=env.get(ENV_PREFIX + "LOG_LEVEL", defaults.log_level).upper(),
        )
