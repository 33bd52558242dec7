"""Instant-key (PIX) settlement.

The provider is simulated: a configurable fraction of attempts reports a
transient outage. Both that draw and the transaction id come from the
injected RandomSource, in that order.
"""

from __future__ import annotations

from decimal import Decimal

from paygate.core.errors import FailureKind, PaymentError
from paygate.core.money import Money
from paygate.core.result import Err, Ok
from paygate.infra.config import EngineConfig
from paygate.infra.protocols import RandomSource
from paygate.instrument.masking import mask_instant_key
from paygate.instrument.types import InstantKey
from paygate.settlement.types import InstantKeySettlement

# Failure draws have basis-point resolution: a 5% rate fails draws 0..499.
FAILURE_DRAW_SCALE = 10_000


def is_transient_failure(random: RandomSource, rate: Decimal) -> bool:
    threshold = int(rate * FAILURE_DRAW_SCALE)
    return random.randbelow(FAILURE_DRAW_SCALE) < threshold


def new_transaction_id(random: RandomSource, config: EngineConfig) -> str:
    digits = config.transaction_id_digits
    return f"{config.transaction_id_prefix}{random.randbelow(10 ** digits):0{digits}d}"


def execute_instant_key(
    key: InstantKey, amount: Money, random: RandomSource, config: EngineConfig,
) -> Ok[InstantKeySettlement] | Err[PaymentError]:
    if is_transient_failure(random, config.transient_failure_rate):
        return Err(PaymentError.of(
            FailureKind.TRANSIENT_UNAVAILABLE,
            "PIX key temporarily unavailable",
            "settlement.instant_key.execute_instant_key",
            key_kind=key.kind.value,
        ))
    return Ok(InstantKeySettlement(
        masked_key=mask_instant_key(key.key, key.kind),
        kind=key.kind,
        amount=amount,
        transaction_id=new_transaction_id(random, config),
        note=key.note,
    ))
