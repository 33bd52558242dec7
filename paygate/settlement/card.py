"""Credit card settlement: consume credit limit."""

from __future__ import annotations

from paygate.core.errors import FailureKind, PaymentError
from paygate.core.money import Money
from paygate.core.result import Err, Ok
from paygate.instrument.masking import mask_card_number
from paygate.instrument.types import CreditCard
from paygate.settlement.types import CardSettlement


def remaining_limit(card: CreditCard) -> Money:
    """credit_limit - used_amount. used_amount never exceeds the limit."""
    return Money(
        amount=card.credit_limit.amount - card.used_amount.amount,
        currency=card.credit_limit.currency,
    )


def execute_card(card: CreditCard, amount: Money) -> Ok[CardSettlement] | Err[PaymentError]:
    """Charge amount against the card's limit.

    used_amount is committed only when the charge fits; on any Err the card
    is left untouched.
    """
    match card.used_amount.add(amount):
        case Err(e):
            return Err(e.with_context("Card charge"))
        case Ok(new_used):
            pass

    if new_used.exceeds(card.credit_limit):
        available = remaining_limit(card)
        return Err(PaymentError.of(
            FailureKind.INSUFFICIENT_LIMIT,
            f"Insufficient limit. Available: {available}",
            "settlement.card.execute_card",
            remaining_limit=str(available.amount),
            currency=available.currency.value,
        ))

    card.used_amount = new_used
    return Ok(CardSettlement(
        masked_number=mask_card_number(card.number),
        amount=amount,
        remaining_limit=remaining_limit(card),
    ))
