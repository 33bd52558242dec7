"""Bank slip settlement with late-payment penalty and daily interest."""

from __future__ import annotations

from datetime import date

from paygate.core.errors import PaymentError
from paygate.core.money import Money
from paygate.core.result import Err, Ok
from paygate.infra.config import EngineConfig
from paygate.instrument.masking import mask_barcode
from paygate.instrument.rules import is_overdue
from paygate.instrument.types import BankSlip
from paygate.settlement.types import BankSlipSettlement, LateFeeBreakdown


def compute_late_fee(
    amount: Money, days_late: int, config: EngineConfig,
) -> Ok[LateFeeBreakdown] | Err[PaymentError]:
    """Flat penalty on amount plus simple daily interest on amount.

    Both components are computed from the original amount and rounded
    half-even to cents independently.
    """
    match amount.mul(config.late_penalty_rate):
        case Err(e):
            return Err(e)
        case Ok(penalty):
            pass
    match amount.mul(config.daily_interest_rate * days_late):
        case Err(e):
            return Err(e)
        case Ok(interest):
            pass
    return Ok(LateFeeBreakdown(days_late=days_late, penalty=penalty, interest=interest))


def execute_bank_slip(
    slip: BankSlip, amount: Money, today: date, config: EngineConfig,
) -> Ok[BankSlipSettlement] | Err[PaymentError]:
    """Settle the slip, adding late fees when today is past the due date.

    Marks the slip paid; a second attempt is rejected by validation.
    """
    late_fee: LateFeeBreakdown | None = None
    settled = amount
    advisories: tuple[str, ...] = ()

    if is_overdue(slip, today) and slip.due_date is not None:
        days_late = (today - slip.due_date).days
        match compute_late_fee(amount, days_late, config):
            case Err(e):
                return Err(e)
            case Ok(late_fee):
                pass
        total = amount.add(late_fee.penalty).bind(lambda m: m.add(late_fee.interest))
        match total:
            case Err(e):
                return Err(e)
            case Ok(settled):
                pass
        advisories = (
            f"Bank slip overdue by {days_late} day(s); penalty and interest applied",
        )

    slip.paid = True
    return Ok(BankSlipSettlement(
        masked_barcode=mask_barcode(slip.barcode),
        original_amount=amount,
        settled_amount=settled,
        beneficiary=slip.beneficiary,
        late_fee=late_fee,
        advisories=advisories,
    ))
