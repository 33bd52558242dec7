"""Settlement records returned by a successful payment.

Settlement = CardSettlement | BankSlipSettlement | InstantKeySettlement.
Records carry only masked identifiers, so they are safe to log and display.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import final

from paygate.core.money import Money
from paygate.core.types import FrozenMap
from paygate.instrument.types import InstantKeyKind


@final
@dataclass(frozen=True, slots=True)
class CardSettlement:
    masked_number: str
    amount: Money
    remaining_limit: Money

    def metadata(self) -> FrozenMap[str, str]:
        return FrozenMap.of(remaining_limit=str(self.remaining_limit.amount))

    def confirmation(self) -> str:
        return (
            f"Payment of {self.amount} approved on card {self.masked_number}. "
            f"Remaining limit: {self.remaining_limit}"
        )


@final
@dataclass(frozen=True, slots=True)
class LateFeeBreakdown:
    """Penalty and interest added to an overdue bank slip."""

    days_late: int
    penalty: Money
    interest: Money


@final
@dataclass(frozen=True, slots=True)
class BankSlipSettlement:
    masked_barcode: str
    original_amount: Money
    settled_amount: Money
    beneficiary: str
    late_fee: LateFeeBreakdown | None = None
    advisories: tuple[str, ...] = ()

    @property
    def amount(self) -> Money:
        return self.settled_amount

    def metadata(self) -> FrozenMap[str, str]:
        if self.late_fee is None:
            return FrozenMap.of(beneficiary=self.beneficiary)
        return FrozenMap.of(
            beneficiary=self.beneficiary,
            original_amount=str(self.original_amount.amount),
            penalty=str(self.late_fee.penalty.amount),
            interest=str(self.late_fee.interest.amount),
            days_late=str(self.late_fee.days_late),
        )

    def confirmation(self) -> str:
        breakdown = ""
        if self.late_fee is not None:
            breakdown = (
                f" (Original amount: {self.original_amount} + Penalty: {self.late_fee.penalty}"
                f" + Interest: {self.late_fee.interest})"
            )
        return (
            f"Bank slip {self.masked_barcode} paid. Amount: {self.settled_amount}"
            f"{breakdown}. Beneficiary: {self.beneficiary}"
        )


@final
@dataclass(frozen=True, slots=True)
class InstantKeySettlement:
    masked_key: str
    kind: InstantKeyKind
    amount: Money
    transaction_id: str
    note: str | None = None

    def metadata(self) -> FrozenMap[str, str]:
        if self.note is None:
            return FrozenMap.of(transaction_id=self.transaction_id, key_kind=self.kind.value)
        return FrozenMap.of(
            transaction_id=self.transaction_id, key_kind=self.kind.value, note=self.note,
        )

    def confirmation(self) -> str:
        line = (
            f"PIX of {self.amount} sent to {self.masked_key} ({self.kind.label}). "
            f"ID: {self.transaction_id}."
        )
        if self.note is not None:
            line += f" Note: {self.note}"
        return line


type Settlement = CardSettlement | BankSlipSettlement | InstantKeySettlement
