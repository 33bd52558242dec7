"""Money, Currency, and the paygate Decimal context.

All financial arithmetic runs under PAYGATE_DECIMAL_CONTEXT (prec=28,
ROUND_HALF_EVEN, traps for InvalidOperation/DivisionByZero/Overflow), and
every Money value is quantized to 2 places with ROUND_HALF_EVEN.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_EVEN as _ROUND_HALF_EVEN
from decimal import (
    Context,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    Overflow,
    localcontext,
)
from enum import Enum
from typing import final

from paygate.core.errors import FailureKind, PaymentError
from paygate.core.result import Err, Ok

PAYGATE_DECIMAL_CONTEXT = Context(
    prec=28,
    rounding=_ROUND_HALF_EVEN,
    Emin=-999999,
    Emax=999999,
    capitals=1,
    clamp=0,
    flags=[],
    traps=[InvalidOperation, DivisionByZero, Overflow],
)

CENT = Decimal("0.01")
DEFAULT_DISCOUNT_CAP = Decimal("30")
_HUNDRED = Decimal("100")
_FACTOR_PLACES = Decimal("0.0001")


class Currency(Enum):
    BRL = "BRL"
    USD = "USD"
    EUR = "EUR"


# Integer digits beyond this cannot be quantized to cents within prec=28,
# allowing one digit of carry from rounding.
_MAX_ADJUSTED = PAYGATE_DECIMAL_CONTEXT.prec - 4


def representable_in_cents(value: Decimal) -> bool:
    """True if value can be quantized to cents under PAYGATE_DECIMAL_CONTEXT."""
    return value.is_finite() and (value.is_zero() or value.adjusted() <= _MAX_ADJUSTED)


def quantize_cents(value: Decimal) -> Decimal:
    """Round to 2 places, half-even.

    Raises TypeError for values with too many integer digits to round to
    cents; callers that take outside input check representable_in_cents.
    """
    if not representable_in_cents(value):
        raise TypeError(f"Amount too large to hold in cents: {value}")
    with localcontext(PAYGATE_DECIMAL_CONTEXT):
        return value.quantize(CENT, rounding=_ROUND_HALF_EVEN)


def _negative(value: Decimal, source: str) -> Err[PaymentError]:
    return Err(PaymentError.of(
        FailureKind.NEGATIVE_AMOUNT,
        f"Amount cannot be negative, got {value}",
        source,
        amount=str(value),
    ))


@final
@dataclass(frozen=True, slots=True)
class Money:
    """Non-negative monetary amount with currency, always at 2 decimal places."""

    amount: Decimal
    currency: Currency

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal) or not self.amount.is_finite():
            raise TypeError(f"Money.amount must be finite Decimal, got {self.amount!r}")
        if self.amount < 0:
            raise TypeError(f"Money.amount must be >= 0, got {self.amount}")
        if self.amount != quantize_cents(self.amount):
            raise TypeError(f"Money.amount must have 2 decimal places, got {self.amount}")

    @staticmethod
    def create(amount: Decimal, currency: Currency) -> Ok[Money] | Err[PaymentError]:
        """Create Money, rejecting non-Decimal, NaN/Infinity and negative values.

        Amounts too large to round to cents raise TypeError.
        """
        if not isinstance(amount, Decimal) or not amount.is_finite():
            # Not a business rejection: the caller handed us garbage.
            raise TypeError(f"Money.create requires finite Decimal, got {amount!r}")
        if amount < 0:
            return _negative(amount, "core.money.Money.create")
        return Ok(Money(amount=quantize_cents(amount), currency=currency))

    @staticmethod
    def zero(currency: Currency) -> Money:
        return Money(amount=Decimal("0.00"), currency=currency)

    def _check_currency(self, other: Money, source: str) -> Err[PaymentError] | None:
        if self.currency is other.currency:
            return None
        return Err(PaymentError.of(
            FailureKind.CURRENCY_MISMATCH,
            f"Currency mismatch: {self.currency.value} vs {other.currency.value}",
            source,
            left=self.currency.value,
            right=other.currency.value,
        ))

    def add(self, other: Money) -> Ok[Money] | Err[PaymentError]:
        """Add two Money values. Err if currencies differ."""
        if (mismatch := self._check_currency(other, "core.money.Money.add")) is not None:
            return mismatch
        with localcontext(PAYGATE_DECIMAL_CONTEXT):
            total = self.amount + other.amount
        return Ok(Money(amount=quantize_cents(total), currency=self.currency))

    def sub(self, other: Money) -> Ok[Money] | Err[PaymentError]:
        """Subtract. Err if currencies differ or the result would be negative."""
        if (mismatch := self._check_currency(other, "core.money.Money.sub")) is not None:
            return mismatch
        with localcontext(PAYGATE_DECIMAL_CONTEXT):
            diff = self.amount - other.amount
        if diff < 0:
            return _negative(diff, "core.money.Money.sub")
        return Ok(Money(amount=quantize_cents(diff), currency=self.currency))

    def mul(self, factor: Decimal) -> Ok[Money] | Err[PaymentError]:
        """Multiply by a non-negative factor, rounding the product half-even."""
        if factor < 0:
            return _negative(factor, "core.money.Money.mul")
        with localcontext(PAYGATE_DECIMAL_CONTEXT):
            product = self.amount * factor
        return Ok(Money(amount=quantize_cents(product), currency=self.currency))

    def mul_quantity(self, quantity: int) -> Ok[Money] | Err[PaymentError]:
        """Multiply by a whole quantity (e.g. cart line items)."""
        return self.mul(Decimal(quantity))

    def apply_discount(
        self, percentage: Decimal, cap: Decimal = DEFAULT_DISCOUNT_CAP,
    ) -> Ok[Money] | Err[PaymentError]:
        """Reduce by percentage (0..cap). The factor is rounded to 4 places first."""
        if percentage < 0 or percentage > cap:
            return Err(PaymentError.of(
                FailureKind.DISCOUNT_OUT_OF_RANGE,
                f"Discount must be between 0% and {cap}%, got {percentage}%",
                "core.money.Money.apply_discount",
                percentage=str(percentage),
                cap=str(cap),
            ))
        with localcontext(PAYGATE_DECIMAL_CONTEXT):
            factor = Decimal(1) - (percentage / _HUNDRED).quantize(
                _FACTOR_PLACES, rounding=_ROUND_HALF_EVEN,
            )
        return self.mul(factor)

    def exceeds(self, other: Money) -> bool:
        """True if self > other. Callers must have checked currencies already."""
        return self.amount > other.amount

    def __str__(self) -> str:
        return f"{self.currency.value} {self.amount}"
