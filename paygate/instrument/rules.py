"""Structural and business-rule validation per instrument variant.

Each validator checks its rules in a fixed order and returns the first
violation as Err[PaymentError]. Validators never mutate the instrument.
"""

from __future__ import annotations

import re
from datetime import date

from dateutil.relativedelta import relativedelta

from paygate.core.checksums import business_id_valid, luhn_valid, personal_id_valid
from paygate.core.errors import FailureKind, PaymentError
from paygate.core.result import Err, Ok
from paygate.infra.logging import get_logger
from paygate.infra.protocols import Clock
from paygate.instrument.masking import mask_barcode
from paygate.instrument.types import BankSlip, CreditCard, InstantKey, InstantKeyKind

logger = get_logger(__name__)

_CARD_NUMBER = re.compile(r"[0-9]{16}")
_CVV = re.compile(r"[0-9]{3,4}")
_EXPIRY = re.compile(r"(0[1-9]|1[0-2])/([0-9]{2})")
_BARCODE = re.compile(r"[0-9]{47}")

_MIN_HOLDER_NAME = 2


# ---------------------------------------------------------------------------
# Credit card
# ---------------------------------------------------------------------------


def card_expiry_date(expiry: str) -> date | None:
    """Last day of the month named by 'MM/YY' (years 2000-2099), or None if malformed."""
    m = _EXPIRY.fullmatch(expiry)
    if m is None:
        return None
    month, year = int(m.group(1)), 2000 + int(m.group(2))
    return date(year, month, 1) + relativedelta(months=1, days=-1)


def _card_err(kind: FailureKind, message: str, **details: str) -> Err[PaymentError]:
    return Err(PaymentError.of(kind, message, "instrument.rules.validate_card", **details))


def validate_card(card: CreditCard, clock: Clock) -> Ok[None] | Err[PaymentError]:
    """Number, Luhn, holder name, expiry format, expiry date, CVV, in that order."""
    if not _CARD_NUMBER.fullmatch(card.number):
        return _card_err(
            FailureKind.MALFORMED_NUMBER, "Card number must contain exactly 16 digits",
        )
    if not luhn_valid(card.number):
        return _card_err(
            FailureKind.FAILED_CHECKSUM, "Card number is invalid (Luhn check failed)",
        )
    if len(card.holder_name.strip()) < _MIN_HOLDER_NAME:
        return _card_err(
            FailureKind.INVALID_HOLDER_NAME,
            f"Holder name must have at least {_MIN_HOLDER_NAME} characters",
        )
    expires_on = card_expiry_date(card.expiry)
    if expires_on is None:
        return _card_err(
            FailureKind.MALFORMED_EXPIRY,
            "Expiry date must be in MM/YY format",
            expiry=card.expiry,
        )
    today = clock.today()
    if expires_on < today:
        return _card_err(
            FailureKind.EXPIRED_CARD,
            f"Card expired on {expires_on.isoformat()}",
            expires_on=expires_on.isoformat(),
        )
    if not _CVV.fullmatch(card.cvv):
        return _card_err(FailureKind.INVALID_CVV, "CVV must contain 3 or 4 digits")
    return Ok(None)


# ---------------------------------------------------------------------------
# Bank slip
# ---------------------------------------------------------------------------


def is_overdue(slip: BankSlip, today: date) -> bool:
    return slip.due_date is not None and slip.due_date < today


def _slip_err(kind: FailureKind, message: str) -> Err[PaymentError]:
    return Err(PaymentError.of(kind, message, "instrument.rules.validate_bank_slip"))


def validate_bank_slip(slip: BankSlip, clock: Clock) -> Ok[None] | Err[PaymentError]:
    """Barcode, not already paid, beneficiary. Overdue is only an advisory."""
    if not _BARCODE.fullmatch(slip.barcode):
        return _slip_err(
            FailureKind.MALFORMED_BARCODE, "Barcode must contain exactly 47 digits",
        )
    if slip.paid:
        return _slip_err(FailureKind.ALREADY_PAID, "Bank slip has already been paid")
    if not slip.beneficiary.strip():
        return _slip_err(FailureKind.MISSING_BENEFICIARY, "Beneficiary cannot be empty")
    if is_overdue(slip, clock.today()):
        logger.warning(
            "Bank slip %s is overdue since %s; penalty and interest will apply",
            mask_barcode(slip.barcode), slip.due_date,
        )
    return Ok(None)


# ---------------------------------------------------------------------------
# Instant key
# ---------------------------------------------------------------------------


def _key_err(kind: FailureKind, message: str, **details: str) -> Err[PaymentError]:
    return Err(PaymentError.of(
        kind, message, "instrument.rules.validate_instant_key", **details,
    ))


def validate_instant_key(key: InstantKey) -> Ok[None] | Err[PaymentError]:
    """Non-blank, kind format, then CPF/CNPJ check digits for those kinds."""
    if not key.key.strip():
        return _key_err(FailureKind.EMPTY_KEY, "PIX key cannot be empty")
    if not key.kind.pattern.fullmatch(key.key):
        return _key_err(
            FailureKind.MALFORMED_KEY_FOR_KIND,
            f"Invalid format for {key.kind.label} key. "
            f"Expected format: {key.kind.expected_format}",
            expected_format=key.kind.expected_format,
            key_kind=key.kind.value,
        )
    match key.kind:
        case InstantKeyKind.PERSONAL_ID if not personal_id_valid(key.key):
            return _key_err(
                FailureKind.FAILED_CHECKSUM_FOR_KIND, "Invalid CPF",
                key_kind=key.kind.value,
            )
        case InstantKeyKind.BUSINESS_ID if not business_id_valid(key.key):
            return _key_err(
                FailureKind.FAILED_CHECKSUM_FOR_KIND, "Invalid CNPJ",
                key_kind=key.kind.value,
            )
        case _:
            return Ok(None)
