"""Gateway parser — raw dict to PaymentInstrument.

parse_instrument is the single entry point for instrument data arriving
from outside (forms, JSON bodies). It only checks that fields are present
and of the right shape to build the instrument; business rules (Luhn,
expiry, key format) are the processing engine's job.

Total: always returns Ok or Err, never raises.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from paygate.core.errors import FieldViolation, ValidationError
from paygate.core.money import Currency, Money, representable_in_cents
from paygate.core.result import Err, Ok
from paygate.core.types import UtcDatetime
from paygate.instrument.types import (
    BankSlip,
    CreditCard,
    InstantKey,
    InstantKeyKind,
    PaymentInstrument,
)

_SOURCE = "gateway.parser.parse_instrument"


def _extract_str(raw: dict[str, Any], key: str) -> str | None:
    val = raw.get(key)
    if isinstance(val, str):
        return val
    return None


def _extract_date(raw: dict[str, Any], key: str) -> date | None:
    val = raw.get(key)
    if isinstance(val, date) and not isinstance(val, datetime):
        return val
    if isinstance(val, str):
        try:
            return date.fromisoformat(val)
        except ValueError:
            return None
    return None


def _extract_decimal(raw: dict[str, Any], key: str) -> Decimal | None:
    val = raw.get(key)
    if isinstance(val, Decimal):
        return val if val.is_finite() else None
    if isinstance(val, (int, str)) and not isinstance(val, bool):
        try:
            parsed = Decimal(str(val))
        except InvalidOperation:
            return None
        return parsed if parsed.is_finite() else None
    return None


def _required_str(
    raw: dict[str, Any], key: str, prefix: str, violations: list[FieldViolation],
) -> str:
    value = _extract_str(raw, key)
    if value is None:
        violations.append(FieldViolation(
            path=f"{prefix}.{key}", constraint="required string",
            actual_value=repr(raw.get(key)),
        ))
        return ""
    return value


def _fail(violations: list[FieldViolation]) -> Err[ValidationError]:
    return Err(ValidationError(
        message=f"Instrument parsing failed: {len(violations)} violation(s)",
        timestamp=UtcDatetime.now(),
        source=_SOURCE,
        fields=tuple(violations),
    ))


def _parse_card(raw: dict[str, Any]) -> Ok[PaymentInstrument] | Err[ValidationError]:
    violations: list[FieldViolation] = []
    number = _required_str(raw, "number", "card", violations)
    holder_name = _required_str(raw, "holder_name", "card", violations)
    expiry = _required_str(raw, "expiry", "card", violations)
    cvv = _required_str(raw, "cvv", "card", violations)

    currency_raw = _extract_str(raw, "currency") or Currency.BRL.value
    currency: Currency | None = None
    try:
        currency = Currency(currency_raw.upper())
    except ValueError:
        violations.append(FieldViolation(
            path="card.currency",
            constraint=f"one of {', '.join(c.value for c in Currency)}",
            actual_value=repr(currency_raw),
        ))

    limit = _extract_decimal(raw, "credit_limit")
    if limit is None or limit < 0 or not representable_in_cents(limit):
        violations.append(FieldViolation(
            path="card.credit_limit", constraint="required non-negative decimal",
            actual_value=repr(raw.get("credit_limit")),
        ))

    if violations or limit is None or currency is None:
        return _fail(violations)
    match Money.create(limit, currency):
        case Err(e):
            return _fail([FieldViolation(
                path="card.credit_limit", constraint=e.message, actual_value=str(limit),
            )])
        case Ok(credit_limit):
            return Ok(CreditCard(
                number=number, holder_name=holder_name, expiry=expiry, cvv=cvv,
                credit_limit=credit_limit,
            ))


def _parse_bank_slip(raw: dict[str, Any]) -> Ok[PaymentInstrument] | Err[ValidationError]:
    violations: list[FieldViolation] = []
    barcode = _required_str(raw, "barcode", "bank_slip", violations)
    beneficiary = _required_str(raw, "beneficiary", "bank_slip", violations)

    due_date: date | None = None
    if raw.get("due_date") is not None:
        due_date = _extract_date(raw, "due_date")
        if due_date is None:
            violations.append(FieldViolation(
                path="bank_slip.due_date", constraint="ISO date (YYYY-MM-DD)",
                actual_value=repr(raw.get("due_date")),
            ))

    if violations:
        return _fail(violations)
    return Ok(BankSlip(barcode=barcode, due_date=due_date, beneficiary=beneficiary))


def _parse_instant_key(raw: dict[str, Any]) -> Ok[PaymentInstrument] | Err[ValidationError]:
    violations: list[FieldViolation] = []
    key = _required_str(raw, "key", "instant_key", violations)

    kind_raw = _extract_str(raw, "key_kind")
    kind: InstantKeyKind | None = None
    try:
        kind = InstantKeyKind((kind_raw or "").upper())
    except ValueError:
        violations.append(FieldViolation(
            path="instant_key.key_kind",
            constraint=f"one of {', '.join(k.value for k in InstantKeyKind)}",
            actual_value=repr(raw.get("key_kind")),
        ))

    note = raw.get("note")
    if note is not None and not isinstance(note, str):
        violations.append(FieldViolation(
            path="instant_key.note", constraint="optional string", actual_value=repr(note),
        ))
        note = None

    if violations or kind is None:
        return _fail(violations)
    return Ok(InstantKey(key=key, kind=kind, note=note))


def parse_instrument(raw: dict[str, Any]) -> Ok[PaymentInstrument] | Err[ValidationError]:
    """Parse ``{"type": "card" | "bank_slip" | "instant_key", ...}`` into an instrument."""
    match raw.get("type"):
        case "card":
            return _parse_card(raw)
        case "bank_slip":
            return _parse_bank_slip(raw)
        case "instant_key":
            return _parse_instant_key(raw)
        case other:
            return _fail([FieldViolation(
                path="type", constraint="one of card, bank_slip, instant_key",
                actual_value=repr(other),
            )])
