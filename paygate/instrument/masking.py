"""Masked renderings of instrument identifiers for receipts and logs.

Every function is pure. Inputs are assumed to have passed validation; on
anything shorter than expected the output degrades to a full mask rather
than leaking characters.
"""

from __future__ import annotations

from typing import assert_never

from paygate.instrument.types import (
    BankSlip,
    CreditCard,
    InstantKey,
    InstantKeyKind,
    PaymentInstrument,
)

FULL_MASK = "***"


def mask_card_number(number: str) -> str:
    """'4532015112830366' -> '**** **** **** 0366'."""
    if len(number) < 8:
        return FULL_MASK
    return "**** **** **** " + number[-4:]


def mask_barcode(barcode: str) -> str:
    """First 5 and last 5 digits, middle elided."""
    if len(barcode) <= 10:
        return FULL_MASK
    return f"{barcode[:5]}...{barcode[-5:]}"


def mask_instant_key(key: str, kind: InstantKeyKind) -> str:
    match kind:
        case InstantKeyKind.PERSONAL_ID:
            if len(key) != 11:
                return FULL_MASK
            return f"{key[:3]}.***.***-{key[9:]}"
        case InstantKeyKind.BUSINESS_ID:
            if len(key) != 14:
                return FULL_MASK
            return f"{key[:2]}.***.***/****-{key[12:]}"
        case InstantKeyKind.EMAIL:
            local, at, domain = key.partition("@")
            if not at or not local:
                return FULL_MASK
            return f"{local[:3]}***@{domain}"
        case InstantKeyKind.PHONE:
            if len(key) < 8:
                return FULL_MASK
            return f"{key[:3]} (**) ****-{key[-4:]}"
        case InstantKeyKind.RANDOM_TOKEN:
            if len(key) != 36:
                return FULL_MASK
            return f"{key[:8]}-****-****-****-{key[-4:]}"
        case _never:
            assert_never(_never)


def mask_identifier(instrument: PaymentInstrument) -> str:
    match instrument:
        case CreditCard():
            return mask_card_number(instrument.number)
        case BankSlip():
            return mask_barcode(instrument.barcode)
        case InstantKey():
            return mask_instant_key(instrument.key, instrument.kind)
        case _never:
            assert_never(_never)


def describe(instrument: PaymentInstrument) -> str:
    """'<kind>: <description> (<masked identifier>)' for listings."""
    return f"{instrument.kind_label}: {instrument.description} ({mask_identifier(instrument)})"
