"""Payment instrument variants.

PaymentInstrument is a closed union: CreditCard | BankSlip | InstantKey.
Code that dispatches on it uses ``match`` with ``assert_never`` so adding a
variant fails type checking everywhere it must be handled.

CreditCard and BankSlip hold mutable settlement state (used_amount, paid).
That state changes only inside a successful settlement of the same
instrument; an instrument instance must not be processed concurrently.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import ClassVar, final

from paygate.core.money import Money


class InstantKeyKind(Enum):
    """Kinds of instant-transfer (PIX) key, with format and display data."""

    PERSONAL_ID = "PERSONAL_ID"
    BUSINESS_ID = "BUSINESS_ID"
    EMAIL = "EMAIL"
    PHONE = "PHONE"
    RANDOM_TOKEN = "RANDOM_TOKEN"

    @property
    def label(self) -> str:
        return _KEY_LABELS[self]

    @property
    def pattern(self) -> re.Pattern[str]:
        return _KEY_PATTERNS[self]

    @property
    def expected_format(self) -> str:
        """Example of a well-formed key, echoed back in format errors."""
        return _KEY_EXAMPLES[self]


_KEY_LABELS: dict[InstantKeyKind, str] = {
    InstantKeyKind.PERSONAL_ID: "CPF",
    InstantKeyKind.BUSINESS_ID: "CNPJ",
    InstantKeyKind.EMAIL: "E-mail",
    InstantKeyKind.PHONE: "Phone",
    InstantKeyKind.RANDOM_TOKEN: "Random key",
}

# Used with fullmatch(); no anchors needed.
_KEY_PATTERNS: dict[InstantKeyKind, re.Pattern[str]] = {
    InstantKeyKind.PERSONAL_ID: re.compile(r"[0-9]{11}"),
    InstantKeyKind.BUSINESS_ID: re.compile(r"[0-9]{14}"),
    InstantKeyKind.EMAIL: re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}"),
    InstantKeyKind.PHONE: re.compile(r"\+55[0-9]{10,11}"),
    InstantKeyKind.RANDOM_TOKEN: re.compile(
        r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}"
    ),
}

_KEY_EXAMPLES: dict[InstantKeyKind, str] = {
    InstantKeyKind.PERSONAL_ID: "11111111111",
    InstantKeyKind.BUSINESS_ID: "11111111111111",
    InstantKeyKind.EMAIL: "usuario@exemplo.com",
    InstantKeyKind.PHONE: "+5511999999999",
    InstantKeyKind.RANDOM_TOKEN: "aaaaaaaa-aaaa-aaaa-aaaa-aaaaaaaaaaaa",
}


@final
@dataclass(slots=True)
class CreditCard:
    """Credit card with a running credit limit.

    used_amount starts at zero in the limit's currency and only grows.
    """

    number: str
    holder_name: str
    expiry: str  # "MM/YY"
    cvv: str
    credit_limit: Money
    used_amount: Money = field(init=False)

    kind_label: ClassVar[str] = "Credit card"

    def __post_init__(self) -> None:
        self.used_amount = Money.zero(self.credit_limit.currency)

    @property
    def identifier(self) -> str:
        return self.number

    @property
    def description(self) -> str:
        return f"Credit card - {self.holder_name}"


@final
@dataclass(slots=True)
class BankSlip:
    """Bank slip (boleto). paid flips to True once, on successful settlement."""

    barcode: str
    due_date: date | None
    beneficiary: str
    paid: bool = field(default=False, init=False)

    kind_label: ClassVar[str] = "Bank slip"

    @property
    def identifier(self) -> str:
        return self.barcode

    @property
    def description(self) -> str:
        return f"Bank slip - {self.beneficiary}"


@final
@dataclass(frozen=True, slots=True)
class InstantKey:
    """Instant-transfer key with an optional payment note."""

    key: str
    kind: InstantKeyKind
    note: str | None = None

    kind_label: ClassVar[str] = "PIX"

    @property
    def identifier(self) -> str:
        return self.key

    @property
    def description(self) -> str:
        return f"PIX - {self.kind.label}"


type PaymentInstrument = CreditCard | BankSlip | InstantKey
