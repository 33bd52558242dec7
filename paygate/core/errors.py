"""Error values — no domain function raises exceptions.

Every rejection is a frozen PaymentError carrying a machine-discriminable
FailureKind and a human-readable message. Callers branch on ``error.kind``
(or ``error.category``) and display ``error.message``.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import final

from paygate.core.types import FrozenMap, ProcessingStage, UtcDatetime


class ErrorCategory(Enum):
    """Layer that produced a failure."""

    AMOUNT = "AMOUNT"
    CARD = "CARD"
    BANK_SLIP = "BANK_SLIP"
    INSTANT_KEY = "INSTANT_KEY"
    CURRENCY = "CURRENCY"


class FailureKind(Enum):
    """Closed enumeration of every reason a payment can be rejected."""

    # Amount
    NULL_OR_MISSING_AMOUNT = "NULL_OR_MISSING_AMOUNT"
    NON_POSITIVE_AMOUNT = "NON_POSITIVE_AMOUNT"
    AMOUNT_EXCEEDS_MAXIMUM = "AMOUNT_EXCEEDS_MAXIMUM"
    # Credit card
    MALFORMED_NUMBER = "MALFORMED_NUMBER"
    FAILED_CHECKSUM = "FAILED_CHECKSUM"
    INVALID_HOLDER_NAME = "INVALID_HOLDER_NAME"
    MALFORMED_EXPIRY = "MALFORMED_EXPIRY"
    EXPIRED_CARD = "EXPIRED_CARD"
    INVALID_CVV = "INVALID_CVV"
    INSUFFICIENT_LIMIT = "INSUFFICIENT_LIMIT"
    # Bank slip
    MALFORMED_BARCODE = "MALFORMED_BARCODE"
    ALREADY_PAID = "ALREADY_PAID"
    MISSING_BENEFICIARY = "MISSING_BENEFICIARY"
    # Instant key
    EMPTY_KEY = "EMPTY_KEY"
    MALFORMED_KEY_FOR_KIND = "MALFORMED_KEY_FOR_KIND"
    FAILED_CHECKSUM_FOR_KIND = "FAILED_CHECKSUM_FOR_KIND"
    TRANSIENT_UNAVAILABLE = "TRANSIENT_UNAVAILABLE"
    # Money
    NEGATIVE_AMOUNT = "NEGATIVE_AMOUNT"
    CURRENCY_MISMATCH = "CURRENCY_MISMATCH"
    DISCOUNT_OUT_OF_RANGE = "DISCOUNT_OUT_OF_RANGE"

    @property
    def category(self) -> ErrorCategory:
        return _CATEGORIES[self]

    @property
    def is_transient(self) -> bool:
        """True when retrying the same instrument later may succeed."""
        return self is FailureKind.TRANSIENT_UNAVAILABLE


_CATEGORIES: dict[FailureKind, ErrorCategory] = {
    FailureKind.NULL_OR_MISSING_AMOUNT: ErrorCategory.AMOUNT,
    FailureKind.NON_POSITIVE_AMOUNT: ErrorCategory.AMOUNT,
    FailureKind.AMOUNT_EXCEEDS_MAXIMUM: ErrorCategory.AMOUNT,
    FailureKind.MALFORMED_NUMBER: ErrorCategory.CARD,
    FailureKind.FAILED_CHECKSUM: ErrorCategory.CARD,
    FailureKind.INVALID_HOLDER_NAME: ErrorCategory.CARD,
    FailureKind.MALFORMED_EXPIRY: ErrorCategory.CARD,
    FailureKind.EXPIRED_CARD: ErrorCategory.CARD,
    FailureKind.INVALID_CVV: ErrorCategory.CARD,
    FailureKind.INSUFFICIENT_LIMIT: ErrorCategory.CARD,
    FailureKind.MALFORMED_BARCODE: ErrorCategory.BANK_SLIP,
    FailureKind.ALREADY_PAID: ErrorCategory.BANK_SLIP,
    FailureKind.MISSING_BENEFICIARY: ErrorCategory.BANK_SLIP,
    FailureKind.EMPTY_KEY: ErrorCategory.INSTANT_KEY,
    FailureKind.MALFORMED_KEY_FOR_KIND: ErrorCategory.INSTANT_KEY,
    FailureKind.FAILED_CHECKSUM_FOR_KIND: ErrorCategory.INSTANT_KEY,
    FailureKind.TRANSIENT_UNAVAILABLE: ErrorCategory.INSTANT_KEY,
    FailureKind.NEGATIVE_AMOUNT: ErrorCategory.CURRENCY,
    FailureKind.CURRENCY_MISMATCH: ErrorCategory.CURRENCY,
    FailureKind.DISCOUNT_OUT_OF_RANGE: ErrorCategory.CURRENCY,
}


@final
@dataclass(frozen=True, slots=True)
class PaymentError:
    """A single typed rejection.

    details holds kind-specific facts as strings, e.g. ``remaining_limit``
    for INSUFFICIENT_LIMIT or ``expected_format`` for MALFORMED_KEY_FOR_KIND.
    stage is filled in by the processing protocol: the last stage the
    attempt completed before failing (CREATED means the amount was rejected).
    """

    kind: FailureKind
    message: str
    timestamp: UtcDatetime
    source: str  # "module.function" that produced this error
    details: FrozenMap[str, str] = FrozenMap.EMPTY
    stage: ProcessingStage | None = None

    @staticmethod
    def of(
        kind: FailureKind, message: str, source: str, **details: str,
    ) -> PaymentError:
        """Build an error stamped with the current time."""
        return PaymentError(
            kind=kind,
            message=message,
            timestamp=UtcDatetime.now(),
            source=source,
            details=FrozenMap.of(**details) if details else FrozenMap.EMPTY,
        )

    @property
    def code(self) -> str:
        return self.kind.value

    @property
    def category(self) -> ErrorCategory:
        return self.kind.category

    def with_context(self, context: str) -> PaymentError:
        """Return a copy with context prepended to message."""
        return replace(self, message=f"{context}: {self.message}")

    def at_stage(self, stage: ProcessingStage) -> PaymentError:
        return replace(self, stage=stage)

    def to_dict(self) -> dict[str, object]:
        """Serialize to a JSON-friendly dict with stable keys."""
        return {
            "kind": self.kind.value,
            "category": self.category.value,
            "message": self.message,
            "timestamp": self.timestamp.value.isoformat(),
            "source": self.source,
            "details": self.details.to_dict(),
            "stage": self.stage.value if self.stage is not None else None,
        }


@final
@dataclass(frozen=True, slots=True)
class FieldViolation:
    """Describes a single field validation failure in raw input."""

    path: str  # e.g. "card.credit_limit"
    constraint: str  # e.g. "required decimal"
    actual_value: str  # e.g. "None"


@final
@dataclass(frozen=True, slots=True)
class ValidationError:
    """One or more raw-input fields could not be parsed into an instrument."""

    message: str
    timestamp: UtcDatetime
    source: str
    fields: tuple[FieldViolation, ...]

    def to_dict(self) -> dict[str, object]:
        return {
            "message": self.message,
            "timestamp": self.timestamp.value.isoformat(),
            "source": self.source,
            "fields": [
                {"path": f.path, "constraint": f.constraint, "actual_value": f.actual_value}
                for f in self.fields
            ],
        }
