"""Tests for paygate.core.errors — failure taxonomy and error values."""

from __future__ import annotations

import dataclasses
import json

import pytest

from paygate.core.errors import (
    ErrorCategory,
    FailureKind,
    FieldViolation,
    PaymentError,
    ValidationError,
)
from paygate.core.types import ProcessingStage, UtcDatetime


def _err(**details: str) -> PaymentError:
    return PaymentError.of(FailureKind.INSUFFICIENT_LIMIT, "no limit", "test.fn", **details)


class TestFailureKind:
    def test_every_kind_has_a_category(self) -> None:
        for kind in FailureKind:
            assert isinstance(kind.category, ErrorCategory)

    @pytest.mark.parametrize(
        ("kind", "category"),
        [
            (FailureKind.NON_POSITIVE_AMOUNT, ErrorCategory.AMOUNT),
            (FailureKind.EXPIRED_CARD, ErrorCategory.CARD),
            (FailureKind.ALREADY_PAID, ErrorCategory.BANK_SLIP),
            (FailureKind.MALFORMED_KEY_FOR_KIND, ErrorCategory.INSTANT_KEY),
            (FailureKind.CURRENCY_MISMATCH, ErrorCategory.CURRENCY),
        ],
    )
    def test_category_mapping(self, kind: FailureKind, category: ErrorCategory) -> None:
        assert kind.category is category

    def test_only_transient_unavailable_is_transient(self) -> None:
        transient = [k for k in FailureKind if k.is_transient]
        assert transient == [FailureKind.TRANSIENT_UNAVAILABLE]


class TestPaymentError:
    def test_is_frozen(self) -> None:
        err = _err()
        with pytest.raises(dataclasses.FrozenInstanceError):
            err.message = "changed"  # type: ignore[misc]

    def test_code_is_kind_value(self) -> None:
        assert _err().code == "INSUFFICIENT_LIMIT"

    def test_details_recorded(self) -> None:
        err = _err(remaining_limit="40.00")
        assert err.details["remaining_limit"] == "40.00"

    def test_no_details_is_empty_map(self) -> None:
        assert len(_err().details) == 0

    def test_with_context_prepends(self) -> None:
        assert _err().with_context("card 0366").message == "card 0366: no limit"

    def test_at_stage(self) -> None:
        err = _err().at_stage(ProcessingStage.INSTRUMENT_VALIDATED)
        assert err.stage is ProcessingStage.INSTRUMENT_VALIDATED

    def test_to_dict_keys_and_json(self) -> None:
        d = _err(remaining_limit="1.00").to_dict()
        assert set(d) == {
            "kind", "category", "message", "timestamp", "source", "details", "stage",
        }
        assert d["details"] == {"remaining_limit": "1.00"}
        assert d["stage"] is None
        json.dumps(d)


class TestValidationError:
    def test_to_dict_lists_fields(self) -> None:
        err = ValidationError(
            message="bad",
            timestamp=UtcDatetime.now(),
            source="test",
            fields=(FieldViolation(path="card.cvv", constraint="required string", actual_value="None"),),
        )
        d = err.to_dict()
        assert d["fields"] == [
            {"path": "card.cvv", "constraint": "required string", "actual_value": "None"},
        ]
