"""Tests for paygate.settlement — card limit, bank slip late fees, PIX provider."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

import pytest

from paygate.core.errors import FailureKind
from paygate.core.money import Currency, Money
from paygate.core.result import unwrap, unwrap_err
from paygate.infra.adapters import ScriptedRandomSource
from paygate.infra.config import EngineConfig
from paygate.instrument.types import InstantKey, InstantKeyKind
from paygate.settlement.bank_slip import compute_late_fee, execute_bank_slip
from paygate.settlement.card import execute_card, remaining_limit
from paygate.settlement.instant_key import (
    execute_instant_key,
    is_transient_failure,
    new_transaction_id,
)
from paygate.settlement.types import LateFeeBreakdown
from tests.conftest import FAILURE_DRAWS, SUCCESS_DRAWS, TODAY, brl, make_card, make_slip

# ---------------------------------------------------------------------------
# Credit card
# ---------------------------------------------------------------------------


class TestExecuteCard:
    def test_charge_consumes_limit(self) -> None:
        card = make_card(limit="100.00")
        settlement = unwrap(execute_card(card, brl("60.00")))
        assert settlement.amount == brl("60.00")
        assert settlement.remaining_limit == brl("40.00")
        assert settlement.masked_number == "**** **** **** 0366"
        assert card.used_amount == brl("60.00")

    def test_second_charge_over_limit_rejected(self) -> None:
        card = make_card(limit="100.00")
        unwrap(execute_card(card, brl("60.00")))
        err = unwrap_err(execute_card(card, brl("60.00")))
        assert err.kind is FailureKind.INSUFFICIENT_LIMIT
        assert err.details["remaining_limit"] == "40.00"
        assert err.message == "Insufficient limit. Available: BRL 40.00"
        assert card.used_amount == brl("60.00")

    def test_charge_exactly_remaining_limit(self) -> None:
        card = make_card(limit="100.00")
        settlement = unwrap(execute_card(card, brl("100.00")))
        assert settlement.remaining_limit == brl("0.00")
        assert remaining_limit(card) == brl("0.00")

    def test_currency_mismatch_leaves_card_untouched(self) -> None:
        card = make_card(limit="100.00")
        usd = unwrap(Money.create(Decimal("10"), Currency.USD))
        err = unwrap_err(execute_card(card, usd))
        assert err.kind is FailureKind.CURRENCY_MISMATCH
        assert err.message.startswith("Card charge: ")
        assert card.used_amount == brl("0.00")

    def test_confirmation_and_metadata(self) -> None:
        settlement = unwrap(execute_card(make_card(limit="100.00"), brl("60.00")))
        assert settlement.confirmation() == (
            "Payment of BRL 60.00 approved on card **** **** **** 0366. "
            "Remaining limit: BRL 40.00"
        )
        assert settlement.metadata().to_dict() == {"remaining_limit": "40.00"}


# ---------------------------------------------------------------------------
# Bank slip
# ---------------------------------------------------------------------------


class TestLateFee:
    def test_ten_days_late(self) -> None:
        fee = unwrap(compute_late_fee(brl("100.00"), 10, EngineConfig()))
        assert fee == LateFeeBreakdown(days_late=10, penalty=brl("2.00"), interest=brl("1.00"))

    def test_rounding_is_per_component(self) -> None:
        # 0.02 * 33.33 = 0.6666 -> 0.67; 0.001 * 3 * 33.33 = 0.09999 -> 0.10
        fee = unwrap(compute_late_fee(brl("33.33"), 3, EngineConfig()))
        assert fee.penalty == brl("0.67")
        assert fee.interest == brl("0.10")

    def test_rates_come_from_config(self) -> None:
        config = EngineConfig(late_penalty_rate=Decimal("0.10"), daily_interest_rate=Decimal("0"))
        fee = unwrap(compute_late_fee(brl("50.00"), 4, config))
        assert fee.penalty == brl("5.00")
        assert fee.interest == brl("0.00")


class TestExecuteBankSlip:
    def test_on_time_settles_face_value(self) -> None:
        slip = make_slip(TODAY + timedelta(days=3))
        settlement = unwrap(execute_bank_slip(slip, brl("100.00"), TODAY, EngineConfig()))
        assert settlement.settled_amount == brl("100.00")
        assert settlement.late_fee is None
        assert settlement.advisories == ()
        assert slip.paid

    def test_ten_days_late_adds_penalty_and_interest(self) -> None:
        slip = make_slip(TODAY - timedelta(days=10))
        settlement = unwrap(execute_bank_slip(slip, brl("100.00"), TODAY, EngineConfig()))
        assert settlement.original_amount == brl("100.00")
        assert settlement.settled_amount == brl("103.00")
        assert settlement.amount == brl("103.00")
        assert settlement.late_fee is not None
        assert settlement.late_fee.penalty == brl("2.00")
        assert settlement.late_fee.interest == brl("1.00")
        assert settlement.advisories == (
            "Bank slip overdue by 10 day(s); penalty and interest applied",
        )
        assert settlement.metadata()["days_late"] == "10"

    def test_confirmation_shows_breakdown(self) -> None:
        slip = make_slip(TODAY - timedelta(days=10))
        settlement = unwrap(execute_bank_slip(slip, brl("100.00"), TODAY, EngineConfig()))
        assert settlement.confirmation() == (
            "Bank slip 23791...71234 paid. Amount: BRL 103.00 "
            "(Original amount: BRL 100.00 + Penalty: BRL 2.00 + Interest: BRL 1.00). "
            "Beneficiary: Loja ABC Ltda"
        )

    def test_no_due_date_never_late(self) -> None:
        settlement = unwrap(execute_bank_slip(make_slip(None), brl("10.00"), TODAY, EngineConfig()))
        assert settlement.late_fee is None


# ---------------------------------------------------------------------------
# Instant key
# ---------------------------------------------------------------------------


def _email_key(note: str | None = None) -> InstantKey:
    return InstantKey(key="usuario@exemplo.com", kind=InstantKeyKind.EMAIL, note=note)


class TestTransientFailure:
    @pytest.mark.parametrize(("draw", "fails"), [(0, True), (499, True), (500, False)])
    def test_five_percent_threshold(self, draw: int, fails: bool) -> None:
        assert is_transient_failure(ScriptedRandomSource([draw]), Decimal("0.05")) is fails

    def test_zero_rate_never_fails(self) -> None:
        assert not is_transient_failure(ScriptedRandomSource([0]), Decimal("0"))

    def test_transaction_id_zero_padded(self) -> None:
        assert new_transaction_id(ScriptedRandomSource([42]), EngineConfig()) == "PIX00000042"


class TestExecuteInstantKey:
    def test_success(self) -> None:
        random = ScriptedRandomSource(SUCCESS_DRAWS)
        settlement = unwrap(execute_instant_key(
            _email_key("Transfer to a friend"), brl("250.00"), random, EngineConfig(),
        ))
        assert settlement.transaction_id == "PIX12345678"
        assert settlement.masked_key == "usu***@exemplo.com"
        assert settlement.note == "Transfer to a friend"
        assert settlement.confirmation() == (
            "PIX of BRL 250.00 sent to usu***@exemplo.com (E-mail). "
            "ID: PIX12345678. Note: Transfer to a friend"
        )

    def test_transient_failure(self) -> None:
        random = ScriptedRandomSource(FAILURE_DRAWS)
        err = unwrap_err(execute_instant_key(_email_key(), brl("250.00"), random, EngineConfig()))
        assert err.kind is FailureKind.TRANSIENT_UNAVAILABLE
        assert err.kind.is_transient
        assert err.message == "PIX key temporarily unavailable"
        assert random.draws == 1

    def test_metadata_without_note(self) -> None:
        random = ScriptedRandomSource(SUCCESS_DRAWS)
        settlement = unwrap(execute_instant_key(_email_key(), brl("1.00"), random, EngineConfig()))
        assert settlement.metadata().to_dict() == {
            "transaction_id": "PIX12345678", "key_kind": "EMAIL",
        }
