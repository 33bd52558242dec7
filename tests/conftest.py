"""Hypothesis profiles and pytest fixtures for paygate.

Every fixture pins the environment: the clock is fixed at TODAY and the
random source is scripted, so no test depends on the wall clock or on luck.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest
from hypothesis import HealthCheck, settings

from paygate.core.money import Currency, Money
from paygate.core.result import unwrap
from paygate.infra.adapters import FixedClock, ScriptedRandomSource
from paygate.infra.config import EngineConfig
from paygate.instrument.types import BankSlip, CreditCard, InstantKey, InstantKeyKind
from paygate.processing.engine import ProcessingContext

# ---------------------------------------------------------------------------
# Hypothesis global settings
# ---------------------------------------------------------------------------

settings.register_profile(
    "ci",
    max_examples=200,
    suppress_health_check=[HealthCheck.too_slow],
    deadline=None,
)
settings.register_profile(
    "dev",
    max_examples=50,
    suppress_health_check=[HealthCheck.too_slow],
    deadline=None,
)
settings.load_profile("dev")

# ---------------------------------------------------------------------------
# Shared constants
# ---------------------------------------------------------------------------

TODAY = date(2026, 10, 17)

VALID_CARD_NUMBER = "4532015112830366"
VALID_BARCODE = "23791111100000001234567890123456789012345671234"
VALID_CPF = "52998224725"
VALID_CNPJ = "11222333000181"

# First draw 9_999 never trips a 5% failure rate; second draw is the tx id.
SUCCESS_DRAWS = (9_999, 12_345_678)
# First draw 0 always trips any non-zero failure rate.
FAILURE_DRAWS = (0,)


def brl(amount: str) -> Money:
    return unwrap(Money.create(Decimal(amount), Currency.BRL))


def make_card(limit: str = "5000.00", **overrides: str) -> CreditCard:
    fields = {
        "number": VALID_CARD_NUMBER,
        "holder_name": "João Silva",
        "expiry": "12/30",
        "cvv": "123",
    }
    fields.update(overrides)
    return CreditCard(credit_limit=brl(limit), **fields)


def make_slip(
    due_date: date | None = None, barcode: str = VALID_BARCODE, beneficiary: str = "Loja ABC Ltda",
) -> BankSlip:
    return BankSlip(barcode=barcode, due_date=due_date, beneficiary=beneficiary)


def make_context(*draws: int, config: EngineConfig | None = None) -> ProcessingContext:
    return ProcessingContext(
        config=config if config is not None else EngineConfig(),
        clock=FixedClock(TODAY),
        random=ScriptedRandomSource(draws),
    )


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(TODAY)


@pytest.fixture
def context() -> ProcessingContext:
    """Context whose random source lets exactly one PIX settlement succeed."""
    return make_context(*SUCCESS_DRAWS)


@pytest.fixture
def card() -> CreditCard:
    return make_card()


@pytest.fixture
def slip() -> BankSlip:
    return make_slip()


@pytest.fixture
def email_key() -> InstantKey:
    return InstantKey(
        key="usuario@exemplo.com", kind=InstantKeyKind.EMAIL, note="Transfer to a friend",
    )
