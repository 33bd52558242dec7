"""Payment processing protocol.

process_payment runs, for every instrument variant, the same strictly
ordered stages:

    CREATED -> AMOUNT_VALIDATED -> INSTRUMENT_VALIDATED -> EXECUTED

Any Err moves the attempt straight to FAILED and skips the remaining
stages. Only the validate and execute steps differ per variant; they are
dispatched with an exhaustive match over PaymentInstrument.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from typing import assert_never, final

from paygate.core.errors import FailureKind, PaymentError
from paygate.core.money import Money, quantize_cents, representable_in_cents
from paygate.core.result import Err, Ok
from paygate.core.types import ProcessingStage
from paygate.infra.adapters import SystemClock, SystemRandomSource
from paygate.infra.config import EngineConfig
from paygate.infra.logging import get_logger
from paygate.infra.protocols import Clock, RandomSource
from paygate.instrument.masking import mask_identifier
from paygate.instrument.rules import validate_bank_slip, validate_card, validate_instant_key
from paygate.instrument.types import BankSlip, CreditCard, InstantKey, PaymentInstrument
from paygate.settlement.bank_slip import execute_bank_slip
from paygate.settlement.card import execute_card
from paygate.settlement.instant_key import execute_instant_key
from paygate.settlement.types import Settlement

logger = get_logger(__name__)

# ---------------------------------------------------------------------------
# Stage transitions
# ---------------------------------------------------------------------------

type StageTransitions = frozenset[tuple[ProcessingStage, ProcessingStage]]

PROCESSING_TRANSITIONS: StageTransitions = frozenset({
    (ProcessingStage.CREATED, ProcessingStage.AMOUNT_VALIDATED),
    (ProcessingStage.CREATED, ProcessingStage.FAILED),
    (ProcessingStage.AMOUNT_VALIDATED, ProcessingStage.INSTRUMENT_VALIDATED),
    (ProcessingStage.AMOUNT_VALIDATED, ProcessingStage.FAILED),
    (ProcessingStage.INSTRUMENT_VALIDATED, ProcessingStage.EXECUTED),
    (ProcessingStage.INSTRUMENT_VALIDATED, ProcessingStage.FAILED),
})


def check_stage_transition(
    from_stage: ProcessingStage, to_stage: ProcessingStage,
) -> Ok[None] | Err[str]:
    if (from_stage, to_stage) in PROCESSING_TRANSITIONS:
        return Ok(None)
    return Err(f"Invalid transition: {from_stage.value} -> {to_stage.value}")


@final
class _StageTracker:
    """Records the stages one attempt passes through."""

    def __init__(self) -> None:
        self.history: list[ProcessingStage] = [ProcessingStage.CREATED]

    @property
    def current(self) -> ProcessingStage:
        return self.history[-1]

    def advance(self, to_stage: ProcessingStage) -> None:
        match check_stage_transition(self.current, to_stage):
            case Err(reason):
                # Engine bug, not a payment outcome.
                raise RuntimeError(reason)
            case Ok(_):
                self.history.append(to_stage)

    def fail(self, error: PaymentError) -> Err[PaymentError]:
        """Stamp the stage that rejected the payment, then move to FAILED."""
        failed_at = self.current
        self.advance(ProcessingStage.FAILED)
        return Err(error.at_stage(failed_at))


# ---------------------------------------------------------------------------
# Context
# ---------------------------------------------------------------------------


@final
@dataclass(frozen=True, slots=True)
class ProcessingContext:
    """Everything the engine reads from its environment."""

    config: EngineConfig = field(default_factory=EngineConfig)
    clock: Clock = field(default_factory=SystemClock)
    random: RandomSource = field(default_factory=SystemRandomSource)

    @staticmethod
    def default() -> ProcessingContext:
        return ProcessingContext()


# ---------------------------------------------------------------------------
# Stages
# ---------------------------------------------------------------------------


def _amount_err(kind: FailureKind, message: str, **details: str) -> Err[PaymentError]:
    return Err(PaymentError.of(kind, message, "processing.engine.validate_amount", **details))


def validate_amount(
    amount: Money | Decimal | None, config: EngineConfig,
) -> Ok[Money] | Err[PaymentError]:
    """Instrument-agnostic checks: present, positive, at most config.max_amount.

    A bare Decimal is taken to be in config.currency. Checks apply to the
    amount as rounded to cents, so 0.004 is non-positive.

    Raises TypeError for anything other than None, Money or a finite
    Decimal, as Money.create does.
    """
    if amount is None:
        return _amount_err(FailureKind.NULL_OR_MISSING_AMOUNT, "Amount cannot be null")
    if isinstance(amount, Money):
        raw = amount.amount
    elif not isinstance(amount, Decimal) or not amount.is_finite():
        raise TypeError(f"Amount must be Money or a finite Decimal, got {amount!r}")
    elif representable_in_cents(amount):
        raw = quantize_cents(amount)
    else:
        # Too many digits to round to cents; the sign decides which check fails.
        raw = amount
    if raw <= 0:
        return _amount_err(
            FailureKind.NON_POSITIVE_AMOUNT, "Amount must be positive", amount=str(raw),
        )
    if raw > config.max_amount:
        return _amount_err(
            FailureKind.AMOUNT_EXCEEDS_MAXIMUM,
            f"Amount exceeds the maximum allowed ({config.max_amount})",
            amount=str(raw),
            maximum=str(config.max_amount),
        )
    if isinstance(amount, Money):
        return Ok(amount)
    return Money.create(raw, config.currency)


def validate_instrument(
    instrument: PaymentInstrument, context: ProcessingContext,
) -> Ok[None] | Err[PaymentError]:
    match instrument:
        case CreditCard():
            return validate_card(instrument, context.clock)
        case BankSlip():
            return validate_bank_slip(instrument, context.clock)
        case InstantKey():
            return validate_instant_key(instrument)
        case _never:
            assert_never(_never)


def execute_instrument(
    instrument: PaymentInstrument, amount: Money, context: ProcessingContext,
) -> Ok[Settlement] | Err[PaymentError]:
    match instrument:
        case CreditCard():
            return execute_card(instrument, amount)
        case BankSlip():
            return execute_bank_slip(
                instrument, amount, context.clock.today(), context.config,
            )
        case InstantKey():
            return execute_instant_key(instrument, amount, context.random, context.config)
        case _never:
            assert_never(_never)


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------


def process_payment(
    instrument: PaymentInstrument,
    amount: Money | Decimal | None,
    context: ProcessingContext,
) -> Ok[Settlement] | Err[PaymentError]:
    """Validate the amount, validate the instrument, then settle.

    Returns the settlement record or the first failure, stamped with the
    stage at which it occurred. Instrument state changes only on Ok.
    """
    tracker = _StageTracker()
    masked = mask_identifier(instrument)

    match validate_amount(amount, context.config):
        case Err(e):
            return _log_failure(instrument, masked, tracker.fail(e))
        case Ok(money):
            tracker.advance(ProcessingStage.AMOUNT_VALIDATED)

    match validate_instrument(instrument, context):
        case Err(e):
            return _log_failure(instrument, masked, tracker.fail(e))
        case Ok(_):
            tracker.advance(ProcessingStage.INSTRUMENT_VALIDATED)

    match execute_instrument(instrument, money, context):
        case Err(e):
            return _log_failure(instrument, masked, tracker.fail(e))
        case Ok(settlement):
            tracker.advance(ProcessingStage.EXECUTED)

    logger.debug(
        "%s %s stages: %s",
        instrument.kind_label, masked, " -> ".join(s.value for s in tracker.history),
    )
    logger.info("%s %s settled %s", instrument.kind_label, masked, settlement.amount)
    return Ok(settlement)


def _log_failure(
    instrument: PaymentInstrument, masked: str, result: Err[PaymentError],
) -> Err[PaymentError]:
    error = result.error
    logger.info(
        "%s %s rejected at %s: %s (%s)",
        instrument.kind_label,
        masked,
        error.stage.value if error.stage is not None else "?",
        error.message,
        error.code,
        extra={"payment": {"kind": error.code, "instrument": masked}},
    )
    return result


@final
@dataclass(frozen=True, slots=True)
class FallbackOutcome:
    """Result of trying instruments in order until one settles."""

    settlement: Settlement
    instrument_index: int
    failures: tuple[PaymentError, ...]


def process_with_fallback(
    instruments: Sequence[PaymentInstrument],
    amount: Money | Decimal | None,
    context: ProcessingContext,
) -> Ok[FallbackOutcome] | Err[tuple[PaymentError, ...]]:
    """Try each instrument in order and stop at the first success.

    Err carries one PaymentError per instrument tried, in order (empty when
    no instrument was given).
    """
    failures: list[PaymentError] = []
    for index, instrument in enumerate(instruments):
        match process_payment(instrument, amount, context):
            case Ok(settlement):
                return Ok(FallbackOutcome(
                    settlement=settlement,
                    instrument_index=index,
                    failures=tuple(failures),
                ))
            case Err(e):
                failures.append(e)
    logger.info("No payment instrument succeeded after %d attempt(s)", len(failures))
    return Err(tuple(failures))


@final
class PaymentProcessor:
    """Entry point bound to one ProcessingContext."""

    def __init__(self, context: ProcessingContext | None = None) -> None:
        self._context = context if context is not None else ProcessingContext.default()

    @property
    def context(self) -> ProcessingContext:
        return self._context

    def process(
        self, instrument: PaymentInstrument, amount: Money | Decimal | None,
    ) -> Ok[Settlement] | Err[PaymentError]:
        return process_payment(instrument, amount, self._context)

    def process_first_success(
        self, instruments: Sequence[PaymentInstrument], amount: Money | Decimal | None,
    ) -> Ok[FallbackOutcome] | Err[tuple[PaymentError, ...]]:
        return process_with_fallback(instruments, amount, self._context)
