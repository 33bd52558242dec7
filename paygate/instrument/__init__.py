"""paygate.instrument — instrument variants, validation rules and masking."""

from paygate.instrument.masking import describe as describe
from paygate.instrument.masking import mask_identifier as mask_identifier
from paygate.instrument.rules import validate_bank_slip as validate_bank_slip
from paygate.instrument.rules import validate_card as validate_card
from paygate.instrument.rules import validate_instant_key as validate_instant_key
from paygate.instrument.types import BankSlip as BankSlip
from paygate.instrument.types import CreditCard as CreditCard
from paygate.instrument.types import InstantKey as InstantKey
from paygate.instrument.types import InstantKeyKind as InstantKeyKind
from paygate.instrument.types import PaymentInstrument as PaymentInstrument
