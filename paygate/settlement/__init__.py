"""paygate.settlement — per-instrument execution and settlement records."""

from paygate.settlement.bank_slip import execute_bank_slip as execute_bank_slip
from paygate.settlement.card import execute_card as execute_card
from paygate.settlement.instant_key import execute_instant_key as execute_instant_key
from paygate.settlement.types import BankSlipSettlement as BankSlipSettlement
from paygate.settlement.types import CardSettlement as CardSettlement
from paygate.settlement.types import InstantKeySettlement as InstantKeySettlement
from paygate.settlement.types import LateFeeBreakdown as LateFeeBreakdown
from paygate.settlement.types import Settlement as Settlement
