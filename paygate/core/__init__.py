"""paygate.core — results, errors, money and check-digit algorithms."""

from paygate.core.checksums import business_id_valid as business_id_valid
from paygate.core.checksums import luhn_check_digit as luhn_check_digit
from paygate.core.checksums import luhn_valid as luhn_valid
from paygate.core.checksums import personal_id_valid as personal_id_valid
from paygate.core.errors import ErrorCategory as ErrorCategory
from paygate.core.errors import FailureKind as FailureKind
from paygate.core.errors import FieldViolation as FieldViolation
from paygate.core.errors import PaymentError as PaymentError
from paygate.core.errors import ValidationError as ValidationError
from paygate.core.money import PAYGATE_DECIMAL_CONTEXT as PAYGATE_DECIMAL_CONTEXT
from paygate.core.money import Currency as Currency
from paygate.core.money import Money as Money
from paygate.core.result import Err as Err
from paygate.core.result import Ok as Ok
from paygate.core.result import Result as Result
from paygate.core.result import unwrap as unwrap
from paygate.core.result import unwrap_err as unwrap_err
from paygate.core.types import FrozenMap as FrozenMap
from paygate.core.types import ProcessingStage as ProcessingStage
from paygate.core.types import UtcDatetime as UtcDatetime
