"""paygate.processing — the validate-then-execute payment protocol."""

from paygate.processing.engine import FallbackOutcome as FallbackOutcome
from paygate.processing.engine import PaymentProcessor as PaymentProcessor
from paygate.processing.engine import ProcessingContext as ProcessingContext
from paygate.processing.engine import process_payment as process_payment
from paygate.processing.engine import process_with_fallback as process_with_fallback
from paygate.processing.engine import validate_amount as validate_amount
