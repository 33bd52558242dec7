"""paygate.gateway — raw input parsing."""

from paygate.gateway.parser import parse_instrument as parse_instrument
