"""paygate.infra — environment seams, configuration and logging."""

from paygate.infra.adapters import FixedClock as FixedClock
from paygate.infra.adapters import ScriptedRandomSource as ScriptedRandomSource
from paygate.infra.adapters import SystemClock as SystemClock
from paygate.infra.adapters import SystemRandomSource as SystemRandomSource
from paygate.infra.config import EngineConfig as EngineConfig
from paygate.infra.logging import get_logger as get_logger
from paygate.infra.logging import setup_logging as setup_logging
from paygate.infra.protocols import Clock as Clock
from paygate.infra.protocols import RandomSource as RandomSource
