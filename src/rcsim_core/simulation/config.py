# src/rcsim_core/simulation/config.py
import logging
import pint
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..units import ureg
from ..constants import DEFAULT_TICK_PERIOD_S

logger = logging.getLogger(__name__)

class ConfigParsingError(ValueError):
    """Custom exception for errors during simulation configuration parsing."""
    pass


@dataclass(frozen=True)
class SimulationConfig:
    """
    Immutable settings for one simulation engine.

    Attributes:
        tick_period_s: Simulated seconds advanced per tick. The engine never
                       measures wall-clock time; this value alone sets the cadence.
    """
    tick_period_s: float = DEFAULT_TICK_PERIOD_S


def _to_seconds(value: Any) -> float:
    """Reads a time as seconds from a number, a pint Quantity or a string like '10 ms'."""
    if isinstance(value, bool):
        raise ValueError(f"Expected a time, got boolean {value!r}.")
    if isinstance(value, str):
        qty = ureg.Quantity(value.strip())
    elif isinstance(value, pint.Quantity):
        qty = value
    else:
        qty = ureg.Quantity(float(value), 's')
    if qty.dimensionless:
        qty = ureg.Quantity(qty.magnitude, 's')
    return float(qty.to('s').magnitude)


def parse_duration(value: Any) -> float:
    """
    Parses a run duration into seconds. Zero is allowed; negative or non-time values are not.
    """
    try:
        seconds = _to_seconds(value)
    except (pint.PintError, SyntaxError, TypeError, ValueError) as e:
        raise ConfigParsingError(f"Failed to parse duration {value!r}: {e}") from e
    if not seconds >= 0.0 or seconds == float('inf'):
        raise ConfigParsingError(f"Duration must be a finite, non-negative time, got {value!r}.")
    return seconds


def parse_simulation_config(raw_config: Optional[Dict[str, Any]]) -> SimulationConfig:
    """
    Parses a raw configuration dictionary into a SimulationConfig.

    Recognised keys:
        tick_period: simulated time per tick ('0.1 s', a Quantity, or seconds).

    Missing keys (or a missing dictionary) fall back to the defaults.
    """
    if not raw_config:
        return SimulationConfig()
    unknown = set(raw_config) - {'tick_period'}
    if unknown:
        raise ConfigParsingError(f"Unknown simulation configuration key(s): {sorted(unknown)}.")
    try:
        tick_period_s = DEFAULT_TICK_PERIOD_S
        if raw_config.get('tick_period') is not None:
            tick_period_s = _to_seconds(raw_config['tick_period'])
        if not tick_period_s > 0.0 or tick_period_s == float('inf'):
            raise ValueError("Tick period must be a finite, positive time.")
    except (pint.PintError, SyntaxError, TypeError, ValueError) as e:
        raise ConfigParsingError(f"Failed to parse simulation configuration: {e}") from e

    logger.debug(f"Parsed simulation configuration: tick_period_s={tick_period_s}")
    return SimulationConfig(tick_period_s=tick_period_s)
