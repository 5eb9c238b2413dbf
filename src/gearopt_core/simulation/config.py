# src/gearopt_core/simulation/config.py
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import pint

from ..constants import HISTORY_CAPACITY
from ..units import TIME_UNIT, to_magnitude

logger = logging.getLogger(__name__)

DEFAULT_DURATION_S = 10.0
DEFAULT_DT_S = 0.05


class ConfigParsingError(ValueError):
    """Custom exception for errors during simulation configuration parsing."""
    pass


@dataclass(frozen=True)
class SimulationSettings:
    """Time grid and buffer size for a simulation run."""
    duration: float = DEFAULT_DURATION_S
    dt: float = DEFAULT_DT_S
    history_capacity: int = HISTORY_CAPACITY


def parse_simulation_config(raw_config: Optional[Dict[str, Any]]) -> SimulationSettings:
    """
    Parses a raw simulation configuration dictionary into SimulationSettings.
    A missing block gives the defaults.
    """
    if not raw_config:
        return SimulationSettings()
    try:
        duration = to_magnitude(raw_config['duration'], TIME_UNIT)
        dt = to_magnitude(raw_config['dt'], TIME_UNIT)
        capacity = int(raw_config.get('history_capacity', HISTORY_CAPACITY))

        if dt <= 0: raise ValueError("Time step 'dt' must be greater than zero.")
        if duration < 0: raise ValueError("Duration must not be negative.")
        if capacity < 1: raise ValueError("History capacity must be at least 1.")

        logger.debug(f"Parsed simulation settings: duration={duration} s, dt={dt} s, capacity={capacity}")
        return SimulationSettings(duration=duration, dt=dt, history_capacity=capacity)
    except (KeyError, ValueError, TypeError, pint.DimensionalityError, pint.UndefinedUnitError) as e:
        raise ConfigParsingError(f"Failed to parse simulation configuration: {e}") from e
