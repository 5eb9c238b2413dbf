# src/gearopt_core/simulation/__init__.py
from .exceptions import (
    SimulationConfigError,
    NonFiniteStateError,
)
from .config import SimulationSettings, ConfigParsingError, parse_simulation_config
from .step import step, input_factor
from .history import SimulationHistory
from .results import SimulationTrace
from .execution import run_simulation, run_with_settings, time_grid

__all__ = [
    # Exceptions
    "SimulationConfigError",
    "NonFiniteStateError",
    "ConfigParsingError",
    # Configuration
    "SimulationSettings",
    "parse_simulation_config",
    # Core functions
    "step",
    "input_factor",
    "run_simulation",
    "run_with_settings",
    "time_grid",
    # Containers
    "SimulationHistory",
    "SimulationTrace",
]
