# src/gearopt_core/simulation/execution.py
"""
Public facade for running the gear stage simulation over a fixed time grid.

`step` samples one instant; `run_simulation` drives it from a start time in
equal increments, feeds each point into a bounded `SimulationHistory` and
returns the trailing window as a `SimulationTrace`. `run_with_settings` takes
the time grid and history capacity from `SimulationSettings`. Diagnosable failures are
reported to the caller as a single `SimulationRunError`.
"""
import logging
import math
from typing import Optional, Tuple

import numpy as np

from ..data_structures import DesignRequirements, DesignResult, SimulationPoint
from ..errors import DiagnosableError, SimulationRunError, format_diagnostic_report
from .exceptions import NonFiniteStateError, SimulationConfigError
from .config import SimulationSettings
from .history import SimulationHistory
from .results import SimulationTrace
from .step import step

logger = logging.getLogger(__name__)

_CHECKED_FIELDS = ("input_rpm", "output_rpm", "input_torque", "stress")


def _check_finite(point: SimulationPoint) -> None:
    for name in _CHECKED_FIELDS:
        value = getattr(point, name)
        if not math.isfinite(value):
            raise NonFiniteStateError(quantity=name, time=point.time, value=value)


def time_grid(duration: float, dt: float, start_time: float = 0.0) -> np.ndarray:
    """
    Tick times from `start_time` (exclusive) to `start_time + duration` (inclusive).

    The first tick lands one `dt` after the start, as when a running clock is
    advanced by a frame before the first sample is taken.
    """
    if not dt > 0:
        raise SimulationConfigError(parameter="dt", value=dt, details="The time step must be greater than zero.")
    if not duration >= 0:
        raise SimulationConfigError(parameter="duration", value=duration, details="The duration must not be negative.")
    num_ticks = int(math.floor(duration / dt + 1e-9))
    return start_time + dt * np.arange(1, num_ticks + 1, dtype=float)


def run_simulation(
    design: DesignResult,
    req: DesignRequirements,
    duration: float,
    dt: float,
    start_time: float = 0.0,
    rng: Optional[np.random.Generator] = None,
    history: Optional[SimulationHistory] = None,
) -> Tuple[SimulationTrace, SimulationHistory]:
    """
    Runs the simulation for `duration` seconds in steps of `dt`.

    Args:
        design: The solved design. It is not modified.
        req: The requirements selecting the forcing mode.
        duration: Simulated time span, s.
        dt: Time step, s.
        start_time: Time of the last sample already taken, s. Lets a paused run resume.
        rng: Random generator for 'noise' forcing. Seed it for reproducible runs.
        history: An existing history to append to. A new one with the default
                 capacity is created when omitted.

    Returns:
        A tuple of the trace of the trailing window held by the history after
        the run, and the history itself so it can be passed to the next call.

    Raises:
        SimulationRunError: If the configuration is invalid or a tick produces
                            non-finite values. The original error is chained.
    """
    effective_history = history if history is not None else SimulationHistory()
    generator = rng if rng is not None else np.random.default_rng()

    try:
        times = time_grid(duration, dt, start_time)
        logger.info(
            f"--- Simulating {len(times)} ticks ({req.input_variability} forcing, dt={dt:.4g} s) ---"
        )
        for t in times:
            point = step(float(t), design, req, rng=generator)
            _check_finite(point)
            effective_history.append(point)

        trace = effective_history.to_trace()
        logger.info(f"Simulation complete. Retained {len(trace)} points, peak stress {trace.peak_stress:.4g} MPa.")
        return trace, effective_history

    except DiagnosableError as e:
        logger.error(f"A diagnosable error occurred during simulation: {e}")
        raise SimulationRunError(e.get_diagnostic_report()) from e

    except Exception as e:
        logger.critical(f"An unexpected internal error occurred during simulation: {e}", exc_info=True)
        report = format_diagnostic_report(
            error_type=f"An Unexpected Simulation Error Occurred ({type(e).__name__})",
            details=f"The simulator encountered an unexpected internal error: {e}",
            suggestion="This may be a bug. Review the traceback and consider filing a bug report.",
            context={}
        )
        raise SimulationRunError(report) from e


def run_with_settings(
    design: DesignResult,
    req: DesignRequirements,
    settings: SimulationSettings,
    start_time: float = 0.0,
    rng: Optional[np.random.Generator] = None,
    history: Optional[SimulationHistory] = None,
) -> Tuple[SimulationTrace, SimulationHistory]:
    """
    Runs `run_simulation` with the duration, time step and history capacity
    read from a requirements file. A passed-in `history` keeps its own capacity.
    """
    effective_history = history if history is not None else SimulationHistory(settings.history_capacity)
    return run_simulation(
        design, req, settings.duration, settings.dt,
        start_time=start_time, rng=rng, history=effective_history,
    )
