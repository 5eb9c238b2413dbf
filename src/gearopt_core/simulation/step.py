# src/gearopt_core/simulation/step.py
"""
Single time step of the gear stage simulation.

The step is a function of (time, design, requirements) only. The one source of
nondeterminism, the uniform jitter of the 'noise' forcing mode, is drawn from
a caller-supplied `numpy.random.Generator` so tests can pin it with a seed.
"""
import logging
import math
from typing import Optional

import numpy as np

from ..constants import NOISE_SPAN, SINE_RIPPLE_AMPLITUDE, SINE_RIPPLE_ANGULAR_FREQUENCY
from ..data_structures import DesignRequirements, DesignResult, InputVariability, SimulationPoint
from ..design.lewis import lewis_bending_stress

logger = logging.getLogger(__name__)


def input_factor(time: float, variability: InputVariability, rng: Optional[np.random.Generator] = None) -> float:
    """
    Multiplier applied to the nominal input speed at `time`.

    constant -> 1.0
    sine     -> 1 + 0.3 * sin(2 t), periodic with period pi
    noise    -> 1 + (U - 0.5) * 0.4 with U uniform on [0, 1)
    """
    if variability is InputVariability.SINE:
        return 1.0 + SINE_RIPPLE_AMPLITUDE * math.sin(SINE_RIPPLE_ANGULAR_FREQUENCY * time)
    if variability is InputVariability.NOISE:
        generator = rng if rng is not None else np.random.default_rng()
        return 1.0 + (generator.random() - 0.5) * NOISE_SPAN
    return 1.0


def step(
    time: float,
    design: DesignResult,
    req: DesignRequirements,
    rng: Optional[np.random.Generator] = None,
) -> SimulationPoint:
    """
    Samples the gear stage at `time`.

    The load is constant-torque: output torque stays at the design torque and
    input torque follows through the fixed ratio, independent of the
    instantaneous speed. Input power is therefore free to vary with the forcing.

    Args:
        time: Simulation time in seconds.
        design: The solved design providing the operating point.
        req: The requirements; only `input_variability` is read.
        rng: Random generator for the 'noise' mode. A fresh, entropy-seeded
             generator is used when omitted.

    Returns:
        The SimulationPoint at `time`, stress in MPa at the pinion root.
    """
    factor = input_factor(time, req.input_variability, rng)

    current_input_rpm = design.pinion.rpm * factor
    current_output_torque = design.gear.torque
    with np.errstate(divide='ignore', invalid='ignore'):
        current_output_rpm = float(np.float64(current_input_rpm) / np.float64(design.ratio))
        current_input_torque = float(np.float64(current_output_torque) / np.float64(design.ratio))

    stress_mpa = lewis_bending_stress(current_input_torque, design.pinion)

    logger.debug(f"t={time:.4f}s factor={factor:.4f} in={current_input_rpm:.2f}rpm stress={stress_mpa:.3f}MPa")
    return SimulationPoint(
        time=time,
        input_torque=current_input_torque,
        output_torque=current_output_torque,
        input_rpm=current_input_rpm,
        output_rpm=current_output_rpm,
        stress=stress_mpa,
    )
