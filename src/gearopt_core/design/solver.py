# src/gearopt_core/design/solver.py
"""
Inverse design of a single pinion/gear stage.

Given a target output torque and speed, a nominal input speed and a material,
the solver fixes the pinion tooth count, rounds the gear tooth count to the
nearest integer, sizes the module from the Lewis bending equation and snaps it
to the standard series. The solver holds no state; every call rebuilds the
DesignResult from scratch.
"""
import logging
import math

import numpy as np

from ..constants import (
    DESIGN_SAFETY_FACTOR,
    FACE_WIDTH_TO_MODULE,
    PINION_TEETH,
    PRESSURE_ANGLE_DEG,
)
from ..data_structures import DesignRequirements, DesignResult, GearParams
from .exceptions import InvalidRequirementError
from .lewis import (
    PA_PER_MPA,
    is_standard_module,
    lewis_bending_stress,
    required_module_mm,
    select_standard_module,
)

logger = logging.getLogger(__name__)


def check_requirements(req: DesignRequirements) -> None:
    """
    Rejects requirements for which the speed ratio is undefined.

    Raises:
        InvalidRequirementError: If target_output_rpm is zero or nominal_input_rpm
                                 is not positive.
    """
    if req.target_output_rpm == 0:
        raise InvalidRequirementError(
            field="target_output_rpm",
            value=req.target_output_rpm,
            details="The target output speed is zero, so the speed ratio is undefined.",
        )
    if not req.nominal_input_rpm > 0:
        raise InvalidRequirementError(
            field="nominal_input_rpm",
            value=req.nominal_input_rpm,
            details="The nominal input speed must be greater than zero.",
        )


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _build_gear(teeth: int, module_mm: float, rpm: float, torque_nm: float) -> GearParams:
    return GearParams(
        teeth=teeth,
        module=module_mm,
        pressure_angle=PRESSURE_ANGLE_DEG,
        face_width=FACE_WIDTH_TO_MODULE * module_mm,
        rpm=rpm,
        torque=torque_nm,
        diameter=teeth * module_mm,
    )


def solve(req: DesignRequirements) -> DesignResult:
    """
    Sizes a pinion/gear pair for the given requirements.

    Only the speed inputs are validated. Other degenerate values (zero torque,
    non-positive yield strength) are carried through float arithmetic and show
    up as zero, infinite or NaN fields in the result.

    Args:
        req: The target operating point.

    Returns:
        A new DesignResult. Identical requirements always give an identical result.

    Raises:
        InvalidRequirementError: If the speed ratio is undefined.
    """
    check_requirements(req)

    nominal_ratio = req.nominal_input_rpm / req.target_output_rpm
    pinion_teeth = PINION_TEETH
    gear_teeth = _round_half_up(pinion_teeth * nominal_ratio)
    # The realized ratio, not the nominal one, drives every downstream value.
    actual_ratio = gear_teeth / pinion_teeth
    logger.debug(f"Nominal ratio {nominal_ratio:.6g}, teeth {pinion_teeth}:{gear_teeth}, realized ratio {actual_ratio:.6g}")

    safety_factor = DESIGN_SAFETY_FACTOR
    allowable_stress_pa = (req.material_yield_strength * PA_PER_MPA) / safety_factor

    # The pinion is sized for bending: fewer teeth give it the lower form factor.
    with np.errstate(divide='ignore', invalid='ignore'):
        pinion_torque = float(np.float64(req.target_output_torque) / np.float64(actual_ratio))
        gear_rpm = float(np.float64(req.nominal_input_rpm) / np.float64(actual_ratio))

    raw_module = required_module_mm(pinion_torque, pinion_teeth, allowable_stress_pa, FACE_WIDTH_TO_MODULE)
    module_mm = select_standard_module(raw_module)
    module_overflow = not is_standard_module(module_mm)
    if module_overflow:
        logger.warning(f"Required module {raw_module:.4g} mm is outside the standard series; using {module_mm} mm.")

    pinion = _build_gear(pinion_teeth, module_mm, req.nominal_input_rpm, pinion_torque)
    gear = _build_gear(gear_teeth, module_mm, gear_rpm, req.target_output_torque)

    realized_stress_mpa = lewis_bending_stress(pinion_torque, pinion)
    with np.errstate(divide='ignore', invalid='ignore'):
        realized_safety_factor = float(np.float64(req.material_yield_strength) / np.float64(realized_stress_mpa))

    result = DesignResult(
        pinion=pinion,
        gear=gear,
        ratio=actual_ratio,
        center_distance=(pinion.diameter + gear.diameter) / 2,
        safety_factor=safety_factor,
        realized_safety_factor=realized_safety_factor,
        module_overflow=module_overflow,
    )
    logger.info(
        f"Design solved: ratio {actual_ratio:.4g}:1, module {module_mm} mm "
        f"(raw {raw_module:.4g} mm), center distance {result.center_distance:.4g} mm."
    )
    return result
