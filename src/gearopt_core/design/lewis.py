# src/gearopt_core/design/lewis.py
"""
Lewis bending-strength helpers shared by the design solver and the simulator.
"""
import logging
import math

import numpy as np

from ..constants import LEWIS_FACTOR_INTERCEPT, LEWIS_FACTOR_SLOPE, STANDARD_MODULES_MM
from ..data_structures import GearParams

logger = logging.getLogger(__name__)

MM_PER_M = 1000.0
PA_PER_MPA = 1.0e6


def lewis_form_factor(teeth: int) -> float:
    """
    Lewis form factor Y for a 20 degree pressure-angle involute tooth.

    Uses the linear approximation Y = 0.484 - 2.87 / z.
    """
    with np.errstate(divide='ignore'):
        return float(LEWIS_FACTOR_INTERCEPT - LEWIS_FACTOR_SLOPE / np.float64(teeth))


def select_standard_module(raw_module_mm: float) -> float:
    """
    Snaps a computed module up to the standardized series.

    Returns the first entry of STANDARD_MODULES_MM that is >= the raw value. A
    raw value beyond the largest entry is rounded up to the next whole
    millimeter instead. NaN propagates unchanged.
    """
    for standard_mm in STANDARD_MODULES_MM:
        if standard_mm >= raw_module_mm:
            return standard_mm
    return float(np.ceil(raw_module_mm))


def is_standard_module(module_mm: float) -> bool:
    return module_mm in STANDARD_MODULES_MM


def lewis_bending_stress(torque_nm: float, gear: GearParams) -> float:
    """
    Root bending stress in MPa on `gear` carrying `torque_nm` at its shaft.

    F_t = T / r_pitch and sigma = F_t / (b * m * Y), all lengths in meters.
    """
    form_factor = lewis_form_factor(gear.teeth)
    pitch_radius_m = np.float64(gear.pitch_radius) / MM_PER_M
    face_width_m = np.float64(gear.face_width) / MM_PER_M
    module_m = np.float64(gear.module) / MM_PER_M

    with np.errstate(divide='ignore', invalid='ignore'):
        tangential_force_n = np.float64(torque_nm) / pitch_radius_m
        stress_pa = tangential_force_n / (face_width_m * module_m * form_factor)
    return float(stress_pa / PA_PER_MPA)


def required_module_mm(pinion_torque_nm: float, pinion_teeth: int, allowable_stress_pa: float,
                       face_width_ratio: float) -> float:
    """
    Solves the Lewis equation for the module of a pinion, in millimeters.

    With b = k * m and F_t = 2 T / (z m), sigma_allow = F_t / (b m Y) gives
    m^3 = 2 T / (k z Y sigma_allow).
    """
    form_factor = lewis_form_factor(pinion_teeth)
    with np.errstate(divide='ignore', invalid='ignore'):
        module_cubed = (2 * np.float64(pinion_torque_nm)) / (
            face_width_ratio * pinion_teeth * form_factor * np.float64(allowable_stress_pa)
        )
        # np.power keeps the NaN result for a negative cube, unlike np.cbrt.
        module_m = np.power(module_cubed, 1.0 / 3.0)
    module_mm = float(module_m * MM_PER_M)
    if not math.isfinite(module_mm):
        logger.warning(f"Lewis module calculation produced a non-finite value ({module_mm}).")
    return module_mm
