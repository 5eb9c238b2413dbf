# src/gearopt_core/data_structures.py
"""
Plain value records shared by the design solver, the step simulator and their
consumers. None of these carry identity; equality is by value.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace as dc_replace
from enum import Enum

from .constants import ADDENDUM_TO_MODULE, DEDENDUM_TO_MODULE
from .units import power_to_torque, torque_to_power

logger = logging.getLogger(__name__)


class InputVariability(Enum):
    """Forcing function applied to the nominal input speed during simulation."""
    CONSTANT = "constant"
    SINE = "sine"
    NOISE = "noise"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class GearParams:
    """
    Physical and operating description of one gear.

    Lengths are in millimeters, speed in rpm, torque in N*m at the gear's shaft.
    `diameter` is the pitch diameter (teeth * module) and `face_width` is
    10 * module for every gear produced by the solver.
    """
    teeth: int
    module: float
    pressure_angle: float
    face_width: float
    rpm: float
    torque: float
    diameter: float

    @property
    def pitch_radius(self) -> float:
        return self.diameter / 2

    @property
    def addendum(self) -> float:
        return ADDENDUM_TO_MODULE * self.module

    @property
    def dedendum(self) -> float:
        return DEDENDUM_TO_MODULE * self.module

    @property
    def outside_diameter(self) -> float:
        return self.diameter + 2 * self.addendum

    @property
    def root_diameter(self) -> float:
        return self.diameter - 2 * self.dedendum

    @property
    def base_diameter(self) -> float:
        return self.diameter * math.cos(math.radians(self.pressure_angle))


@dataclass(frozen=True)
class DesignRequirements:
    """
    The user's target operating point.

    Attributes:
        target_output_torque: Torque required at the output shaft, N*m.
        target_output_rpm: Desired output speed, rpm.
        nominal_input_rpm: Nominal speed of the driving source, rpm.
        material_yield_strength: Yield strength of the gear material, MPa.
        input_variability: Forcing function used by the simulator.
    """
    target_output_torque: float
    target_output_rpm: float
    nominal_input_rpm: float
    material_yield_strength: float
    input_variability: InputVariability = InputVariability.CONSTANT

    def __post_init__(self):
        # Accept the plain string names ('sine', ...) as a convenience.
        if not isinstance(self.input_variability, InputVariability):
            object.__setattr__(self, 'input_variability', InputVariability(self.input_variability))

    @classmethod
    def from_output_power(
        cls,
        output_power_kw: float,
        target_output_rpm: float,
        nominal_input_rpm: float,
        material_yield_strength: float,
        input_variability: InputVariability = InputVariability.CONSTANT,
    ) -> DesignRequirements:
        """Builds requirements from a power target, deriving the output torque."""
        return cls(
            target_output_torque=power_to_torque(output_power_kw, target_output_rpm),
            target_output_rpm=target_output_rpm,
            nominal_input_rpm=nominal_input_rpm,
            material_yield_strength=material_yield_strength,
            input_variability=input_variability,
        )

    @classmethod
    def from_input_power(
        cls,
        input_power_kw: float,
        target_output_rpm: float,
        nominal_input_rpm: float,
        material_yield_strength: float,
        input_variability: InputVariability = InputVariability.CONSTANT,
    ) -> DesignRequirements:
        """
        Builds requirements from the power available at the source. The stage
        is lossless, so the output torque is P_in / omega_out.
        """
        return cls(
            target_output_torque=power_to_torque(input_power_kw, target_output_rpm),
            target_output_rpm=target_output_rpm,
            nominal_input_rpm=nominal_input_rpm,
            material_yield_strength=material_yield_strength,
            input_variability=input_variability,
        )

    @classmethod
    def from_input_torque(
        cls,
        input_torque_nm: float,
        target_output_rpm: float,
        nominal_input_rpm: float,
        material_yield_strength: float,
        input_variability: InputVariability = InputVariability.CONSTANT,
    ) -> DesignRequirements:
        """
        Builds requirements from the motor torque at nominal_input_rpm, carried
        through to the output at constant power.
        """
        return cls.from_input_power(
            input_power_kw=torque_to_power(input_torque_nm, nominal_input_rpm),
            target_output_rpm=target_output_rpm,
            nominal_input_rpm=nominal_input_rpm,
            material_yield_strength=material_yield_strength,
            input_variability=input_variability,
        )

    @property
    def target_output_power_kw(self) -> float:
        """Output power implied by the torque and speed targets, kW."""
        return torque_to_power(self.target_output_torque, self.target_output_rpm)

    def replace(self, **changes) -> DesignRequirements:
        """Returns a copy with the given fields changed."""
        return dc_replace(self, **changes)


@dataclass(frozen=True)
class DesignResult:
    """
    Output of the design solver.

    `safety_factor` is the design-stage constant used to size the module and is
    reported as-is. `realized_safety_factor` is the margin of the final,
    standardized design: yield strength over the pinion root stress at nominal
    torque. `module_overflow` is set when the required module exceeded the
    standard series and was rounded up to a whole millimeter instead.
    """
    pinion: GearParams
    gear: GearParams
    ratio: float
    center_distance: float
    safety_factor: float
    realized_safety_factor: float
    module_overflow: bool = False

    @property
    def module(self) -> float:
        return self.pinion.module


@dataclass(frozen=True)
class SimulationPoint:
    """One sampled instant of the simulated gear stage. Stress is in MPa."""
    time: float
    input_torque: float
    output_torque: float
    input_rpm: float
    output_rpm: float
    stress: float
