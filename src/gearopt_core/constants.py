# --- src/gearopt_core/constants.py ---
import logging
from typing import Dict, Tuple

logger = logging.getLogger(__name__)

# --- Design Policy Constants ---

#: Pinion tooth count. 18 teeth avoids undercutting at a 20 degree pressure angle.
PINION_TEETH: int = 18

#: Pressure angle shared by both gears, in degrees.
PRESSURE_ANGLE_DEG: float = 20.0

#: Bending-stress safety factor applied to the material yield strength when sizing the module.
DESIGN_SAFETY_FACTOR: float = 2.0

#: Face width expressed as a multiple of the module (b = k * m).
FACE_WIDTH_TO_MODULE: float = 10.0

#: Lewis form factor approximation Y = A - B / z for 20 degree involute teeth.
LEWIS_FACTOR_INTERCEPT: float = 0.484
LEWIS_FACTOR_SLOPE: float = 2.87

#: Addendum and dedendum as multiples of the module (standard full-depth teeth).
ADDENDUM_TO_MODULE: float = 1.0
DEDENDUM_TO_MODULE: float = 1.25

#: Standardized module series in millimeters, ascending.
STANDARD_MODULES_MM: Tuple[float, ...] = (
    0.5, 0.8, 1.0, 1.25, 1.5, 2.0, 2.5, 3.0, 4.0, 5.0, 6.0, 8.0, 10.0, 12.0, 16.0, 20.0,
)

# --- Simulation Forcing Constants ---

#: Relative amplitude of the sinusoidal input ripple (+/- 30%).
SINE_RIPPLE_AMPLITUDE: float = 0.3

#: Angular frequency of the sinusoidal input ripple, rad/s.
SINE_RIPPLE_ANGULAR_FREQUENCY: float = 2.0

#: Full span of the uniform input jitter (+/- 20% around nominal).
NOISE_SPAN: float = 0.4

#: Number of trailing simulation points retained by the history buffer.
HISTORY_CAPACITY: int = 200

# --- Material Presets ---

#: Yield strengths in MPa for the common gear materials offered as presets.
MATERIAL_PRESETS_MPA: Dict[str, float] = {
    "cast_iron": 200.0,
    "mild_steel": 250.0,
    "alloy_steel_4140": 600.0,
    "nylon": 50.0,
    "titanium_grade_5": 800.0,
}

logger.debug("Defined core constants: PINION_TEETH, DESIGN_SAFETY_FACTOR, STANDARD_MODULES_MM, HISTORY_CAPACITY")
