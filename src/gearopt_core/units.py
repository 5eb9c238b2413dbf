# --- src/gearopt_core/units.py ---
import logging
from typing import Union

import pint

logger = logging.getLogger(__name__)
ureg = pint.UnitRegistry()
Quantity = ureg.Quantity
logger.info("Pint Unit Registry initialized.")

# --- Canonical units for the plain-float data model ---
# GearParams and DesignRequirements carry bare floats in these units.
TORQUE_UNIT = "newton * meter"
SPEED_UNIT = "rpm"
STRESS_UNIT = "MPa"
POWER_UNIT = "kW"
TIME_UNIT = "second"

TORQUE_DIMENSIONALITY = ureg.parse_expression(TORQUE_UNIT).dimensionality
STRESS_DIMENSIONALITY = ureg.parse_expression(STRESS_UNIT).dimensionality
POWER_DIMENSIONALITY = ureg.parse_expression(POWER_UNIT).dimensionality

logger.debug("Defined canonical units: torque=N*m, speed=rpm, stress=MPa, power=kW, time=s")


def to_magnitude(value: Union[str, int, float, pint.Quantity], unit: str) -> float:
    """
    Converts a user-supplied value to a bare float in the given canonical unit.

    Numbers are taken to already be expressed in `unit`. Strings are parsed by
    the shared registry, so '1.2 krpm', '50 N*m' or '0.5 hp' are all accepted.

    Raises:
        pint.DimensionalityError: If the value cannot be converted to `unit`.
        pint.UndefinedUnitError: If the string names an unknown unit.
    """
    if isinstance(value, bool):
        raise TypeError(f"Boolean value {value!r} is not a physical quantity.")
    if isinstance(value, (int, float)):
        return float(value)
    quantity = value if isinstance(value, pint.Quantity) else ureg.Quantity(value)
    if quantity.dimensionless and not ureg.Quantity(1, unit).dimensionless:
        # A bare number inside a string, e.g. "120"
        return float(quantity.magnitude)
    return float(quantity.to(unit).magnitude)


def power_to_torque(power_kw: float, rpm: float) -> float:
    """Torque in N*m delivered at `rpm` by a shaft transmitting `power_kw`."""
    power = ureg.Quantity(power_kw, POWER_UNIT)
    speed = ureg.Quantity(rpm, SPEED_UNIT)
    return float((power / speed).to(TORQUE_UNIT).magnitude)


def torque_to_power(torque_nm: float, rpm: float) -> float:
    """Shaft power in kW for a torque in N*m at `rpm`."""
    torque = ureg.Quantity(torque_nm, TORQUE_UNIT)
    speed = ureg.Quantity(rpm, SPEED_UNIT)
    return float((torque * speed).to(POWER_UNIT).magnitude)
