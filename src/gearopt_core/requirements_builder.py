# src/gearopt_core/requirements_builder.py
"""
Turns a parsed requirements document into the plain-float `DesignRequirements`
consumed by the solver, and offers the file-to-design facade.

The builder resolves every unit string through the shared pint registry,
derives the output torque when the document gives a power target or a
source-side load (motor power or torque, carried through at constant power),
and looks up material presets. Any diagnosable error from the parser, the builder or the
solver is re-raised as a single, user-facing `DesignError`.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Tuple, Union

import pint

from .constants import MATERIAL_PRESETS_MPA
from .data_structures import DesignRequirements, DesignResult, InputVariability
from .design import InvalidRequirementError, solve
from .errors import DesignError, DiagnosableError, format_diagnostic_report
from .parser import ParsedRequirementsNode, QuantityError, RequirementsParser
from .simulation.config import ConfigParsingError, SimulationSettings, parse_simulation_config
from .units import POWER_UNIT, SPEED_UNIT, STRESS_UNIT, TORQUE_UNIT, power_to_torque, to_magnitude, torque_to_power

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuiltRequirements:
    """Requirements ready for the solver, plus the simulation settings that came with them."""
    name: str
    requirements: DesignRequirements
    simulation: SimulationSettings
    source_path: Optional[Path] = None


class RequirementsBuilder:
    """Converts a ParsedRequirementsNode into BuiltRequirements."""

    def build(self, node: ParsedRequirementsNode) -> BuiltRequirements:
        logger.info(f"--- Building requirements '{node.name}' ---")
        output_rpm = self._quantity(node, "target_output.rpm", node.raw_output_rpm, SPEED_UNIT)
        nominal_input_rpm = self._quantity(node, "nominal_input_rpm", node.raw_nominal_input_rpm, SPEED_UNIT)

        output_torque = self._output_torque(node, output_rpm, nominal_input_rpm)

        if node.material is not None:
            yield_strength = MATERIAL_PRESETS_MPA[node.material]
            logger.debug(f"Material preset '{node.material}' -> {yield_strength} MPa.")
        else:
            yield_strength = self._quantity(node, "yield_strength", node.raw_yield_strength, STRESS_UNIT)

        try:
            settings = parse_simulation_config(node.raw_simulation_config)
        except ConfigParsingError as e:
            raise QuantityError(
                field="simulation", value=node.raw_simulation_config, expected_unit="seconds",
                details=str(e), file_path=node.source_yaml_path,
            ) from e

        requirements = DesignRequirements(
            target_output_torque=output_torque,
            target_output_rpm=output_rpm,
            nominal_input_rpm=nominal_input_rpm,
            material_yield_strength=yield_strength,
            input_variability=InputVariability(node.input_variability),
        )
        return BuiltRequirements(
            name=node.name,
            requirements=requirements,
            simulation=settings,
            source_path=node.source_yaml_path,
        )

    def _output_torque(self, node: ParsedRequirementsNode, output_rpm: float, nominal_input_rpm: float) -> float:
        """
        Output torque from whichever load the document gives. Power and source
        torque are carried through the stage at constant power.
        """
        if node.raw_output_torque is not None:
            return self._quantity(node, "target_output.torque", node.raw_output_torque, TORQUE_UNIT)

        if node.raw_output_power is not None:
            power_kw = self._quantity(node, "target_output.power", node.raw_output_power, POWER_UNIT)
            origin = "target output power"
        elif node.raw_input_power is not None:
            power_kw = self._quantity(node, "input_source.power", node.raw_input_power, POWER_UNIT)
            origin = "input power"
        else:
            input_torque = self._quantity(node, "input_source.torque", node.raw_input_torque, TORQUE_UNIT)
            power_kw = torque_to_power(input_torque, nominal_input_rpm)
            origin = f"input torque {input_torque:.4g} N*m, i.e."

        if output_rpm == 0:
            raise InvalidRequirementError(
                field="target_output_rpm", value=output_rpm,
                details="The target output speed is zero, so the output torque cannot be derived from a power.",
            )
        output_torque = power_to_torque(power_kw, output_rpm)
        logger.debug(f"Derived output torque {output_torque:.4g} N*m from {origin} {power_kw:.4g} kW at {output_rpm:.4g} rpm.")
        return output_torque

    @staticmethod
    def _quantity(node: ParsedRequirementsNode, field: str, value: Any, unit: str) -> float:
        try:
            return to_magnitude(value, unit)
        except (pint.DimensionalityError, pint.UndefinedUnitError, ValueError, TypeError, AttributeError) as e:
            raise QuantityError(
                field=field, value=value, expected_unit=unit, details=str(e), file_path=node.source_yaml_path,
            ) from e
        except Exception as e:
            # pint's expression parser fails on malformed strings such as '50 N*m *'
            # with assorted internal errors (AssertionError, tokenizer errors).
            raise QuantityError(
                field=field, value=value, expected_unit=unit,
                details=f"Malformed quantity expression ({type(e).__name__}): {e}",
                file_path=node.source_yaml_path,
            ) from e


def solve_requirements_file(
    yaml_path: Union[str, Path],
    parser: Optional[RequirementsParser] = None,
) -> Tuple[DesignResult, BuiltRequirements]:
    """
    Reads a requirements file and solves the design it describes.

    Returns:
        The solved design and the built requirements (including simulation settings).

    Raises:
        DesignError: With a diagnostic report, for any failure from reading the
                     file to solving the design.
    """
    effective_parser = parser if parser is not None else RequirementsParser()
    try:
        node = effective_parser.parse_file(yaml_path)
        built = RequirementsBuilder().build(node)
        design = solve(built.requirements)
        return design, built

    except DiagnosableError as e:
        logger.error(f"A diagnosable error occurred while designing from '{yaml_path}': {e}")
        raise DesignError(e.get_diagnostic_report()) from e

    except Exception as e:
        logger.critical(f"An unexpected internal error occurred while designing: {e}", exc_info=True)
        report = format_diagnostic_report(
            error_type=f"An Unexpected Design Error Occurred ({type(e).__name__})",
            details=f"The design pipeline encountered an unexpected internal error: {e}",
            suggestion="This may be a bug. Review the traceback and consider filing a bug report.",
            context={'source_file': yaml_path}
        )
        raise DesignError(report) from e
