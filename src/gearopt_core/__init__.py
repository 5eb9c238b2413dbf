# src/gearopt_core/__init__.py
import logging
from .log_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)
logger.info("gearopt_core package initialized.")

from .units import ureg, pint, Quantity, to_magnitude, power_to_torque, torque_to_power
from .data_structures import (
    GearParams, DesignRequirements, DesignResult, SimulationPoint, InputVariability,
)
from .design import (
    solve, lewis_form_factor, lewis_bending_stress, select_standard_module, InvalidRequirementError,
)
from .simulation import (
    step, run_simulation, run_with_settings, SimulationHistory, SimulationTrace, SimulationSettings,
    SimulationConfigError, NonFiniteStateError,
)
from .parser import RequirementsParser, ParsingError, SchemaValidationError, QuantityError
from .requirements_builder import RequirementsBuilder, BuiltRequirements, solve_requirements_file
from .validation import (
    DesignReviewer, DesignReviewError, ValidationIssue, ValidationIssueLevel, DesignIssueCode,
)
from .reporting import format_design_summary
from .errors import GearOptError, DesignError, SimulationRunError

__all__ = [
    # Logging
    "setup_logging",
    # Units
    "ureg", "pint", "Quantity", "to_magnitude", "power_to_torque", "torque_to_power",
    # Data Structures
    "GearParams", "DesignRequirements", "DesignResult", "SimulationPoint", "InputVariability",
    # Design Solver
    "solve", "lewis_form_factor", "lewis_bending_stress", "select_standard_module",
    "InvalidRequirementError",
    # Simulation
    "step", "run_simulation", "run_with_settings", "SimulationHistory", "SimulationTrace", "SimulationSettings",
    "SimulationConfigError", "NonFiniteStateError",
    # Requirements Files
    "RequirementsParser", "RequirementsBuilder", "BuiltRequirements", "solve_requirements_file",
    "ParsingError", "SchemaValidationError", "QuantityError",
    # Design Review
    "DesignReviewer", "DesignReviewError", "ValidationIssue", "ValidationIssueLevel", "DesignIssueCode",
    # Reporting
    "format_design_summary",
    # Top-Level Errors (Actionable Diagnostics)
    "GearOptError", "DesignError", "SimulationRunError",
]
