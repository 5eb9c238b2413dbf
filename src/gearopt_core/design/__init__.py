# src/gearopt_core/design/__init__.py
from .exceptions import InvalidRequirementError
from .lewis import (
    lewis_form_factor,
    lewis_bending_stress,
    required_module_mm,
    select_standard_module,
    is_standard_module,
)
from .solver import solve, check_requirements

__all__ = [
    # Exceptions
    "InvalidRequirementError",
    # Lewis helpers
    "lewis_form_factor",
    "lewis_bending_stress",
    "required_module_mm",
    "select_standard_module",
    "is_standard_module",
    # Solver
    "solve",
    "check_requirements",
]
