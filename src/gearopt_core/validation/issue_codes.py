# src/gearopt_core/validation/issue_codes.py
import logging
from enum import Enum

logger = logging.getLogger(__name__)


class DesignIssueCode(Enum):
    """
    Registry of design review issue codes and their message templates.
    Each enum member's value is a tuple: (code_str, message_template_str).
    """

    # --- Requirement Issues (REQ_...) ---
    REQ_RPM_INVALID = ("REQ_RPM_INVALID", "Speed requirement '{field}' = {value} leaves the gear ratio undefined.")
    REQ_RPM_NEGATIVE = ("REQ_RPM_NEGATIVE", "Target output speed {value} rpm is negative; the gear tooth count and module come out negative or NaN.")
    REQ_YIELD_NONPOSITIVE = ("REQ_YIELD_NONPOSITIVE", "Material yield strength {value} MPa is not positive; the module cannot be sized.")
    REQ_TORQUE_NONPOSITIVE = ("REQ_TORQUE_NONPOSITIVE", "Target output torque {value} N*m is not positive; the smallest standard module is selected.")

    # --- Solved Design Issues ---
    MODULE_OVERFLOW = ("MODULE_OVERFLOW", "Module {module} mm exceeds the standard series (max {max_standard} mm) and is a non-standard size.")
    NONFINITE_DESIGN = ("NONFINITE_DESIGN", "Design field '{field}' is not finite ({value}).")
    RATIO_ROUNDING = ("RATIO_ROUNDING", "Realized ratio {actual_ratio:.4f}:1 differs from the requested {nominal_ratio:.4f}:1 by {deviation_pct:.2f}% after rounding tooth counts.")
    SAFETY_BELOW_TARGET = ("SAFETY_BELOW_TARGET", "Realized bending safety factor {realized:.3f} is below the design target {target:.3f}.")

    @property
    def code(self) -> str:
        return self.value[0]

    @property
    def template(self) -> str:
        return self.value[1]

    def format_message(self, **kwargs) -> str:
        """Formats the message template with provided keyword arguments."""
        try:
            return self.template.format(**kwargs)
        except KeyError as e:
            logger.error(f"Missing key {e} for formatting message template of {self.name} (code: {self.code}): '{self.template}'. Provided args: {kwargs}")
            return f"Error formatting message for {self.code}: Missing key {e}. Template: '{self.template}' Args: {kwargs}"
