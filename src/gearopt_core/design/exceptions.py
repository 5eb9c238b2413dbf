# src/gearopt_core/design/exceptions.py
"""
Diagnosable exceptions raised while solving a gear design.
"""
from dataclasses import dataclass
from typing import Any

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass()
class InvalidRequirementError(DiagnosableError, ValueError):
    """
    Raised when the requirements make the speed ratio undefined: a zero target
    output speed or a non-positive nominal input speed. Recoverable by asking
    the user for new values.
    """
    field: str
    value: Any
    details: str

    def __str__(self):
        return f"Invalid requirement '{self.field}' = {self.value!r}: {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Invalid Design Requirement",
            details=self.details,
            suggestion="Provide a non-zero target output speed and a positive nominal input speed.",
            context={'field': self.field, 'user_input': str(self.value)}
        )
