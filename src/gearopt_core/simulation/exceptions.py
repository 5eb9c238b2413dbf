# src/gearopt_core/simulation/exceptions.py
"""
Diagnosable exceptions for the simulation driver.
"""
from dataclasses import dataclass
from typing import Optional

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass()
class SimulationConfigError(DiagnosableError, ValueError):
    """Raised when the driver is asked for a run with an invalid time grid."""
    parameter: str
    value: float
    details: str

    def __str__(self):
        return f"Invalid simulation setting '{self.parameter}' = {self.value!r}: {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Invalid Simulation Configuration",
            details=self.details,
            suggestion="Use a positive time step and a non-negative duration.",
            context={'field': self.parameter, 'user_input': str(self.value)}
        )


@dataclass()
class NonFiniteStateError(DiagnosableError, ArithmeticError):
    """
    Raised by the driver when a tick produces an infinite or NaN value, which
    happens when the design itself was solved from degenerate requirements.
    """
    quantity: str
    time: float
    value: Optional[float] = None

    def __str__(self):
        return f"Non-finite {self.quantity} ({self.value}) at t={self.time:.4g} s"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Non-Finite Simulation State",
            details=f"The simulated {self.quantity} evaluated to {self.value}.",
            suggestion="Check the design for a zero ratio or a non-finite module, usually caused by zero or negative requirements.",
            context={'time': f"{self.time:.4g} s"}
        )
