# src/gearopt_core/errors.py
import logging
from typing import Any, Dict, Protocol, abstractmethod
from typing import runtime_checkable

logger = logging.getLogger(__name__)

# --- User-Facing Exception Hierarchy ---

class GearOptError(Exception):
    """Base class for all custom, user-facing errors in gearopt_core."""
    pass

class DesignError(GearOptError):
    """
    Raised when a gear design cannot be produced from a set of requirements, from
    reading a requirements file to solving for the module. The message is a
    pre-formatted, user-friendly diagnostic report.
    """
    pass

class SimulationRunError(GearOptError):
    """
    Raised when the time-stepped simulation fails after a design has been solved.
    The message is a pre-formatted, user-friendly diagnostic report.
    """
    pass


# --- Diagnostic Protocol & Base Exception ---

@runtime_checkable
class Diagnosable(Protocol):
    """
    A protocol for exceptions that can generate their own diagnostic report.
    """
    def get_diagnostic_report(self) -> str:
        """Generates a complete, user-friendly, multi-line report string."""
        ...

class DiagnosableError(Exception, Diagnosable):
    """
    A common, concrete base class for all internal exceptions that are diagnosable.

    It is a real `Exception` so it can be caught in `except` clauses, and it
    declares `get_diagnostic_report` abstract so every subclass provides a
    user-facing report.
    """
    @abstractmethod
    def get_diagnostic_report(self) -> str:
        """
        Abstract method to generate the diagnostic report.
        Subclasses MUST implement this.
        """
        raise NotImplementedError


# --- Stateless Formatting Utility ---

def format_diagnostic_report(
    error_type: str,
    details: str,
    suggestion: str,
    context: Dict[str, Any]
) -> str:
    """
    A stateless helper to format the final multi-line report string, ensuring a
    consistent look and feel for all user-facing diagnostics.

    Args:
        error_type: The high-level category of the error (e.g., "Invalid Requirement").
        details: A detailed, potentially multi-line description of the problem.
        suggestion: Actionable advice for the user to resolve the issue.
        context: A dictionary of contextual information (field, file path, user input, time).

    Returns:
        A formatted, user-friendly diagnostic report string ready for display.
    """
    lines = [
        "\n",
        "=============== gearopt_core: Actionable Diagnostic Report ===============",
        f"Error Type:     {error_type}",
    ]
    if field_name := context.get('field'):
        lines.append(f"Field:          {field_name}")
    if source_file := context.get('source_file'):
        lines.append(f"Source File:    {source_file}")
    if user_input := context.get('user_input'):
        lines.append(f"User Input:     '{user_input}'")
    if sim_time := context.get('time'):
        lines.append(f"Sim Time:       {sim_time}")

    lines.append("\nDetails:")
    for line in details.splitlines():
        lines.append(f"  {line}")

    if suggestion:
        lines.append("\nSuggestion:")
        for line in suggestion.splitlines():
            lines.append(f"  {line}")

    lines.append("==========================================================================")
    return "\n".join(lines)
