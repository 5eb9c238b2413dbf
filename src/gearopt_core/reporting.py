# src/gearopt_core/reporting.py
"""
Text summaries of a solved design for display and for the advisory service.
"""
import logging

from .data_structures import DesignResult

logger = logging.getLogger(__name__)


def format_design_summary(design: DesignResult) -> str:
    """
    Multi-line, human-readable summary of a design.

    This is the design context handed to the engineering advisory service
    together with the user's question.
    """
    lines = [
        "Current Design:",
        f"- Ratio: {design.ratio:.2f}:1",
        f"- Module: {design.pinion.module:g} mm" + (" (non-standard)" if design.module_overflow else ""),
        f"- Pinion: {design.pinion.teeth} teeth, {design.pinion.rpm:.0f} RPM, {design.pinion.diameter:.1f}mm Dia",
        f"- Gear: {design.gear.teeth} teeth, {design.gear.torque:.1f} Nm Torque, {design.gear.diameter:.1f}mm Dia",
        f"- Center Distance: {design.center_distance:.2f} mm",
        f"- Safety Factor (Bending): ~{design.safety_factor:.2f} (realized {design.realized_safety_factor:.2f})",
    ]
    return "\n".join(lines)
