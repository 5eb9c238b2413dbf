# src/gearopt_core/parser/raw_data.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

# Intermediate Representation between the RequirementsParser and the
# RequirementsBuilder. Values are kept exactly as written in the YAML; unit
# strings are resolved only by the builder.

@dataclass(frozen=True)
class ParsedRequirementsNode:
    """IR for one schema-validated requirements document."""
    name: str
    source_yaml_path: Optional[Path]
    raw_output_rpm: Any
    raw_output_torque: Any
    raw_output_power: Any
    raw_nominal_input_rpm: Any
    material: Optional[str]
    raw_yield_strength: Any
    input_variability: str
    raw_simulation_config: Optional[Dict[str, Any]] = None
    # Source-side load: at most one of these, and only when target_output gives neither torque nor power.
    raw_input_power: Any = None
    raw_input_torque: Any = None
