# src/gearopt_core/parser/parser.py
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import cerberus
import yaml

from ..constants import MATERIAL_PRESETS_MPA
from ..data_structures import InputVariability
from .raw_data import ParsedRequirementsNode
from .exceptions import ParsingError, SchemaValidationError

logger = logging.getLogger(__name__)

_QUANTITY_TYPES = ["string", "number"]


class RequirementsValidator(cerberus.Validator):
    """Cerberus validator with a rule for strictly positive plain numbers."""

    def _validate_positive_number(self, constraint, field, value):
        """
        Rejects plain numbers that are zero or negative. Unit strings are left
        to the builder, which knows their dimension.
        The rule's arguments are validated against this schema:
        {'type': 'boolean'}
        """
        if constraint and isinstance(value, (int, float)) and not isinstance(value, bool) and value <= 0:
            self._error(field, f"must be greater than zero, got {value}")


class RequirementsParser:
    """
    Loads and structurally validates gear requirements documents written in YAML.
    Its sole responsibility is to produce a `ParsedRequirementsNode`; unit
    strings are resolved later by the RequirementsBuilder.
    """
    _quantity_rule = {"type": _QUANTITY_TYPES, "empty": False}

    _schema = {
        "name": {"type": "string", "required": False, "empty": False},
        "target_output": {
            "type": "dict", "required": True, "schema": {
                "rpm": {**_quantity_rule, "required": True},
                # At most one of torque/power here; input_source is the third way to give the load.
                "torque": {**_quantity_rule, "excludes": "power"},
                "power": {**_quantity_rule, "excludes": "torque", "positive_number": True},
            },
        },
        "input_source": {
            "type": "dict", "required": False, "schema": {
                "power": {**_quantity_rule, "required": True, "excludes": "torque", "positive_number": True},
                "torque": {**_quantity_rule, "required": True, "excludes": "power", "positive_number": True},
            },
        },
        "nominal_input_rpm": {**_quantity_rule, "required": True, "positive_number": True},
        # Exactly one of material/yield_strength.
        "material": {"type": "string", "required": True, "allowed": sorted(MATERIAL_PRESETS_MPA), "excludes": "yield_strength"},
        "yield_strength": {**_quantity_rule, "required": True, "excludes": "material", "positive_number": True},
        "input_variability": {
            "type": "string", "required": False,
            "allowed": [mode.value for mode in InputVariability],
            "default": InputVariability.CONSTANT.value,
        },
        "simulation": {
            "type": "dict", "required": False, "schema": {
                "duration": {**_quantity_rule, "required": True},
                "dt": {**_quantity_rule, "required": True, "positive_number": True},
                "history_capacity": {"type": "integer", "required": False, "min": 1},
            },
        },
    }

    def __init__(self):
        self._validator = RequirementsValidator(self._schema)
        self._validator.allow_unknown = False
        logger.info("RequirementsParser initialized with strict structural validation rules.")

    def parse_file(self, yaml_path: Union[str, Path]) -> ParsedRequirementsNode:
        """Parses a requirements file and returns its IR node."""
        resolved_path = Path(yaml_path).resolve()
        logger.info(f"Parsing requirements file: {resolved_path}")
        content = self._load_yaml_file(resolved_path)
        return self._validate_and_convert(content, resolved_path, default_name=resolved_path.stem)

    def parse_text(self, yaml_text: str, name: str = "requirements") -> ParsedRequirementsNode:
        """Parses a requirements document held in a string."""
        content = self._load_yaml_text(yaml_text, source=None)
        return self._validate_and_convert(content, None, default_name=name)

    def _validate_and_convert(
        self, content: Dict[str, Any], source: Optional[Path], default_name: str
    ) -> ParsedRequirementsNode:
        if not self._validator.validate(content):
            raise SchemaValidationError(self._validator.errors, source)
        validated = self._validator.document
        output = validated["target_output"]
        source_side = validated.get("input_source")
        self._check_single_load(output, source_side, source)

        return ParsedRequirementsNode(
            name=validated.get("name", default_name),
            source_yaml_path=source,
            raw_output_rpm=output["rpm"],
            raw_output_torque=output.get("torque"),
            raw_output_power=output.get("power"),
            raw_nominal_input_rpm=validated["nominal_input_rpm"],
            material=validated.get("material"),
            raw_yield_strength=validated.get("yield_strength"),
            input_variability=validated["input_variability"],
            raw_simulation_config=validated.get("simulation"),
            raw_input_power=source_side.get("power") if source_side else None,
            raw_input_torque=source_side.get("torque") if source_side else None,
        )

    @staticmethod
    def _check_single_load(output: Dict[str, Any], source_side: Optional[Dict[str, Any]], source: Optional[Path]):
        """The load is given exactly once: target_output.torque, target_output.power or input_source."""
        given = [f"target_output.{key}" for key in ("torque", "power") if key in output]
        if source_side:
            given.append("input_source")
        if len(given) == 1:
            return
        if not given:
            message = "one of 'torque' or 'power' is required (or give an 'input_source' block)"
        else:
            message = f"conflicts with 'input_source'; give the load only once (found {', '.join(given)})"
        raise SchemaValidationError({"target_output": [message]}, source)

    def _load_yaml_file(self, source: Path) -> Dict[str, Any]:
        """Loads and performs basic sanity checks on a YAML file."""
        if not source.is_file():
            raise ParsingError(details=f"Requirements file not found at path: {source}", file_path=source)
        try:
            text = source.read_text(encoding="utf-8")
        except PermissionError as e:
            raise ParsingError(details=f"Permission denied when trying to read file: {e}", file_path=source) from e
        return self._load_yaml_text(text, source)

    def _load_yaml_text(self, text: str, source: Optional[Path]) -> Dict[str, Any]:
        try:
            content = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ParsingError(details=f"Invalid YAML syntax: {e}", file_path=source) from e
        if content is None:
            raise ParsingError(details="The YAML document is empty or contains no valid content.", file_path=source)
        if not isinstance(content, dict):
            raise ParsingError(details="The root of the YAML document must be a dictionary (mapping).", file_path=source)
        return content
