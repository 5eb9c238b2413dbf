# src/gearopt_core/parser/exceptions.py
"""
Diagnosable exceptions for reading and schema-validating requirements files.

`ParsingError` covers file-system and YAML syntax problems; `SchemaValidationError`
covers documents that load but do not match the Cerberus schema.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from ..errors import DiagnosableError, format_diagnostic_report


class BaseParsingError(DiagnosableError):
    """
    A local, concrete base class for all YAML parsing and schema validation errors.
    """
    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Generic Parsing Error",
            details=str(self),
            suggestion="Please check the format and content of the requirements file.",
            context={}
        )


@dataclass(frozen=True)
class ParsingError(BaseParsingError):
    """
    Raised when a requirements document cannot be loaded: missing file, no read
    permission, invalid YAML, or a root that is not a mapping.
    """
    details: str
    file_path: Optional[Path] = None

    def __str__(self):
        where = f" in file '{self.file_path}'" if self.file_path else ""
        return f"Parsing error{where}: {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="YAML Parsing or File Error",
            details=self.details,
            suggestion="Ensure the file exists, has the correct read permissions, and contains valid YAML syntax.",
            context={'source_file': self.file_path}
        )


@dataclass(frozen=True)
class SchemaValidationError(BaseParsingError):
    """
    Raised when the YAML is syntactically valid but does not match the
    requirements schema (missing keys, unknown keys, both torque and power, ...).
    """
    errors: Dict[str, Any]
    file_path: Optional[Path] = None

    def _error_lines(self) -> str:
        return "\n".join(
            f"  - Field '{field}': {messages[0]}"
            for field, messages in sorted(self.errors.items())
        )

    def __str__(self):
        where = f" for file '{self.file_path}'" if self.file_path else ""
        return f"YAML schema validation failed{where}:\n" + self._error_lines()

    def get_diagnostic_report(self) -> str:
        details = (
            "The structure of the requirements document does not conform to the required schema.\n"
            f"See details for {len(self.errors)} issue(s) below:\n\n{self._error_lines()}"
        )
        return format_diagnostic_report(
            error_type="YAML Schema Validation Error",
            details=details,
            suggestion=(
                "Give the load once: 'torque' or 'power' under 'target_output', or an 'input_source' block. Give exactly one of "
                "'material' or 'yield_strength'. Remove keys that are not part of the format."
            ),
            context={'source_file': self.file_path}
        )


@dataclass(frozen=True)
class QuantityError(BaseParsingError):
    """
    Raised when a value in a schema-valid document cannot be read as a quantity
    of the expected dimension, e.g. '50 MPa' given for a torque.
    """
    field: str
    value: Any
    expected_unit: str
    details: str
    file_path: Optional[Path] = None

    def __str__(self):
        return f"Cannot read '{self.field}' = {self.value!r} as {self.expected_unit}: {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Unit or Dimension Error",
            details=f"Value for '{self.field}' could not be converted to {self.expected_unit}.\n{self.details}",
            suggestion=f"Write the value as a plain number in {self.expected_unit} or as a quantity with compatible units (e.g. '50 N*m', '1.2 krpm', '250 MPa', '0.5 hp').",
            context={'field': self.field, 'user_input': str(self.value), 'source_file': self.file_path}
        )
