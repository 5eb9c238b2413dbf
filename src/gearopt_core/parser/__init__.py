# src/gearopt_core/parser/__init__.py
from .raw_data import ParsedRequirementsNode
from .parser import RequirementsParser, RequirementsValidator
from .exceptions import ParsingError, SchemaValidationError, QuantityError

__all__ = [
    # IR Data Structures
    "ParsedRequirementsNode",
    # Parser and Exceptions
    "RequirementsParser",
    "RequirementsValidator",
    "ParsingError",
    "SchemaValidationError",
    "QuantityError",
]
