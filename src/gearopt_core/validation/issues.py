# src/gearopt_core/validation/issues.py
from collections import Counter
from dataclasses import dataclass, field as dataclass_field
from enum import Enum
from typing import Any, Dict, Iterable, Optional

from .issue_codes import DesignIssueCode


class ValidationIssueLevel(Enum):
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class ValidationIssue:
    """
    One finding of a design review, tied to the requirement or design field it
    concerns. `details` holds the raw values the message was formatted from.
    """
    level: ValidationIssueLevel
    code: str
    message: str
    field: Optional[str] = None
    details: Dict[str, Any] = dataclass_field(default_factory=dict)

    @classmethod
    def from_code(cls, level: ValidationIssueLevel, issue_code: DesignIssueCode,
                  field: Optional[str] = None, **values) -> "ValidationIssue":
        return cls(
            level=level,
            code=issue_code.code,
            message=issue_code.format_message(field=field, **values),
            field=field,
            details=values,
        )

    @property
    def is_error(self) -> bool:
        return self.level is ValidationIssueLevel.ERROR

    def __str__(self) -> str:
        text = f"[{self.level.name} - {self.code}]"
        if self.field:
            text += f" Field: {self.field}"
        text += f" Message: {self.message}"
        if self.details:
            text += " Details: (" + ", ".join(f"{k}={v}" for k, v in sorted(self.details.items())) + ")"
        return text


def count_by_level(issues: Iterable[ValidationIssue]) -> Dict[ValidationIssueLevel, int]:
    """Number of issues at each level; levels with no issues map to 0."""
    counts = Counter(issue.level for issue in issues)
    return {level: counts.get(level, 0) for level in ValidationIssueLevel}
