# src/gearopt_core/validation/exceptions.py
"""
The diagnosable error raised when a design review finds error-level issues.
"""
from typing import List

from .issues import ValidationIssue
from ..errors import DiagnosableError, format_diagnostic_report


class DesignReviewError(DiagnosableError):
    """
    Container for all ERROR-level issues found by a DesignReviewer pass.
    """
    def __init__(self, issues: List[ValidationIssue]):
        self.issues: List[ValidationIssue] = [
            issue for issue in issues if issue.is_error
        ]
        if not self.issues:
            summary_message = "DesignReviewError was raised with no error-level issues."
        else:
            summary_message = (
                f"Design review failed with {len(self.issues)} error(s):\n"
                + "\n".join(f"  - {issue}" for issue in self.issues)
            )
        super().__init__(summary_message)

    def get_diagnostic_report(self) -> str:
        details = (
            f"The requirements or the solved design are not usable.\n"
            f"Found {len(self.issues)} error(s). See details below:\n\n"
            + "\n".join(f"  - {issue}" for issue in self.issues)
        )
        first_issue = self.issues[0] if self.issues else None
        context = {'field': first_issue.field} if first_issue and first_issue.field else {}
        return format_diagnostic_report(
            error_type="Gear Design Review Error",
            details=details,
            suggestion="Correct the requirements listed above and solve the design again.",
            context=context
        )
