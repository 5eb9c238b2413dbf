# src/gearopt_core/validation/design_reviewer.py
import logging
import math
from typing import List, Optional

from ..constants import DESIGN_SAFETY_FACTOR, PINION_TEETH, STANDARD_MODULES_MM
from ..data_structures import DesignRequirements, DesignResult
from .issues import ValidationIssue, ValidationIssueLevel, count_by_level
from .issue_codes import DesignIssueCode
from .exceptions import DesignReviewError

logger = logging.getLogger(__name__)

#: Relative tolerance below the design safety factor before a warning is raised.
SAFETY_FACTOR_TOLERANCE = 1e-9


class DesignReviewer:
    """
    Reviews requirements and, when available, the design solved from them.

    The solver itself stays permissive; this pass is where degenerate inputs,
    non-standard module selections and rounding effects are surfaced.
    """

    def __init__(self, requirements: DesignRequirements, design: Optional[DesignResult] = None):
        self.requirements = requirements
        self.design = design
        self.issues: List[ValidationIssue] = []

    def review(self) -> List[ValidationIssue]:
        """Returns all issues found (errors, warnings, and info)."""
        self.issues = []
        self._review_requirements()
        if self.design is not None:
            self._review_design()

        counts = count_by_level(self.issues)
        logger.info(
            f"Design review complete. Found: {counts[ValidationIssueLevel.ERROR]} errors, "
            f"{counts[ValidationIssueLevel.WARNING]} warnings, {counts[ValidationIssueLevel.INFO]} info messages."
        )
        return self.issues

    def review_or_raise(self) -> List[ValidationIssue]:
        """Like review(), but raises DesignReviewError if any issue is an error."""
        issues = self.review()
        if any(issue.is_error for issue in issues):
            raise DesignReviewError(issues)
        return issues

    def _add_issue(self, level: ValidationIssueLevel, code_enum: DesignIssueCode, field: Optional[str] = None, **kwargs):
        self.issues.append(ValidationIssue.from_code(level, code_enum, field=field, **kwargs))

    def _review_requirements(self):
        req = self.requirements
        if req.target_output_rpm == 0:
            self._add_issue(ValidationIssueLevel.ERROR, DesignIssueCode.REQ_RPM_INVALID,
                            field="target_output_rpm", value=req.target_output_rpm)
        elif req.target_output_rpm < 0:
            # Accepted by the solver; the negative and NaN design values below stem from it.
            self._add_issue(ValidationIssueLevel.WARNING, DesignIssueCode.REQ_RPM_NEGATIVE,
                            field="target_output_rpm", value=req.target_output_rpm)
        if not req.nominal_input_rpm > 0:
            self._add_issue(ValidationIssueLevel.ERROR, DesignIssueCode.REQ_RPM_INVALID,
                            field="nominal_input_rpm", value=req.nominal_input_rpm)
        if not req.material_yield_strength > 0:
            self._add_issue(ValidationIssueLevel.ERROR, DesignIssueCode.REQ_YIELD_NONPOSITIVE,
                            field="material_yield_strength", value=req.material_yield_strength)
        if not req.target_output_torque > 0:
            self._add_issue(ValidationIssueLevel.WARNING, DesignIssueCode.REQ_TORQUE_NONPOSITIVE,
                            field="target_output_torque", value=req.target_output_torque)

    def _review_design(self):
        design = self.design
        non_finite_found = False
        for name, value in (
            ("module", design.module),
            ("ratio", design.ratio),
            ("pinion.torque", design.pinion.torque),
            ("gear.rpm", design.gear.rpm),
        ):
            if not math.isfinite(value):
                non_finite_found = True
                self._add_issue(ValidationIssueLevel.WARNING, DesignIssueCode.NONFINITE_DESIGN, field=name, value=value)

        if design.module_overflow and math.isfinite(design.module):
            self._add_issue(ValidationIssueLevel.WARNING, DesignIssueCode.MODULE_OVERFLOW, field="module",
                            module=design.module, max_standard=STANDARD_MODULES_MM[-1])

        nominal_ratio = self.requirements.nominal_input_rpm / self.requirements.target_output_rpm \
            if self.requirements.target_output_rpm != 0 else math.nan
        if math.isfinite(nominal_ratio) and nominal_ratio != 0 and design.ratio != nominal_ratio:
            deviation_pct = 100.0 * (design.ratio - nominal_ratio) / nominal_ratio
            self._add_issue(ValidationIssueLevel.INFO, DesignIssueCode.RATIO_ROUNDING, field="ratio",
                            actual_ratio=design.ratio, nominal_ratio=nominal_ratio,
                            deviation_pct=deviation_pct, gear_teeth=design.gear.teeth, pinion_teeth=PINION_TEETH)

        # A non-finite design already explains a NaN safety factor.
        if non_finite_found:
            return
        realized = design.realized_safety_factor
        if not realized >= DESIGN_SAFETY_FACTOR * (1 - SAFETY_FACTOR_TOLERANCE):
            self._add_issue(ValidationIssueLevel.WARNING, DesignIssueCode.SAFETY_BELOW_TARGET,
                            field="realized_safety_factor", realized=realized, target=DESIGN_SAFETY_FACTOR)
