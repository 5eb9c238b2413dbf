# src/gearopt_core/validation/__init__.py
import logging
logger = logging.getLogger(__name__)

from .issue_codes import DesignIssueCode
from .issues import ValidationIssue, ValidationIssueLevel, count_by_level
from .design_reviewer import DesignReviewer
from .exceptions import DesignReviewError

__all__ = [
    "ValidationIssue",
    "ValidationIssueLevel",
    "count_by_level",
    "DesignIssueCode",
    "DesignReviewer",
    "DesignReviewError",
]
