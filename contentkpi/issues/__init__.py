"""Issue normalization, grouping and ranking."""

from .classifier import (
    DEFAULT_DIMENSION,
    DEFAULT_KEYWORD_RULES,
    KeywordRule,
    classify_dimension,
)
from .grouper import IssueGrouper, issue_key, summarize
from .models import (
    SEVERITY_RANK,
    UNKNOWN_SEVERITY_RANK,
    AffectedSource,
    GroupedIssue,
    IssueSummary,
    NormalizedIssue,
    Severity,
    severity_rank,
)
from .normalizer import (
    IssueNormalizer,
    composite_issue_id,
    filter_issues,
    sort_issues,
)

__all__ = [
    "DEFAULT_DIMENSION",
    "DEFAULT_KEYWORD_RULES",
    "KeywordRule",
    "classify_dimension",
    "IssueGrouper",
    "issue_key",
    "summarize",
    "SEVERITY_RANK",
    "UNKNOWN_SEVERITY_RANK",
    "AffectedSource",
    "GroupedIssue",
    "IssueSummary",
    "NormalizedIssue",
    "Severity",
    "severity_rank",
    "IssueNormalizer",
    "composite_issue_id",
    "filter_issues",
    "sort_issues",
]
