"""Deduplication and severity ranking of normalized issues."""

import logging
from collections.abc import Sequence

from .models import (
    SEVERITY_RANK,
    AffectedSource,
    GroupedIssue,
    IssueSummary,
    NormalizedIssue,
    severity_rank,
)

logger = logging.getLogger(__name__)


def issue_key(issue: NormalizedIssue) -> str:
    """
    Deduplication key for an issue.

    Rule id is preferred since unrelated rules can emit identical text.
    The description+severity fallback only applies to issues without any
    id and may merge textually identical but unrelated issues.
    """
    if issue.rule_id:
        return issue.rule_id
    if issue.id:
        return issue.id
    return f"{issue.description}|{issue.severity}"


class IssueGrouper:
    """Folds normalized issues into one GroupedIssue per underlying issue."""

    def group(self, issues: Sequence[NormalizedIssue]) -> list[GroupedIssue]:
        """
        Group issues by key, in first-seen order.

        The first occurrence of a key becomes the representative issue;
        later occurrences only add an affected source.
        """
        groups: dict[str, GroupedIssue] = {}

        for issue in issues:
            key = issue_key(issue)
            affected = AffectedSource(
                source=issue.source,
                source_type=issue.source_type,
                title=issue.source_title,
            )
            existing = groups.get(key)
            if existing is None:
                groups[key] = GroupedIssue(
                    issue_key=key,
                    representative_issue=issue,
                    dimension=issue.dimension,
                    affected_sources=[affected],
                )
            else:
                existing.affected_sources.append(affected)

        logger.debug("Grouped %d issues into %d groups", len(issues), len(groups))
        return list(groups.values())

    def sort(self, groups: Sequence[GroupedIssue]) -> list[GroupedIssue]:
        """Stable sort by severity rank; ties keep their input order."""
        return sorted(groups, key=lambda group: severity_rank(group.severity))

    def group_and_sort(self, issues: Sequence[NormalizedIssue]) -> list[GroupedIssue]:
        return self.sort(self.group(issues))


def summarize(issues: Sequence[NormalizedIssue]) -> IssueSummary:
    """
    Count issues by severity and by dimension.

    Known severities are listed most severe first, followed by unknown
    severities and then dimensions in first-seen order.
    """
    severity_counts: dict[str, int] = {}
    dimension_counts: dict[str, int] = {}

    for issue in issues:
        severity_counts[issue.severity] = severity_counts.get(issue.severity, 0) + 1
        dimension_counts[issue.dimension] = (
            dimension_counts.get(issue.dimension, 0) + 1
        )

    known = [s for s in SEVERITY_RANK if s in severity_counts]
    unknown = [s for s in severity_counts if s not in SEVERITY_RANK]
    ordered = {str(s): severity_counts[s] for s in known + unknown}

    return IssueSummary(
        total=len(issues),
        by_severity=ordered,
        by_dimension=dimension_counts,
    )
