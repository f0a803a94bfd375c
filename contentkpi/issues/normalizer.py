"""Conversion of page and domain issues into NormalizedIssue records."""

import logging
from collections.abc import Sequence

from contentkpi.protocol import (
    DEFAULT_SEVERITY,
    Dimension,
    DomainAnalysis,
    PageScore,
    RawIssue,
    RuleResult,
    canonical_dimension,
)

from .classifier import (
    DEFAULT_DIMENSION,
    DEFAULT_KEYWORD_RULES,
    KeywordRule,
    classify_dimension,
)
from .models import NormalizedIssue, severity_rank

logger = logging.getLogger(__name__)

PAGE_FALLBACK_DIMENSION = "General"
RULE_FALLBACK_DIMENSION: str = Dimension.TECHNICAL


def composite_issue_id(source: str, index: int) -> str:
    """Identity for an issue that carries neither an id nor a rule id."""
    return f"{source}-issue-{index}"


def _rule_dimension(rule: RuleResult) -> str:
    if rule.category:
        return canonical_dimension(rule.category)
    if rule.dimension:
        return canonical_dimension(rule.dimension)
    return RULE_FALLBACK_DIMENSION


class IssueNormalizer:
    """
    Flattens page issues and domain issues into one list of NormalizedIssue.

    For a domain, issues attached to its rule results take precedence:
    when any rule reported an issue, the domain's free-text issue list is
    ignored entirely. Free-text issues are only used for domains whose
    rules reported nothing, and get their dimension from keyword rules.
    """

    def __init__(
        self,
        rules: Sequence[KeywordRule] = DEFAULT_KEYWORD_RULES,
        default_dimension: str = DEFAULT_DIMENSION,
    ) -> None:
        """
        Initialize the normalizer.

        Args:
            rules: Ordered keyword rules for classifying free-text issues.
            default_dimension: Dimension used when no keyword rule matches.
        """
        self.rules = tuple(rules)
        self.default_dimension = default_dimension

    def normalize(
        self,
        pages: Sequence[PageScore],
        domains: Sequence[DomainAnalysis],
    ) -> list[NormalizedIssue]:
        """
        Normalize all issues, pages first, then domains, in input order.

        Args:
            pages: Page analyses.
            domains: Domain analyses.

        Returns:
            Normalized issues. Severities are passed through unchanged.
        """
        issues: list[NormalizedIssue] = []
        for page in pages:
            issues.extend(self.normalize_page(page))
        for domain in domains:
            issues.extend(self.normalize_domain(domain))

        logger.debug(
            "Normalized %d issues from %d pages and %d domains",
            len(issues),
            len(pages),
            len(domains),
        )
        return issues

    def normalize_page(self, page: PageScore) -> list[NormalizedIssue]:
        """Normalize the issues attached to one page."""
        return [
            NormalizedIssue(
                id=issue.id
                or issue.rule_id
                or composite_issue_id(page.url, index),
                source=page.url,
                source_type="page",
                source_title=page.title,
                severity=issue.severity,
                dimension=issue.dimension or PAGE_FALLBACK_DIMENSION,
                description=issue.description,
                recommendation=issue.recommendation,
                rule_id=issue.rule_id,
            )
            for index, issue in enumerate(page.issues)
        ]

    def normalize_domain(self, domain: DomainAnalysis) -> list[NormalizedIssue]:
        """Normalize one domain's issues, preferring rule-sourced ones."""
        rule_issues = self._rule_issues(domain)
        if rule_issues:
            return rule_issues
        return self._fallback_issues(domain)

    def _rule_issues(self, domain: DomainAnalysis) -> list[NormalizedIssue]:
        pairs: list[tuple[RuleResult, RawIssue]] = [
            (rule, issue)
            for rule in domain.rule_results
            if rule.issues
            for issue in rule.issues
        ]

        result = []
        for index, (rule, issue) in enumerate(pairs):
            rule_id = issue.rule_id or rule.rule_id or None
            result.append(
                NormalizedIssue(
                    id=issue.id or rule_id or composite_issue_id(domain.domain, index),
                    source=domain.domain,
                    source_type="domain",
                    severity=issue.severity,
                    dimension=_rule_dimension(rule),
                    description=issue.description,
                    recommendation=issue.recommendation,
                    rule_id=rule_id,
                    rule_name=rule.rule_name or None,
                )
            )
        return result

    def _fallback_issues(self, domain: DomainAnalysis) -> list[NormalizedIssue]:
        result = []
        for index, issue in enumerate(domain.issues):
            if isinstance(issue, str):
                result.append(
                    NormalizedIssue(
                        id=composite_issue_id(domain.domain, index),
                        source=domain.domain,
                        source_type="domain",
                        severity=DEFAULT_SEVERITY,
                        dimension=classify_dimension(
                            issue, self.rules, self.default_dimension
                        ),
                        description=issue,
                    )
                )
            else:
                result.append(
                    NormalizedIssue(
                        id=issue.id
                        or issue.rule_id
                        or composite_issue_id(domain.domain, index),
                        source=domain.domain,
                        source_type="domain",
                        severity=issue.severity,
                        dimension=issue.dimension
                        or classify_dimension(
                            issue.description, self.rules, self.default_dimension
                        ),
                        description=issue.description,
                        recommendation=issue.recommendation,
                        rule_id=issue.rule_id,
                    )
                )
        return result


def sort_issues(issues: Sequence[NormalizedIssue]) -> list[NormalizedIssue]:
    """Stable sort by severity rank; equal severities keep input order."""
    return sorted(issues, key=lambda issue: severity_rank(issue.severity))


def filter_issues(
    issues: Sequence[NormalizedIssue],
    dimension: str | None = None,
    severity: str | None = None,
) -> list[NormalizedIssue]:
    """Keep issues matching the given dimension and/or severity."""
    result = list(issues)
    if dimension:
        wanted = dimension.lower()
        result = [issue for issue in result if issue.dimension.lower() == wanted]
    if severity:
        result = [issue for issue in result if issue.severity == severity]
    return result
