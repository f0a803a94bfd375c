"""Single entry point deriving every dashboard aggregate from one fetch.

Overview cards, the combined-scores tab, the domain tab and the issue
table all consume the same AggregationReport instead of re-deriving
scores and issue lists on their own.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel, Field

from contentkpi.core.settings import ContentKPISettings
from contentkpi.issues import (
    GroupedIssue,
    IssueGrouper,
    IssueNormalizer,
    IssueSummary,
    NormalizedIssue,
    sort_issues,
    summarize,
)
from contentkpi.loader import parse_payload
from contentkpi.presentation import DEFAULT_PALETTE, Palette
from contentkpi.protocol import DomainAnalysis, PageScore
from contentkpi.scoring import (
    CombinedScore,
    DimensionComparison,
    ScoreCombiner,
    pages_needing_attention,
    score_band,
    top_pages,
)

logger = logging.getLogger(__name__)


class AggregationReport(BaseModel):
    """Everything the dashboard views need from one page/domain fetch."""

    combined: CombinedScore
    dimensions: list[DimensionComparison] = Field(default_factory=list)
    issues: list[GroupedIssue] = Field(
        default_factory=list, description="Grouped issues, most severe first"
    )
    flat_issues: list[NormalizedIssue] = Field(
        default_factory=list, description="Ungrouped issues, most severe first"
    )
    summary: IssueSummary = Field(default_factory=IssueSummary)
    attention: list[PageScore] = Field(
        default_factory=list, description="Lowest scoring pages"
    )
    top_pages: list[PageScore] = Field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Deterministic dictionary form; identical input gives identical output."""
        return {
            "combined": self.combined.to_dict(),
            "dimensions": [d.to_dict() for d in self.dimensions],
            "issues": [g.to_dict() for g in self.issues],
            "flatIssues": [i.to_dict() for i in self.flat_issues],
            "summary": self.summary.to_dict(),
            "attention": [_page_entry(p) for p in self.attention],
            "topPages": [_page_entry(p) for p in self.top_pages],
        }

    def to_view(self, palette: Palette = DEFAULT_PALETTE) -> dict[str, Any]:
        """Presentation form: rounded scores, score bands and colors."""
        combined = self.combined.rounded()
        combined["band"] = str(score_band(self.combined.overall_score))
        combined["pageContribution"] = round(self.combined.page_contribution)
        combined["domainContribution"] = round(self.combined.domain_contribution)

        return {
            "combined": combined,
            "dimensions": [
                {
                    "dimension": d.dimension,
                    "label": palette.dimension_label(d.dimension),
                    "color": palette.dimension_color(d.dimension),
                    "pageScore": round(d.page_score),
                    "domainScore": round(d.domain_score),
                    "combined": round(d.combined),
                }
                for d in self.dimensions
            ],
            "issues": [
                {
                    **g.to_dict(),
                    "severityColor": palette.severity_color(g.severity),
                    "dimensionColor": palette.dimension_color(g.dimension),
                }
                for g in self.issues
            ],
            "flatIssues": [
                {
                    **i.to_dict(),
                    "severityColor": palette.severity_color(i.severity),
                    "dimensionColor": palette.dimension_color(i.dimension),
                }
                for i in self.flat_issues
            ],
            "summary": self.summary.to_dict(),
            "attention": [
                {**_page_entry(p), "globalScore": round(p.global_score)}
                for p in self.attention
            ],
            "topPages": [
                {**_page_entry(p), "globalScore": round(p.global_score)}
                for p in self.top_pages
            ],
            "legend": palette.legend(),
        }


def _page_entry(page: PageScore) -> dict[str, Any]:
    return {
        "url": page.url,
        "title": page.title,
        "globalScore": page.global_score,
        "issueCount": len(page.issues),
    }


class Aggregator:
    """
    Combines scores and ranks issues for a set of page and domain analyses.

    Holds no state between calls: aggregate() is a pure function of its
    arguments and the configuration given at construction.
    """

    def __init__(
        self,
        combiner: ScoreCombiner | None = None,
        normalizer: IssueNormalizer | None = None,
        grouper: IssueGrouper | None = None,
        attention_threshold: float = 60,
        attention_limit: int = 5,
        top_threshold: float = 80,
    ) -> None:
        self.combiner = combiner or ScoreCombiner()
        self.normalizer = normalizer or IssueNormalizer()
        self.grouper = grouper or IssueGrouper()
        self.attention_threshold = attention_threshold
        self.attention_limit = attention_limit
        self.top_threshold = top_threshold

    @classmethod
    def from_settings(cls, settings: ContentKPISettings) -> "Aggregator":
        """Build an aggregator honoring the configured weights and thresholds."""
        return cls(
            combiner=ScoreCombiner(page_weight=settings.page_weight),
            attention_threshold=settings.attention_threshold,
            attention_limit=settings.attention_limit,
            top_threshold=settings.top_threshold,
        )

    def combine(
        self,
        pages: Sequence[PageScore],
        domains: Sequence[DomainAnalysis],
    ) -> CombinedScore:
        return self.combiner.combine(pages, domains)

    def issues(
        self,
        pages: Sequence[PageScore],
        domains: Sequence[DomainAnalysis],
    ) -> list[GroupedIssue]:
        """Grouped issues, most severe first."""
        return self.grouper.group_and_sort(self.normalizer.normalize(pages, domains))

    def aggregate(
        self,
        pages: Sequence[PageScore],
        domains: Sequence[DomainAnalysis],
    ) -> AggregationReport:
        """
        Derive every aggregate from one set of analyses.

        Args:
            pages: Page analyses.
            domains: Domain analyses.

        Returns:
            AggregationReport. Empty input yields a zero-filled report.
        """
        normalized = self.normalizer.normalize(pages, domains)
        grouped = self.grouper.group_and_sort(normalized)

        report = AggregationReport(
            combined=self.combiner.combine(pages, domains),
            dimensions=self.combiner.dimension_breakdown(pages, domains),
            issues=grouped,
            flat_issues=sort_issues(normalized),
            summary=summarize(normalized),
            attention=pages_needing_attention(
                pages, self.attention_threshold, self.attention_limit
            ),
            top_pages=top_pages(pages, self.top_threshold),
        )

        logger.debug(
            "Aggregated %d pages, %d domains, %d issue groups",
            len(pages),
            len(domains),
            len(grouped),
        )
        return report

    def aggregate_payload(self, payload: Mapping[str, Any]) -> AggregationReport:
        """Aggregate a raw combined-scores payload (camelCase JSON shape)."""
        pages, domains = parse_payload(payload)
        return self.aggregate(pages, domains)
