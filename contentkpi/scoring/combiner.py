"""Weighted combination of page-level and domain-level scores."""

import logging
from collections.abc import Sequence

from contentkpi.core.exceptions import WeightConfigurationError
from contentkpi.protocol import DIMENSIONS, DomainAnalysis, PageScore

from .models import CombinedScore, DimensionComparison, ScoreBand

logger = logging.getLogger(__name__)

# Page content outweighs domain authority in the headline number
PAGE_WEIGHT = 0.6
DOMAIN_WEIGHT = 0.4

# Lower bounds of each band, best first
SCORE_BANDS: tuple[tuple[float, ScoreBand], ...] = (
    (80, ScoreBand.EXCELLENT),
    (70, ScoreBand.GOOD),
    (60, ScoreBand.FAIR),
    (50, ScoreBand.POOR),
)


def _mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def score_band(score: float) -> ScoreBand:
    """Return the qualitative band for a 0-100 score."""
    for lower_bound, band in SCORE_BANDS:
        if score >= lower_bound:
            return band
    return ScoreBand.CRITICAL


class ScoreCombiner:
    """
    Combines page and domain analyses into a single weighted score.

    The overall score is calculated as:
        overall = mean(page.global_score) * page_weight
                  + mean(domain.overall_score) * domain_weight

    An empty side contributes 0 and the weights are not renormalized, so
    a project with pages but no domains tops out at page_weight * 100.
    """

    def __init__(self, page_weight: float | None = None) -> None:
        """
        Initialize the combiner.

        Args:
            page_weight: Fraction of the overall score taken by page analysis.
                         If None, uses the fixed 0.6/0.4 split.

        Raises:
            WeightConfigurationError: If page_weight is outside [0, 1].
        """
        if page_weight is None:
            self.page_weight = PAGE_WEIGHT
            self.domain_weight = DOMAIN_WEIGHT
        else:
            if not 0.0 <= page_weight <= 1.0:
                raise WeightConfigurationError(page_weight)
            self.page_weight = page_weight
            self.domain_weight = 1.0 - page_weight

    def combine(
        self,
        pages: Sequence[PageScore],
        domains: Sequence[DomainAnalysis],
    ) -> CombinedScore:
        """
        Compute the combined score.

        Args:
            pages: Page analyses.
            domains: Domain analyses.

        Returns:
            CombinedScore with unrounded floats. Always complete, even for
            empty input.
        """
        page_score = _mean([page.global_score for page in pages])
        domain_score = _mean([domain.overall_score for domain in domains])
        overall = page_score * self.page_weight + domain_score * self.domain_weight

        logger.debug(
            "Combined %d pages and %d domains into %.2f",
            len(pages),
            len(domains),
            overall,
        )

        return CombinedScore(
            overall_score=overall,
            page_score=page_score,
            domain_score=domain_score,
            total_pages=len(pages),
            total_domains=len(domains),
            page_weight=self.page_weight,
            domain_weight=self.domain_weight,
        )

    def page_dimensions(self, pages: Sequence[PageScore]) -> dict[str, float]:
        """
        Mean score of each dimension across all pages.

        Every page counts; a page without scores contributes 0.
        """
        return {
            dimension: _mean([page.scores.get(dimension) for page in pages])
            for dimension in DIMENSIONS
        }

    def domain_dimensions(self, domains: Sequence[DomainAnalysis]) -> dict[str, float]:
        """
        Mean normalized score of each dimension across domains.

        Unlike page_dimensions, a domain that lacks a dimension (or reports
        a non-positive max_score for it) is left out of that dimension's
        mean instead of counting as 0. A dimension no domain reports is 0.
        """
        result: dict[str, float] = {}
        for dimension in DIMENSIONS:
            values: list[float] = []
            for domain in domains:
                entry = domain.analysis_results.get(dimension)
                if entry is None:
                    continue
                normalized = entry.normalized
                if normalized is not None:
                    values.append(normalized)
            result[dimension] = _mean(values)
        return result

    def dimension_breakdown(
        self,
        pages: Sequence[PageScore],
        domains: Sequence[DomainAnalysis],
    ) -> list[DimensionComparison]:
        """
        Page, domain and combined value for each dimension, in fixed order.
        """
        page_dims = self.page_dimensions(pages)
        domain_dims = self.domain_dimensions(domains)

        return [
            DimensionComparison(
                dimension=dimension,
                page_score=page_dims[dimension],
                domain_score=domain_dims[dimension],
                combined=page_dims[dimension] * self.page_weight
                + domain_dims[dimension] * self.domain_weight,
            )
            for dimension in DIMENSIONS
        ]


def pages_needing_attention(
    pages: Sequence[PageScore],
    threshold: float = 60,
    limit: int = 5,
) -> list[PageScore]:
    """
    Lowest scoring pages below a threshold, worst first.

    Skipped pages that never received a score are not listed.
    """
    candidates = [
        page
        for page in pages
        if page.global_score < threshold
        and not (page.skipped and page.global_score == 0)
    ]
    candidates.sort(key=lambda page: page.global_score)
    return candidates[:limit]


def top_pages(pages: Sequence[PageScore], threshold: float = 80) -> list[PageScore]:
    """Pages scoring above a threshold, in input order."""
    return [page for page in pages if page.global_score > threshold]
