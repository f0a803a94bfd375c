"""Input records consumed by the aggregation engine."""

from .models import (
    DEFAULT_SEVERITY,
    DIMENSION_ALIASES,
    DIMENSIONS,
    Dimension,
    DimensionResult,
    DimensionScores,
    DomainAnalysis,
    PageScore,
    RawIssue,
    RuleResult,
    canonical_dimension,
)

__all__ = [
    "DEFAULT_SEVERITY",
    "DIMENSIONS",
    "DIMENSION_ALIASES",
    "Dimension",
    "DimensionResult",
    "DimensionScores",
    "DomainAnalysis",
    "PageScore",
    "RawIssue",
    "RuleResult",
    "canonical_dimension",
]
