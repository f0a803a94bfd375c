"""Data models for combined scoring."""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ScoreBand(StrEnum):
    """Qualitative band for a 0-100 score."""

    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"
    CRITICAL = "Critical"


class CombinedScore(BaseModel):
    """Weighted blend of page and domain analysis.

    Scores are kept as floats; use :meth:`rounded` at presentation time.
    ``total_pages``/``total_domains`` distinguish "no data" from a real zero.
    """

    model_config = ConfigDict(frozen=True)

    overall_score: float = Field(default=0.0, description="Weighted overall score")
    page_score: float = Field(default=0.0, description="Mean page global score")
    domain_score: float = Field(default=0.0, description="Mean domain overall score")
    total_pages: int = Field(default=0, ge=0, description="Pages analyzed")
    total_domains: int = Field(default=0, ge=0, description="Domains analyzed")
    page_weight: float = Field(default=0.6, ge=0.0, le=1.0)
    domain_weight: float = Field(default=0.4, ge=0.0, le=1.0)

    @property
    def page_contribution(self) -> float:
        """Points the page side adds to the overall score."""
        return self.page_score * self.page_weight

    @property
    def domain_contribution(self) -> float:
        """Points the domain side adds to the overall score."""
        return self.domain_score * self.domain_weight

    @property
    def has_data(self) -> bool:
        """Whether any page or domain was analyzed."""
        return self.total_pages + self.total_domains > 0

    def rounded(self) -> dict[str, int]:
        """Presentation form with every score rounded to an integer."""
        return {
            "overallScore": round(self.overall_score),
            "pageScore": round(self.page_score),
            "domainScore": round(self.domain_score),
            "totalPages": self.total_pages,
            "totalDomains": self.total_domains,
        }

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for reporting."""
        return {
            "overallScore": self.overall_score,
            "pageScore": self.page_score,
            "domainScore": self.domain_score,
            "totalPages": self.total_pages,
            "totalDomains": self.total_domains,
            "weights": {"page": self.page_weight, "domain": self.domain_weight},
            "contributions": {
                "page": self.page_contribution,
                "domain": self.domain_contribution,
            },
        }


class DimensionComparison(BaseModel):
    """Page versus domain view of one dimension."""

    model_config = ConfigDict(frozen=True)

    dimension: str = Field(..., description="Dimension name", min_length=1)
    page_score: float = Field(..., description="Mean page score for the dimension")
    domain_score: float = Field(
        ..., description="Mean normalized domain score for the dimension"
    )
    combined: float = Field(..., description="Weighted blend of both sides")

    def to_dict(self) -> dict[str, Any]:
        return {
            "dimension": self.dimension,
            "pageScore": self.page_score,
            "domainScore": self.domain_score,
            "combined": self.combined,
        }
