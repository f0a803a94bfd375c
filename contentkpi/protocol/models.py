"""Input records produced by the page and domain rule engines.

Field names are snake_case; the backend's camelCase JSON keys are accepted
as aliases. Missing or null optional fields fall back to empty collections
and zero scores so that partially populated analyses still validate.
"""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_SEVERITY = "medium"


class Dimension(StrEnum):
    """The four content-quality axes."""

    TECHNICAL = "technical"
    STRUCTURE = "structure"
    AUTHORITY = "authority"
    QUALITY = "quality"


DIMENSIONS: tuple[str, ...] = tuple(d.value for d in Dimension)

# Category names the domain rule engine uses for two of the dimensions
DIMENSION_ALIASES: dict[str, str] = {
    "content": Dimension.STRUCTURE,
    "monitoringkpi": Dimension.QUALITY,
}


def canonical_dimension(name: str) -> str:
    """Map a dimension or rule category name onto a dimension name.

    Names are lowercased with underscores removed, so "MONITORING_KPI" and
    "monitoringKpi" both become "quality". Unrecognized names are returned
    lowercased.
    """
    key = name.lower().replace("_", "")
    return str(DIMENSION_ALIASES.get(key, key))


def _drop_nulls(v: Any) -> Any:
    if v is None:
        return []
    if isinstance(v, list):
        return [item for item in v if item is not None]
    return v


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class DimensionScores(_Record):
    """Per-dimension scores (0-100) of one page."""

    technical: float = Field(default=0.0, description="Technical score")
    structure: float = Field(default=0.0, description="Structure score")
    authority: float = Field(default=0.0, description="Authority score")
    quality: float = Field(default=0.0, description="Quality score")

    @field_validator("technical", "structure", "authority", "quality", mode="before")
    @classmethod
    def zero_fill(cls, v: Any) -> Any:
        return 0 if v is None else v

    def get(self, dimension: str) -> float:
        """Return the score for a dimension, 0.0 for unknown names."""
        if dimension in DIMENSIONS:
            return float(getattr(self, dimension))
        return 0.0

    def as_dict(self) -> dict[str, float]:
        """Return the scores in fixed dimension order."""
        return {d: self.get(d) for d in DIMENSIONS}


class RawIssue(_Record):
    """A structured issue as emitted by a rule."""

    id: str | None = Field(None, description="Issue identifier, if assigned")
    rule_id: str | None = Field(None, alias="ruleId", description="Emitting rule")
    severity: str = Field(default=DEFAULT_SEVERITY, description="Issue severity")
    dimension: str | None = Field(None, description="Dimension the issue affects")
    description: str = Field(default="", description="Human-readable issue text")
    recommendation: str | None = Field(None, description="Suggested fix")

    @field_validator("severity", mode="before")
    @classmethod
    def default_severity(cls, v: Any) -> Any:
        """Missing severities become medium; unknown ones are kept."""
        return DEFAULT_SEVERITY if v is None or v == "" else v

    @field_validator("description", mode="before")
    @classmethod
    def default_description(cls, v: Any) -> Any:
        return "" if v is None else v


class RuleResult(_Record):
    """One rule's evaluation against one page or domain."""

    rule_id: str = Field(default="", alias="ruleId", description="Rule identifier")
    rule_name: str = Field(default="", alias="ruleName", description="Rule name")
    dimension: str | None = Field(None, description="Dimension the rule scores")
    category: str | None = Field(None, description="Rule category (domain rules)")
    score: float = Field(default=0.0, description="Points earned")
    max_score: float = Field(default=0.0, alias="maxScore", description="Points possible")
    weight: float = Field(default=0.0, description="Rule weight")
    contribution: float = Field(
        default=0.0, description="score / max_score * weight * 100, as delivered"
    )
    evidence: list[Any] = Field(default_factory=list, description="Supporting evidence")
    issues: list[RawIssue] = Field(default_factory=list, description="Issues found")

    @field_validator("score", "max_score", "weight", "contribution", mode="before")
    @classmethod
    def zero_fill(cls, v: Any) -> Any:
        return 0 if v is None else v

    @field_validator("evidence", "issues", mode="before")
    @classmethod
    def empty_fill(cls, v: Any) -> Any:
        return _drop_nulls(v)

    @field_validator("rule_id", "rule_name", mode="before")
    @classmethod
    def default_text(cls, v: Any) -> Any:
        return "" if v is None else v


class DimensionResult(_Record):
    """Domain-level result for one dimension."""

    score: float = Field(default=0.0, description="Raw dimension score")
    max_score: float = Field(
        default=100.0, alias="maxScore", description="Scale of the raw score"
    )
    evidence: list[Any] = Field(default_factory=list)
    issues: list[Any] = Field(default_factory=list)

    @field_validator("score", mode="before")
    @classmethod
    def zero_fill(cls, v: Any) -> Any:
        return 0 if v is None else v

    @field_validator("max_score", mode="before")
    @classmethod
    def default_max_score(cls, v: Any) -> Any:
        return 100 if v is None else v

    @field_validator("evidence", "issues", mode="before")
    @classmethod
    def empty_fill(cls, v: Any) -> Any:
        return _drop_nulls(v)

    @property
    def normalized(self) -> float | None:
        """Score on a 0-100 scale, or None when max_score is not positive."""
        if self.max_score <= 0:
            return None
        return self.score / self.max_score * 100


class PageScore(_Record):
    """Analysis of a single crawled page."""

    url: str = Field(default="", description="Page URL")
    title: str | None = Field(None, description="Page title")
    global_score: float = Field(
        default=0.0, alias="globalScore", description="Weighted page score (0-100)"
    )
    scores: DimensionScores = Field(default_factory=DimensionScores)
    issues: list[RawIssue] = Field(default_factory=list)
    rule_results: list[RuleResult] = Field(default_factory=list, alias="ruleResults")
    skipped: bool = Field(default=False, description="Page was skipped by the crawler")

    @field_validator("global_score", mode="before")
    @classmethod
    def zero_fill(cls, v: Any) -> Any:
        return 0 if v is None else v

    @field_validator("issues", "rule_results", mode="before")
    @classmethod
    def empty_fill(cls, v: Any) -> Any:
        return _drop_nulls(v)

    @field_validator("scores", mode="before")
    @classmethod
    def default_scores(cls, v: Any) -> Any:
        return {} if v is None else v

    @field_validator("url", mode="before")
    @classmethod
    def default_url(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("skipped", mode="before")
    @classmethod
    def default_skipped(cls, v: Any) -> Any:
        return False if v is None else v


class DomainAnalysis(_Record):
    """Analysis of a registered domain."""

    domain: str = Field(default="", description="Domain name")
    overall_score: float = Field(
        default=0.0, alias="overallScore", description="Domain score (0-100)"
    )
    analysis_results: dict[str, DimensionResult] = Field(
        default_factory=dict, alias="analysisResults"
    )
    rule_results: list[RuleResult] = Field(default_factory=list, alias="ruleResults")
    issues: list[RawIssue | str] = Field(
        default_factory=list, description="Free-text or structured domain issues"
    )
    recommendations: list[Any] = Field(default_factory=list)

    @field_validator("overall_score", mode="before")
    @classmethod
    def zero_fill(cls, v: Any) -> Any:
        return 0 if v is None else v

    @field_validator("rule_results", "issues", "recommendations", mode="before")
    @classmethod
    def empty_fill(cls, v: Any) -> Any:
        return _drop_nulls(v)

    @field_validator("analysis_results", mode="before")
    @classmethod
    def default_analysis_results(cls, v: Any) -> Any:
        """Drop null entries and key the rest by dimension name.

        The backend reports structure under "content" and quality under
        "monitoringKpi"; an entry already keyed by the dimension name wins
        over its alias.
        """
        if v is None:
            return {}
        if not isinstance(v, dict):
            return v

        results: dict[str, Any] = {}
        for name, result in v.items():
            if result is None:
                continue
            dimension = canonical_dimension(str(name))
            if dimension == str(name).lower():
                results[dimension] = result
            else:
                results.setdefault(dimension, result)
        return results

    @field_validator("domain", mode="before")
    @classmethod
    def default_domain(cls, v: Any) -> Any:
        return "" if v is None else v
