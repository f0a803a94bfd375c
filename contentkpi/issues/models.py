"""Data models for normalized and grouped issues."""

from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Severity(StrEnum):
    """Known issue severities, most severe first."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


SEVERITY_RANK: dict[str, int] = {
    Severity.CRITICAL: 0,
    Severity.HIGH: 1,
    Severity.MEDIUM: 2,
    Severity.LOW: 3,
}
UNKNOWN_SEVERITY_RANK = 4

SourceType = Literal["page", "domain"]


def severity_rank(severity: str) -> int:
    """Sort rank of a severity; unknown severities sort last."""
    return SEVERITY_RANK.get(severity, UNKNOWN_SEVERITY_RANK)


class NormalizedIssue(BaseModel):
    """An issue reduced to a single shape regardless of where it came from."""

    model_config = ConfigDict(frozen=True)

    id: str | None = Field(None, description="Issue identity used for grouping")
    source: str = Field(..., description="Page URL or domain name")
    source_type: SourceType = Field(..., description="Whether source is a page or domain")
    source_title: str | None = Field(None, description="Page title, if known")
    severity: str = Field(..., description="Severity, passed through unchanged")
    dimension: str = Field(..., description="Dimension the issue affects")
    description: str = Field(default="", description="Issue text")
    recommendation: str | None = Field(None, description="Suggested fix")
    rule_id: str | None = Field(None, description="Emitting rule, if known")
    rule_name: str | None = Field(None, description="Emitting rule name, if known")

    @property
    def severity_rank(self) -> int:
        return severity_rank(self.severity)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for reporting."""
        return {
            "id": self.id,
            "source": self.source,
            "sourceType": self.source_type,
            "severity": self.severity,
            "dimension": self.dimension,
            "description": self.description,
            "recommendation": self.recommendation,
            "ruleId": self.rule_id,
            "ruleName": self.rule_name,
        }


class AffectedSource(BaseModel):
    """One page or domain where a grouped issue occurs."""

    model_config = ConfigDict(frozen=True)

    source: str
    source_type: SourceType
    title: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "sourceType": self.source_type,
            "title": self.title,
        }


class GroupedIssue(BaseModel):
    """All occurrences of one underlying issue across pages and domains.

    The representative issue is the first occurrence seen and does not
    change when later duplicates are folded in.
    """

    issue_key: str = Field(..., description="Deduplication key")
    representative_issue: NormalizedIssue
    dimension: str
    affected_sources: list[AffectedSource] = Field(..., min_length=1)

    @field_validator("affected_sources")
    @classmethod
    def validate_sources(cls, v: list[AffectedSource]) -> list[AffectedSource]:
        if not v:
            raise ValueError("A grouped issue needs at least one affected source")
        return v

    @property
    def severity(self) -> str:
        return self.representative_issue.severity

    @property
    def occurrences(self) -> int:
        return len(self.affected_sources)

    @property
    def source_label(self) -> str:
        """'Domain', 'Pages' or 'Mixed' depending on where the issue occurs."""
        types = {s.source_type for s in self.affected_sources}
        if types == {"domain"}:
            return "Domain"
        if types == {"page"}:
            return "Pages"
        return "Mixed"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for reporting."""
        return {
            "issueKey": self.issue_key,
            "severity": self.severity,
            "dimension": self.dimension,
            "sourceLabel": self.source_label,
            "occurrences": self.occurrences,
            "representativeIssue": self.representative_issue.to_dict(),
            "affectedSources": [s.to_dict() for s in self.affected_sources],
        }


class IssueSummary(BaseModel):
    """Issue counts for summary cards and charts."""

    model_config = ConfigDict(frozen=True)

    total: int = Field(default=0, ge=0)
    by_severity: dict[str, int] = Field(default_factory=dict)
    by_dimension: dict[str, int] = Field(default_factory=dict)

    @property
    def critical_count(self) -> int:
        return self.by_severity.get(Severity.CRITICAL, 0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "criticalCount": self.critical_count,
            "bySeverity": dict(self.by_severity),
            "byDimension": dict(self.by_dimension),
        }
