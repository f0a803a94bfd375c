"""Shared presentation constants for views consuming aggregation output."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from contentkpi.issues.models import Severity
from contentkpi.protocol import Dimension
from contentkpi.scoring.models import ScoreBand


def _frozen(mapping: Mapping[str, str]) -> Mapping[str, str]:
    return MappingProxyType({str(k): v for k, v in mapping.items()})


@dataclass(frozen=True)
class Palette:
    """Immutable color and label configuration.

    One instance is shared by every view instead of each view declaring
    its own color maps.
    """

    dimension_colors: Mapping[str, str] = field(default_factory=dict)
    severity_colors: Mapping[str, str] = field(default_factory=dict)
    source_colors: Mapping[str, str] = field(default_factory=dict)
    fallback_color: str = "#6B7280"
    # ANSI SGR codes for terminal output
    severity_ansi: Mapping[str, str] = field(default_factory=dict)
    band_ansi: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name in (
            "dimension_colors",
            "severity_colors",
            "source_colors",
            "severity_ansi",
            "band_ansi",
        ):
            object.__setattr__(self, name, _frozen(getattr(self, name)))

    def dimension_color(self, dimension: str) -> str:
        return self.dimension_colors.get(dimension.lower(), self.fallback_color)

    def severity_color(self, severity: str) -> str:
        return self.severity_colors.get(severity, self.fallback_color)

    def source_color(self, source_type: str) -> str:
        return self.source_colors.get(source_type, self.fallback_color)

    def severity_ansi_code(self, severity: str) -> str:
        """ANSI code for a severity; "0" (no styling) when unknown."""
        return self.severity_ansi.get(severity, "0")

    def band_ansi_code(self, band: str) -> str:
        return self.band_ansi.get(band, "0")

    @staticmethod
    def dimension_label(dimension: str) -> str:
        """Display label for a dimension name ('technical' -> 'Technical')."""
        return dimension[:1].upper() + dimension[1:]

    def legend(self) -> dict[str, Any]:
        """Colors keyed by group, for chart legends."""
        return {
            "dimensions": dict(self.dimension_colors),
            "severities": dict(self.severity_colors),
            "sources": dict(self.source_colors),
            "fallback": self.fallback_color,
        }


DEFAULT_PALETTE = Palette(
    dimension_colors={
        Dimension.TECHNICAL: "#3B82F6",
        Dimension.STRUCTURE: "#10B981",
        Dimension.AUTHORITY: "#8B5CF6",
        Dimension.QUALITY: "#F59E0B",
    },
    severity_colors={
        Severity.CRITICAL: "#EF4444",
        Severity.HIGH: "#F59E0B",
        Severity.MEDIUM: "#3B82F6",
        Severity.LOW: "#10B981",
    },
    source_colors={"page": "#6366F1", "domain": "#F59E0B"},
    severity_ansi={
        Severity.CRITICAL: "31",
        Severity.HIGH: "33",
        Severity.MEDIUM: "34",
        Severity.LOW: "32",
    },
    band_ansi={
        ScoreBand.EXCELLENT: "32",
        ScoreBand.GOOD: "32",
        ScoreBand.FAIR: "33",
        ScoreBand.POOR: "31",
        ScoreBand.CRITICAL: "31",
    },
)
