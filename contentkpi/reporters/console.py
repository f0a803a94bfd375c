"""Console reporter for terminal output."""

import sys
from io import StringIO
from typing import TextIO

from contentkpi.aggregator import AggregationReport
from contentkpi.issues import GroupedIssue
from contentkpi.presentation import DEFAULT_PALETTE, Palette
from contentkpi.reporters.base import Reporter
from contentkpi.scoring import score_band


class ConsoleReporter(Reporter):
    """Reporter that outputs aggregation results to the terminal.

    Provides human-readable output with optional color support and
    verbosity levels.
    """

    def __init__(
        self,
        output: TextIO | None = None,
        use_colors: bool = True,
        verbose: bool = False,
        palette: Palette = DEFAULT_PALETTE,
    ) -> None:
        """Initialize the console reporter.

        Args:
            output: Output stream (defaults to sys.stdout).
            use_colors: Whether to use ANSI color codes.
            verbose: Whether to list every affected source of each issue.
            palette: Dimension labels and ANSI color codes.
        """
        self._output = output or sys.stdout
        self._use_colors = use_colors and self._supports_color()
        self._verbose = verbose
        self._palette = palette

    @property
    def name(self) -> str:
        """Return the reporter name."""
        return "console"

    def _supports_color(self) -> bool:
        """Check if the output stream supports ANSI colors."""
        if isinstance(self._output, StringIO):
            return True
        if not hasattr(self._output, "isatty"):
            return False
        return self._output.isatty()

    def _color(self, text: str, color_code: str) -> str:
        if not self._use_colors:
            return text
        return f"\033[{color_code}m{text}\033[0m"

    def _bold(self, text: str) -> str:
        return self._color(text, "1")

    def _dim(self, text: str) -> str:
        return self._color(text, "2")

    def _band_color(self, score: float, text: str) -> str:
        return self._color(text, self._palette.band_ansi_code(score_band(score)))

    def _write(self, text: str = "") -> None:
        self._output.write(text + "\n")

    def report(self, report: AggregationReport) -> None:
        """Generate and output the console report.

        Args:
            report: Aggregation report to output.
        """
        self._write_scores(report)
        self._write()
        self._write_dimensions(report)
        self._write()
        self._write_issues(report)
        if report.attention:
            self._write()
            self._write_attention(report)

    def _write_scores(self, report: AggregationReport) -> None:
        combined = report.combined
        self._write(self._bold("Content KPI Scores"))
        self._write("=" * 50)

        if not combined.has_data:
            self._write("No page or domain analysis available yet.")
            return

        overall = self._format_score(combined.overall_score)
        band = str(score_band(combined.overall_score))
        self._write(
            f"Combined score: {self._band_color(combined.overall_score, overall)}"
            f"  ({band})"
        )
        self._write(
            f"Page score:     {self._format_score(combined.page_score)}"
            f"  {round(combined.page_weight * 100)}% weight"
            f" - {combined.total_pages} pages"
        )
        self._write(
            f"Domain score:   {self._format_score(combined.domain_score)}"
            f"  {round(combined.domain_weight * 100)}% weight"
            f" - {combined.total_domains} domains"
        )

    def _write_dimensions(self, report: AggregationReport) -> None:
        self._write("Dimensions:")
        for row in report.dimensions:
            label = f"{self._palette.dimension_label(row.dimension):<12}"
            self._write(
                f"  {label} page {round(row.page_score):>3}"
                f"  domain {round(row.domain_score):>3}"
                f"  combined {round(row.combined):>3}"
            )

    def _write_issues(self, report: AggregationReport) -> None:
        summary = report.summary
        if summary.total == 0:
            self._write("Issues: none found")
            return

        counts = ", ".join(
            f"{count} {severity}" for severity, count in summary.by_severity.items()
        )
        self._write(
            f"Issues: {summary.total} occurrences in {len(report.issues)} groups"
            f" ({counts})"
        )
        for group in report.issues:
            self._write_issue(group)

    def _write_issue(self, group: GroupedIssue) -> None:
        issue = group.representative_issue
        severity = self._color(
            f"[{group.severity}]", self._palette.severity_ansi_code(group.severity)
        )
        where = f"{group.source_label}, {group.occurrences}x"
        self._write(f"  {severity} {issue.description}  {self._dim(where)}")

        if self._verbose:
            if issue.recommendation:
                self._write(f"      Recommendation: {issue.recommendation}")
            for affected in group.affected_sources:
                self._write(self._dim(f"      - {affected.source}"))

    def _write_attention(self, report: AggregationReport) -> None:
        self._write("Pages needing attention:")
        for page in report.attention:
            self._write(f"  {self._format_score(page.global_score):>8}  {page.url}")
