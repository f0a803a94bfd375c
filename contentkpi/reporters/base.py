"""Base reporter interface."""

from abc import ABC, abstractmethod

from contentkpi.aggregator import AggregationReport


class Reporter(ABC):
    """Base class for reporters.

    Reporters format and output aggregation reports in various formats.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the reporter name."""

    @abstractmethod
    def report(self, report: AggregationReport) -> None:
        """Generate and output the report.

        Args:
            report: Aggregation report to output.
        """

    def _format_score(self, score: float | None) -> str:
        """Format a 0-100 score for display, rounded to an integer."""
        if score is None:
            return "N/A"
        return f"{round(score)}/100"
