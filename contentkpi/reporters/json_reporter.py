"""JSON reporter for machine-readable output."""

import json
import sys
from pathlib import Path
from typing import Any, TextIO

from contentkpi.aggregator import AggregationReport
from contentkpi.presentation import DEFAULT_PALETTE, Palette
from contentkpi.reporters.base import Reporter


class JSONReporter(Reporter):
    """Reporter that outputs aggregation results in JSON format.

    Output is a pure function of the report: no timestamps are added, so
    identical input produces byte-identical output.
    """

    # JSON format version for compatibility tracking
    FORMAT_VERSION = "1.0"

    def __init__(
        self,
        output_file: Path | str | None = None,
        output: TextIO | None = None,
        indent: int | None = 2,
        view: bool = False,
        palette: Palette = DEFAULT_PALETTE,
    ) -> None:
        """Initialize the JSON reporter.

        Args:
            output_file: Path to write JSON file (takes precedence over output).
            output: Output stream (defaults to sys.stdout if no file specified).
            indent: JSON indentation level (None for compact output).
            view: Emit the rounded presentation form instead of raw floats.
            palette: Colors used by the presentation form.
        """
        self._output_file = Path(output_file) if output_file else None
        self._output = output
        self._indent = indent
        self._view = view
        self._palette = palette

    @property
    def name(self) -> str:
        """Return the reporter name."""
        return "json"

    def report(self, report: AggregationReport) -> None:
        """Generate and output the JSON report.

        Args:
            report: Aggregation report to output.
        """
        json_str = json.dumps(self._build_json(report), indent=self._indent)

        if self._output_file:
            self._output_file.parent.mkdir(parents=True, exist_ok=True)
            self._output_file.write_text(json_str + "\n")
        else:
            output = self._output or sys.stdout
            output.write(json_str + "\n")

    def _build_json(self, report: AggregationReport) -> dict[str, Any]:
        body = report.to_view(self._palette) if self._view else report.to_dict()
        return {"version": self.FORMAT_VERSION, **body}
