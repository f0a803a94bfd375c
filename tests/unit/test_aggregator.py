"""Unit tests for the Aggregator entry point."""

import json

import pytest

from contentkpi.aggregator import AggregationReport, Aggregator
from contentkpi.core.exceptions import InputError, WeightConfigurationError
from contentkpi.core.settings import ContentKPISettings
from contentkpi.presentation import DEFAULT_PALETTE
from contentkpi.protocol import PageScore
from contentkpi.scoring import ScoreCombiner


class TestAggregate:
    """Tests for Aggregator.aggregate."""

    def test_sample_report(self, sample_analyses) -> None:
        """Test every aggregate of the sample payload."""
        pages, domains = sample_analyses
        report = Aggregator().aggregate(pages, domains)

        assert report.combined.overall_score == pytest.approx(78)
        assert report.combined.page_score == pytest.approx(70)
        assert report.combined.domain_score == pytest.approx(90)

        assert [g.issue_key for g in report.issues] == [
            "https-enforced",
            "meta-description",
            "alt-text",
        ]
        assert [i.severity for i in report.flat_issues] == [
            "critical",
            "high",
            "high",
            "low",
        ]
        assert report.summary.total == 4
        assert report.summary.critical_count == 1

        technical = report.dimensions[0]
        assert technical.dimension == "technical"
        assert technical.combined == pytest.approx(78)

        assert report.attention == []
        assert report.top_pages == []

    def test_empty_input(self) -> None:
        """Test that empty input produces a zero-filled report."""
        report = Aggregator().aggregate([], [])

        assert report.combined.overall_score == 0
        assert report.combined.has_data is False
        assert report.issues == []
        assert report.summary.total == 0
        assert len(report.dimensions) == 4

    def test_attention_and_top_pages(self) -> None:
        """Test page selection thresholds from construction."""
        pages = [
            PageScore(url="https://low.test", global_score=30),
            PageScore(url="https://mid.test", global_score=65),
            PageScore(url="https://high.test", global_score=92),
        ]
        report = Aggregator(attention_threshold=70, top_threshold=90).aggregate(
            pages, []
        )
        assert [p.url for p in report.attention] == [
            "https://low.test",
            "https://mid.test",
        ]
        assert [p.url for p in report.top_pages] == ["https://high.test"]

    def test_idempotent(self, sample_analyses) -> None:
        """Test that repeated aggregation is byte-identical."""
        pages, domains = sample_analyses
        aggregator = Aggregator()

        first = json.dumps(aggregator.aggregate(pages, domains).to_dict())
        second = json.dumps(aggregator.aggregate(pages, domains).to_dict())
        assert first == second

    def test_combine_and_issues_shortcuts(self, sample_analyses) -> None:
        """Test the single-purpose helpers match the full report."""
        pages, domains = sample_analyses
        aggregator = Aggregator()
        report = aggregator.aggregate(pages, domains)

        assert aggregator.combine(pages, domains) == report.combined
        assert [g.to_dict() for g in aggregator.issues(pages, domains)] == [
            g.to_dict() for g in report.issues
        ]

    def test_aggregate_payload(self, sample_payload) -> None:
        """Test aggregation straight from the camelCase payload."""
        report = Aggregator().aggregate_payload(sample_payload)
        assert report.combined.total_pages == 2
        assert report.combined.total_domains == 1

    def test_aggregate_payload_null_issue_entry(self) -> None:
        """Test that a null entry in an issue list does not abort aggregation."""
        payload = {
            "pageScores": [
                {
                    "url": "https://example.com/",
                    "globalScore": 70,
                    "issues": [
                        None,
                        {"ruleId": "alt-text", "severity": "low"},
                    ],
                }
            ],
            "domainAnalyses": [],
        }
        report = Aggregator().aggregate_payload(payload)
        assert report.summary.total == 1
        assert report.issues[0].issue_key == "alt-text"

    def test_aggregate_payload_invalid(self) -> None:
        """Test that a malformed payload raises InputError."""
        with pytest.raises(InputError):
            Aggregator().aggregate_payload({"pageScores": "nope"})


class TestFromSettings:
    """Tests for Aggregator.from_settings."""

    def test_uses_configured_values(self) -> None:
        """Test that weights and thresholds come from settings."""
        settings = ContentKPISettings(
            _skip_file_loading=True,
            page_weight=0.5,
            attention_threshold=40,
            attention_limit=2,
            top_threshold=95,
        )
        aggregator = Aggregator.from_settings(settings)

        assert aggregator.combiner.page_weight == 0.5
        assert aggregator.combiner.domain_weight == 0.5
        assert aggregator.attention_threshold == 40
        assert aggregator.attention_limit == 2
        assert aggregator.top_threshold == 95

    def test_defaults(self) -> None:
        """Test that default settings give the 60/40 split."""
        aggregator = Aggregator.from_settings(
            ContentKPISettings(_skip_file_loading=True)
        )
        assert aggregator.combiner.page_weight == 0.6

    def test_invalid_weight_on_combiner(self) -> None:
        """Test that an invalid direct weight is rejected."""
        with pytest.raises(WeightConfigurationError):
            Aggregator(combiner=ScoreCombiner(page_weight=3))


class TestReportOutput:
    """Tests for AggregationReport.to_dict and to_view."""

    def test_to_dict_shape(self, sample_analyses) -> None:
        """Test the top-level keys and raw float scores."""
        pages, domains = sample_analyses
        data = Aggregator().aggregate(pages, domains).to_dict()

        assert list(data) == [
            "combined",
            "dimensions",
            "issues",
            "flatIssues",
            "summary",
            "attention",
            "topPages",
        ]
        assert data["combined"]["overallScore"] == pytest.approx(78)
        assert data["issues"][0]["sourceLabel"] == "Domain"
        assert data["summary"]["bySeverity"] == {"critical": 1, "high": 2, "low": 1}
        assert [i["source"] for i in data["flatIssues"]] == [
            "example.com",
            "https://example.com/",
            "https://example.com/blog",
            "https://example.com/blog",
        ]
        assert data["flatIssues"][0]["ruleId"] == "https-enforced"

    def test_to_view(self, sample_analyses) -> None:
        """Test the rounded presentation form with colors."""
        pages, domains = sample_analyses
        view = Aggregator().aggregate(pages, domains).to_view()

        assert view["combined"]["overallScore"] == 78
        assert view["combined"]["band"] == "Good"
        assert view["combined"]["pageContribution"] == 42
        assert view["combined"]["domainContribution"] == 36

        technical = view["dimensions"][0]
        assert technical["label"] == "Technical"
        assert technical["color"] == "#3B82F6"

        assert view["issues"][0]["severityColor"] == "#EF4444"
        assert len(view["flatIssues"]) == 4
        assert view["flatIssues"][-1]["severityColor"] == "#10B981"
        assert view["legend"] == DEFAULT_PALETTE.legend()

    def test_to_view_rounds_page_scores(self) -> None:
        """Test that listed pages carry rounded scores."""
        report = Aggregator().aggregate(
            [PageScore(url="https://low.test", global_score=12.6)], []
        )
        view = report.to_view()
        assert view["attention"][0]["globalScore"] == 13
        assert report.to_dict()["attention"][0]["globalScore"] == 12.6

    def test_report_defaults(self) -> None:
        """Test that a report can be built from a combined score alone."""
        report = AggregationReport(combined=ScoreCombiner().combine([], []))
        assert report.issues == []
        assert report.summary.total == 0
