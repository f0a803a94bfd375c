"""Unit tests for analysis input records."""

import pytest
from pydantic import ValidationError

from contentkpi.protocol import (
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


class TestDimension:
    """Tests for the Dimension enum."""

    def test_fixed_order(self) -> None:
        """Test that dimensions are listed in display order."""
        assert DIMENSIONS == ("technical", "structure", "authority", "quality")

    def test_string_values(self) -> None:
        """Test that dimensions compare equal to their names."""
        assert Dimension.TECHNICAL == "technical"
        assert str(Dimension.QUALITY) == "quality"


class TestDimensionScores:
    """Tests for DimensionScores."""

    def test_defaults_to_zero(self) -> None:
        """Test that missing dimensions are zero."""
        scores = DimensionScores()
        assert scores.as_dict() == {
            "technical": 0.0,
            "structure": 0.0,
            "authority": 0.0,
            "quality": 0.0,
        }

    def test_null_values_become_zero(self) -> None:
        """Test that explicit nulls are zero-filled."""
        scores = DimensionScores.model_validate({"technical": None, "quality": 70})
        assert scores.technical == 0.0
        assert scores.quality == 70.0

    def test_get_unknown_dimension(self) -> None:
        """Test that unknown dimension names score zero."""
        assert DimensionScores(technical=80).get("speed") == 0.0


class TestRawIssue:
    """Tests for RawIssue."""

    def test_camel_case_alias(self) -> None:
        """Test that ruleId is accepted."""
        issue = RawIssue.model_validate(
            {"ruleId": "meta-title", "description": "Missing title"}
        )
        assert issue.rule_id == "meta-title"

    def test_snake_case_name(self) -> None:
        """Test that rule_id is accepted too."""
        issue = RawIssue(rule_id="meta-title", description="Missing title")
        assert issue.rule_id == "meta-title"

    @pytest.mark.parametrize("severity", [None, ""])
    def test_missing_severity_is_medium(self, severity) -> None:
        """Test that a missing severity defaults to medium."""
        issue = RawIssue.model_validate({"severity": severity})
        assert issue.severity == "medium"

    def test_unknown_severity_kept(self) -> None:
        """Test that unrecognized severities are passed through."""
        assert RawIssue(severity="blocker").severity == "blocker"

    def test_null_description(self) -> None:
        """Test that a null description becomes empty text."""
        assert RawIssue.model_validate({"description": None}).description == ""

    def test_frozen(self) -> None:
        """Test that records cannot be mutated."""
        issue = RawIssue(description="x")
        with pytest.raises(ValidationError):
            issue.description = "y"  # type: ignore[misc]


class TestRuleResult:
    """Tests for RuleResult."""

    def test_from_backend_json(self) -> None:
        """Test parsing a rule result in backend shape."""
        rule = RuleResult.model_validate(
            {
                "ruleId": "https-enforced",
                "ruleName": "HTTPS enforced",
                "category": "Technical",
                "score": 5,
                "maxScore": 10,
                "weight": 0.2,
                "contribution": 10,
                "evidence": None,
                "issues": [{"severity": "high", "description": "No HSTS header"}],
            }
        )
        assert rule.rule_id == "https-enforced"
        assert rule.rule_name == "HTTPS enforced"
        assert rule.max_score == 10
        assert rule.evidence == []
        assert rule.issues[0].severity == "high"

    def test_null_fields_default(self) -> None:
        """Test that null numeric and list fields get defaults."""
        rule = RuleResult.model_validate(
            {"ruleId": None, "score": None, "issues": None}
        )
        assert rule.rule_id == ""
        assert rule.score == 0.0
        assert rule.issues == []


class TestDimensionResult:
    """Tests for DimensionResult."""

    def test_normalized(self) -> None:
        """Test normalization onto a 0-100 scale."""
        assert DimensionResult(score=45, max_score=50).normalized == 90.0

    def test_missing_max_score_defaults_to_100(self) -> None:
        """Test that a missing maxScore means the score is already 0-100."""
        result = DimensionResult.model_validate({"score": 72, "maxScore": None})
        assert result.max_score == 100
        assert result.normalized == 72.0

    @pytest.mark.parametrize("max_score", [0, -5])
    def test_non_positive_max_score(self, max_score: float) -> None:
        """Test that a non-positive maxScore cannot be normalized."""
        assert DimensionResult(score=10, max_score=max_score).normalized is None


class TestPageScore:
    """Tests for PageScore."""

    def test_from_backend_json(self) -> None:
        """Test parsing a page in backend shape."""
        page = PageScore.model_validate(
            {
                "url": "https://example.com/",
                "title": "Home",
                "globalScore": 72.5,
                "scores": {"technical": 80},
                "issues": [{"ruleId": "r1", "description": "Thin content"}],
                "ruleResults": [{"ruleId": "r1"}],
            }
        )
        assert page.global_score == 72.5
        assert page.scores.technical == 80
        assert page.scores.structure == 0
        assert page.issues[0].rule_id == "r1"
        assert page.rule_results[0].rule_id == "r1"
        assert page.skipped is False

    def test_null_fields_default(self) -> None:
        """Test that a sparsely populated page still validates."""
        page = PageScore.model_validate(
            {
                "url": None,
                "globalScore": None,
                "scores": None,
                "issues": None,
                "skipped": None,
            }
        )
        assert page.url == ""
        assert page.global_score == 0.0
        assert page.scores == DimensionScores()
        assert page.issues == []
        assert page.skipped is False

    def test_null_issue_entries_dropped(self) -> None:
        """Test that a null inside the issue list does not reject the page."""
        page = PageScore.model_validate(
            {
                "url": "https://example.com/",
                "issues": [None, {"ruleId": "r1", "description": "Thin content"}],
                "ruleResults": [None, {"ruleId": "r1", "evidence": [None, "x"]}],
            }
        )
        assert [i.rule_id for i in page.issues] == ["r1"]
        assert page.rule_results[0].evidence == ["x"]

    def test_unknown_fields_ignored(self) -> None:
        """Test that extra backend fields are tolerated."""
        page = PageScore.model_validate({"url": "https://x.test", "crawlId": 7})
        assert page.url == "https://x.test"


class TestDomainAnalysis:
    """Tests for DomainAnalysis."""

    def test_mixed_issue_list(self) -> None:
        """Test that free-text and structured issues are both accepted."""
        domain = DomainAnalysis.model_validate(
            {
                "domain": "example.com",
                "issues": [
                    "Missing HTTPS certificate",
                    {"severity": "high", "description": "Expired certificate"},
                ],
            }
        )
        assert domain.issues[0] == "Missing HTTPS certificate"
        assert isinstance(domain.issues[1], RawIssue)
        assert domain.issues[1].severity == "high"

    def test_analysis_results_keys_lowercased(self) -> None:
        """Test that dimension keys are normalized and null entries dropped."""
        domain = DomainAnalysis.model_validate(
            {
                "domain": "example.com",
                "analysisResults": {
                    "Technical": {"score": 40, "maxScore": 50},
                    "authority": None,
                },
            }
        )
        assert set(domain.analysis_results) == {"technical"}
        assert domain.analysis_results["technical"].normalized == 80.0

    def test_null_fields_default(self) -> None:
        """Test that nulls fall back to empty values."""
        domain = DomainAnalysis.model_validate(
            {
                "domain": "example.com",
                "overallScore": None,
                "analysisResults": None,
                "ruleResults": None,
                "issues": None,
                "recommendations": None,
            }
        )
        assert domain.overall_score == 0.0
        assert domain.analysis_results == {}
        assert domain.rule_results == []
        assert domain.issues == []
        assert domain.recommendations == []

    def test_backend_category_keys(self) -> None:
        """Test that content and monitoringKpi map onto structure and quality."""
        domain = DomainAnalysis.model_validate(
            {
                "domain": "example.com",
                "analysisResults": {
                    "technical": {"score": 80},
                    "content": {"score": 60},
                    "authority": {"score": 40},
                    "monitoringKpi": {"score": 100},
                },
            }
        )
        assert set(domain.analysis_results) == {
            "technical",
            "structure",
            "authority",
            "quality",
        }
        assert domain.analysis_results["structure"].score == 60
        assert domain.analysis_results["quality"].score == 100

    def test_dimension_key_wins_over_alias(self) -> None:
        """Test that an entry keyed by the dimension name is not replaced."""
        for results in (
            {"structure": {"score": 70}, "content": {"score": 10}},
            {"content": {"score": 10}, "structure": {"score": 70}},
        ):
            domain = DomainAnalysis.model_validate({"analysisResults": results})
            assert domain.analysis_results["structure"].score == 70

    def test_null_list_entries_dropped(self) -> None:
        """Test that null entries inside lists are skipped."""
        domain = DomainAnalysis.model_validate(
            {
                "domain": "example.com",
                "ruleResults": [None, {"ruleId": "r1", "issues": [None]}],
                "issues": [None, "Few backlinks"],
                "recommendations": [None],
            }
        )
        assert len(domain.rule_results) == 1
        assert domain.rule_results[0].issues == []
        assert domain.issues == ["Few backlinks"]
        assert domain.recommendations == []


class TestCanonicalDimension:
    """Tests for canonical_dimension."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("Technical", "technical"),
            ("CONTENT", "structure"),
            ("MONITORING_KPI", "quality"),
            ("monitoringKpi", "quality"),
            ("General", "general"),
        ],
    )
    def test_names(self, name: str, expected: str) -> None:
        """Test mapping of backend category names."""
        assert canonical_dimension(name) == expected
