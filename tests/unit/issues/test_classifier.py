"""Unit tests for keyword dimension classification."""

import pytest
from pydantic import ValidationError

from contentkpi.issues import (
    DEFAULT_DIMENSION,
    DEFAULT_KEYWORD_RULES,
    KeywordRule,
    classify_dimension,
)


class TestClassifyDimension:
    """Tests for classify_dimension with the default rules."""

    @pytest.mark.parametrize(
        "text,dimension",
        [
            ("Missing HTTPS certificate", "technical"),
            ("High bounce rate due to poor mobile optimization", "technical"),
            ("Technical SEO audit overdue", "technical"),
            ("Weak site structure", "structure"),
            ("Thin content on key pages", "structure"),
            ("No KPI monitoring in place", "quality"),
            ("Inconsistent editorial quality", "quality"),
            ("Few referring domains", "authority"),
        ],
    )
    def test_default_rules(self, text: str, dimension: str) -> None:
        """Test keyword matches for each dimension."""
        assert classify_dimension(text) == dimension

    def test_case_insensitive(self) -> None:
        """Test that matching ignores case."""
        assert classify_dimension("MOBILE layout breaks") == "technical"

    def test_first_rule_wins(self) -> None:
        """Test that rule order decides when several keywords match."""
        assert classify_dimension("Content quality is low") == "structure"
        assert classify_dimension("Mobile content is hidden") == "technical"

    def test_default_dimension(self) -> None:
        """Test the fallback when nothing matches."""
        assert DEFAULT_DIMENSION == "authority"
        assert classify_dimension("") == "authority"
        assert classify_dimension("Few backlinks", default="general") == "general"

    def test_custom_rules(self) -> None:
        """Test classification with caller-provided rules."""
        rules = [KeywordRule(keywords=("backlink",), dimension="authority")]
        assert classify_dimension("Few backlinks", rules, "other") == "authority"
        assert classify_dimension("Missing HTTPS", rules, "other") == "other"


class TestKeywordRule:
    """Tests for KeywordRule."""

    def test_default_rule_order(self) -> None:
        """Test that default rules are ordered technical, structure, quality."""
        assert [str(rule.dimension) for rule in DEFAULT_KEYWORD_RULES] == [
            "technical",
            "structure",
            "quality",
        ]

    def test_matches_substring(self) -> None:
        """Test substring matching."""
        rule = KeywordRule(keywords=("kpi",), dimension="quality")
        assert rule.matches("Define KPIs for each page")
        assert not rule.matches("Add alt text")

    def test_requires_keywords(self) -> None:
        """Test that an empty keyword list is rejected."""
        with pytest.raises(ValidationError):
            KeywordRule(keywords=(), dimension="quality")
