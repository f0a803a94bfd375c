"""Keyword-based dimension inference for free-text domain issues."""

from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict, Field

from contentkpi.protocol import Dimension


class KeywordRule(BaseModel):
    """Assigns a dimension to issue text containing any of the keywords."""

    model_config = ConfigDict(frozen=True)

    keywords: tuple[str, ...] = Field(..., min_length=1)
    dimension: str = Field(..., min_length=1)

    def matches(self, text: str) -> bool:
        lowered = text.lower()
        return any(keyword.lower() in lowered for keyword in self.keywords)


# Evaluated in order, first match wins
DEFAULT_KEYWORD_RULES: tuple[KeywordRule, ...] = (
    KeywordRule(keywords=("technical", "mobile", "https"), dimension=Dimension.TECHNICAL),
    KeywordRule(keywords=("structure", "content"), dimension=Dimension.STRUCTURE),
    KeywordRule(keywords=("monitoring", "kpi", "quality"), dimension=Dimension.QUALITY),
)

# Most unclassified domain-level signals are about authority
DEFAULT_DIMENSION: str = Dimension.AUTHORITY


def classify_dimension(
    text: str,
    rules: Sequence[KeywordRule] = DEFAULT_KEYWORD_RULES,
    default: str = DEFAULT_DIMENSION,
) -> str:
    """Return the dimension of the first rule matching text, else default."""
    for rule in rules:
        if rule.matches(text):
            return str(rule.dimension)
    return default
