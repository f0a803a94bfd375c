"""Combined page and domain scoring."""

from .combiner import (
    DOMAIN_WEIGHT,
    PAGE_WEIGHT,
    ScoreCombiner,
    pages_needing_attention,
    score_band,
    top_pages,
)
from .models import CombinedScore, DimensionComparison, ScoreBand

__all__ = [
    "DOMAIN_WEIGHT",
    "PAGE_WEIGHT",
    "ScoreCombiner",
    "CombinedScore",
    "DimensionComparison",
    "ScoreBand",
    "pages_needing_attention",
    "score_band",
    "top_pages",
]
