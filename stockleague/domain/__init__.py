"""Domain models for strongly-typed data throughout the package.

Usage:
    from stockleague.domain import LeagueEntry, Prediction, SymbolSearchMatch

    entry = LeagueEntry(updated_at="2024-03-01T00:00:00.000Z")
    data = entry.to_dict()
"""

from stockleague.domain.league import (
    LeagueEntry,
    LeagueUsers,
    MergeSummary,
    NormalizeResult,
    Prediction,
    PredictionPeriod,
    PredictionStatus,
    TrendDirection,
)
from stockleague.domain.symbol import (
    ParsedSymbolSearchResponse,
    SymbolSearchMatch,
)

__all__ = [
    # League
    "LeagueEntry",
    "LeagueUsers",
    "MergeSummary",
    "NormalizeResult",
    "Prediction",
    "PredictionPeriod",
    "PredictionStatus",
    "TrendDirection",
    # Symbol search
    "ParsedSymbolSearchResponse",
    "SymbolSearchMatch",
]
