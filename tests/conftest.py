"""Pytest configuration and fixtures."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from stockleague.domain import SymbolSearchMatch


class FakeClock:
    """Manually advanced clock returning seconds."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """Deterministic clock for cache tests."""
    return FakeClock()


@pytest.fixture
def fixed_now() -> datetime:
    """Fixed instant used wherever the current time would be read."""
    return datetime(2024, 3, 5, 14, 30, 0, 123000, tzinfo=timezone.utc)


@pytest.fixture
def base_prediction() -> dict:
    """A resolved, correct 'up' prediction as stored in league files."""
    return {
        "id": 1,
        "symbol": "AAPL",
        "prediction": "up",
        "period": "day",
        "madeAt": "2024-01-01T00:00:00.000Z",
        "targetDate": "2024-01-02",
        "openPrice": 100,
        "closePrice": 110,
        "status": "resolved",
        "user": "Test",
    }


@pytest.fixture
def make_prediction(base_prediction):
    """Factory for stored prediction dicts overriding base fields."""

    def _make(**overrides) -> dict:
        return {**base_prediction, **overrides}

    return _make


@pytest.fixture
def sample_matches() -> list[SymbolSearchMatch]:
    """Parsed symbol search matches."""
    return [
        SymbolSearchMatch(
            symbol="AAPL",
            name="Apple Inc.",
            type="Equity",
            region="United States",
            currency="USD",
            match_score=1.0,
        ),
        SymbolSearchMatch(symbol="APLE", name="Apple Hospitality REIT Inc."),
    ]


@pytest.fixture
def alpha_vantage_payload() -> dict:
    """Decoded SYMBOL_SEARCH payload."""
    return {
        "bestMatches": [
            {
                "1. symbol": "AAPL",
                "2. name": "Apple Inc.",
                "3. type": "Equity",
                "4. region": "United States",
                "5. marketOpen": "09:30",
                "6. marketClose": "16:00",
                "7. timezone": "UTC-04",
                "8. currency": "USD",
                "9. matchScore": "0.8889",
            },
        ]
    }
