"""Symbol search domain models.

Typed results of Alpha Vantage ``SYMBOL_SEARCH`` lookups.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from stockleague.core.exceptions import ExternalServiceError, RateLimitError


class SymbolSearchMatch(BaseModel):
    """A single symbol search hit."""

    symbol: str = Field(..., description="Ticker symbol")
    name: str = Field(..., description="Company/fund name")
    type: str | None = Field(None, description="Asset type, e.g. Equity or ETF")
    region: str | None = Field(None, description="Listing region")
    currency: str | None = Field(None, description="Trading currency")
    match_score: float | None = Field(None, alias="matchScore", description="Upstream relevance score")

    model_config = {
        "populate_by_name": True,
    }

    def to_dict(self) -> dict[str, Any]:
        """Serialize without the optional fields that were never set."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ParsedSymbolSearchResponse(BaseModel):
    """Interpretation of one upstream search payload.

    Errors are carried as data: ``message`` is meant for display and
    ``is_rate_limited`` separates quota signals (retry later) from everything
    else.
    """

    matches: list[SymbolSearchMatch] = Field(default_factory=list)
    message: str | None = None
    is_rate_limited: bool = False
    is_cacheable: bool = False

    def raise_for_error(self) -> ParsedSymbolSearchResponse:
        """Raise for non-cacheable responses, return self otherwise."""
        if self.is_cacheable:
            return self
        if self.is_rate_limited:
            raise RateLimitError(message=self.message)
        raise ExternalServiceError(message=self.message)
