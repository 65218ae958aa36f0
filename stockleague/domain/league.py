"""League domain models.

Type-safe representations of predictions and per-user league progress.
Field aliases match the camelCase keys of stored and exported league files,
so ``to_dict()`` output can be persisted as-is.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from pydantic import BaseModel, Field


TrendDirection = Literal["up", "down"]
PredictionPeriod = Literal["day", "week"]
PredictionStatus = Literal["pending", "resolved"]


class Prediction(BaseModel):
    """One user's call on where a stock closes by its target date.

    Unknown keys from the source record are kept as extra fields so that
    round-tripping a league file does not lose data.
    """

    id: Any = Field(None, description="Identifier, unique within a user")
    symbol: str = Field(..., description="Ticker symbol")
    direction: TrendDirection = Field(..., alias="prediction", description="Predicted move")
    period: PredictionPeriod = Field(..., description="Prediction horizon")
    made_at: str = Field(..., alias="madeAt", description="Creation time (ISO)")
    target_date: str = Field(..., alias="targetDate", description="Resolution date (YYYY-MM-DD)")
    open_price: float | None = Field(None, alias="openPrice", description="Price at creation")
    close_price: float | None = Field(None, alias="closePrice", description="Price on target date")
    status: PredictionStatus = Field(default="pending", description="Resolution status")
    user: str = Field(default="", description="Owning username")

    model_config = {
        "populate_by_name": True,
        "extra": "allow",
    }

    @property
    def is_resolved(self) -> bool:
        return self.status == "resolved"

    @property
    def has_prices(self) -> bool:
        """Both prices present, which is required for scoring."""
        return self.open_price is not None and self.close_price is not None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class LeagueEntry(BaseModel):
    """A user's full prediction history plus aggregate scores."""

    predictions: list[Prediction] = Field(default_factory=list, description="Ordered history")
    points_s1: int = Field(default=0, alias="pointsS1", description="Win/loss count")
    points_s2: int = Field(default=0, alias="pointsS2", description="Cumulative percent return")
    updated_at: str = Field(..., alias="updatedAt", description="Last update (ISO)")

    model_config = {
        "populate_by_name": True,
    }

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


LeagueUsers = dict[str, LeagueEntry]


@dataclass
class MergeSummary:
    """Outcome of folding an incoming collection into an existing one."""

    added: list[str] = field(default_factory=list)
    updated: list[str] = field(default_factory=list)
    merged_users: LeagueUsers = field(default_factory=dict)


@dataclass
class NormalizeResult:
    """Sanitized stored collection and whether it needs rewriting."""

    normalized_users: LeagueUsers = field(default_factory=dict)
    has_changes: bool = False
