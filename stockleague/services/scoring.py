"""
League scoring.

Two independent point systems computed from a user's predictions:
- System 1: +1 for every correct direction call, -1 for every miss
- System 2: signed percent move, gained when right and lost when wrong

Only resolved predictions with both prices count. A close equal to the open
counts as a move down.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Union

from stockleague.domain.league import Prediction, TrendDirection


PredictionLike = Union[Prediction, Mapping[str, Any]]


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _scorable(
    prediction: PredictionLike,
) -> tuple[TrendDirection, float, float] | None:
    """Return (direction, open, close) for a scorable prediction, else None."""
    if isinstance(prediction, Prediction):
        status = prediction.status
        direction = prediction.direction
        open_price = prediction.open_price
        close_price = prediction.close_price
    elif isinstance(prediction, Mapping):
        status = prediction.get("status")
        direction = prediction.get("prediction")
        open_price = prediction.get("openPrice")
        close_price = prediction.get("closePrice")
    else:
        return None

    if status != "resolved":
        return None
    if not _is_number(open_price) or not _is_number(close_price):
        return None
    return direction, float(open_price), float(close_price)


def actual_direction(open_price: float, close_price: float) -> TrendDirection:
    """Direction the stock actually moved; ties count as down."""
    return "up" if close_price > open_price else "down"


def score_system_one(predictions: Iterable[PredictionLike]) -> int:
    """Count correct calls minus incorrect calls."""
    total = 0
    for prediction in predictions:
        scorable = _scorable(prediction)
        if scorable is None:
            continue
        direction, open_price, close_price = scorable
        total += 1 if direction == actual_direction(open_price, close_price) else -1
    return total


def score_system_two(predictions: Iterable[PredictionLike]) -> float:
    """
    Sum of signed percent moves.

    Predictions opened at a price of exactly 0 are skipped. The result is not
    rounded; callers round where they store totals.

    Example:
        Open 100, close 120: +20.0 for an "up" call, -20.0 for a "down" call.
    """
    total = 0.0
    for prediction in predictions:
        scorable = _scorable(prediction)
        if scorable is None:
            continue
        direction, open_price, close_price = scorable
        if open_price == 0:
            continue
        change_percent = (close_price - open_price) / open_price * 100
        total += change_percent if direction == "up" else -change_percent
    return total
