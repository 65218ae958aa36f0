"""League service - sanitizing, merging and normalizing per-user progress.

League files come from local storage, from older versions of the app and from
files imported from other devices or players, so every record is treated as
untrusted:

1. ``sanitize_user_entry`` rebuilds one user's entry, dropping malformed
   predictions and recomputing totals from what survives.
2. ``should_replace_user_entry`` picks the winner of two entries for the same
   user: freshest ``updatedAt``, then most predictions, then higher scores,
   otherwise the existing entry stays.
3. ``merge_league_users`` folds an imported collection into the current one.
4. ``normalize_users`` sanitizes a stored collection and reports whether it
   has to be written back.

None of these raise for malformed input.

Usage:
    from stockleague.services.league import merge_league_users

    summary = merge_league_users(current_users, imported_json["users"], exclude={me})
    save(league_users_to_dict(summary.merged_users))
"""

from __future__ import annotations

from collections.abc import Collection, Mapping
from datetime import datetime
from typing import Any

from stockleague.core.data_helpers import (
    parse_timestamp_ms,
    round_half_up,
    safe_float,
    to_iso_timestamp,
    utc_now,
)
from stockleague.core.exceptions import PredictionStateError, ValidationError
from stockleague.core.logging import get_logger
from stockleague.core.market_calendar import format_yyyymmdd, next_friday, next_market_day
from stockleague.domain.league import (
    LeagueEntry,
    LeagueUsers,
    MergeSummary,
    NormalizeResult,
    Prediction,
    PredictionPeriod,
    TrendDirection,
)
from stockleague.services.scoring import score_system_one, score_system_two


logger = get_logger("services.league")

VALID_DIRECTIONS = ("up", "down")
VALID_PERIODS = ("day", "week")
VALID_STATUSES = ("pending", "resolved")

# Attribute names that differ from their stored keys; never read from raw records
_ATTRIBUTE_ONLY_KEYS = frozenset(
    name
    for name, info in Prediction.model_fields.items()
    if info.alias and info.alias != name
)


def is_prediction(raw: Any) -> bool:
    """Check that a raw record has the shape of a stored prediction.

    Prices are not checked here; they are coerced afterwards.
    """
    if not isinstance(raw, Mapping):
        return False
    return (
        isinstance(raw.get("symbol"), str)
        and raw.get("prediction") in VALID_DIRECTIONS
        and raw.get("period") in VALID_PERIODS
        and isinstance(raw.get("madeAt"), str)
        and isinstance(raw.get("targetDate"), str)
        and ("status" not in raw or raw["status"] in VALID_STATUSES)
    )


def _sanitize_prediction(raw: Mapping[str, Any], username: str) -> Prediction:
    data = {
        key: value
        for key, value in raw.items()
        if isinstance(key, str) and key not in _ATTRIBUTE_ONLY_KEYS
    }
    data["openPrice"] = safe_float(raw.get("openPrice"))
    data["closePrice"] = safe_float(raw.get("closePrice"))
    data["status"] = "resolved" if raw.get("status") == "resolved" else "pending"
    data["user"] = username
    return Prediction.model_validate(data)


def _as_raw_entry(entry: Any) -> Mapping[str, Any]:
    if isinstance(entry, LeagueEntry):
        return entry.to_dict()
    if isinstance(entry, Mapping):
        return entry
    return {}


def sanitize_user_entry(
    username: str,
    entry: Any = None,
    now: datetime | None = None,
) -> LeagueEntry:
    """
    Rebuild a user's league entry from an untrusted record.

    Args:
        username: Owner of the entry; every kept prediction is reassigned to it
        entry: Raw mapping (or an existing LeagueEntry); anything else is empty
        now: Instant used when the record carries no ``updatedAt``

    Returns:
        A fresh LeagueEntry. Totals are recomputed when any prediction
        survives, otherwise taken from the record's own totals.
    """
    raw = _as_raw_entry(entry)
    raw_predictions = raw.get("predictions")
    if not isinstance(raw_predictions, list):
        raw_predictions = []

    predictions = [
        _sanitize_prediction(candidate, username)
        for candidate in raw_predictions
        if is_prediction(candidate)
    ]

    dropped = len(raw_predictions) - len(predictions)
    if dropped:
        logger.debug(f"Dropped {dropped} malformed prediction(s) for {username}")

    if predictions:
        points_s1 = round_half_up(score_system_one(predictions))
        points_s2 = round_half_up(score_system_two(predictions))
    else:
        points_s1 = round_half_up(safe_float(raw.get("pointsS1"), 0.0))
        points_s2 = round_half_up(safe_float(raw.get("pointsS2"), 0.0))

    updated_at = raw.get("updatedAt")
    if not isinstance(updated_at, str) or not updated_at:
        updated_at = to_iso_timestamp(now or utc_now())

    return LeagueEntry(
        predictions=predictions,
        points_s1=points_s1,
        points_s2=points_s2,
        updated_at=updated_at,
    )


def should_replace_user_entry(existing: LeagueEntry, incoming: LeagueEntry) -> bool:
    """
    Decide whether ``incoming`` wins over ``existing`` for the same user.

    Checked in order, the first decisive rule wins:
    1. Both have valid timestamps: the later one wins
    2. Only one has a valid timestamp: that one wins
    3. More predictions wins
    4. Higher system 1 total wins
    5. Higher system 2 total wins
    6. Otherwise the existing entry stays
    """
    existing_ts = parse_timestamp_ms(existing.updated_at)
    incoming_ts = parse_timestamp_ms(incoming.updated_at)

    if incoming_ts and existing_ts:
        if incoming_ts != existing_ts:
            return incoming_ts > existing_ts
    elif incoming_ts:
        return True
    elif existing_ts:
        return False

    existing_count = len(existing.predictions)
    incoming_count = len(incoming.predictions)
    if incoming_count != existing_count:
        return incoming_count > existing_count

    if incoming.points_s1 != existing.points_s1:
        return incoming.points_s1 > existing.points_s1

    if incoming.points_s2 != existing.points_s2:
        return incoming.points_s2 > existing.points_s2

    return False


def _is_entry_like(value: Any) -> bool:
    return isinstance(value, (Mapping, LeagueEntry))


def merge_league_users(
    existing_users: Mapping[str, LeagueEntry],
    incoming_users: Any,
    exclude: Collection[str] | None = None,
    now: datetime | None = None,
) -> MergeSummary:
    """
    Fold an incoming (untrusted) collection into the existing one.

    Incoming users are processed in their insertion order. Excluded usernames,
    empty usernames and non-mapping entries are skipped. Neither input is
    mutated.

    Returns:
        MergeSummary with the usernames added, the usernames whose entry was
        replaced, and the full merged collection.
    """
    excluded = set(exclude or ())
    merged_users: LeagueUsers = dict(existing_users or {})
    summary = MergeSummary(merged_users=merged_users)

    if not isinstance(incoming_users, Mapping):
        return summary

    for username, entry in incoming_users.items():
        if not isinstance(username, str) or not username:
            continue
        if username in excluded or not _is_entry_like(entry):
            continue

        sanitized = sanitize_user_entry(username, entry, now=now)
        current = merged_users.get(username)

        if current is None:
            merged_users[username] = sanitized
            summary.added.append(username)
        elif should_replace_user_entry(current, sanitized):
            merged_users[username] = sanitized
            summary.updated.append(username)

    logger.info(
        f"Merged league users: {len(summary.added)} added, "
        f"{len(summary.updated)} updated, {len(merged_users)} total"
    )
    return summary


def normalize_users(stored_users: Any, now: datetime | None = None) -> NormalizeResult:
    """
    Sanitize a stored collection and flag whether it must be rewritten.

    Changes are flagged when an entry had no ``updatedAt``, when any
    prediction was dropped, or when a kept prediction was owned by someone
    else.
    """
    result = NormalizeResult()
    if not isinstance(stored_users, Mapping):
        return result

    for username, entry in stored_users.items():
        if not isinstance(username, str) or not username or not _is_entry_like(entry):
            continue

        original = _as_raw_entry(entry)
        sanitized = sanitize_user_entry(username, original, now=now)
        result.normalized_users[username] = sanitized

        original_predictions = original.get("predictions")
        if not isinstance(original_predictions, list):
            original_predictions = []

        if (
            not original.get("updatedAt")
            or sanitized.updated_at != original.get("updatedAt")
            or len(sanitized.predictions) != len(original_predictions)
        ):
            result.has_changes = True
            continue

        # Counts match, so nothing was dropped and indexes line up
        for original_prediction in original_predictions:
            if (
                not isinstance(original_prediction, Mapping)
                or original_prediction.get("user") != username
            ):
                result.has_changes = True
                break

    if result.has_changes:
        logger.info(f"Stored league data needs rewrite ({len(result.normalized_users)} users)")
    return result


def create_prediction(
    prediction_id: Any,
    symbol: str,
    direction: TrendDirection,
    period: PredictionPeriod,
    user: str,
    open_price: float | None = None,
    now: datetime | None = None,
) -> Prediction:
    """
    Create a pending prediction.

    Daily predictions resolve on the next market day, weekly ones on the next
    Friday.

    Raises:
        pydantic.ValidationError: If direction or period is not allowed
    """
    moment = now or utc_now()
    target = next_market_day(moment) if period == "day" else next_friday(moment)
    return Prediction(
        id=prediction_id,
        symbol=symbol.strip().upper(),
        direction=direction,
        period=period,
        made_at=to_iso_timestamp(moment),
        target_date=format_yyyymmdd(target),
        open_price=open_price,
        status="pending",
        user=user,
    )


def resolve_prediction(
    prediction: Prediction,
    open_price: Any,
    close_price: Any,
) -> Prediction:
    """
    Return a resolved copy of a pending prediction.

    Raises:
        PredictionStateError: If the prediction is already resolved
        ValidationError: If either price is not a finite number
    """
    if prediction.is_resolved:
        raise PredictionStateError(
            details={"id": prediction.id, "symbol": prediction.symbol},
        )

    resolved_open = safe_float(open_price)
    resolved_close = safe_float(close_price)
    if resolved_open is None or resolved_close is None:
        raise ValidationError(
            message="Both open and close prices are required to resolve a prediction",
            details={"open_price": open_price, "close_price": close_price},
        )

    return prediction.model_copy(
        update={
            "open_price": resolved_open,
            "close_price": resolved_close,
            "status": "resolved",
        }
    )


def league_users_to_dict(users: Mapping[str, LeagueEntry]) -> dict[str, dict[str, Any]]:
    """Serialize a collection for the persistence layer."""
    return {username: entry.to_dict() for username, entry in users.items()}
