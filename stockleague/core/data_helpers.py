"""
Centralized Data Conversion Helpers.

Safe conversions for untrusted values coming from stored or imported league
files and from upstream API payloads. None of these raise.

Usage:
    from stockleague.core.data_helpers import safe_float, round_half_up, parse_timestamp_ms
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any


def safe_float(value: Any, default: float | None = None) -> float | None:
    """
    Safely convert value to float.

    Accepts ints, floats and numeric strings. Booleans, NaN, Inf and anything
    that fails conversion return the default.

    Args:
        value: Any value to convert
        default: Default to return if conversion fails

    Returns:
        Float value or default if conversion fails
    """
    if value is None or isinstance(value, bool):
        return default
    if not isinstance(value, (int, float, str)):
        return default
    try:
        f = float(value)
    except (ValueError, TypeError, OverflowError):
        return default
    if not math.isfinite(f):
        return default
    return f


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards positive infinity.

    ``round()`` uses banker's rounding, which would make 2.5 and 3.5 land on
    the same total.
    """
    return int(math.floor(value + 0.5))


def clean_string(value: Any) -> str | None:
    """Return the stripped string, or None for non-strings and blanks."""
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return None


def parse_timestamp_ms(value: Any) -> float:
    """
    Parse an ISO-8601 string to epoch milliseconds.

    A trailing ``Z`` is accepted and naive values are read as UTC.

    Returns:
        Milliseconds since the epoch, or 0 when the value is not a string or
        cannot be parsed (0 means "no timestamp").
    """
    if not isinstance(value, str):
        return 0
    text = value.strip()
    if not text:
        return 0
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return 0
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.timestamp() * 1000


def to_iso_timestamp(moment: datetime) -> str:
    """Format a datetime as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    utc = moment.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def utc_now() -> datetime:
    """Current instant in UTC."""
    return datetime.now(timezone.utc)


def format_number(value: Any) -> str:
    """
    Format a market figure for display.

    Examples:
        >>> format_number(2_500_000_000)
        '$2.50B'
        >>> format_number("1234.567")
        '$1,234.57'
        >>> format_number("None")
        'N/A'
    """
    if value is None or value == "None":
        return "N/A"
    numeric = safe_float(value)
    if numeric is None:
        return "N/A"
    if numeric >= 1e9:
        return f"${numeric / 1e9:.2f}B"
    if numeric >= 1e6:
        return f"${numeric / 1e6:.2f}M"
    text = f"{numeric:,.2f}".rstrip("0").rstrip(".")
    return f"${text}"


__all__ = [
    "clean_string",
    "format_number",
    "parse_timestamp_ms",
    "round_half_up",
    "safe_float",
    "to_iso_timestamp",
    "utc_now",
]
