"""Trading calendar helpers used to pick prediction target dates.

Weekends are the only non-trading days considered; exchange holidays are not
modelled.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta

SATURDAY = 5
FRIDAY = 4


def _as_date(reference: date | datetime) -> date:
    if isinstance(reference, datetime):
        return reference.date()
    return reference


def next_market_day(reference: date | datetime) -> date:
    """First weekday strictly after ``reference``."""
    result = _as_date(reference) + timedelta(days=1)
    while result.weekday() >= SATURDAY:
        result += timedelta(days=1)
    return result


def next_friday(reference: date | datetime) -> date:
    """Next Friday strictly after ``reference`` (a Friday maps to the following week)."""
    current = _as_date(reference)
    days_until_friday = (FRIDAY - current.weekday()) % 7
    if days_until_friday == 0:
        days_until_friday = 7
    return current + timedelta(days=days_until_friday)


def format_yyyymmdd(value: date | datetime) -> str:
    return _as_date(value).strftime("%Y-%m-%d")


def format_display_date(value: date | datetime) -> str:
    """Format like ``Mon, Mar 4, 2024``."""
    day = _as_date(value)
    return f"{day.strftime('%a')}, {day.strftime('%b')} {day.day}, {day.year}"
