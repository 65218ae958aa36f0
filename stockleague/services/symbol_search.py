"""Symbol search service - Alpha Vantage response parsing with cache-first lookup.

SEARCH STRATEGY:
1. Normalize the keyword (trim + lowercase); empty keywords never hit the API
2. Serve from the in-process cache when a fresh entry exists
3. Otherwise call the caller-supplied fetch function and parse the payload
4. Cache the result only when the upstream answered normally (zero matches
   included); rate-limit and error answers are never cached

The HTTP transport is not part of this module: ``fetch`` receives the raw
keyword and returns the decoded JSON payload.

Usage:
    from stockleague.cache import create_symbol_search_cache
    from stockleague.services.symbol_search import search_symbols

    cache = create_symbol_search_cache()
    result = search_symbols("apple", fetch=alpha_vantage_get, cache=cache)
    if result.is_rate_limited:
        show(result.message)
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Optional

from stockleague.cache.symbol_cache import SymbolSearchCache, normalize_symbol_search_keyword
from stockleague.core.data_helpers import clean_string, safe_float
from stockleague.core.logging import get_logger
from stockleague.domain.symbol import ParsedSymbolSearchResponse, SymbolSearchMatch


logger = get_logger("services.symbol_search")

UNEXPECTED_RESPONSE_MESSAGE = "Unexpected response from Alpha Vantage."

# Upstream field names, verbatim from the SYMBOL_SEARCH schema
FIELD_SYMBOL = "1. symbol"
FIELD_NAME = "2. name"
FIELD_TYPE = "3. type"
FIELD_REGION = "4. region"
FIELD_CURRENCY = "8. currency"
FIELD_MATCH_SCORE = "9. matchScore"

# Quota signals, checked in this order
RATE_LIMIT_FIELDS = ("Note", "Information")
ERROR_FIELD = "Error Message"
MATCHES_FIELD = "bestMatches"

FetchFn = Callable[[str], Any]


def _unexpected_response() -> ParsedSymbolSearchResponse:
    return ParsedSymbolSearchResponse(
        matches=[],
        message=UNEXPECTED_RESPONSE_MESSAGE,
        is_rate_limited=False,
        is_cacheable=False,
    )


def parse_symbol_search_match(value: Any) -> SymbolSearchMatch | None:
    """Parse one ``bestMatches`` element; None when symbol or name is missing."""
    if not isinstance(value, Mapping):
        return None

    symbol = clean_string(value.get(FIELD_SYMBOL))
    name = clean_string(value.get(FIELD_NAME))
    if not symbol or not name:
        return None

    return SymbolSearchMatch(
        symbol=symbol,
        name=name,
        type=clean_string(value.get(FIELD_TYPE)),
        region=clean_string(value.get(FIELD_REGION)),
        currency=clean_string(value.get(FIELD_CURRENCY)),
        match_score=safe_float(value.get(FIELD_MATCH_SCORE)),
    )


def parse_symbol_search_response(payload: Any) -> ParsedSymbolSearchResponse:
    """
    Interpret a decoded ``SYMBOL_SEARCH`` payload.

    Never raises. Rate limits, upstream errors and unknown shapes come back
    as non-cacheable responses with a displayable message.
    """
    if not isinstance(payload, Mapping):
        return _unexpected_response()

    for field in RATE_LIMIT_FIELDS:
        note = clean_string(payload.get(field))
        if note:
            return ParsedSymbolSearchResponse(
                matches=[],
                message=note,
                is_rate_limited=True,
                is_cacheable=False,
            )

    error_message = clean_string(payload.get(ERROR_FIELD))
    if error_message:
        return ParsedSymbolSearchResponse(
            matches=[],
            message=error_message,
            is_rate_limited=False,
            is_cacheable=False,
        )

    raw_matches = payload.get(MATCHES_FIELD)
    if not isinstance(raw_matches, list):
        return _unexpected_response()

    matches = [
        match
        for match in (parse_symbol_search_match(item) for item in raw_matches)
        if match is not None
    ]

    return ParsedSymbolSearchResponse(
        matches=matches,
        message=None,
        is_rate_limited=False,
        is_cacheable=True,
    )


def search_symbols(
    keyword: str,
    fetch: FetchFn,
    cache: Optional[SymbolSearchCache] = None,
) -> ParsedSymbolSearchResponse:
    """
    Search symbols, serving from ``cache`` when possible.

    Args:
        keyword: User-entered search text
        fetch: Called with the stripped keyword on a cache miss; returns the
            decoded upstream payload
        cache: Optional cache; cacheable results are stored in it

    Returns:
        ParsedSymbolSearchResponse (cache hits are always cacheable)
    """
    if not normalize_symbol_search_keyword(keyword):
        return ParsedSymbolSearchResponse(matches=[], is_cacheable=True)

    if cache is not None:
        cached = cache.get(keyword)
        if cached is not None:
            return ParsedSymbolSearchResponse(matches=cached, is_cacheable=True)

    result = parse_symbol_search_response(fetch(keyword.strip()))

    if result.is_rate_limited:
        logger.warning(f"Symbol search rate limited: {result.message}")
    elif not result.is_cacheable:
        logger.warning(f"Symbol search failed for '{keyword.strip()}': {result.message}")
    elif cache is not None:
        cache.set(keyword, result.matches)

    return result
