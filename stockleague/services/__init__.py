"""Services package."""

from stockleague.services.league import (
    create_prediction,
    is_prediction,
    league_users_to_dict,
    merge_league_users,
    normalize_users,
    resolve_prediction,
    sanitize_user_entry,
    should_replace_user_entry,
)
from stockleague.services.scoring import score_system_one, score_system_two
from stockleague.services.symbol_search import (
    parse_symbol_search_response,
    search_symbols,
)

__all__ = [
    "create_prediction",
    "is_prediction",
    "league_users_to_dict",
    "merge_league_users",
    "normalize_users",
    "parse_symbol_search_response",
    "resolve_prediction",
    "sanitize_user_entry",
    "score_system_one",
    "score_system_two",
    "search_symbols",
    "should_replace_user_entry",
]
