"""In-process cache module."""

from .symbol_cache import (
    SymbolSearchCache,
    create_symbol_search_cache,
    normalize_symbol_search_keyword,
)

__all__ = [
    "SymbolSearchCache",
    "create_symbol_search_cache",
    "normalize_symbol_search_keyword",
]
