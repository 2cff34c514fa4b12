"""String, regex and parameter helpers used by the filter builders."""

from .fuzzy_search import (
    build_fuzzy_pattern,
    build_fuzzy_regex,
    normalize_text,
    tokenize_search_query,
)
from .parse import to_number_or_none, to_string_or_none
from .regex import escape_regex_literal

__all__ = [
    "build_fuzzy_pattern",
    "build_fuzzy_regex",
    "normalize_text",
    "tokenize_search_query",
    "to_number_or_none",
    "to_string_or_none",
    "escape_regex_literal",
]
