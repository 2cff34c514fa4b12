"""
Accent- and typo-tolerant regex construction for free-text search.

MongoDB ``$text`` indexes cannot fold accents in both directions nor
tolerate a stray character inside a word, so multi-token searches fall
back to regular expressions built here:

- Accent variations: each latin letter matches itself plus its common
  diacritics ("resume" matches "résumé" and the other way round).
- Typo tolerance: terms of 5 characters or more accept one optional
  extra character between two interior characters ("helxlo" matches
  "hello"). Shorter terms would become too permissive.
"""

from __future__ import annotations

import re
import unicodedata

from .regex import escape_regex_literal

ACCENT_CLASS_MAP: dict[str, str] = {
    "a": "[aàáâãäåāăą]",
    "e": "[eèéêëēĕėęě]",
    "i": "[iìíîïĩīĭį]",
    "o": "[oòóôõöøōŏő]",
    "u": "[uùúûüũūŭůű]",
    "c": "[cçćĉċč]",
    "n": "[nñńņň]",
    "y": "[yýÿŷ]",
}

DEFAULT_MAX_TOKENS = 8
TYPO_TOLERANCE_MIN_LENGTH = 5

_COMBINING_MARKS = re.compile(r"[\u0300-\u036f]")


def normalize_text(text: str) -> str:
    """Lowercase ``text`` and strip its diacritics ("Café" -> "cafe")."""
    decomposed = unicodedata.normalize("NFD", text.lower())
    return _COMBINING_MARKS.sub("", decomposed)


def tokenize_search_query(value: str, max_tokens: int = DEFAULT_MAX_TOKENS) -> list[str]:
    """
    Split a search query on whitespace runs.

    The result is truncated to ``max_tokens`` entries, which bounds the
    size of the fuzzy regex built from user input.
    """
    return value.split()[:max_tokens]


def build_fuzzy_pattern(term: str) -> str:
    """
    Build a fuzzy regex pattern (as a string) for ``term``.

    The term is normalized, then every character is escaped on its own so
    an escaped metacharacter (``\\+``) stays a single unit when the
    optional ``.?`` typo slots are inserted between units.
    """
    units = [escape_regex_literal(char) for char in normalize_text(term)]
    allow_typos = sum(len(unit) for unit in units) >= TYPO_TOLERANCE_MIN_LENGTH

    parts: list[str] = []
    last = len(units) - 1
    for index, unit in enumerate(units):
        part = ACCENT_CLASS_MAP.get(unit, unit)
        if allow_typos and 0 < index < last:
            part += ".?"
        parts.append(part)
    return "".join(parts)


def build_fuzzy_regex(term: str) -> re.Pattern[str]:
    """Compile :func:`build_fuzzy_pattern` case-insensitively."""
    return re.compile(build_fuzzy_pattern(term), re.IGNORECASE)
