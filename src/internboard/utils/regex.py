"""Regex helpers for building MongoDB ``$regex`` conditions from user input."""

from __future__ import annotations

import re

# Characters with a special meaning in PCRE/Python patterns.
_SPECIAL_CHARS = re.compile(r"[.*+?^${}()|\[\]\\\-]")


def escape_regex_literal(value: str) -> str:
    """
    Escape ``value`` so it matches itself literally inside a regex.

    Only regex metacharacters are escaped; whitespace, unicode and
    punctuation such as ``@`` or ``:`` are left untouched so the
    resulting pattern stays readable in stored queries and logs.

    Example:
        >>> escape_regex_literal("user+tag@example.com")
        'user\\\\+tag@example\\\\.com'
    """
    return _SPECIAL_CHARS.sub(lambda match: "\\" + match.group(0), value)
