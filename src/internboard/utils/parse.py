"""
Lenient coercion of query-string values.

Both helpers return ``None`` for anything that is absent or unusable, so
filter builders can skip a clause instead of failing the request.
"""

from __future__ import annotations

import math
from typing import Any

_NON_FINITE = {"infinity", "-infinity", "+infinity", "inf", "-inf", "+inf", "nan"}


def to_number_or_none(value: Any) -> int | float | None:
    """Convert ``value`` to a finite number, or ``None`` when not possible."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else None
    if not isinstance(value, str):
        return None

    normalized = value.strip()
    # float() also accepts digit separators ("1_000"), query strings do not
    if not normalized or "_" in normalized or normalized.lower() in _NON_FINITE:
        return None
    try:
        number = float(normalized)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def to_string_or_none(value: Any) -> str | None:
    """Convert ``value`` to a stripped string, or ``None`` when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None
