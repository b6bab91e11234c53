from __future__ import annotations

import re
from typing import Any

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_non_negative_int(value: Any) -> int:
    """Parse ``value`` as a non-negative integer, returning 0 when it cannot.

    Strings are read up to the first non-digit character ("12abc" -> 12,
    "3.9" -> 3). Floats are truncated. Parse failures, negative numbers,
    booleans and ``None`` all give 0, so a genuine 0 and a failure look the
    same to the caller.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return 0
        parsed = int(value)
    else:
        match = _LEADING_INT.match(str(value))
        if not match:
            return 0
        parsed = int(match.group(1))
    return parsed if parsed > 0 else 0


def parse_vote_count(value: Any) -> int | None:
    """Like :func:`parse_non_negative_int`, but ``None`` on failure or negative input."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    match = _LEADING_INT.match(str(value)) if value is not None else None
    if not match:
        return None
    parsed = int(match.group(1))
    return parsed if parsed >= 0 else None
