"""Small predicates used at the HTTP boundary before any storage access."""

from __future__ import annotations

from typing import Any


# Upper bound of the Integer columns ids, page and limit end up in.
INTEGER_COLUMN_MAX = 2**31 - 1


def is_positive_integer(value: Any) -> bool:
    # bool is an int subclass; True must not pass as 1
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def fits_integer_column(value: int) -> bool:
    return value <= INTEGER_COLUMN_MAX


def is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and len(value.strip()) > 0


def parse_boolean(value: Any) -> bool | None:
    """Parse a literal ``"true"``/``"false"`` (any case).

    Returns ``None`` for anything else, including non-string input. Callers treat
    ``None`` as "no filter" rather than as ``False``.
    """
    if not isinstance(value, str):
        return None
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return None


def parse_int(raw: str | None) -> int | None:
    if raw is None:
        return None
    stripped = raw.strip()
    digits = stripped[1:] if stripped[:1] in {"+", "-"} else stripped
    if not digits.isdecimal():
        return None
    return int(stripped)
