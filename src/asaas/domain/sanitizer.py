"""Normalization of raw user input.

Every function here is pure and total: it never raises, and ``None``
means "absent". Sanitizers run before validation so value objects and
DTOs only ever see clean, predictable data. All of them are idempotent.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal, InvalidOperation
from typing import Any

TRUTHY_STRINGS = frozenset({"true", "on", "yes", "y", "1", "sim"})

_NON_DIGITS = re.compile(r"[^0-9]")


def normalize_string(value: Any) -> str | None:
    """Trim whitespace; an empty result is absent."""
    if value is None:
        return None
    text = value if isinstance(value, str) else str(value)
    text = text.strip()
    return text or None


def digits_only(value: Any) -> str | None:
    """Strip every non-digit character."""
    if value is None:
        return None
    text = value if isinstance(value, str) else str(value)
    return _NON_DIGITS.sub("", text) or None


def normalize_case(value: Any) -> str | None:
    """Trim and lower-case."""
    text = normalize_string(value)
    return text.lower() if text is not None else None


def coerce_boolean(value: Any) -> bool | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in TRUTHY_STRINGS
    return bool(value)


def coerce_integer(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        text = value.strip()
        if "_" in text:
            return None
        try:
            return int(text)
        except ValueError:
            pass
        number = _parse_float(text)
        return int(number) if number is not None else None
    return None


def coerce_float(value: Any) -> float | None:
    """Coerce to float, accepting pt-BR strings such as ``"1.234,56"``."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        number = float(value)
        return number if math.isfinite(number) else None
    if isinstance(value, str):
        text = value.strip()
        number = _parse_float(text)
        if number is None:
            # '.' as thousands separator, ',' as decimal separator
            number = _parse_float(text.replace(".", "").replace(",", "."))
        return number
    return None


def coerce_decimal(value: Any) -> Decimal | None:
    """Coerce a money amount to Decimal without float artifacts."""
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    number = coerce_float(value)
    if number is None:
        return None
    try:
        return Decimal(str(number))
    except InvalidOperation:
        return None


def _parse_float(text: str) -> float | None:
    # float() accepts digit separators such as "1_000"
    if "_" in text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None
