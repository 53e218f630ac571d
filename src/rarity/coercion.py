from __future__ import annotations

import math
import re
from typing import Any


_NON_NUMERIC = re.compile(r"[^0-9.\-]")


def coerce_number(value: Any) -> float | int | None:
    """Parse loosely formatted numeric input ("3,2", "3.2 s", "320 km/h").

    Finite numbers pass through unchanged; anything that cannot be read as a
    finite number comes back as ``None``. Never raises.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        # JSON integers can be arbitrarily long; keep only float-sized ones
        try:
            float(value)
        except OverflowError:
            return None
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if not isinstance(value, str):
        return None

    cleaned = _NON_NUMERIC.sub("", value.replace(",", "."))
    if not cleaned:
        return None
    try:
        parsed = float(cleaned)
    except ValueError:
        return None
    return parsed if math.isfinite(parsed) else None


def clamp_unit_interval(value: Any) -> float | int | None:
    number = coerce_number(value)
    if number is None:
        return None
    return min(1, max(0, number))


def coerce_year(value: Any) -> int | None:
    number = coerce_number(value)
    if number is None or number != int(number):
        return None
    return int(number)


def coerce_text(value: Any) -> str | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(value) if math.isfinite(value) else None
    if not isinstance(value, str):
        return None
    text = value.strip()
    return text or None
