from __future__ import annotations

import re
import unicodedata
from typing import Any

from rarity.coercion import coerce_text


_YEAR_PAIR = re.compile(r"(\d{4})\D+(\d{4})")
_SLUG_JUNK = re.compile(r"[^a-z0-9]+")


def parse_year_range(year_range: Any) -> tuple[int, int] | None:
    if not isinstance(year_range, str):
        return None
    match = _YEAR_PAIR.search(year_range)
    if match is None:
        return None
    return int(match.group(1)), int(match.group(2))


def build_year_range(year_start: int | None, year_end: int | None) -> str | None:
    if year_start is not None and year_end is not None:
        if year_start == year_end:
            return str(year_start)
        return f"{year_start}-{year_end}"
    if year_start is not None:
        return str(year_start)
    if year_end is not None:
        return str(year_end)
    return None


def derive_years(
    year_start: int | None,
    year_end: int | None,
    year_range: Any,
) -> tuple[int | None, int | None, str | None]:
    """Fill whichever of start/end/range is missing from the others.

    Returns ``(year_start, year_end, year_range)`` with ``year_start <= year_end``
    whenever both are known.
    """
    if year_start is None and year_end is None:
        parsed = parse_year_range(year_range)
        if parsed is not None:
            year_start, year_end = parsed

    if year_start is not None and year_end is not None and year_start > year_end:
        year_start, year_end = year_end, year_start

    range_text = coerce_text(year_range)
    if range_text is None:
        range_text = build_year_range(year_start, year_end)
    return year_start, year_end, range_text


def slugify(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    ascii_text = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _SLUG_JUNK.sub("_", ascii_text.lower()).strip("_")


def build_car_slug(
    make: str | None,
    model: str | None,
    generation: str | None,
    year_start: int | None,
) -> str | None:
    parts = [part for part in (make, model, generation) if part]
    base = slugify(" ".join(parts))
    if not base:
        return None
    if isinstance(year_start, int) and not isinstance(year_start, bool):
        return f"{base}_{year_start}"
    return base
