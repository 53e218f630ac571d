from __future__ import annotations

from typing import Any, Mapping

from rarity.coercion import clamp_unit_interval, coerce_number, coerce_text, coerce_year
from rarity.config import DEFAULT_SCORING, ScoringConfig
from rarity.data_models import NormalizedRecord
from rarity.derivation import build_car_slug, derive_years
from rarity.normalizers import (
    canonical_make,
    make_key,
    normalize_drivetrain,
    normalize_engine_aspiration,
    normalize_prestige_class,
    normalize_region,
    normalize_vehicle_category,
)
from rarity.scoring import score, tier


TECHNICAL_FIELDS: tuple[str, ...] = (
    "horsepower",
    "torque_nm",
    "weight_kg",
    "zero_to_hundred",
    "top_speed_kmh",
    "production_numbers",
)
CONFIDENCE_FIELDS: tuple[str, ...] = ("confidence", "real_world_confidence", "frame_suspicion")


def _first(raw: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = raw.get(key)
        if value is not None and value != "":
            return value
    return None


def _model_from_name(name: Any, make: str) -> str:
    text = coerce_text(name) or ""
    lowered = text.lower()
    for prefix in (make_key(make), make_key(make).split(" ")[0] if make else ""):
        if prefix and lowered.startswith(prefix + " "):
            return text[len(prefix) + 1 :].strip()
    return text


def normalize(raw: Mapping[str, Any] | None, config: ScoringConfig = DEFAULT_SCORING) -> NormalizedRecord:
    """Turn one loosely-typed oracle record into a scored ``NormalizedRecord``.

    Unknown or badly typed fields become ``None``; this never raises for a
    mapping input.
    """
    raw = raw if isinstance(raw, Mapping) else {}

    make = canonical_make(_first(raw, "make", "manufacturer", "brand"))
    model = coerce_text(raw.get("model"))
    if model is None:
        model = _model_from_name(raw.get("name"), make)
    generation = coerce_text(raw.get("generation"))

    year_start = coerce_year(raw.get("year_start"))
    year_end = coerce_year(raw.get("year_end"))
    if year_start is None and year_end is None:
        year_start = year_end = coerce_year(raw.get("year"))
    year_start, year_end, year_range = derive_years(year_start, year_end, raw.get("year_range"))

    engine = coerce_text(raw.get("engine"))
    country = coerce_text(_first(raw, "country", "country_of_origin", "origin"))

    fields: dict[str, Any] = {
        "make": make,
        "model": model,
        "generation": generation,
        "year_start": year_start,
        "year_end": year_end,
        "year_range": year_range,
        "drivetrain": normalize_drivetrain(raw.get("drivetrain")),
        "vehicle_category": normalize_vehicle_category(
            _first(raw, "vehicle_category", "type", "body_type", "category")
        ),
        "prestige_class": normalize_prestige_class(_first(raw, "prestige_class", "prestige"), make),
        "region": normalize_region(raw.get("region"), country),
        "engine_aspiration": normalize_engine_aspiration(
            _first(raw, "engine_aspiration", "aspiration"), engine
        ),
        "engine": engine,
        "country": country,
        "car_slug": build_car_slug(make, model, generation, year_start),
    }
    fields.update({name: coerce_number(raw.get(name)) for name in TECHNICAL_FIELDS})
    fields.update({name: clamp_unit_interval(raw.get(name)) for name in CONFIDENCE_FIELDS})

    rarity_score = score(fields, config)
    return NormalizedRecord(
        **fields,
        rarity_score=rarity_score,
        rarity_tier=tier(rarity_score, config),
    )
