from __future__ import annotations

from typing import Any, Mapping

from rarity.config import DEFAULT_SCORING, ScoringConfig
from rarity.data_models import RarityTier
from rarity.normalizers import make_key


def _bucket(value: float | None, buckets: tuple[tuple[float, int], ...]) -> int:
    if value is None:
        return 0
    for upper, points in buckets:
        if value < upper:
            return points
    return 0


def production_contribution(production_numbers: float | None, config: ScoringConfig = DEFAULT_SCORING) -> int:
    return _bucket(production_numbers, config.production_buckets)


def acceleration_contribution(zero_to_hundred: float | None, config: ScoringConfig = DEFAULT_SCORING) -> int:
    return _bucket(zero_to_hundred, config.acceleration_buckets)


def power_contribution(horsepower: float | None, config: ScoringConfig = DEFAULT_SCORING) -> float:
    if horsepower is None:
        return 0.0
    return min(horsepower / config.horsepower_divisor, config.horsepower_cap)


def make_contribution(make: Any, config: ScoringConfig = DEFAULT_SCORING) -> int:
    key = make_key(make)
    for makes, points in config.make_tiers:
        if key in makes:
            return points
    return 0


def category_contribution(vehicle_category: str | None, config: ScoringConfig = DEFAULT_SCORING) -> int:
    if vehicle_category is None:
        return 0
    return config.category_bonus.get(vehicle_category, 0)


def score(fields: Mapping[str, Any], config: ScoringConfig = DEFAULT_SCORING) -> int:
    """Weighted rarity score over already-normalized fields.

    Absent fields contribute nothing. The fractional horsepower term is
    dropped by truncating the sum, never rounded up.
    """
    total = (
        production_contribution(fields.get("production_numbers"), config)
        + acceleration_contribution(fields.get("zero_to_hundred"), config)
        + power_contribution(fields.get("horsepower"), config)
        + make_contribution(fields.get("make"), config)
        + category_contribution(fields.get("vehicle_category"), config)
    )
    return max(0, int(total))


def tier(rarity_score: int, config: ScoringConfig = DEFAULT_SCORING) -> RarityTier:
    for threshold, name in config.tier_thresholds:
        if rarity_score >= threshold:
            return name  # type: ignore[return-value]
    return config.floor_tier  # type: ignore[return-value]
