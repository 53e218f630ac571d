from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict


@dataclass(frozen=True)
class ScoringConfig:
    # (exclusive upper bound, points); first bound the value falls under wins
    production_buckets: tuple[tuple[float, int], ...] = (
        (10, 10),
        (30, 8),
        (100, 6),
        (1_000, 4),
        (5_000, 3),
        (20_000, 2),
        (100_000, 1),
    )
    acceleration_buckets: tuple[tuple[float, int], ...] = (
        (3.5, 3),
        (5.0, 2),
        (7.0, 1),
    )
    horsepower_divisor: float = 200.0
    horsepower_cap: float = 3.0
    make_tiers: tuple[tuple[frozenset[str], int], ...] = (
        (frozenset({"pagani", "bugatti", "koenigsegg", "rimac"}), 3),
        (frozenset({"ferrari", "lamborghini", "porsche", "aston martin", "mclaren"}), 2),
        (frozenset({"bmw", "mercedes-benz", "audi", "lexus", "dodge", "chevrolet"}), 1),
    )
    category_bonus: Dict[str, int] = field(
        default_factory=lambda: {
            "hypercar": 4,
            "track-only": 5,
            "supercar": 2,
        }
    )
    # inclusive lower bounds, highest first
    tier_thresholds: tuple[tuple[int, str], ...] = (
        (18, "Mythic"),
        (12, "Legendary"),
        (8, "Epic"),
        (5, "Rare"),
        (3, "Uncommon"),
    )
    floor_tier: str = "Common"


DEFAULT_SCORING = ScoringConfig()
