from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass, fields
from typing import Any, Iterator, Literal


Drivetrain = Literal["FWD", "RWD", "AWD", "4WD"]
VehicleCategory = Literal[
    "hypercar",
    "supercar",
    "track-only",
    "muscle car",
    "hatchback",
    "suv",
    "wagon",
    "coupe",
    "sedan",
    "other",
]
PrestigeClass = Literal["low", "medium", "high", "ultra"]
Region = Literal["Europe", "Japan", "USA", "Other"]
EngineAspiration = Literal["electric", "hybrid", "twin-turbo", "turbo", "supercharged", "na"]
RarityTier = Literal["Common", "Uncommon", "Rare", "Epic", "Legendary", "Mythic"]

RARITY_TIERS: tuple[str, ...] = ("Common", "Uncommon", "Rare", "Epic", "Legendary", "Mythic")


@dataclass(frozen=True)
class NormalizedRecord(Mapping):
    """Canonical vehicle record produced by ``rarity.normalize.normalize``.

    Read-only; also usable as a mapping so it can be handed straight to a JSON
    encoder or compared against plain dicts field by field.
    """

    make: str = ""
    model: str = ""
    generation: str | None = None
    year_start: int | None = None
    year_end: int | None = None
    year_range: str | None = None
    horsepower: float | None = None
    torque_nm: float | None = None
    weight_kg: float | None = None
    zero_to_hundred: float | None = None
    top_speed_kmh: float | None = None
    production_numbers: float | None = None
    drivetrain: Drivetrain | None = None
    vehicle_category: VehicleCategory | None = None
    prestige_class: PrestigeClass | None = None
    region: Region | None = None
    engine_aspiration: EngineAspiration | None = None
    engine: str | None = None
    country: str | None = None
    confidence: float | None = None
    real_world_confidence: float | None = None
    frame_suspicion: float | None = None
    rarity_score: int = 0
    rarity_tier: RarityTier = "Common"
    car_slug: str | None = None

    def __getitem__(self, key: str) -> Any:
        if key not in self.field_names():
            raise KeyError(key)
        return getattr(self, key)

    def __iter__(self) -> Iterator[str]:
        return iter(self.field_names())

    def __len__(self) -> int:
        return len(self.field_names())

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
