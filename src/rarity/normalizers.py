"""Keyword normalizers for the categorical fields of a vehicle record.

Each rule table is checked in order and the first keyword hit wins, so more
specific phrasings (``twin-turbo``, ``quattro``) sit above generic ones.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Any, Mapping, Sequence

from rarity.coercion import coerce_text
from rarity.data_models import (
    Drivetrain,
    EngineAspiration,
    PrestigeClass,
    Region,
    VehicleCategory,
)


Rules = Sequence[tuple[str, Sequence[str]]]

DRIVETRAIN_RULES: Rules = (
    ("AWD", ("awd", "all-wheel", "all wheel", "quattro", "4matic", "xdrive", "4motion")),
    ("4WD", ("4wd", "4x4", "four-wheel", "four wheel")),
    ("RWD", ("rwd", "rear-wheel", "rear wheel")),
    ("FWD", ("fwd", "front-wheel", "front wheel")),
)

VEHICLE_CATEGORY_RULES: Rules = (
    ("hypercar", ("hypercar", "hyper car", "hyper-car")),
    ("supercar", ("supercar", "super car", "super-car")),
    ("track-only", ("track-only", "track only", "track car", "race car", "racecar")),
    ("muscle car", ("muscle",)),
    ("hatchback", ("hatch",)),
    ("suv", ("suv", "crossover", "sport utility")),
    ("wagon", ("wagon", "estate", "shooting brake")),
    ("coupe", ("coupe", "coupé")),
    ("sedan", ("sedan", "saloon")),
    ("other", ("other", "pickup", "truck")),
)

# hybrid sits above electric so "plug-in hybrid electric" stays a hybrid
ENGINE_ASPIRATION_RULES: Rules = (
    ("hybrid", ("hybrid", "phev")),
    ("electric", ("electric", "battery")),
    ("twin-turbo", ("twin-turbo", "twin turbo", "twinturbo", "bi-turbo", "biturbo", "bi turbo", "quad-turbo")),
    ("turbo", ("turbo",)),
    ("supercharged", ("supercharg", "kompressor")),
    ("na", ("naturally aspirated", "normally aspirated", "natural aspiration", "atmospheric")),
)

REGION_HINT_RULES: Rules = (
    ("Europe", ("europe",)),
    ("Japan", ("japan", "jdm")),
    ("USA", ("usa", "u.s.", "united states", "america")),
)

COUNTRIES_BY_REGION: Mapping[str, Sequence[str]] = MappingProxyType(
    {
        "Europe": (
            "germany", "italy", "france", "united kingdom", "uk", "england", "great britain",
            "sweden", "croatia", "spain", "netherlands", "austria", "belgium", "czech",
            "switzerland", "denmark", "norway", "finland", "poland", "romania",
        ),
        "Japan": ("japan",),
        "USA": ("usa", "us", "u.s.", "u.s.a.", "united states", "america"),
    }
)

PRESTIGE_MAKE_GROUPS: Mapping[str, Sequence[str]] = MappingProxyType(
    {
        "ultra": (
            "Pagani", "Bugatti", "Koenigsegg", "Rimac", "Rolls-Royce", "Maybach", "Hennessey", "SSC",
        ),
        "high": (
            "Ferrari", "Lamborghini", "McLaren", "Aston Martin", "Porsche", "Bentley",
            "Maserati", "Lotus", "Lucid",
        ),
        "medium": (
            "BMW", "Mercedes-Benz", "Mercedes", "Audi", "Lexus", "Jaguar", "Land Rover",
            "Alfa Romeo", "Cadillac", "Genesis", "Tesla", "Volvo", "Infiniti", "Acura",
            "Lincoln", "Polestar", "Dodge", "Chevrolet",
        ),
    }
)

PRESTIGE_CLASSES: tuple[str, ...] = ("low", "medium", "high", "ultra")


def make_key(make: Any) -> str:
    text = coerce_text(make) or ""
    return re.sub(r"\s+", " ", text).lower()


def _build_make_lookups() -> tuple[Mapping[str, str], Mapping[str, str]]:
    prestige: dict[str, str] = {}
    display: dict[str, str] = {}
    for tier, makes in PRESTIGE_MAKE_GROUPS.items():
        for make in makes:
            prestige.setdefault(make_key(make), tier)
            display.setdefault(make_key(make), make)
    return MappingProxyType(prestige), MappingProxyType(display)


PRESTIGE_BY_MAKE, _MAKE_DISPLAY = _build_make_lookups()
_MAKE_KEYS_LONGEST_FIRST = tuple(sorted(_MAKE_DISPLAY, key=len, reverse=True))


def canonical_make(make: Any) -> str:
    """Trim corporate suffixes off a known make ("Pagani Automobili" -> "Pagani").

    Unknown makes come back stripped but otherwise untouched.
    """
    text = coerce_text(make) or ""
    key = make_key(text)
    if not key or key in _MAKE_DISPLAY:
        return text
    for known in _MAKE_KEYS_LONGEST_FIRST:
        if key.startswith(known + " "):
            return _MAKE_DISPLAY[known]
    return text


def match_rules(value: Any, rules: Rules) -> str | None:
    text = coerce_text(value)
    if text is None:
        return None
    lowered = text.lower()
    for label, keywords in rules:
        if any(keyword in lowered for keyword in keywords):
            return label
    return None


def normalize_drivetrain(value: Any) -> Drivetrain | None:
    return match_rules(value, DRIVETRAIN_RULES)  # type: ignore[return-value]


def normalize_vehicle_category(value: Any) -> VehicleCategory | None:
    return match_rules(value, VEHICLE_CATEGORY_RULES)  # type: ignore[return-value]


def normalize_prestige_class(hint: Any, make: Any) -> PrestigeClass:
    """Explicit tier hint if it names a known tier, else a make lookup, else "low"."""
    hint_text = (coerce_text(hint) or "").lower()
    if hint_text in PRESTIGE_CLASSES:
        return hint_text  # type: ignore[return-value]
    return PRESTIGE_BY_MAKE.get(make_key(make), "low")  # type: ignore[return-value]


def region_from_country(country: Any) -> Region | None:
    text = coerce_text(country)
    if text is None:
        return None
    lowered = text.lower()
    for region, names in COUNTRIES_BY_REGION.items():
        for name in names:
            # short codes must match whole, "us" is inside "russia"
            if lowered == name or (len(name) > 3 and name in lowered):
                return region  # type: ignore[return-value]
    return None


def normalize_region(hint: Any, country: Any) -> Region:
    if coerce_text(hint) is not None:
        return match_rules(hint, REGION_HINT_RULES) or "Other"  # type: ignore[return-value]
    return region_from_country(country) or "Other"


def normalize_engine_aspiration(hint: Any, engine: Any) -> EngineAspiration | None:
    hint_text = (coerce_text(hint) or "").lower()
    if hint_text in {"na", "n/a", "n.a."}:
        return "na"
    if hint_text == "ev":
        return "electric"
    return (
        match_rules(hint_text, ENGINE_ASPIRATION_RULES)
        or match_rules(engine, ENGINE_ASPIRATION_RULES)
    )  # type: ignore[return-value]
