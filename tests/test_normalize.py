import dataclasses

import pytest

from rarity.data_models import NormalizedRecord
from rarity.normalize import normalize
from rarity.salvage import salvage_parse


def test_pagani_zonda_scores_legendary():
    car = normalize(
        {
            "make": "Pagani",
            "model": "Zonda",
            "production_numbers": "40",
            "horsepower": "555",
            "vehicle_category": "hypercar",
            "zero_to_hundred": "3.7 s",
        }
    )
    assert car.production_numbers == 40
    assert car.horsepower == 555
    assert car.zero_to_hundred == pytest.approx(3.7)
    assert car.prestige_class == "ultra"
    assert car.vehicle_category == "hypercar"
    assert car.rarity_score == 17
    assert car.rarity_tier == "Legendary"
    assert car.car_slug == "pagani_zonda"


def test_full_record_is_canonicalized():
    car = normalize(
        {
            "make": "Porsche",
            "model": "911 GT3 RS",
            "generation": "992",
            "year_range": "2022-2024",
            "horsepower": "525 PS",
            "torque_nm": "465 Nm",
            "weight_kg": "1.450",
            "top_speed_kmh": "296 km/h",
            "drivetrain": "rear-wheel drive",
            "vehicle_category": "Track-focused coupe",
            "engine": "4.0L naturally aspirated flat-six",
            "country": "Germany",
            "confidence": "0.91",
            "real_world_confidence": 1.4,
            "frame_suspicion": "-0.1",
        }
    )
    assert (car.year_start, car.year_end, car.year_range) == (2022, 2024, "2022-2024")
    assert car.torque_nm == 465
    assert car.top_speed_kmh == 296
    assert car.weight_kg == pytest.approx(1.45)
    assert car.drivetrain == "RWD"
    assert car.vehicle_category == "coupe"
    assert car.engine_aspiration == "na"
    assert car.region == "Europe"
    assert car.prestige_class == "high"
    assert car.confidence == pytest.approx(0.91)
    assert car.real_world_confidence == 1
    assert car.frame_suspicion == 0
    assert car.car_slug == "porsche_911_gt3_rs_992_2022"


def test_legacy_payload_keys_are_understood():
    car = normalize(
        {
            "name": "Pagani Zonda C12 S",
            "manufacturer": "Pagani Automobili",
            "year": 2002,
            "type": "Coupe",
            "horsepower": 555,
            "engine": "7.3L V12",
            "country": "Italy",
            "confidence": 0.98,
        }
    )
    assert car.make == "Pagani"
    assert car.model == "Zonda C12 S"
    assert (car.year_start, car.year_end, car.year_range) == (2002, 2002, "2002")
    assert car.vehicle_category == "coupe"
    assert car.region == "Europe"
    assert car.engine == "7.3L V12"
    assert car.engine_aspiration is None
    assert car.car_slug == "pagani_zonda_c12_s_2002"
    # 3 (make) + 2.775 (power)
    assert car.rarity_score == 5
    assert car.rarity_tier == "Rare"


def test_garbage_fields_degrade_to_absence():
    car = normalize(
        {
            "make": 42,
            "model": None,
            "horsepower": "lots",
            "production_numbers": {"n": 3},
            "zero_to_hundred": True,
            "drivetrain": ["AWD"],
            "vehicle_category": "spaceship",
            "confidence": "sure",
            "year_start": "long ago",
            "rarity_score": 99,
            "rarity_tier": "Mythic",
        }
    )
    assert car.make == "42"
    assert car.model == ""
    assert car.horsepower is None
    assert car.production_numbers is None
    assert car.zero_to_hundred is None
    assert car.drivetrain is None
    assert car.vehicle_category is None
    assert car.confidence is None
    assert car.year_start is None
    assert car.year_range is None
    assert car.rarity_score == 0
    assert car.rarity_tier == "Common"


@pytest.mark.parametrize("raw", [{}, None, []])
def test_empty_input_yields_defaults(raw):
    car = normalize(raw)
    assert car.make == ""
    assert car.model == ""
    assert car.car_slug is None
    assert car.prestige_class == "low"
    assert car.region == "Other"
    assert car.rarity_tier == "Common"


def test_descending_years_are_reordered():
    car = normalize({"make": "Lotus", "year_start": 2011, "year_end": 1996})
    assert (car.year_start, car.year_end) == (1996, 2011)
    assert car.year_range == "1996-2011"
    assert car.car_slug == "lotus_1996"


def test_record_is_immutable_and_mapping_like():
    car = normalize({"make": "Ford", "model": "Focus"})
    with pytest.raises(dataclasses.FrozenInstanceError):
        car.make = "Fiat"  # type: ignore[misc]
    assert isinstance(car, NormalizedRecord)
    assert car["model"] == "Focus"
    assert dict(car) == car.to_dict()
    assert "rarity_tier" in car
    assert "unknown_field" not in car
    with pytest.raises(KeyError):
        car["unknown_field"]


def test_oversized_json_integer_degrades_to_absence():
    raw = salvage_parse('{"make":"Ford","model":"GT","horsepower":1' + "0" * 400 + ',"production_numbers":1' + "0" * 400 + "}")
    car = normalize(raw)
    assert car.horsepower is None
    assert car.production_numbers is None
    assert car.car_slug == "ford_gt"
    assert car.rarity_score == 0
    assert car.rarity_tier == "Common"


def test_salvaged_payload_normalizes_end_to_end():
    raw = salvage_parse('Sure! {"make":"Ford","model":"Focus"} Hope that helps!')
    car = normalize(raw)
    assert (car.make, car.model) == ("Ford", "Focus")
    assert car.car_slug == "ford_focus"
    assert car.rarity_tier == "Common"
