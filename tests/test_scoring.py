import pytest

from rarity.config import DEFAULT_SCORING, ScoringConfig
from rarity.data_models import RARITY_TIERS
from rarity.scoring import (
    acceleration_contribution,
    category_contribution,
    make_contribution,
    power_contribution,
    production_contribution,
    score,
    tier,
)


@pytest.mark.parametrize(
    "production, points",
    [
        (1, 10), (9, 10), (10, 8), (29, 8), (30, 6), (99, 6), (100, 4), (999, 4),
        (1_000, 3), (4_999, 3), (5_000, 2), (19_999, 2), (20_000, 1), (99_999, 1),
        (100_000, 0), (2_000_000, 0), (None, 0),
    ],
)
def test_production_buckets(production, points):
    assert production_contribution(production) == points


def test_production_contribution_never_increases_with_volume():
    volumes = [0, 5, 9, 10, 11, 29, 30, 99, 100, 999, 1_000, 4_999, 5_000, 19_999, 20_000, 99_999, 100_000]
    points = [score({"production_numbers": v}) for v in volumes]
    assert points == sorted(points, reverse=True)


@pytest.mark.parametrize(
    "seconds, points",
    [(2.4, 3), (3.49, 3), (3.5, 2), (3.7, 2), (4.99, 2), (5.0, 1), (6.9, 1), (7.0, 0), (12.0, 0), (None, 0)],
)
def test_acceleration_buckets(seconds, points):
    assert acceleration_contribution(seconds) == points


def test_power_contribution_is_continuous_and_capped():
    assert power_contribution(555) == pytest.approx(2.775)
    assert power_contribution(100) == pytest.approx(0.5)
    assert power_contribution(600) == pytest.approx(3.0)
    assert power_contribution(1500) == pytest.approx(3.0)
    assert power_contribution(None) == 0.0


@pytest.mark.parametrize(
    "make, points",
    [
        ("Pagani", 3), ("BUGATTI", 3), ("koenigsegg", 3), ("Rimac", 3),
        ("Ferrari", 2), ("aston martin", 2), ("McLaren", 2), ("Porsche", 2), ("Lamborghini", 2),
        ("BMW", 1), ("Mercedes-Benz", 1), ("Dodge", 1), ("Chevrolet", 1),
        ("Pagani Automobili", 0), ("Fiat", 0), (None, 0), ("", 0),
    ],
)
def test_make_contribution(make, points):
    assert make_contribution(make) == points


@pytest.mark.parametrize(
    "category, points",
    [("hypercar", 4), ("track-only", 5), ("supercar", 2), ("sedan", 0), ("other", 0), (None, 0)],
)
def test_category_contribution(category, points):
    assert category_contribution(category) == points


def test_score_empty_record_is_zero():
    assert score({}) == 0
    assert tier(score({})) == "Common"


def test_score_truncates_fractional_sum():
    # 2.775 + 3 + 4 + 6 + 2 = 17.775
    fields = {
        "make": "Pagani",
        "production_numbers": 40,
        "horsepower": 555,
        "vehicle_category": "hypercar",
        "zero_to_hundred": 3.7,
    }
    assert score(fields) == 17


def test_score_is_order_independent():
    fields = {"make": "Ferrari", "horsepower": 710, "zero_to_hundred": 2.9, "production_numbers": 499}
    reordered = dict(reversed(list(fields.items())))
    assert score(fields) == score(reordered) == 12


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, "Common"), (2, "Common"), (3, "Uncommon"), (4, "Uncommon"), (5, "Rare"), (7, "Rare"),
        (8, "Epic"), (11, "Epic"), (12, "Legendary"), (17, "Legendary"), (18, "Mythic"), (25, "Mythic"),
    ],
)
def test_tier_thresholds(value, expected):
    assert tier(value) == expected


def test_tier_is_monotonic():
    ranks = [RARITY_TIERS.index(tier(value)) for value in range(0, 30)]
    assert ranks == sorted(ranks)


def test_custom_config_changes_weights():
    config = ScoringConfig(category_bonus={"sedan": 7})
    assert score({"vehicle_category": "sedan"}, config) == 7
    assert score({"vehicle_category": "sedan"}) == 0
    assert DEFAULT_SCORING.category_bonus["track-only"] == 5
