from decimal import Decimal

import pytest

from app.models.delivery import DeliveryType
from app.services.pricing import coordinate_pair, estimate_minutes, estimate_price, haversine_km


@pytest.mark.parametrize(
    ("delivery_type", "expected"),
    [
        (DeliveryType.LETTER, Decimal("8.50")),
        (DeliveryType.PACKAGE, Decimal("12.50")),
        (DeliveryType.EXPRESS, Decimal("15.75")),
    ],
)
def test_base_price_without_coordinates(delivery_type, expected):
    assert estimate_price(delivery_type) == expected


def test_distance_surcharge_is_half_euro_per_km():
    # one degree of longitude on the equator is ~111.19 km
    price = estimate_price(DeliveryType.PACKAGE, (0.0, 0.0), (0.0, 1.0))

    assert price == Decimal("68.10")


def test_same_point_costs_base_price():
    point = (52.3676, 4.9041)

    assert estimate_price(DeliveryType.EXPRESS, point, point) == Decimal("15.75")


def test_missing_dropoff_skips_distance_surcharge():
    assert estimate_price(DeliveryType.LETTER, (52.3676, 4.9041), None) == Decimal("8.50")


def test_haversine_is_symmetric():
    there = haversine_km(52.3676, 4.9041, 51.9244, 4.4777)
    back = haversine_km(51.9244, 4.4777, 52.3676, 4.9041)

    assert there == pytest.approx(back)
    assert 55 < there < 60


def test_estimate_minutes_faster_for_express():
    assert estimate_minutes(DeliveryType.EXPRESS) == 30
    assert estimate_minutes(DeliveryType.PACKAGE) == 45
    assert estimate_minutes(DeliveryType.LETTER) == 45


def test_coordinate_pair_requires_both_values():
    assert coordinate_pair(None, 4.9) is None
    assert coordinate_pair(52.3, None) is None
    assert coordinate_pair(Decimal("52.3"), "4.9") == (52.3, 4.9)
