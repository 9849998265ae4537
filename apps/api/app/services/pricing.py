import math
from decimal import ROUND_HALF_UP, Decimal

from app.models.delivery import DeliveryType

EARTH_RADIUS_KM = 6371.0
PRICE_PER_KM = Decimal("0.50")
CURRENCY = "EUR"

BASE_PRICES: dict[DeliveryType, Decimal] = {
    DeliveryType.LETTER: Decimal("8.50"),
    DeliveryType.PACKAGE: Decimal("12.50"),
    DeliveryType.EXPRESS: Decimal("15.75"),
}

_CENTS = Decimal("0.01")


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def estimate_price(
    delivery_type: DeliveryType,
    pickup: tuple[float, float] | None = None,
    dropoff: tuple[float, float] | None = None,
) -> Decimal:
    price = BASE_PRICES[delivery_type]
    if pickup is not None and dropoff is not None:
        distance_km = haversine_km(pickup[0], pickup[1], dropoff[0], dropoff[1])
        price += Decimal(str(distance_km)) * PRICE_PER_KM
    return price.quantize(_CENTS, rounding=ROUND_HALF_UP)


def estimate_minutes(delivery_type: DeliveryType) -> int:
    return 30 if delivery_type == DeliveryType.EXPRESS else 45


def coordinate_pair(lat, lng) -> tuple[float, float] | None:
    if lat is None or lng is None:
        return None
    return float(lat), float(lng)
