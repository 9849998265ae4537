import pytest

from workers.tracking_worker.models import DeliverySnapshot


def _delivery_json(status: str = "assigned", **overrides) -> dict:
    body = {
        "id": 42,
        "orderNumber": "SP2026-042",
        "type": "package",
        "status": status,
        "pickupStreet": "Keizersgracht 123",
        "pickupCity": "Amsterdam",
        "pickupLatitude": "52.36760000",
        "pickupLongitude": "4.90410000",
        "deliveryStreet": "Vondelpark 45",
        "deliveryCity": "Amsterdam",
        "deliveryLatitude": "52.35800000",
        "deliveryLongitude": "4.86900000",
        "estimatedPrice": "13.81",
        "finalPrice": None,
        "estimatedDeliveryTime": 45,
        "createdAt": "2024-01-01T09:30:00Z",
        "pickedUpAt": None,
        "deliveredAt": None,
        "driver": {
            "id": 1,
            "name": "Marco van der Berg",
            "rating": "4.8",
            "vehicle": "Toyota Hiace",
            "vehicleType": "van",
            "phone": "+31687654321",
            "currentLatitude": "52.37020000",
            "currentLongitude": "4.89520000",
        },
    }
    body.update(overrides)
    return body


@pytest.fixture
def delivery_json():
    return _delivery_json


@pytest.fixture
def make_snapshot():
    def _make(status: str = "assigned", **overrides) -> DeliverySnapshot:
        return DeliverySnapshot.model_validate(_delivery_json(status, **overrides))

    return _make
