from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import Field, field_validator

from app.models.delivery import DeliveryStatus, DeliveryType
from app.schemas.common import CamelModel
from app.schemas.driver import DriverResponse


class DeliveryCreate(CamelModel):
    user_id: int | None = None
    type: DeliveryType

    pickup_address_id: int | None = None
    pickup_street: str = Field(min_length=1, max_length=255)
    pickup_city: str = Field(min_length=1, max_length=255)
    pickup_postal_code: str = Field(min_length=1, max_length=20)
    pickup_latitude: Decimal | None = Field(default=None, ge=-90, le=90)
    pickup_longitude: Decimal | None = Field(default=None, ge=-180, le=180)

    delivery_address_id: int | None = None
    delivery_street: str = Field(min_length=1, max_length=255)
    delivery_city: str = Field(min_length=1, max_length=255)
    delivery_postal_code: str = Field(min_length=1, max_length=20)
    delivery_latitude: Decimal | None = Field(default=None, ge=-90, le=90)
    delivery_longitude: Decimal | None = Field(default=None, ge=-180, le=180)

    @field_validator(
        "pickup_street",
        "pickup_city",
        "pickup_postal_code",
        "delivery_street",
        "delivery_city",
        "delivery_postal_code",
    )
    @classmethod
    def strip_strings(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("must not be blank")
        return stripped


class DeliveryResponse(CamelModel):
    id: int
    user_id: int | None
    driver_id: int | None
    order_number: str | None
    type: DeliveryType
    status: DeliveryStatus

    pickup_address_id: int | None
    pickup_street: str
    pickup_city: str
    pickup_postal_code: str
    pickup_latitude: Decimal | None
    pickup_longitude: Decimal | None

    delivery_address_id: int | None
    delivery_street: str
    delivery_city: str
    delivery_postal_code: str
    delivery_latitude: Decimal | None
    delivery_longitude: Decimal | None

    estimated_price: Decimal
    final_price: Decimal | None
    estimated_delivery_time: int | None

    created_at: datetime
    picked_up_at: datetime | None
    delivered_at: datetime | None


class DeliveryDetailResponse(DeliveryResponse):
    driver: DriverResponse | None = None


class DeliveryStatusUpdate(CamelModel):
    status: DeliveryStatus
    driver_id: int | None = None


class DeliveryAcceptRequest(CamelModel):
    driver_id: int | None = None


class EstimateRequest(CamelModel):
    type: DeliveryType = DeliveryType.PACKAGE
    pickup_latitude: float | None = Field(default=None, ge=-90, le=90)
    pickup_longitude: float | None = Field(default=None, ge=-180, le=180)
    delivery_latitude: float | None = Field(default=None, ge=-90, le=90)
    delivery_longitude: float | None = Field(default=None, ge=-180, le=180)


class EstimateResponse(CamelModel):
    estimated_price: Decimal
    estimated_time: int
    currency: Literal["EUR"] = "EUR"
