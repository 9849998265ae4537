from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SnapshotModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class DriverSnapshot(SnapshotModel):
    id: int
    name: str
    rating: Decimal | None = None
    vehicle: str
    vehicle_type: str | None = None
    phone: str | None = None
    current_latitude: Decimal | None = None
    current_longitude: Decimal | None = None


class DeliverySnapshot(SnapshotModel):
    id: int
    order_number: str | None = None
    type: str
    # kept as a plain string: unknown server statuses must still parse
    status: str
    pickup_street: str
    pickup_city: str | None = None
    pickup_latitude: Decimal | None = None
    pickup_longitude: Decimal | None = None
    delivery_street: str
    delivery_city: str | None = None
    delivery_latitude: Decimal | None = None
    delivery_longitude: Decimal | None = None
    estimated_price: Decimal
    final_price: Decimal | None = None
    estimated_delivery_time: int | None = None
    created_at: datetime | None = None
    picked_up_at: datetime | None = None
    delivered_at: datetime | None = None
    driver: DriverSnapshot | None = None


class AddressRecord(SnapshotModel):
    id: int
    label: str
    street: str
    city: str
    postal_code: str | None = None
    latitude: Decimal | None = None
    longitude: Decimal | None = None


class PublicConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    google_maps_api_key: str | None = Field(default=None, alias="GOOGLE_MAPS_API_KEY")
    locationiq_api_key: str | None = Field(default=None, alias="LOCATIONIQ_API_KEY")


@dataclass(frozen=True)
class DeliveryFetch:
    """Outcome of one conditional GET against the delivery store."""

    delivery: DeliverySnapshot | None
    etag: str | None = None
    not_modified: bool = False
