from decimal import Decimal

from pydantic import AliasChoices, Field

from app.models.driver import VehicleType
from app.schemas.common import CamelModel


class DriverResponse(CamelModel):
    id: int
    name: str
    phone: str
    email: str
    rating: Decimal | None = None
    vehicle: str
    vehicle_type: VehicleType
    is_active: bool
    current_latitude: Decimal | None = None
    current_longitude: Decimal | None = None


class DriverLocationUpdate(CamelModel):
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)


class DriverLocationReport(CamelModel):
    driver_id: int | None = None
    latitude: float | None = Field(
        default=None,
        ge=-90,
        le=90,
        validation_alias=AliasChoices("lat", "latitude"),
    )
    longitude: float | None = Field(
        default=None,
        ge=-180,
        le=180,
        validation_alias=AliasChoices("lng", "longitude"),
    )
