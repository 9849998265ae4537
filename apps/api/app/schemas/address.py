from decimal import Decimal

from app.schemas.common import CamelModel


class AddressResponse(CamelModel):
    id: int
    user_id: int | None
    label: str
    street: str
    city: str
    postal_code: str
    country: str
    latitude: Decimal | None = None
    longitude: Decimal | None = None
