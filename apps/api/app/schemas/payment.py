from decimal import Decimal
from typing import Literal

from pydantic import Field, model_validator

from app.schemas.common import CamelModel

PaymentMethod = Literal["ideal", "card", "paypal", "bancontact"]


class CardDetails(CamelModel):
    number: str = Field(min_length=12, max_length=23)
    expiry: str = Field(pattern=r"^\d{2}/\d{2}$")
    cvv: str = Field(pattern=r"^\d{3,4}$")
    name: str = Field(min_length=1, max_length=255)


class PaymentRequest(CamelModel):
    method: PaymentMethod
    amount: Decimal = Field(gt=0, max_digits=8, decimal_places=2)
    delivery_id: int | None = None
    card_details: CardDetails | None = None

    @model_validator(mode="after")
    def card_details_match_method(self) -> "PaymentRequest":
        if self.method == "card" and self.card_details is None:
            raise ValueError("cardDetails is required for card payments")
        if self.method != "card" and self.card_details is not None:
            raise ValueError("cardDetails is only accepted for card payments")
        return self


class PaymentResponse(CamelModel):
    delivery_id: int
    status: Literal["paid"] = "paid"
    method: PaymentMethod
    amount: Decimal
