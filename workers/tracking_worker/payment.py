from collections.abc import Callable
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any

from workers.tracking_worker.api_client import DeliveryStoreClient
from workers.tracking_worker.errors import DeliveryStoreError, PaymentRejectedError
from workers.tracking_worker.formatting import format_card_number
from workers.tracking_worker.observability import log_event

GENERIC_PAYMENT_ERROR = "Something went wrong while processing the payment."
PAYMENT_SUCCESS_TITLE = "Payment successful"
PAYMENT_SUCCESS_DESCRIPTION = "Your parcel is now being prepared for delivery."
PAYMENT_FAILURE_TITLE = "Payment failed"


class PaymentMethod(str, Enum):
    IDEAL = "ideal"
    CARD = "card"
    PAYPAL = "paypal"
    BANCONTACT = "bancontact"


@dataclass(frozen=True)
class CardDetails:
    number: str
    expiry: str
    cvv: str
    name: str

    def is_complete(self) -> bool:
        return all((self.number, self.expiry, self.cvv, self.name))

    def as_payload(self) -> dict[str, str]:
        return {
            "number": format_card_number(self.number),
            "expiry": self.expiry,
            "cvv": self.cvv,
            "name": self.name,
        }


@dataclass(frozen=True)
class Toast:
    title: str
    description: str
    variant: str = "default"


@dataclass
class PaymentForm:
    """Simulated checkout for one delivery. Stays editable after a failure."""

    delivery_id: int
    amount: Decimal
    method: PaymentMethod = PaymentMethod.IDEAL
    card_details: CardDetails | None = None
    processing: bool = field(default=False, init=False)

    def can_submit(self) -> bool:
        if self.processing:
            return False
        if self.method == PaymentMethod.CARD:
            return self.card_details is not None and self.card_details.is_complete()
        return True

    def body(self) -> dict[str, Any]:
        card = None
        if self.method == PaymentMethod.CARD and self.card_details is not None:
            card = self.card_details.as_payload()
        return {
            "method": self.method.value,
            "amount": str(self.amount),
            "deliveryId": self.delivery_id,
            "cardDetails": card,
        }

    async def submit(
        self,
        client: DeliveryStoreClient,
        on_complete: Callable[[], None] | None = None,
    ) -> Toast:
        if not self.can_submit():
            return Toast(PAYMENT_FAILURE_TITLE, "Complete the card details first.", "destructive")

        self.processing = True
        try:
            await client.submit_payment(self.delivery_id, self.body())
        except PaymentRejectedError as err:
            log_event("payment_rejected", delivery_id=self.delivery_id, status=str(err.status_code))
            return Toast(PAYMENT_FAILURE_TITLE, err.message or GENERIC_PAYMENT_ERROR, "destructive")
        except DeliveryStoreError as err:
            log_event("payment_failed", delivery_id=self.delivery_id, status=err.code)
            return Toast(PAYMENT_FAILURE_TITLE, GENERIC_PAYMENT_ERROR, "destructive")
        finally:
            self.processing = False

        log_event("payment_completed", delivery_id=self.delivery_id, status="paid")
        if on_complete is not None:
            on_complete()
        return Toast(PAYMENT_SUCCESS_TITLE, PAYMENT_SUCCESS_DESCRIPTION)
