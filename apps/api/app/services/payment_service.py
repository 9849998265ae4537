from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.models.delivery import DeliveryStatus
from app.observability import log_event, metrics_store
from app.schemas.payment import PaymentRequest, PaymentResponse
from app.services.deliveries_service import get_delivery


def simulate_payment(db: Session, delivery_id: int, payload: PaymentRequest) -> PaymentResponse:
    """Record nothing and settle nothing: the payment is accepted if it is coherent."""
    delivery = get_delivery(db, delivery_id)

    if payload.delivery_id is not None and payload.delivery_id != delivery_id:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="deliveryId does not match the payment URL",
        )
    if delivery.status == DeliveryStatus.CANCELLED:
        metrics_store.increment("payments_rejected_total")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Cancelled deliveries cannot be paid",
        )

    metrics_store.increment("payments_accepted_total")
    log_event("payment_simulated", delivery_id=delivery.id, status="paid")
    return PaymentResponse(delivery_id=delivery.id, method=payload.method, amount=payload.amount)
