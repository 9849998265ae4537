from datetime import datetime, timezone
from decimal import Decimal

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.config import settings
from app.models.delivery import Delivery, DeliveryStatus, DeliveryType
from app.observability import log_event, metrics_store
from app.schemas.delivery import DeliveryCreate, DeliveryDetailResponse, EstimateRequest
from app.services.drivers_service import first_available_driver, get_driver
from app.services.pricing import coordinate_pair, estimate_minutes, estimate_price
from app.services.state_machine import ensure_valid_transition, is_terminal


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _order_number(delivery_id: int, year: int) -> str:
    return f"SP{year}-{delivery_id:03d}"


def estimate_delivery(payload: EstimateRequest) -> tuple[Decimal, int]:
    price = estimate_price(
        payload.type,
        coordinate_pair(payload.pickup_latitude, payload.pickup_longitude),
        coordinate_pair(payload.delivery_latitude, payload.delivery_longitude),
    )
    return price, estimate_minutes(payload.type)


def create_delivery(db: Session, payload: DeliveryCreate) -> Delivery:
    delivery_type = DeliveryType(payload.type)
    delivery = Delivery(
        **payload.model_dump(),
        status=DeliveryStatus.PENDING,
        estimated_price=estimate_price(
            delivery_type,
            coordinate_pair(payload.pickup_latitude, payload.pickup_longitude),
            coordinate_pair(payload.delivery_latitude, payload.delivery_longitude),
        ),
        estimated_delivery_time=estimate_minutes(delivery_type),
    )
    db.add(delivery)
    db.flush()
    delivery.order_number = _order_number(delivery.id, _now_utc().year)

    driver = first_available_driver(db)
    if driver is not None:
        transition_delivery_status(db, delivery, DeliveryStatus.ASSIGNED, driver_id=driver.id)

    db.commit()
    db.refresh(delivery)
    metrics_store.increment("deliveries_created_total")
    log_event(
        "delivery_created",
        delivery_id=delivery.id,
        driver_id=delivery.driver_id,
        status=delivery.status.value,
    )
    return delivery


def get_delivery(db: Session, delivery_id: int) -> Delivery:
    delivery = db.get(Delivery, delivery_id)
    if not delivery:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Delivery not found")
    return delivery


def list_deliveries(db: Session) -> list[Delivery]:
    query = select(Delivery).order_by(Delivery.id.desc())
    return list(db.scalars(query).unique())


def list_user_deliveries(db: Session, user_id: int) -> list[Delivery]:
    query = select(Delivery).where(Delivery.user_id == user_id).order_by(Delivery.id.desc())
    return list(db.scalars(query).unique())


def transition_delivery_status(
    db: Session,
    delivery: Delivery,
    next_status: DeliveryStatus,
    driver_id: int | None = None,
) -> Delivery:
    previous_status = delivery.status
    ensure_valid_transition(previous_status, next_status)

    if driver_id is not None and driver_id != delivery.driver_id:
        if is_terminal(previous_status):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Driver cannot change on a {previous_status.value} delivery",
            )
        if next_status != DeliveryStatus.ASSIGNED:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Driver can only change when the delivery is assigned",
            )
        delivery.driver = get_driver(db, driver_id)
        delivery.driver_id = driver_id

    if previous_status == next_status:
        return delivery

    if next_status == DeliveryStatus.ASSIGNED and delivery.driver_id is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A driver is required to assign a delivery",
        )

    delivery.status = next_status
    if next_status == DeliveryStatus.PICKED_UP:
        delivery.picked_up_at = _now_utc()
    elif next_status == DeliveryStatus.DELIVERED:
        delivery.delivered_at = _now_utc()
        delivery.final_price = delivery.estimated_price

    metrics_store.increment(f"delivery_status_{next_status.value}_total")
    log_event(
        "delivery_status_changed",
        delivery_id=delivery.id,
        driver_id=delivery.driver_id,
        status=next_status.value,
    )
    return delivery


def update_delivery_status(
    db: Session,
    delivery_id: int,
    next_status: DeliveryStatus,
    driver_id: int | None = None,
) -> Delivery:
    delivery = get_delivery(db, delivery_id)
    transition_delivery_status(db, delivery, next_status, driver_id=driver_id)
    db.commit()
    db.refresh(delivery)
    return delivery


def accept_delivery(db: Session, delivery_id: int, driver_id: int | None = None) -> Delivery:
    return update_delivery_status(
        db,
        delivery_id,
        DeliveryStatus.ASSIGNED,
        driver_id=driver_id if driver_id is not None else settings.default_driver_id,
    )


def delivery_detail_payload(delivery: Delivery) -> dict:
    return DeliveryDetailResponse.model_validate(delivery).model_dump(mode="json", by_alias=True)
