from fastapi import HTTPException, status

from app.models.delivery import DeliveryStatus

DELIVERY_STATE_TRANSITIONS: dict[DeliveryStatus, set[DeliveryStatus]] = {
    DeliveryStatus.PENDING: {DeliveryStatus.ASSIGNED, DeliveryStatus.CANCELLED},
    DeliveryStatus.ASSIGNED: {DeliveryStatus.PICKED_UP, DeliveryStatus.CANCELLED},
    DeliveryStatus.PICKED_UP: {DeliveryStatus.IN_TRANSIT, DeliveryStatus.CANCELLED},
    DeliveryStatus.IN_TRANSIT: {DeliveryStatus.DELIVERED},
    DeliveryStatus.DELIVERED: set(),
    DeliveryStatus.CANCELLED: set(),
}

TERMINAL: set[DeliveryStatus] = {DeliveryStatus.DELIVERED, DeliveryStatus.CANCELLED}


def ensure_valid_transition(current: DeliveryStatus, next_status: DeliveryStatus) -> None:
    if next_status == current:
        return

    allowed = DELIVERY_STATE_TRANSITIONS.get(current, set())
    if next_status not in allowed:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Invalid state transition: {current.value} -> {next_status.value}",
        )


def is_terminal(value: DeliveryStatus) -> bool:
    return value in TERMINAL
