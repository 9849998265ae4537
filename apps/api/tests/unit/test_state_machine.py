import pytest
from fastapi import HTTPException

from app.models.delivery import DeliveryStatus
from app.services.state_machine import (
    DELIVERY_STATE_TRANSITIONS,
    ensure_valid_transition,
    is_terminal,
)


@pytest.mark.parametrize(
    ("current", "next_status"),
    [
        (DeliveryStatus.PENDING, DeliveryStatus.ASSIGNED),
        (DeliveryStatus.PENDING, DeliveryStatus.CANCELLED),
        (DeliveryStatus.ASSIGNED, DeliveryStatus.PICKED_UP),
        (DeliveryStatus.PICKED_UP, DeliveryStatus.IN_TRANSIT),
        (DeliveryStatus.IN_TRANSIT, DeliveryStatus.DELIVERED),
    ],
)
def test_forward_transitions_are_allowed(current, next_status):
    ensure_valid_transition(current, next_status)


@pytest.mark.parametrize(
    ("current", "next_status"),
    [
        (DeliveryStatus.PENDING, DeliveryStatus.DELIVERED),
        (DeliveryStatus.IN_TRANSIT, DeliveryStatus.CANCELLED),
        (DeliveryStatus.DELIVERED, DeliveryStatus.IN_TRANSIT),
        (DeliveryStatus.CANCELLED, DeliveryStatus.PENDING),
    ],
)
def test_invalid_transitions_raise_conflict(current, next_status):
    with pytest.raises(HTTPException) as exc_info:
        ensure_valid_transition(current, next_status)

    assert exc_info.value.status_code == 409
    expected = f"Invalid state transition: {current.value} -> {next_status.value}"
    assert exc_info.value.detail == expected


def test_same_status_is_a_no_op():
    ensure_valid_transition(DeliveryStatus.DELIVERED, DeliveryStatus.DELIVERED)


def test_terminal_states_have_no_exits():
    for status in DeliveryStatus:
        assert is_terminal(status) == (not DELIVERY_STATE_TRANSITIONS[status])
