from datetime import datetime, timedelta, timezone

import pytest

from workers.tracking_worker.status_projector import (
    ESTIMATED_ARRIVAL_PLACEHOLDER,
    WAITING_PLACEHOLDER,
    is_terminal,
    project_status_steps,
    status_position,
)

STEP_KEYS = ["picked_up", "in_transit", "delivered"]


def _flags(steps):
    return [(step.key, step.completed, step.active) for step in steps]


def test_steps_are_always_three_in_fixed_order():
    for status in ("pending", "assigned", "picked_up", "in_transit", "delivered", "cancelled"):
        assert [step.key for step in project_status_steps(status)] == STEP_KEYS


@pytest.mark.parametrize("status", ["picked_up", "in_transit", "delivered"])
def test_exactly_one_step_is_active_for_displayed_statuses(status):
    active = [step.key for step in project_status_steps(status) if step.active]

    assert active == [status]


@pytest.mark.parametrize("status", ["pending", "assigned"])
def test_early_statuses_leave_every_step_idle(status):
    steps = project_status_steps(status)

    assert all(not step.completed and not step.active for step in steps)
    assert all(step.display_time == WAITING_PLACEHOLDER for step in steps)


def test_delivered_completes_previous_steps_and_keeps_last_active():
    steps = project_status_steps("delivered", "2024-01-01T10:00:00Z")

    assert _flags(steps) == [
        ("picked_up", True, False),
        ("in_transit", True, False),
        ("delivered", False, True),
    ]


def test_in_transit_with_pickup_time():
    steps = project_status_steps("in_transit", "2024-01-01T10:00:00Z")

    assert _flags(steps) == [
        ("picked_up", True, False),
        ("in_transit", False, True),
        ("delivered", False, False),
    ]
    assert [step.display_time for step in steps] == [
        "10:00",
        ESTIMATED_ARRIVAL_PLACEHOLDER,
        WAITING_PLACEHOLDER,
    ]


def test_completed_step_without_pickup_time_falls_back_to_waiting():
    steps = project_status_steps("in_transit")

    assert steps[0].completed
    assert steps[0].display_time == WAITING_PLACEHOLDER


def test_pickup_time_keeps_its_own_timezone():
    amsterdam = timezone(timedelta(hours=2))
    picked_up_at = datetime(2024, 6, 1, 14, 5, tzinfo=amsterdam)

    steps = project_status_steps("delivered", picked_up_at)

    assert steps[0].display_time == "14:05"
    assert steps[1].display_time == "14:05"


@pytest.mark.parametrize("status", ["cancelled", "lost_in_space", ""])
def test_statuses_outside_the_ordering_yield_idle_steps(status):
    steps = project_status_steps(status, "2024-01-01T10:00:00Z")

    assert status_position(status) == -1
    assert all(not step.completed and not step.active for step in steps)


def test_projection_is_idempotent():
    first = project_status_steps("in_transit", "2024-01-01T10:00:00Z")
    second = project_status_steps("in_transit", "2024-01-01T10:00:00Z")

    assert first == second


def test_terminal_statuses():
    assert is_terminal("delivered")
    assert is_terminal("cancelled")
    assert not is_terminal("in_transit")
