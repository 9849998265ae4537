"""Project a delivery status onto the three progress steps shown while tracking.

The projection is pure: the same status and pickup time always give the same
steps, and nothing is kept between calls.
"""

from dataclasses import dataclass
from datetime import datetime

from workers.tracking_worker.formatting import format_clock

ESTIMATED_ARRIVAL_PLACEHOLDER = "Estimated arrival soon"
WAITING_PLACEHOLDER = "Waiting for delivery"

NOT_IN_ORDERING = -1

# Canonical progress ordering. "cancelled" is deliberately absent.
STATUS_POSITIONS: dict[str, int] = {
    "pending": 0,
    "assigned": 1,
    "picked_up": 2,
    "in_transit": 3,
    "delivered": 4,
}

TERMINAL_STATUSES = frozenset({"delivered", "cancelled"})


@dataclass(frozen=True)
class StepDefinition:
    key: str
    label: str

    @property
    def position(self) -> int:
        return STATUS_POSITIONS[self.key]


DISPLAYED_STEPS: tuple[StepDefinition, ...] = (
    StepDefinition("picked_up", "Package picked up"),
    StepDefinition("in_transit", "On the way to destination"),
    StepDefinition("delivered", "Delivered"),
)


@dataclass(frozen=True)
class UIStep:
    key: str
    label: str
    completed: bool
    active: bool
    display_time: str


def status_position(status: str) -> int:
    return STATUS_POSITIONS.get(status, NOT_IN_ORDERING)


def is_cancelled(status: str) -> bool:
    return status == "cancelled"


def is_terminal(status: str) -> bool:
    return status in TERMINAL_STATUSES


def _display_time(completed: bool, active: bool, picked_up_at: datetime | str | None) -> str:
    if completed and picked_up_at is not None:
        return format_clock(picked_up_at)
    if active:
        return ESTIMATED_ARRIVAL_PLACEHOLDER
    return WAITING_PLACEHOLDER


def project_status_steps(
    status: str,
    picked_up_at: datetime | str | None = None,
) -> tuple[UIStep, ...]:
    """Return the displayed steps for ``status``.

    A step is completed when it lies strictly before the current status in the
    canonical ordering and active when it is the current status. Statuses
    outside the ordering (``cancelled`` or anything unknown) give three idle
    steps; callers render cancelled deliveries separately.
    """
    current = status_position(status)
    steps = []
    for step in DISPLAYED_STEPS:
        completed = current != NOT_IN_ORDERING and step.position < current
        active = step.position == current
        steps.append(
            UIStep(
                key=step.key,
                label=step.label,
                completed=completed,
                active=active,
                display_time=_display_time(completed, active, picked_up_at),
            )
        )
    return tuple(steps)
