from dataclasses import dataclass
from enum import Enum

from workers.tracking_worker.formatting import format_price, parse_coordinates
from workers.tracking_worker.maps import MapMarkers, MapRenderer
from workers.tracking_worker.models import DeliverySnapshot, DriverSnapshot
from workers.tracking_worker.status_projector import UIStep, is_cancelled, project_status_steps

DELIVERY_TYPE_LABELS = {
    "package": "Package",
    "letter": "Letter",
    "express": "Express",
}


class TrackingPhase(str, Enum):
    LOADING = "loading"
    NOT_FOUND = "not_found"
    CANCELLED = "cancelled"
    TRACKING = "tracking"


@dataclass(frozen=True)
class DriverCard:
    name: str
    initial: str
    rating: str | None
    vehicle: str


@dataclass(frozen=True)
class DeliveryDetails:
    order_number: str
    type_label: str
    price: str
    from_street: str
    to_street: str


@dataclass(frozen=True)
class TrackingView:
    phase: TrackingPhase
    delivery_id: int | None = None
    status: str | None = None
    steps: tuple[UIStep, ...] = ()
    driver: DriverCard | None = None
    details: DeliveryDetails | None = None
    markers: MapMarkers | None = None


def loading_view(delivery_id: int | None = None) -> TrackingView:
    return TrackingView(phase=TrackingPhase.LOADING, delivery_id=delivery_id)


def not_found_view(delivery_id: int | None = None) -> TrackingView:
    return TrackingView(phase=TrackingPhase.NOT_FOUND, delivery_id=delivery_id)


def _driver_card(driver: DriverSnapshot | None) -> DriverCard | None:
    if driver is None:
        return None
    return DriverCard(
        name=driver.name,
        initial=driver.name[:1].upper(),
        rating=str(driver.rating) if driver.rating is not None else None,
        vehicle=driver.vehicle,
    )


def _details(delivery: DeliverySnapshot) -> DeliveryDetails:
    price = delivery.final_price if delivery.final_price is not None else delivery.estimated_price
    return DeliveryDetails(
        order_number=delivery.order_number or f"#{delivery.id}",
        type_label=DELIVERY_TYPE_LABELS.get(delivery.type, delivery.type),
        price=format_price(price),
        from_street=delivery.pickup_street,
        to_street=delivery.delivery_street,
    )


def _markers(delivery: DeliverySnapshot) -> MapMarkers:
    driver = delivery.driver
    return MapMarkers(
        pickup=parse_coordinates(delivery.pickup_latitude, delivery.pickup_longitude),
        delivery=parse_coordinates(delivery.delivery_latitude, delivery.delivery_longitude),
        driver=(
            parse_coordinates(driver.current_latitude, driver.current_longitude)
            if driver is not None
            else None
        ),
        address=delivery.delivery_street,
    )


def build_tracking_view(delivery: DeliverySnapshot) -> TrackingView:
    """Turn a fetched delivery into everything the tracking screen shows."""
    if is_cancelled(delivery.status):
        return TrackingView(
            phase=TrackingPhase.CANCELLED,
            delivery_id=delivery.id,
            status=delivery.status,
            details=_details(delivery),
        )

    return TrackingView(
        phase=TrackingPhase.TRACKING,
        delivery_id=delivery.id,
        status=delivery.status,
        steps=project_status_steps(delivery.status, delivery.picked_up_at),
        driver=_driver_card(delivery.driver),
        details=_details(delivery),
        markers=_markers(delivery),
    )


def render_tracking_view(view: TrackingView, renderer: MapRenderer | None = None) -> list[str]:
    if view.phase == TrackingPhase.LOADING:
        return ["Loading delivery..."]
    if view.phase == TrackingPhase.NOT_FOUND:
        return ["Delivery not found"]

    lines: list[str] = []
    details = view.details
    if details is not None:
        lines.append(f"Order {details.order_number} ({details.type_label}) {details.price}")
        lines.append(f"From: {details.from_street}")
        lines.append(f"To: {details.to_street}")

    if view.phase == TrackingPhase.CANCELLED:
        lines.append("This delivery has been cancelled")
        return lines

    for step in view.steps:
        marker = "x" if step.completed else (">" if step.active else " ")
        lines.append(f"[{marker}] {step.label} - {step.display_time}")

    if view.driver is not None:
        rating = f" ({view.driver.rating})" if view.driver.rating else ""
        lines.append(f"Driver: {view.driver.name}{rating}, {view.driver.vehicle}")

    if renderer is not None and view.markers is not None and view.markers.points():
        lines.append(f"Map: {renderer.render_markers(view.markers)}")
    return lines
