from workers.tracking_worker.formatting import Coordinates
from workers.tracking_worker.maps import OpenStreetMapRenderer
from workers.tracking_worker.view import (
    TrackingPhase,
    build_tracking_view,
    loading_view,
    not_found_view,
    render_tracking_view,
)


def test_tracking_view_carries_steps_driver_and_details(make_snapshot):
    view = build_tracking_view(
        make_snapshot("in_transit", pickedUpAt="2024-01-01T10:00:00Z")
    )

    assert view.phase == TrackingPhase.TRACKING
    assert [step.active for step in view.steps] == [False, True, False]
    assert view.driver.name == "Marco van der Berg"
    assert view.driver.initial == "M"
    assert view.driver.rating == "4.8"
    assert view.details.order_number == "SP2026-042"
    assert view.details.type_label == "Package"
    assert view.details.price == "€13.81"
    assert view.details.from_street == "Keizersgracht 123"
    assert view.details.to_street == "Vondelpark 45"


def test_final_price_replaces_estimate_once_known(make_snapshot):
    view = build_tracking_view(make_snapshot("delivered", finalPrice="14.20"))

    assert view.details.price == "€14.20"


def test_cancelled_delivery_short_circuits_projection(make_snapshot):
    view = build_tracking_view(make_snapshot("cancelled"))

    assert view.phase == TrackingPhase.CANCELLED
    assert view.steps == ()
    assert view.driver is None
    assert view.details.order_number == "SP2026-042"


def test_unknown_status_still_renders_idle_steps(make_snapshot):
    view = build_tracking_view(make_snapshot("on_hold"))

    assert view.phase == TrackingPhase.TRACKING
    assert not any(step.active or step.completed for step in view.steps)


def test_markers_use_parsed_coordinates(make_snapshot):
    view = build_tracking_view(make_snapshot("assigned"))

    assert view.markers.pickup == Coordinates(52.3676, 4.9041)
    assert view.markers.delivery == Coordinates(52.358, 4.869)
    assert view.markers.driver == Coordinates(52.3702, 4.8952)
    assert view.markers.address == "Vondelpark 45"


def test_missing_coordinates_are_left_off_the_map(make_snapshot):
    view = build_tracking_view(
        make_snapshot("pending", pickupLatitude=None, deliveryLongitude=None, driver=None)
    )

    assert view.markers.points() == []
    assert view.driver is None


def test_missing_order_number_falls_back_to_id(make_snapshot):
    view = build_tracking_view(make_snapshot("pending", orderNumber=None))

    assert view.details.order_number == "#42"


def test_render_loading_and_not_found():
    assert render_tracking_view(loading_view(42)) == ["Loading delivery..."]
    assert render_tracking_view(not_found_view(42)) == ["Delivery not found"]


def test_render_tracking_view_lists_steps_and_map(make_snapshot):
    view = build_tracking_view(make_snapshot("in_transit", pickedUpAt="2024-01-01T10:00:00Z"))

    lines = render_tracking_view(view, OpenStreetMapRenderer())

    assert lines[0] == "Order SP2026-042 (Package) €13.81"
    assert "[x] Package picked up - 10:00" in lines
    assert "[>] On the way to destination - Estimated arrival soon" in lines
    assert "[ ] Delivered - Waiting for delivery" in lines
    assert "Driver: Marco van der Berg (4.8), Toyota Hiace" in lines
    assert lines[-1].startswith("Map: https://www.openstreetmap.org/export/embed.html?")


def test_render_cancelled_view(make_snapshot):
    lines = render_tracking_view(build_tracking_view(make_snapshot("cancelled")))

    assert lines[-1] == "This delivery has been cancelled"
    assert not any(line.startswith("[") for line in lines)
