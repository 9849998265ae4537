from decimal import Decimal

import pytest

from app.models.driver import Driver, VehicleType


def test_create_delivery_returns_camel_case_record_with_driver(client, delivery_payload):
    response = client.post("/api/deliveries", json=delivery_payload)

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "assigned"
    assert body["orderNumber"].startswith("SP")
    assert body["estimatedDeliveryTime"] == 45
    assert Decimal(body["estimatedPrice"]) > Decimal("12.50")
    assert body["finalPrice"] is None
    assert body["pickedUpAt"] is None
    assert body["driver"]["name"] == "Marco van der Berg"
    assert body["driver"]["vehicleType"] == "van"


def test_create_delivery_rejects_blank_street(client, delivery_payload):
    response = client.post("/api/deliveries", json={**delivery_payload, "pickupStreet": "   "})

    assert response.status_code == 422


def test_create_delivery_rejects_unknown_type(client, delivery_payload):
    response = client.post("/api/deliveries", json={**delivery_payload, "type": "pallet"})

    assert response.status_code == 422


def test_get_delivery_embeds_driver_and_sets_cache_headers(client, created_delivery):
    response = client.get(f"/api/deliveries/{created_delivery['id']}")

    assert response.status_code == 200
    assert response.json()["driver"]["id"] == 1
    assert response.headers["ETag"].startswith('"')
    assert response.headers["Cache-Control"] == "no-cache"


def test_get_delivery_returns_304_for_matching_etag(client, created_delivery):
    first = client.get(f"/api/deliveries/{created_delivery['id']}")
    etag = first.headers["ETag"]

    second = client.get(
        f"/api/deliveries/{created_delivery['id']}", headers={"If-None-Match": etag}
    )

    assert second.status_code == 304
    assert second.content == b""
    assert second.headers["ETag"] == etag


def test_etag_changes_when_status_changes(client, created_delivery, advance_delivery):
    delivery_id = created_delivery["id"]
    etag = client.get(f"/api/deliveries/{delivery_id}").headers["ETag"]

    advance_delivery(delivery_id, "picked_up")
    response = client.get(f"/api/deliveries/{delivery_id}", headers={"If-None-Match": etag})

    assert response.status_code == 200
    assert response.headers["ETag"] != etag
    assert response.json()["status"] == "picked_up"


def test_get_unknown_delivery_is_404(client):
    response = client.get("/api/deliveries/9999")

    assert response.status_code == 404
    assert response.json() == {"detail": "Delivery not found"}


def test_status_lifecycle_over_http(client, created_delivery, advance_delivery):
    delivered = advance_delivery(created_delivery["id"], "delivered")

    assert delivered["status"] == "delivered"
    assert delivered["pickedUpAt"] is not None
    assert delivered["deliveredAt"] is not None
    assert delivered["finalPrice"] == delivered["estimatedPrice"]


def test_status_update_accepts_post_as_well_as_patch(client, created_delivery):
    response = client.post(
        f"/api/deliveries/{created_delivery['id']}/status", json={"status": "cancelled"}
    )

    assert response.status_code == 200
    assert response.json()["status"] == "cancelled"


def test_invalid_status_transition_is_409(client, created_delivery):
    response = client.patch(
        f"/api/deliveries/{created_delivery['id']}/status", json={"status": "delivered"}
    )

    assert response.status_code == 409
    assert response.json()["detail"] == "Invalid state transition: assigned -> delivered"


def test_accept_pending_delivery_without_body_uses_default_driver(
    client, db_session, delivery_payload
):
    db_session.get(Driver, 1).is_active = False
    db_session.commit()
    created = client.post("/api/deliveries", json=delivery_payload).json()
    assert created["status"] == "pending"
    assert created["driver"] is None

    response = client.post(f"/api/deliveries/{created['id']}/accept")

    assert response.status_code == 200
    assert response.json()["status"] == "assigned"
    assert response.json()["driverId"] == 1


def test_accept_cancelled_delivery_is_409(client, created_delivery):
    client.patch(f"/api/deliveries/{created_delivery['id']}/status", json={"status": "cancelled"})

    response = client.post(
        f"/api/deliveries/{created_delivery['id']}/accept", json={"driverId": 1}
    )

    assert response.status_code == 409


def test_list_deliveries_newest_first(client, delivery_payload):
    first = client.post("/api/deliveries", json=delivery_payload).json()
    second = client.post("/api/deliveries", json={**delivery_payload, "type": "letter"}).json()

    all_items = client.get("/api/deliveries").json()
    user_items = client.get("/api/deliveries/user/1").json()

    assert [item["id"] for item in all_items] == [second["id"], first["id"]]
    assert [item["id"] for item in user_items] == [second["id"], first["id"]]
    assert client.get("/api/deliveries/user/2").json() == []


def test_estimate_without_coordinates_returns_base_price(client):
    response = client.post("/api/estimate", json={"type": "express"})

    assert response.status_code == 200
    assert response.json() == {
        "estimatedPrice": "15.75",
        "estimatedTime": 30,
        "currency": "EUR",
    }


def test_estimate_with_coordinates_adds_distance(client):
    response = client.post(
        "/api/estimate",
        json={
            "type": "package",
            "pickupLatitude": 0.0,
            "pickupLongitude": 0.0,
            "deliveryLatitude": 0.0,
            "deliveryLongitude": 1.0,
        },
    )

    assert response.status_code == 200
    assert response.json()["estimatedPrice"] == "68.10"


@pytest.fixture
def second_driver(db_session) -> int:
    driver = Driver(
        name="Sanne de Vries",
        phone="+31611122233",
        email="sanne@spoedpakketjes.nl",
        vehicle="Gazelle cargo bike",
        vehicle_type=VehicleType.BIKE,
        is_active=True,
    )
    db_session.add(driver)
    db_session.commit()
    return driver.id


def test_driver_cannot_change_on_delivered_delivery(
    client, created_delivery, advance_delivery, second_driver
):
    delivery_id = created_delivery["id"]
    advance_delivery(delivery_id, "delivered")

    response = client.patch(
        f"/api/deliveries/{delivery_id}/status",
        json={"status": "delivered", "driverId": second_driver},
    )

    assert response.status_code == 409
    assert response.json()["detail"] == "Driver cannot change on a delivered delivery"
    assert client.get(f"/api/deliveries/{delivery_id}").json()["driverId"] == 1


def test_driver_cannot_change_mid_delivery(client, created_delivery, second_driver):
    response = client.patch(
        f"/api/deliveries/{created_delivery['id']}/status",
        json={"status": "picked_up", "driverId": second_driver},
    )

    assert response.status_code == 409
    body = client.get(f"/api/deliveries/{created_delivery['id']}").json()
    assert body["status"] == "assigned"
    assert body["driverId"] == 1


def test_assigned_delivery_can_be_reassigned(client, created_delivery, second_driver):
    response = client.post(
        f"/api/deliveries/{created_delivery['id']}/accept", json={"driverId": second_driver}
    )

    assert response.status_code == 200
    assert response.json()["status"] == "assigned"
    assert response.json()["driver"]["name"] == "Sanne de Vries"


def test_same_driver_is_accepted_on_forward_transition(client, created_delivery):
    response = client.patch(
        f"/api/deliveries/{created_delivery['id']}/status",
        json={"status": "picked_up", "driverId": 1},
    )

    assert response.status_code == 200
    assert response.json()["status"] == "picked_up"
