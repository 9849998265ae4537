import pytest

FORWARD_PATH = ("picked_up", "in_transit", "delivered")


@pytest.fixture
def created_delivery(client, delivery_payload):
    response = client.post("/api/deliveries", json=delivery_payload)
    assert response.status_code == 200
    return response.json()


@pytest.fixture
def advance_delivery(client):
    def _advance(delivery_id: int, until: str) -> dict:
        payload: dict = {}
        for status in FORWARD_PATH:
            response = client.patch(
                f"/api/deliveries/{delivery_id}/status", json={"status": status}
            )
            assert response.status_code == 200
            payload = response.json()
            if status == until:
                break
        return payload

    return _advance
