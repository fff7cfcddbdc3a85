import pytest
from fastapi.testclient import TestClient

from backend.main import create_app, http_status_for
from dispatcher.errors import (
    NoDriversAvailableError,
    NoPendingOrdersError,
    NotYetAssignedError,
    OrderNotFoundError,
)


@pytest.fixture
def client(engine):
    return TestClient(create_app(engine))


def test_health(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "drivers": 2, "pending_orders": 0}


def test_order_lifecycle(client):
    response = client.post("/orders", json={"delivery_address": "1 Main St", "items": ["Burger"]})
    assert response.status_code == 201
    assert response.json()["order_id"] == "ORD1"
    assert response.json()["status"] == "pending"

    queue = client.get("/queue").json()
    assert queue["count"] == 1
    assert queue["orders"][0]["order_id"] == "ORD1"

    assignment = client.post("/assignments").json()
    assert assignment["order"]["status"] == "active"
    assert assignment["driver"]["driver_id"] == "DRV1"

    tracked = client.get("/orders/ORD1").json()
    assert tracked["driver"]["name"] == "John"

    done = client.post("/orders/ORD1/complete")
    assert done.status_code == 200
    assert done.json()["order"]["status"] == "completed"
    assert done.json()["already_completed"] is False

    again = client.post("/orders/ORD1/complete")
    assert again.status_code == 200
    assert again.json()["already_completed"] is True
    assert "already completed" in again.json()["message"]


def test_error_responses(client):
    missing = client.get("/orders/ORD9")
    assert missing.status_code == 404
    assert missing.json()["detail"]["error"] == "not_found"

    empty = client.post("/assignments")
    assert empty.status_code == 409
    assert empty.json()["detail"]["error"] == "no_pending_orders"

    client.post("/orders", json={"delivery_address": "1 Main St", "items": []})
    early = client.post("/orders/ORD1/complete")
    assert early.status_code == 409
    assert early.json()["detail"]["error"] == "not_yet_assigned"


def test_summary_endpoint(client):
    client.post("/orders", json={"delivery_address": "1 Main St", "items": ["Burger"]})
    summary = client.get("/summary").json()

    assert summary["totals"]["pending"] == 1
    assert len(summary["drivers"]) == 2


def test_status_mapping():
    assert http_status_for(OrderNotFoundError("ORD1")) == 404
    assert http_status_for(NoPendingOrdersError()) == 409
    assert http_status_for(NotYetAssignedError("ORD1")) == 409
    assert http_status_for(NoDriversAvailableError()) == 503
