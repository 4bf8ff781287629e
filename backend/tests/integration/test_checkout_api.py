"""Integration tests for the checkout validation API

Tests the HTTP surface end to end:
- Basket snapshot parsing and validation
- Decision outcomes returned with HTTP 200
- Data integrity and inventory service errors mapped to 422 / 503
- Health and metrics endpoints

The inventory strategy is replaced with an in-memory lookup through
app.dependency_overrides.
"""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from connectors.implementations.mock_inventory import InMemoryInventoryLookup
from dependencies import get_inventory_evaluator
from domain.checkout.inventory import StoreInventoryEvaluator
from main import app


VALIDATE_URL = "/api/v1/checkout/validate"


@pytest.fixture
def store_inventory() -> InMemoryInventoryLookup:
    return InMemoryInventoryLookup({("S1", "P1"): 10, ("S1", "P2"): 1})


@pytest.fixture
def client(store_inventory):
    app.dependency_overrides[get_inventory_evaluator] = lambda: StoreInventoryEvaluator(store_inventory)
    yield TestClient(app)
    app.dependency_overrides.clear()


def product(product_id, ats=100, **fields):
    return {"id": product_id, "availability": {"ats": ats}, **fields}


def line_item(product_id, quantity=1, shipment_id="me", **fields):
    return {
        "product_id": product_id,
        "product": fields.pop("product", product(product_id)),
        "quantity": quantity,
        "shipment_id": shipment_id,
        **fields,
    }


def basket(items, shipments=None, **fields):
    if shipments is None:
        shipments = [{
            "id": "me",
            "is_default": True,
            "shipping_address": {"address1": "123 Main St", "city": "Springfield"},
        }]
    return {"id": "basket-42", "product_line_items": items, "shipments": shipments, **fields}


def class_date(delta: timedelta) -> str:
    return (datetime.now(timezone.utc) + delta).strftime("%m/%d/%Y %I:%M %p")


class TestCheckoutValidateAPI:
    """Integration tests for POST /api/v1/checkout/validate"""

    def test_valid_basket(self, client):
        response = client.post(VALIDATE_URL, json={"basket": basket([line_item("P1", quantity=2)])})

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "OK"
        assert data["reason"] is None
        assert data["enable_checkout"] is True
        assert data["min_order_quantities"] == {"P1": 1}

    def test_missing_basket(self, client):
        response = client.post(VALIDATE_URL, json={"basket": None})

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ERROR"
        assert data["reason"] is None
        assert data["enable_checkout"] is False

    def test_empty_basket(self, client):
        response = client.post(VALIDATE_URL, json={"basket": basket([])})

        data = response.json()
        assert data["status"] == "OK"
        assert data["enable_checkout"] is False

    def test_store_pickup_inventory_matrix(self, client, store_inventory):
        """Store shortage reports the per-key matrix and blocks checkout"""
        shipments = [
            {"id": "me", "is_default": True, "shipping_address": {"address1": "123 Main St"}},
            {"id": "pickup", "store_id": "S1"},
        ]
        items = [
            line_item("P1", quantity=2, shipment_id="pickup"),
            line_item("P2", quantity=1, shipment_id="pickup"),
        ]

        response = client.post(VALIDATE_URL, json={"basket": basket(items, shipments)})

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ERROR"
        assert data["reason"] is None
        assert data["enable_checkout"] is False
        assert data["inventory_matrix"]["S1P1"]["availability"] == 1
        assert data["inventory_matrix"]["S1P2"]["availability"] == -1
        assert len(store_inventory.requests) == 1

    def test_class_within_cutoff(self, client):
        item = line_item(
            "CLASS-1",
            product_type="Class",
            sales_channel="S",
            class_payload=f'{{"classDate": "{class_date(timedelta(hours=24))}"}}',
        )

        response = client.post(VALIDATE_URL, json={"basket": basket([item])})

        data = response.json()
        assert data["status"] == "ERROR"
        assert data["reason"] == "within-48-hours"

    def test_quantity_error_with_promotion_minimum(self, client):
        item = line_item(
            "P1",
            quantity=1,
            product=product("P1", promotions=[{"id": "bulk", "attributes": {"minQuantity": 3}}]),
        )

        response = client.post(VALIDATE_URL, json={"basket": basket([item])})

        data = response.json()
        assert data["reason"] == "quantity-error"
        assert data["min_order_quantities"] == {"P1": 3}
        assert "quantity_limits" in data["failed_rules"]

    def test_tax_error_only_when_requested(self, client):
        payload = {"basket": basket([line_item("P1")], total_tax={"amount": None, "state": "NOT_COMPUTED"})}

        assert client.post(VALIDATE_URL, json=payload).json()["status"] == "OK"

        payload["validate_tax"] = True
        assert client.post(VALIDATE_URL, json=payload).json()["reason"] == "tax-error"

    def test_po_box_error(self, client):
        shipments = [{"id": "me", "is_default": True, "shipping_address": {"address1": "PO Box 77"}}]
        items = [line_item("P1", source_channel="drop-ship")]

        response = client.post(VALIDATE_URL, json={"basket": basket(items, shipments)})

        data = response.json()
        assert data["reason"] == "pobox-error"
        assert data["enable_checkout"] is False


class TestCheckoutValidateErrors:
    """Error responses of POST /api/v1/checkout/validate"""

    def test_unknown_shipment_reference(self, client):
        items = [line_item("P1", shipment_id="nowhere")]

        response = client.post(VALIDATE_URL, json={"basket": basket(items)})

        assert response.status_code == 422
        assert response.json()["error"] == "validation_error"

    def test_negative_quantity(self, client):
        response = client.post(VALIDATE_URL, json={"basket": basket([line_item("P1", quantity=-1)])})
        assert response.status_code == 422

    def test_malformed_class_payload(self, client):
        item = line_item("CLASS-1", product_type="Class", sales_channel="S", class_payload="{}")

        response = client.post(VALIDATE_URL, json={"basket": basket([item])})

        assert response.status_code == 422
        assert response.json()["error"] == "data_integrity_error"

    def test_missing_inventory_entry(self, client):
        shipments = [{"id": "pickup", "store_id": "S9", "is_default": True}]
        items = [line_item("P1", shipment_id="pickup")]

        response = client.post(VALIDATE_URL, json={"basket": basket(items, shipments)})

        assert response.status_code == 422
        assert response.json()["details"]["key"] == "S9P1"

    def test_inventory_service_unavailable(self, client, store_inventory):
        store_inventory.mode = "failure"
        shipments = [{"id": "pickup", "store_id": "S1", "is_default": True}]

        response = client.post(
            VALIDATE_URL,
            json={"basket": basket([line_item("P1", shipment_id="pickup")], shipments)}
        )

        assert response.status_code == 503
        assert response.json()["error"] == "inventory_unavailable"


class TestObservabilityEndpoints:

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_metrics_after_validation(self, client):
        client.post(VALIDATE_URL, json={"basket": basket([line_item("P1")])})

        response = client.get("/metrics")

        assert response.status_code == 200
        assert "checkout_gate_validations_total" in response.text

    def test_request_id_header(self, client):
        response = client.get("/health", headers={"X-Request-ID": "req-123"})
        assert response.headers.get("X-Request-ID") == "req-123"
