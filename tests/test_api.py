"""HTTP-level tests for the JSON API."""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from conftest import FakeDispatcher, make_batch, make_job
from main import app
from repairdesk.api.verification import get_verification_service
from repairdesk.core import get_db, settings
from repairdesk.models import JobStatus
from repairdesk.services import VerificationService


@pytest.fixture
def client(session_factory, dispatcher):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_verification_service] = lambda: VerificationService(dispatcher)
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


class TestInventoryEndpoints:
    def test_item_and_batches(self, client):
        response = client.post("/api/inventory", json={"product_name": "Power Board", "stock_limit": 2})
        assert response.status_code == 201
        item_id = response.json()["id"]

        response = client.post(f"/api/inventory/{item_id}/batches", json={"quantity": 4, "cost_per_item": "12.50"})
        assert response.status_code == 201
        assert Decimal(response.json()["total_amount"]) == Decimal("50.00")

        levels = client.get("/api/inventory/stock-levels").json()
        assert levels == [{
            "inventory_id": item_id,
            "product_name": "Power Board",
            "stock_limit": 2,
            "total_quantity": 4,
            "is_low": False,
        }]
        assert client.get("/api/inventory/purchases").json()["count"] == 1

    def test_batch_validation(self, client, db, item):
        response = client.post(f"/api/inventory/{item.id}/batches", json={"quantity": 0, "cost_per_item": "5"})
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "ValidationError"
        assert body["errors"][0]["loc"] == ["body", "quantity"]

    def test_future_purchase_date_is_bad_request(self, client, item):
        response = client.post(f"/api/inventory/{item.id}/batches", json={
            "quantity": 1, "cost_per_item": "5", "purchase_date": "2999-01-01T00:00:00",
        })
        assert response.status_code == 400

    def test_unknown_item(self, client):
        response = client.get("/api/inventory/999")
        assert response.status_code == 404
        assert response.json()["error"] == "NotFoundError"


class TestConsumeEndpoint:
    def test_fifo_lines(self, client, db, job, item):
        b1 = make_batch(db, item, 5, "10.00", days_ago=3)
        b2 = make_batch(db, item, 3, "12.00", days_ago=2)

        response = client.post(f"/api/jobs/{job.id}/inventory", json={"inventory_id": item.id, "quantity": 6})

        assert response.status_code == 201
        lines = response.json()["lines"]
        assert [(line["batch_id"], line["quantity_taken"]) for line in lines] == [(b1.id, 5), (b2.id, 1)]

        usage = client.get(f"/api/jobs/{job.id}/inventory").json()
        assert Decimal(usage["total_inventory_cost"]) == Decimal("62.00")

    def test_insufficient_stock_is_conflict(self, client, db, job, item):
        make_batch(db, item, 2, "10.00", days_ago=1)

        response = client.post(f"/api/jobs/{job.id}/inventory", json={"inventory_id": item.id, "quantity": 5})

        assert response.status_code == 409
        body = response.json()
        assert body["error"] == "InsufficientStockError"
        assert body["shortfall"] == 3

    def test_zero_quantity_is_bad_request(self, client, job, item):
        response = client.post(f"/api/jobs/{job.id}/inventory", json={"inventory_id": item.id, "quantity": 0})
        assert response.status_code == 400
        assert response.json()["error"] == "InvalidQuantityError"

    def test_release(self, client, db, job, item):
        batch = make_batch(db, item, 5, "10.00", days_ago=1)
        client.post(f"/api/jobs/{job.id}/inventory", json={"inventory_id": item.id, "quantity": 2})

        response = client.delete(f"/api/jobs/{job.id}/inventory/{item.id}/{batch.id}")
        assert response.json() == {"success": True, "released": 2}


class TestJobAndWarrantyEndpoints:
    def test_register_complete_invoice_and_warranty(self, client, customer, product, owner, technician):
        response = client.post("/api/jobs", json={
            "customer_id": customer.id,
            "product_id": product.id,
            "assigned_employee_id": technician.id,
            "repair_description": "No backlight",
        })
        assert response.status_code == 201
        job_id = response.json()["id"]

        assert client.get(f"/api/jobs/{job_id}/warranty").json()["status"] == "Not Eligible"

        for status in ("In Progress", "Completed"):
            assert client.post(f"/api/jobs/{job_id}/status", json={"status": status}).status_code == 200

        response = client.post("/api/invoices", json={
            "job_id": job_id, "owner_id": owner.id, "labour_cost": "75.00", "warranty_eligible": True,
        })
        assert response.status_code == 201
        assert Decimal(response.json()["owner_share"]) == Decimal("75.00")

        warranty = client.get(f"/api/jobs/{job_id}/warranty").json()
        assert warranty["status"] == "Active"
        assert warranty["days_remaining"] == 90

        response = client.post("/api/warranty/claims", json={
            "original_job_id": job_id,
            "customer_id": customer.id,
            "product_id": product.id,
            "description": "Backlight failed again",
        })
        assert response.status_code == 201

        again = client.post("/api/warranty/claims", json={
            "original_job_id": job_id,
            "customer_id": customer.id,
            "product_id": product.id,
            "description": "Still broken",
        })
        assert again.status_code == 409
        assert again.json()["error"] == "AlreadyClaimedError"

        listed = client.get("/api/warranty/jobs").json()
        assert listed["total"] == 1
        assert listed["jobs"][0]["status"] == "Warranty-Claimed"

    def test_invalid_transition(self, client, db, customer, product):
        job = make_job(db, customer, product, status=JobStatus.PENDING)
        response = client.post(f"/api/jobs/{job.id}/status", json={"status": "Paid"})
        assert response.status_code == 409

    def test_advance_payment_requires_owner(self, client, job, technician):
        response = client.post("/api/invoices/advance-payments", json={
            "job_id": job.id, "owner_id": technician.id, "amount": "100",
        })
        assert response.status_code == 403

    def test_unknown_job(self, client):
        assert client.get("/api/jobs/999").status_code == 404


class TestVerificationEndpoints:
    def test_send_then_verify_once(self, client, dispatcher):
        response = client.post("/api/verification/send", json={"email": "kasun@mnelectronics.lk"})
        assert response.status_code == 200
        code = dispatcher.sent[0].body.split(": ")[1].split()[0]

        first = client.post("/api/verification/verify", json={"email": "kasun@mnelectronics.lk", "code": code})
        assert first.status_code == 200
        assert first.json()["verified"] is True

        second = client.post("/api/verification/verify", json={"email": "kasun@mnelectronics.lk", "code": code})
        assert second.status_code == 400
        assert second.json()["detail"] == "Invalid or expired verification code"

    def test_both_contacts_rejected(self, client):
        response = client.post("/api/verification/send", json={"email": "a@mnelectronics.lk", "phone_number": "+94771234567"})
        assert response.status_code == 400
        assert response.json()["error"] == "ValidationError"

    def test_malformed_email_rejected(self, client):
        response = client.post("/api/verification/send", json={"email": "not-an-email"})
        assert response.status_code == 400
        assert "detail" in response.json()

    @pytest.mark.parametrize("mode", ["noop", "NOOP", "Noop"])
    def test_noop_mode_echoes_code_any_case(self, client, dispatcher, monkeypatch, mode):
        monkeypatch.setattr(settings, "DISPATCH_MODE", mode)
        response = client.post("/api/verification/send", json={"phone_number": "+94771234567"})
        assert response.json()["code"] in dispatcher.sent[0].body

    def test_real_mode_hides_code(self, client, monkeypatch):
        monkeypatch.setattr(settings, "DISPATCH_MODE", "real")
        response = client.post("/api/verification/send", json={"phone_number": "+94771234567"})
        assert response.json()["code"] is None

    def test_dispatch_failure(self, client, dispatcher):
        dispatcher.fail = True
        response = client.post("/api/verification/send", json={"phone_number": "+94771234567"})
        assert response.status_code == 502
        assert response.json()["error"] == "DispatchError"


class TestSalaryEndpoints:
    def test_register_and_list(self, client, technician):
        response = client.post("/api/salaries/full-time", json={"entries": [{"employee_id": technician.id, "bonus": "1000"}]})
        assert response.status_code == 201

        summary = client.get(f"/api/salaries/employee/{technician.id}").json()
        assert len(summary["salaries"]) == 1
        assert Decimal(summary["total_paid"]) == Decimal("51000.00")
