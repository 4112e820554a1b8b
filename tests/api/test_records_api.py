"""Tests for the owner-scoped record endpoints across all domains."""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from recordhub.core.config import settings
from recordhub.dependencies import get_owner_id
from recordhub.main import app

VALID_PAYLOADS = {
    "/api/health/records": {"record_type": "blood_pressure", "value": "120/80", "unit": "mmHg"},
    "/api/health/appointments": {
        "title": "Checkup",
        "provider_name": "Dr. Lee",
        "appointment_date": "2024-03-01T09:30:00Z",
    },
    "/api/health/medications": {"name": "Ibuprofen", "dosage": "200mg", "frequency": "twice daily"},
    "/api/health/ai-diagnoses": {"symptoms": "cough", "diagnosis": "common cold", "confidence": "0.82"},
    "/api/finance/transactions": {
        "description": "Salary",
        "amount": "3500.00",
        "category": "income",
        "transaction_type": "income",
    },
    "/api/finance/budgets": {"category": "groceries", "limit_amount": "400"},
    "/api/finance/expenses": {"description": "Coffee", "amount": "4.50", "category": "food", "tags": ["daily"]},
    "/api/personal/tasks": {"title": "Write report"},
    "/api/personal/goals": {"title": "Emergency fund", "target": "5000", "category": "savings"},
    "/api/personal/mood-logs": {"mood": 7, "energy": 5},
    "/api/b2b/leads": {"name": "Ada", "company": "Acme", "email": "ada@acme.com"},
    "/api/b2b/invoices": {"client_name": "Acme", "amount": "1200", "due_date": "2024-04-01T00:00:00Z"},
    "/api/government/applications": {"application_type": "permit", "title": "Building permit"},
    "/api/government/documents": {"name": "Passport", "document_type": "identity"},
    "/api/government/complaints": {"subject": "Potholes", "description": "Main St", "department": "Roads"},
}


class TestRecordEndpoints:
    """List and create behaviour shared by every family."""

    @pytest.mark.parametrize("path,payload", list(VALID_PAYLOADS.items()))
    def test_create_then_list(self, test_client: TestClient, path: str, payload: dict) -> None:
        response = test_client.post(path, json=payload)

        assert response.status_code == 200, response.text
        created = response.json()
        assert isinstance(created["id"], int)
        assert created["user_id"] == settings.default_owner_id

        listed = test_client.get(path)
        assert listed.status_code == 200
        assert [record["id"] for record in listed.json()] == [created["id"]]

    @pytest.mark.parametrize("path", list(VALID_PAYLOADS))
    def test_empty_payload_is_rejected(self, test_client: TestClient, path: str) -> None:
        response = test_client.post(path, json={})

        assert response.status_code == 400
        body = response.json()
        assert body["error"].startswith("Invalid ")
        assert body["error"].endswith(" data")
        assert "details" not in body

    def test_invalid_json_body(self, test_client: TestClient) -> None:
        response = test_client.post(
            "/api/personal/tasks",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400

    def test_task_defaults(self, test_client: TestClient) -> None:
        task = test_client.post("/api/personal/tasks", json={"title": "Write report"}).json()

        assert task["completed"] is False
        assert task["priority"] == "medium"
        assert task["status"] == "pending"

    def test_task_invalid_priority(self, test_client: TestClient) -> None:
        response = test_client.post("/api/personal/tasks", json={"title": "x", "priority": "urgent"})

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid task data"}

    def test_invalid_email(self, test_client: TestClient) -> None:
        response = test_client.post(
            "/api/b2b/leads", json={"name": "Ada", "company": "Acme", "email": "not-an-email"}
        )
        assert response.json() == {"error": "Invalid lead data"}

    def test_money_serializes_as_string(self, test_client: TestClient) -> None:
        transaction = test_client.post(
            "/api/finance/transactions", json=VALID_PAYLOADS["/api/finance/transactions"]
        ).json()

        assert isinstance(transaction["amount"], str)
        assert Decimal(transaction["amount"]) == Decimal("3500")

    def test_portfolio_valuation(self, test_client: TestClient) -> None:
        response = test_client.post("/api/finance/portfolio", json={
            "symbol": "AAPL",
            "name": "Apple",
            "asset_type": "stock",
            "quantity": "10",
            "average_price": "150",
            "current_price": "165",
        })

        assert response.status_code == 200
        item = response.json()
        assert Decimal(item["total_value"]) == Decimal("1650")
        assert Decimal(item["gain_loss"]) == Decimal("150")
        assert Decimal(item["gain_loss_percent"]) == Decimal("10")

    def test_listing_is_owner_scoped(self, test_client: TestClient) -> None:
        test_client.post("/api/personal/goals", json=VALID_PAYLOADS["/api/personal/goals"])

        app.dependency_overrides[get_owner_id] = lambda: 2
        assert test_client.get("/api/personal/goals").json() == []

    def test_owner_in_body_is_ignored(self, test_client: TestClient) -> None:
        task = test_client.post("/api/personal/tasks", json={"title": "x", "user_id": 77}).json()
        assert task["user_id"] == settings.default_owner_id


class TestExplicitOwnerFamilies:
    """Consents and treatment actions carry their owner in the body."""

    def test_consent_without_user_id(self, test_client: TestClient) -> None:
        response = test_client.post(
            "/api/health/patient-consents",
            json={"consent_type": "data_sharing", "purpose": "research"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid patient consent data"}

    def test_consent_with_user_id(self, test_client: TestClient) -> None:
        response = test_client.post(
            "/api/health/patient-consents",
            json={"user_id": 5, "consent_type": "data_sharing", "purpose": "research", "granted": True},
        )

        assert response.status_code == 200
        consent = response.json()
        assert consent["user_id"] == 5
        assert consent["granted"] is True

    def test_treatment_action_defaults(self, test_client: TestClient) -> None:
        response = test_client.post(
            "/api/health/treatment-actions",
            json={"user_id": 1, "action_type": "injection", "description": "Flu shot", "performed_by": "RN Park"},
        )

        assert response.status_code == 200
        assert response.json()["verified"] is False


class TestPatchEndpoints:

    def test_patch_task(self, test_client: TestClient) -> None:
        task = test_client.post("/api/personal/tasks", json={"title": "Write report", "priority": "high"}).json()

        response = test_client.patch(f"/api/personal/tasks/{task['id']}", json={"completed": True})

        assert response.status_code == 200
        updated = response.json()
        assert updated["completed"] is True
        assert updated["title"] == "Write report"
        assert updated["priority"] == "high"

    def test_patch_medication(self, test_client: TestClient) -> None:
        med = test_client.post(
            "/api/health/medications", json=VALID_PAYLOADS["/api/health/medications"]
        ).json()

        updated = test_client.patch(f"/api/health/medications/{med['id']}", json={"taken": True}).json()

        assert updated["taken"] is True
        assert updated["dosage"] == "200mg"

    def test_patch_unknown_task(self, test_client: TestClient) -> None:
        response = test_client.patch("/api/personal/tasks/9999", json={"completed": True})

        assert response.status_code == 404
        assert response.json() == {"error": "Task not found"}

    def test_patch_unknown_medication(self, test_client: TestClient) -> None:
        response = test_client.patch("/api/health/medications/9999", json={"taken": True})

        assert response.status_code == 404
        assert response.json() == {"error": "Medication not found"}

    def test_patch_wrong_type(self, test_client: TestClient) -> None:
        task = test_client.post("/api/personal/tasks", json={"title": "x"}).json()

        response = test_client.patch(f"/api/personal/tasks/{task['id']}", json={"completed": "definitely"})

        assert response.status_code == 400

    def test_goals_have_no_patch_route(self, test_client: TestClient) -> None:
        response = test_client.patch("/api/personal/goals/1", json={"title": "x"})
        assert response.status_code == 404

    def test_patch_cannot_clear_required_field(self, test_client: TestClient) -> None:
        task = test_client.post("/api/personal/tasks", json={"title": "Write report"}).json()

        response = test_client.patch(f"/api/personal/tasks/{task['id']}", json={"title": None})

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid task data"}
        listed = test_client.get("/api/personal/tasks").json()
        assert listed[0]["title"] == "Write report"

    def test_patch_can_clear_optional_field(self, test_client: TestClient) -> None:
        med = test_client.post(
            "/api/health/medications",
            json={**VALID_PAYLOADS["/api/health/medications"], "notes": "with food"},
        ).json()

        updated = test_client.patch(f"/api/health/medications/{med['id']}", json={"notes": None}).json()

        assert updated["notes"] is None
