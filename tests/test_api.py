from __future__ import annotations

from datetime import date

import pytest
from fastapi.testclient import TestClient

from scholarmatch.api import create_app
from scholarmatch.errors import StoreError
from scholarmatch.explanations.orchestrator import ExplanationOrchestrator
from scholarmatch.schemas import ScholarshipCreate
from scholarmatch.storage.repository import SqlMatchingStore


class EchoProvider:
    async def generate_explanation(self, student, scholarship) -> str:
        return f"{student.name} is a strong candidate for {scholarship.name}."


STUDENT = {
    "name": "Jordan Lee",
    "email": "jordan@example.com",
    "gpa": 3.8,
    "enrollment_status": "full_time",
    "citizenship_status": "citizen",
    "first_generation": True,
    "household_income": 65000,
    "ethnicity": ["Asian"],
}


@pytest.fixture
def client(store: SqlMatchingStore) -> TestClient:
    store.add_scholarship(
        ScholarshipCreate(
            id="sch_001",
            name="First Gen Award",
            amount=5000,
            provider="Horizon",
            deadline=date(2027, 3, 15),
            url="https://example.org/first-gen",
            gpa_minimum=3.5,
            first_generation=True,
            enrollment_statuses=["full_time"],
            citizenship_statuses=["citizen"],
        )
    )
    store.add_scholarship(
        ScholarshipCreate(
            id="sch_002",
            name="Need Grant",
            amount=2000,
            provider="Aid Org",
            deadline=date(2027, 4, 1),
            gpa_minimum=2.0,
            financial_need=True,
            enrollment_statuses=["full_time"],
            citizenship_statuses=["citizen"],
        )
    )
    store.add_scholarship(
        ScholarshipCreate(
            id="sch_003",
            name="Heritage Award",
            amount=1500,
            provider="Heritage Alliance",
            deadline=date(2027, 1, 15),
            gpa_minimum=3.0,
            enrollment_statuses=["full_time"],
            citizenship_statuses=["citizen", "permanent_resident"],
            ethnicities=["Asian", "Pacific Islander"],
        )
    )
    app = create_app(store, ExplanationOrchestrator(EchoProvider()))
    return TestClient(app)


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_register_and_match_student(client: TestClient) -> None:
    created = client.post("/students", json=STUDENT)
    assert created.status_code == 201
    body = created.json()
    assert body["id"] == "stu_001"
    assert body["email"] == "jordan@example.com"

    response = client.get(f"/students/{body['id']}/matches")

    assert response.status_code == 200
    payload = response.json()
    assert payload["student_id"] == "stu_001"
    assert payload["student_name"] == "Jordan Lee"
    assert payload["total_matches"] == 2
    assert payload["total_potential_aid"] == 6500
    first, second = payload["matches"]
    assert first["scholarship"]["id"] == "sch_001"
    assert first["scholarship"]["deadline"] == "2027-03-15"
    assert first["match_reasons"] == [
        "GPA requirement met (3.8 >= 3.5)",
        "First-generation student status",
    ]
    assert first["explanation"] == "Jordan Lee is a strong candidate for First Gen Award."
    assert second["scholarship"]["id"] == "sch_003"
    assert second["match_reasons"][-1] == "Ethnicity requirement met"


def test_unknown_student_returns_404(client: TestClient) -> None:
    response = client.get("/students/stu_404/matches")

    assert response.status_code == 404
    assert response.json() == {"error": "Not Found", "message": "Student not found"}


def test_invalid_registration_returns_400(client: TestClient) -> None:
    response = client.post("/students", json={**STUDENT, "gpa": 4.5})

    assert response.status_code == 400
    assert response.json()["error"] == "ValidationError"
    assert "gpa" in response.json()["message"]


def test_unknown_enum_value_is_rejected(client: TestClient) -> None:
    response = client.post("/students", json={**STUDENT, "enrollment_status": "Full_Time"})

    assert response.status_code == 400


def test_duplicate_email_returns_409(client: TestClient) -> None:
    client.post("/students", json=STUDENT)

    response = client.post("/students", json={**STUDENT, "name": "Other"})

    assert response.status_code == 409
    assert response.json() == {"error": "Conflict", "message": "Email already exists"}


def test_list_scholarships(client: TestClient) -> None:
    payload = client.get("/scholarships").json()

    assert payload["total"] == 3
    assert payload["scholarships"][0] == {
        "id": "sch_001",
        "name": "First Gen Award",
        "amount": 5000,
        "deadline": "2027-03-15",
        "provider": "Horizon",
    }


def test_store_failure_returns_500(client: TestClient, store: SqlMatchingStore, monkeypatch) -> None:
    def broken():
        raise StoreError("Failed to load scholarships")

    monkeypatch.setattr(store, "list_scholarships", broken)

    response = client.get("/scholarships")

    assert response.status_code == 500
    assert response.json()["error"] == "Internal Server Error"


def test_catalog_failure_during_matching_returns_500(
    client: TestClient, store: SqlMatchingStore, monkeypatch
) -> None:
    student_id = client.post("/students", json=STUDENT).json()["id"]

    def broken():
        raise StoreError("Failed to load scholarships")

    monkeypatch.setattr(store, "load_all_scholarships_with_requirements", broken)

    response = client.get(f"/students/{student_id}/matches")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal Server Error", "message": "An error occurred"}
