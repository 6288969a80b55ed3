"""
API tests: full request/response cycle through the FastAPI app.
"""
from fastapi.testclient import TestClient

from app.main import app

client = TestClient(app)


def _survey_payload(**kwargs) -> dict:
    payload = {
        "survey_id": "SUR-API-01",
        "request_id": "REQ-API-01",
        "status": "submitted",
        "personal_details": {"full_name": "Ayesha Begum", "father_name": "Abdul Karim", "district": "Hyderabad"},
        "family_members": [
            {"name": "Ayesha Begum", "age": 42, "relationship": "Wife", "monthly_income": 2_000.0},
            {"name": "Imran", "age": 12, "relationship": "Son", "is_dependent": True},
            {"name": "Sana", "age": 9, "relationship": "Daughter", "is_dependent": True, "has_disability": True},
            {"name": "Fatima Bi", "age": 68, "relationship": "Mother-in-law", "is_dependent": True},
        ],
        "housing_details": {
            "rent_amount": 1_500.0,
            "housing_condition": "poor",
            "utility_bills": {"electricity_bill_amount": 300.0, "gas_bill_amount": 200.0, "water_bill_amount": 100.0},
        },
        "income_expenses": {
            "monthly_earnings": {"primary_income": 3_000.0, "other_earnings": 500.0},
            "monthly_expenses": {
                "education_expenses": 400.0,
                "medical_expenses": 600.0,
                "food_expenses": 2_500.0,
                "other_expenses": 200.0,
            },
        },
        "officer_report": {"officer_score": 4, "verification_status": "verified"},
        "photos": ["https://cdn.example.org/surveys/SUR-API-01/house.jpg"],
    }
    payload.update(kwargs)
    return payload


class TestCalculate:
    def test_destitute_widow(self):
        resp = client.post("/v1/assessment/calculate", json={
            "total_earnings": 0,
            "total_expenses": 0,
            "family_size": 5,
            "family_members": [],
            "housing_condition": "very_poor",
            "officer_report": {"officer_score": 5},
            "is_widow_headed": True,
        })

        assert resp.status_code == 200
        body = resp.json()
        assert body["total_score"] == 13.0
        assert body["category"] == "category_1"
        assert body["category_color"] == "green"
        assert len(body["factor_scores"]) == 4

    def test_widow_inferred_when_omitted(self):
        members = [{"name": "Nasreen", "age": 36, "relationship": "Wife"}]
        inferred = client.post("/v1/assessment/calculate", json={"family_members": members, "family_size": 1})
        explicit = client.post(
            "/v1/assessment/calculate",
            json={"family_members": members, "family_size": 1, "is_widow_headed": False},
        )

        assert inferred.json()["social_status_score"] > explicit.json()["social_status_score"]

    def test_empty_payload_still_scores(self):
        resp = client.post("/v1/assessment/calculate", json={"family_size": 0})

        assert resp.status_code == 200
        assert resp.json()["per_capita_income"] == 0.0


class TestSurvey:
    def test_scores_full_survey(self):
        resp = client.post("/v1/assessment/survey", json=_survey_payload())

        assert resp.status_code == 200
        body = resp.json()
        assert body["household"]["total_earnings"] == 5_500.0
        assert body["household"]["total_expenses"] == 5_800.0
        assert body["household"]["net_amount"] == -300.0
        assert body["household"]["is_widow_headed"] is True
        assert body["scores"]["financial_score"] == 5.0
        assert body["scores"]["dependents_score"] == 3.0
        assert body["scores"]["social_status_score"] == 4.0
        assert body["scores"]["officer_score"] == 4.0
        assert body["scores"]["total_score"] == 16.0
        assert body["scores"]["category"] == "category_1"
        assert body["validation"]["is_valid"] is True
        assert len(body["eligible_facilities"]) == 6

    def test_partial_survey_scored_provisionally(self):
        resp = client.post("/v1/assessment/survey", json={"survey_id": "SUR-API-02"})

        assert resp.status_code == 200
        body = resp.json()
        assert body["household"]["family_size"] == 1
        assert body["validation"]["is_valid"] is False
        assert "At least one family member is required" in body["validation"]["errors"]

    def test_negative_survey_earnings_reported(self):
        payload = _survey_payload()
        payload["income_expenses"]["monthly_earnings"]["primary_income"] = -5_000.0
        resp = client.post("/v1/assessment/survey", json=payload)

        assert resp.status_code == 200
        body = resp.json()
        assert body["household"]["total_earnings"] == 2_500.0
        assert body["validation"]["is_valid"] is False
        assert "Total income cannot be negative" in body["validation"]["errors"]

    def test_frozen_survey_rejected(self):
        resp = client.post("/v1/assessment/survey", json=_survey_payload(status="verified"))
        assert resp.status_code == 409


class TestValidateAndFacilities:
    def test_validate_reports_errors(self):
        resp = client.post("/v1/assessment/validate", json={
            "total_earnings": -10,
            "family_size": 2,
            "family_members": [{"name": "", "age": 130, "relationship": "Self"}],
            "officer_report": {"officer_score": 7},
        })

        body = resp.json()
        assert body["is_valid"] is False
        assert "Total income cannot be negative" in body["errors"]
        assert "Officer score must be between 0 and 5" in body["errors"]
        assert "Family member 1: Name is required" in body["errors"]
        assert "Family member 1: Age must be between 0 and 120" in body["errors"]

    def test_facilities(self):
        resp = client.get("/v1/assessment/facilities/category_3")
        assert resp.status_code == 200
        assert [f["facility_type"] for f in resp.json()] == ["emergency_relief"]

    def test_unknown_category(self):
        assert client.get("/v1/assessment/facilities/category_9").status_code == 422


class TestBeneficiary:
    def test_card_from_submitted_survey(self):
        resp = client.post("/v1/beneficiary/card", json={"survey": _survey_payload(), "approved_by": "admin-1"})

        assert resp.status_code == 200
        body = resp.json()
        assert body["category"] == "category_1"
        assert body["monthly_eligible_amount"] == 3000.0
        assert body["assessment_scores"]["total_score"] == 16.0
        assert body["is_widow_headed"] is True

    def test_card_requires_submitted_survey(self):
        resp = client.post(
            "/v1/beneficiary/card",
            json={"survey": _survey_payload(status="draft"), "approved_by": "admin-1"},
        )
        assert resp.status_code == 409

    def test_workflow_status(self):
        resp = client.post("/v1/beneficiary/workflow", json={
            "request": {
                "request_id": "REQ-API-01",
                "applicant_name": "Ayesha Begum",
                "father_name": "Abdul Karim",
                "phone": "9876543210",
                "full_address": "Old City, Hyderabad",
                "reason_for_request": "Widow with dependent children",
            },
        })

        assert resp.status_code == 200
        assert resp.json()["current_step"] == "admin_assignment"


class TestServiceEndpoints:
    def test_health(self):
        resp = client.get("/v1/assessment/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"

    def test_admin_config(self):
        resp = client.get("/v1/admin/config")

        assert resp.status_code == 200
        body = resp.json()
        assert [c["min_score"] for c in body["categories"]] == [12.0, 6.0, 0.0]
        assert [c["color"] for c in body["categories"]] == ["green", "yellow", "white"]
        assert body["dependent_weights"]["disabled_member"] == 2.0
