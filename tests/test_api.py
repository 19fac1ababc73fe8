"""Tests for API endpoints."""

import base64
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from crop_claims import dependencies
from crop_claims.dependencies import (
    get_claim_ledger,
    get_disaster_classifier,
    get_ground_truth_service,
    get_weather_service,
)
from crop_claims.main import app
from crop_claims.repositories.claim_repository import ClaimLedger
from crop_claims.schemas.claims import CurrentWeather, DataSource, DisasterType, FraudRisk
from crop_claims.services.classification.disaster_classifier import FAILURE_MESSAGES, FixedResponseClassifier


@pytest.fixture
def ledger() -> ClaimLedger:
    ledger = ClaimLedger()
    app.dependency_overrides[get_claim_ledger] = lambda: ledger
    return ledger


@pytest.fixture
def ground_truth_service(ground_truth):
    service = MagicMock()
    service.fetch = AsyncMock(return_value=ground_truth)
    app.dependency_overrides[get_ground_truth_service] = lambda: service
    return service


@pytest.fixture
def claim_payload(sample_image):
    return {
        "policy_id": "pol_01",
        "lat": 12.532981,
        "lng": 76.932119,
        "image_base64": base64.b64encode(sample_image).decode(),
    }


def use_classifier(response) -> FixedResponseClassifier:
    classifier = FixedResponseClassifier(response)
    app.dependency_overrides[get_disaster_classifier] = lambda: classifier
    return classifier


class TestHealthEndpoints:
    """Test suite for service status endpoints."""

    def test_health_check(self, test_client: TestClient) -> None:
        response = test_client.get("/api/v1/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "version" in data

    def test_root(self, test_client: TestClient) -> None:
        response = test_client.get("/")

        assert response.status_code == 200
        assert response.json()["health"] == "/api/v1/health"


class TestPolicyEndpoints:
    """Test suite for policy lookup endpoints."""

    def test_list_policies(self, test_client: TestClient) -> None:
        response = test_client.get("/api/v1/policies")

        assert response.status_code == 200
        ids = [item["policy"]["id"] for item in response.json()]
        assert ids == ["pol_01", "pol_02", "pol_03"]

    def test_get_policy_with_expected_premium(self, test_client: TestClient) -> None:
        response = test_client.get("/api/v1/policies/pol_02")

        assert response.status_code == 200
        data = response.json()
        assert data["policy"]["crop_type"] == "Cotton"
        assert data["expected_premium"] == 10_000

    def test_get_unknown_policy(self, test_client: TestClient) -> None:
        response = test_client.get("/api/v1/policies/pol_404")

        assert response.status_code == 404
        assert "pol_404" in response.json()["detail"]


class TestClaimEndpoints:
    """Test suite for claim submission and ledger endpoints.

    The classifier and ground truth providers are replaced through
    dependency overrides; adjudication and the ledger run for real.
    """

    def test_submit_claim_approved(
        self, test_client: TestClient, ledger, ground_truth_service, claim_payload, raw_assessment
    ) -> None:
        raw_assessment.update({"type": "Pest", "severity": 50})
        use_classifier(raw_assessment)

        response = test_client.post("/api/v1/claims", json=claim_payload)

        assert response.status_code == 201
        data = response.json()
        assert data["claim"]["status"] == "Approved"
        assert data["claim"]["payout"] == 125_000
        assert data["decision"]["citation"] == "Clause 8.1.1: Yield Losses (Standing Crop)"
        assert data["ground_truth"]["weather"]["source"] == DataSource.LIVE.value
        assert "125,000" in data["message"]
        assert len(ledger) == 1

    def test_submit_claim_under_review(
        self, test_client: TestClient, ledger, ground_truth_service, claim_payload, assessment_factory
    ) -> None:
        use_classifier(assessment_factory(type=DisasterType.DROUGHT, severity=60, fraud_risk=FraudRisk.HIGH))

        response = test_client.post("/api/v1/claims", json=claim_payload)

        assert response.status_code == 201
        claim = response.json()["claim"]
        assert claim["status"] == "UnderReview"
        assert claim["computed_payout"] == 150_000
        assert claim["payout"] == 0

    def test_submit_claim_unknown_policy(
        self, test_client: TestClient, ledger, ground_truth_service, claim_payload, assessment_factory
    ) -> None:
        use_classifier(assessment_factory())
        claim_payload["policy_id"] = "pol_404"

        response = test_client.post("/api/v1/claims", json=claim_payload)

        assert response.status_code == 404
        assert len(ledger) == 0

    def test_submit_claim_classifier_failure(
        self, test_client: TestClient, ledger, ground_truth_service, claim_payload
    ) -> None:
        use_classifier({"type": "Flood", "severity": "bad"})
        claim_payload["locale"] = "kn"

        response = test_client.post("/api/v1/claims", json=claim_payload)

        assert response.status_code == 502
        assert response.json()["detail"] == FAILURE_MESSAGES["kn"]
        assert len(ledger) == 0

    def test_submit_claim_raising_classifier(
        self, test_client: TestClient, ledger, ground_truth_service, claim_payload
    ) -> None:
        classifier = MagicMock()
        classifier.assess = AsyncMock(side_effect=RuntimeError("connection reset by peer"))
        app.dependency_overrides[get_disaster_classifier] = lambda: classifier

        response = test_client.post("/api/v1/claims", json=claim_payload)

        assert response.status_code == 502
        assert response.json()["detail"] == FAILURE_MESSAGES["en"]
        assert len(ledger) == 0

    def test_submit_claim_invalid_image(
        self, test_client: TestClient, ledger, ground_truth_service, claim_payload, assessment_factory
    ) -> None:
        use_classifier(assessment_factory())
        claim_payload["image_base64"] = "not base64!!"

        response = test_client.post("/api/v1/claims", json=claim_payload)

        assert response.status_code == 400

    def test_submit_claim_accepts_data_url(
        self, test_client: TestClient, ledger, ground_truth_service, claim_payload, assessment_factory
    ) -> None:
        use_classifier(assessment_factory())
        claim_payload["image_base64"] = "data:image/jpeg;base64," + claim_payload["image_base64"]

        response = test_client.post("/api/v1/claims", json=claim_payload)

        assert response.status_code == 201

    def test_submit_claim_out_of_range_coordinates(
        self, test_client: TestClient, ledger, ground_truth_service, claim_payload, assessment_factory
    ) -> None:
        use_classifier(assessment_factory())
        claim_payload["lat"] = 123.0

        response = test_client.post("/api/v1/claims", json=claim_payload)

        assert response.status_code == 422

    def test_submit_claim_without_classifier_key(
        self, test_client: TestClient, ledger, ground_truth_service, claim_payload, monkeypatch
    ) -> None:
        monkeypatch.setattr(dependencies.settings, "gemini_api_key", "")
        dependencies._build_live_classifier.cache_clear()

        response = test_client.post("/api/v1/claims", json=claim_payload)

        assert response.status_code == 503
        assert len(ledger) == 0

    def test_list_and_get_claims(
        self, test_client: TestClient, ledger, ground_truth_service, claim_payload, assessment_factory
    ) -> None:
        use_classifier(assessment_factory())
        first = test_client.post("/api/v1/claims", json=claim_payload).json()["claim"]
        claim_payload["policy_id"] = "pol_02"
        second = test_client.post("/api/v1/claims", json=claim_payload).json()["claim"]

        listed = test_client.get("/api/v1/claims").json()
        assert [c["id"] for c in listed] == [second["id"], first["id"]]

        filtered = test_client.get("/api/v1/claims", params={"policy_id": "pol_01"}).json()
        assert [c["id"] for c in filtered] == [first["id"]]

        response = test_client.get(f"/api/v1/claims/{first['id']}")
        assert response.status_code == 200
        assert response.json()["policy_id"] == "pol_01"

    def test_get_unknown_claim(self, test_client: TestClient, ledger) -> None:
        response = test_client.get("/api/v1/claims/does-not-exist")
        assert response.status_code == 404


class TestWeatherEndpoints:
    """Test suite for dashboard weather endpoints."""

    def test_current_weather(self, test_client: TestClient) -> None:
        weather_service = MagicMock()
        weather_service.get_current_weather = AsyncMock(return_value=CurrentWeather(
            temperature=27.5, humidity=88.0, wind_speed=14.0, condition_code=63,
        ))
        app.dependency_overrides[get_weather_service] = lambda: weather_service

        response = test_client.get("/api/v1/weather/current", params={"lat": 12.53, "lng": 76.93})

        assert response.status_code == 200
        assert response.json()["condition_code"] == 63
        weather_service.get_current_weather.assert_awaited_once_with(12.53, 76.93)

    def test_current_weather_requires_valid_coordinates(self, test_client: TestClient) -> None:
        response = test_client.get("/api/v1/weather/current", params={"lat": 200, "lng": 76.93})
        assert response.status_code == 422
