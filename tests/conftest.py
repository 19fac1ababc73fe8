"""Pytest configuration and shared fixtures."""

from datetime import date
from typing import Any, Dict

import pytest
from fastapi.testclient import TestClient

from crop_claims.main import app
from crop_claims.schemas.claims import (
    DataSource,
    DisasterAssessment,
    DisasterType,
    FraudRisk,
    GovtDbStatus,
    GroundTruth,
    Policy,
    SatelliteSignal,
    Season,
    WeatherSignal,
)


@pytest.fixture
def test_client() -> TestClient:
    """Create FastAPI test client.

    Returns:
        TestClient: FastAPI test client instance
    """
    return TestClient(app)


@pytest.fixture(autouse=True)
def clear_dependency_overrides():
    """Ensure FastAPI dependency overrides are reset between tests."""
    app.dependency_overrides = {}
    yield
    app.dependency_overrides = {}


def make_policy(sum_insured: int = 250_000, crop_type: str = "Paddy (Rice)", policy_id: str = "pol_test") -> Policy:
    return Policy(
        id=policy_id,
        farmer_name="Ramesh Kumar",
        land_id="SVY-102/4",
        crop_type=crop_type,
        season=Season.KHARIF,
        acres=2.5,
        sum_insured=sum_insured,
        premium_paid=sum_insured * 2 // 100,
        implementing_agency="AIC of India",
        location="Mandya, Karnataka",
        lat=12.532981,
        lng=76.932119,
        govt_db_status=GovtDbStatus.LINKED,
    )


def make_ground_truth(
    rain: float = 25.0,
    ndvi: float = 0.2,
    weather_source: DataSource = DataSource.LIVE,
    satellite_source: DataSource = DataSource.LIVE,
) -> GroundTruth:
    return GroundTruth(
        weather=WeatherSignal(rain_sum_7_days=rain, max_temp_7_days=31.5, source=weather_source),
        satellite=SatelliteSignal(ndvi=ndvi, last_updated=date(2025, 7, 14), source=satellite_source),
    )


def make_assessment(**overrides) -> DisasterAssessment:
    fields = {
        "type": DisasterType.PEST,
        "confidence": 88,
        "severity": 50,
        "is_crop_match": True,
        "detected_crop": "Paddy (Rice)",
        "fraud_risk": FraudRisk.LOW,
        "weather_check_match": True,
        "weather_analysis": "Rainfall is consistent with the reported damage.",
        "satellite_verification": "NDVI indicates stressed vegetation.",
        "description": "Stem borer infestation across most of the plot.",
        "recommended_action": "Apply recommended pesticide and await surveyor visit.",
    }
    fields.update(overrides)
    return DisasterAssessment(**fields)


@pytest.fixture
def policy() -> Policy:
    return make_policy()


@pytest.fixture
def ground_truth() -> GroundTruth:
    """Live ground truth that supports a Pest claim."""
    return make_ground_truth()


@pytest.fixture
def raw_assessment() -> Dict[str, Any]:
    """Well-formed classifier response as decoded JSON."""
    return {
        "type": "Flood",
        "confidence": 91,
        "severity": 70,
        "description": "Standing water covers the paddy field.",
        "satellite_verification": "Low NDVI supports inundation.",
        "recommended_action": "Drain the field where possible.",
        "fraud_risk": "Low",
        "weather_check_match": True,
        "weather_analysis": "Heavy rainfall recorded in the last week.",
        "is_crop_match": True,
        "detected_crop": "Paddy (Rice)",
    }


@pytest.fixture
def sample_image() -> bytes:
    """Minimal JPEG header bytes standing in for a damage photo."""
    return b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00\xff\xd9"


@pytest.fixture
def policy_factory():
    return make_policy


@pytest.fixture
def ground_truth_factory():
    return make_ground_truth


@pytest.fixture
def assessment_factory():
    return make_assessment
