"""Centralized dependency injection for FastAPI application.

Collaborators are process-wide singletons; tests replace them through
``app.dependency_overrides``.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, HTTPException, status

from crop_claims.config import settings
from crop_claims.core.exceptions import ConfigurationError
from crop_claims.repositories.claim_repository import ClaimLedger
from crop_claims.repositories.policy_repository import PolicyRepository
from crop_claims.services.adjudication.engine import rules_from_settings
from crop_claims.services.claim_service import ClaimService
from crop_claims.services.classification.disaster_classifier import DisasterClassifier, LiveClassifier
from crop_claims.services.ground_truth.ground_truth_service import GroundTruthService
from crop_claims.services.ground_truth.satellite_service import SatelliteService
from crop_claims.services.ground_truth.weather_service import WeatherService
from crop_claims.utils.logging import get_logger

LOGGER = get_logger(__name__)


@lru_cache
def get_policy_repository() -> PolicyRepository:
    """Get the policy store."""
    return PolicyRepository()


@lru_cache
def get_claim_ledger() -> ClaimLedger:
    """Get the process-wide claim ledger."""
    return ClaimLedger()


@lru_cache
def get_weather_service() -> WeatherService:
    return WeatherService(base_url=settings.open_meteo_url, timeout=settings.weather_timeout_seconds)


@lru_cache
def get_ground_truth_service() -> GroundTruthService:
    """Get the ground truth fan-out service."""
    return GroundTruthService(
        weather_service=get_weather_service(),
        satellite_service=SatelliteService(
            api_url=settings.satellite_api_url,
            timeout=settings.satellite_timeout_seconds,
        ),
        weather_timeout=settings.weather_timeout_seconds,
        satellite_timeout=settings.satellite_timeout_seconds,
    )


@lru_cache
def _build_live_classifier() -> LiveClassifier:
    return LiveClassifier(
        api_key=settings.gemini_api_key,
        model=settings.gemini_model,
        timeout=settings.classifier_timeout_seconds,
        max_retries=settings.classifier_max_retries,
    )


def get_disaster_classifier() -> DisasterClassifier:
    """Get the live disaster classifier.

    Raises:
        HTTPException: 503 if the classifier is not configured
    """
    try:
        return _build_live_classifier()
    except ConfigurationError as e:
        LOGGER.error(f"Disaster classifier unavailable: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Damage assessment is temporarily unavailable",
        )


async def get_claim_service(
    policy_repository: Annotated[PolicyRepository, Depends(get_policy_repository)],
    ground_truth_service: Annotated[GroundTruthService, Depends(get_ground_truth_service)],
    classifier: Annotated[DisasterClassifier, Depends(get_disaster_classifier)],
    ledger: Annotated[ClaimLedger, Depends(get_claim_ledger)],
) -> ClaimService:
    """Get claim service instance.

    Args:
        policy_repository: Policy store
        ground_truth_service: Weather and satellite fan-out
        classifier: Disaster classifier
        ledger: Claim ledger

    Returns:
        ClaimService: Workflow for claim submissions
    """
    return ClaimService(
        policy_repository=policy_repository,
        ground_truth_service=ground_truth_service,
        classifier=classifier,
        ledger=ledger,
        rules=rules_from_settings(settings),
        escalate_on_inconsistency=settings.escalate_fraud_on_inconsistency,
        classifier_timeout=settings.classifier_timeout_seconds,
    )
