"""Disaster classifier adapters.

The classifier is an external oracle: it looks at the damage photo plus the
claim context and returns a structured verdict. Its output is untrusted.
Every response goes through ``parse_assessment``, which rejects responses
with missing or wrongly typed fields and sanitises out-of-range values.

Two implementations share the ``DisasterClassifier`` interface:
- LiveClassifier: Gemini multimodal call
- FixedResponseClassifier: replays a canned response (tests, demos)
"""

import math
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Union

from crop_claims.core.exceptions import ClassifierError, ConfigurationError, ValidationError
from crop_claims.core.gemini_client import GeminiClient
from crop_claims.prompts.disaster_assessment import (
    DISASTER_ASSESSMENT_PROMPT,
    DISASTER_ASSESSMENT_SCHEMA,
    LANGUAGE_INSTRUCTIONS,
    PROMPT_VERSION,
    SATELLITE_CONTEXT,
    SATELLITE_UNAVAILABLE,
    WEATHER_CONTEXT,
    WEATHER_UNAVAILABLE,
)
from crop_claims.schemas.claims import (
    DataSource,
    DisasterAssessment,
    DisasterType,
    FraudRisk,
    GroundTruth,
    Locale,
)
from crop_claims.utils.json_parser import parse_json_safely
from crop_claims.utils.logging import get_logger

LOGGER = get_logger(__name__)

REQUIRED_FIELDS = ("type", "confidence", "severity", "is_crop_match", "detected_crop")

FAILURE_MESSAGES = {
    Locale.EN: "Analysis failed. Please retry.",
    Locale.KN: "ವಿಶ್ಲೇಷಣೆ ವಿಫಲವಾಗಿದೆ. ದಯವಿಟ್ಟು ಮತ್ತೆ ಪ್ರಯತ್ನಿಸಿ.",
}


def failed_assessment(locale: Locale = Locale.EN) -> DisasterAssessment:
    """Neutral assessment returned when the oracle cannot be used."""
    return DisasterAssessment(
        type=DisasterType.NONE,
        confidence=0,
        severity=0,
        is_crop_match=False,
        detected_crop="Unknown",
        fraud_risk=FraudRisk.LOW,
        weather_check_match=None,
        weather_analysis="N/A",
        satellite_verification="N/A",
        description=FAILURE_MESSAGES.get(Locale(locale), FAILURE_MESSAGES[Locale.EN]),
        recommended_action="Retry",
        analysis_failed=True,
    )


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_percentage(name: str, value: Any, warnings: List[str]) -> int:
    """Parse a 0-100 reading from oracle output.

    Non-numeric values are a validation error; out-of-range values are
    clamped and the correction recorded in ``warnings``.

    Raises:
        ValidationError: If the value is not a finite number
    """
    if not _is_number(value) or math.isnan(value):
        raise ValidationError(f"'{name}' must be a number, got {value!r}")

    if value < 0 or value > 100:
        clamped = 0 if value < 0 else 100
        warnings.append(f"{name} {value} outside 0-100, clamped to {clamped}")
        return clamped
    return int(value)


def parse_assessment(payload: Any) -> DisasterAssessment:
    """Validate and sanitise a raw classifier response.

    Args:
        payload: Decoded JSON object from the classifier

    Returns:
        DisasterAssessment with clamped numbers and safe enum defaults

    Raises:
        ClassifierError: If the response is not an object, lacks a required
            field, or carries a wrongly typed field
    """
    if not isinstance(payload, dict):
        raise ClassifierError(f"Classifier response is not a JSON object: {type(payload).__name__}")

    missing = [field for field in REQUIRED_FIELDS if field not in payload or payload[field] is None]
    if missing:
        raise ClassifierError(f"Classifier response missing required fields: {missing}")

    if not isinstance(payload["type"], str):
        raise ClassifierError("'type' must be a string")
    if not isinstance(payload["is_crop_match"], bool):
        raise ClassifierError("'is_crop_match' must be a boolean")
    if not isinstance(payload["detected_crop"], str):
        raise ClassifierError("'detected_crop' must be a string")

    weather_check_match = payload.get("weather_check_match")
    if weather_check_match is not None and not isinstance(weather_check_match, bool):
        raise ClassifierError("'weather_check_match' must be a boolean")

    warnings: List[str] = []
    try:
        confidence = parse_percentage("confidence", payload["confidence"], warnings)
        severity = parse_percentage("severity", payload["severity"], warnings)
    except ValidationError as e:
        raise ClassifierError(f"Invalid classifier response: {e}", original_error=e)

    disaster_type = DisasterType.parse(payload["type"])
    if disaster_type is None:
        warnings.append(f"unknown disaster type {payload['type']!r}, treated as None")
        disaster_type = DisasterType.NONE

    fraud_risk = FraudRisk.parse(payload.get("fraud_risk"))
    if fraud_risk is None:
        warnings.append(f"unknown fraud risk {payload.get('fraud_risk')!r}, treated as High")
        fraud_risk = FraudRisk.HIGH

    if warnings:
        LOGGER.warning("Classifier response sanitised", extra={"warnings": warnings})

    def text(field: str) -> str:
        value = payload.get(field)
        return value if isinstance(value, str) else ""

    return DisasterAssessment(
        type=disaster_type,
        confidence=confidence,
        severity=severity,
        is_crop_match=payload["is_crop_match"],
        detected_crop=payload["detected_crop"],
        fraud_risk=fraud_risk,
        weather_check_match=weather_check_match,
        weather_analysis=text("weather_analysis"),
        satellite_verification=text("satellite_verification"),
        description=text("description"),
        recommended_action=text("recommended_action"),
        validation_warnings=warnings,
    )


def build_prompt(
    lat: float,
    lng: float,
    expected_crop: str,
    ground_truth: Optional[GroundTruth],
    locale: Locale = Locale.EN,
) -> str:
    """Render the surveyor prompt; fallback signals are reported as unavailable."""
    weather_context = WEATHER_UNAVAILABLE
    satellite_context = SATELLITE_UNAVAILABLE

    if ground_truth is not None:
        weather = ground_truth.weather
        if weather.source == DataSource.LIVE:
            weather_context = WEATHER_CONTEXT.format(rain=weather.rain_sum_7_days, temp=weather.max_temp_7_days)

        satellite = ground_truth.satellite
        if satellite.source == DataSource.LIVE:
            satellite_context = SATELLITE_CONTEXT.format(
                date=satellite.last_updated.isoformat(), ndvi=satellite.ndvi
            )

    return DISASTER_ASSESSMENT_PROMPT.format(
        lat=lat,
        lng=lng,
        expected_crop=expected_crop,
        weather_context=weather_context.strip(),
        satellite_context=satellite_context.strip(),
        language_instruction=LANGUAGE_INSTRUCTIONS[Locale(locale).value],
    )


class DisasterClassifier(ABC):
    """Interface for disaster classification oracles."""

    @abstractmethod
    async def assess(
        self,
        image: bytes,
        lat: float,
        lng: float,
        expected_crop: str,
        ground_truth: Optional[GroundTruth] = None,
        locale: Locale = Locale.EN,
        mime_type: str = "image/jpeg",
    ) -> DisasterAssessment:
        """Assess a damage photo.

        Never raises: an unusable oracle answer yields ``failed_assessment``.
        """


class LiveClassifier(DisasterClassifier):
    """Gemini-backed disaster classifier."""

    def __init__(
        self,
        api_key: str = "",
        model: str = "gemini-2.5-flash",
        timeout: int = 60,
        max_retries: int = 1,
        client: Optional[GeminiClient] = None,
    ):
        """Initialize live classifier.

        Args:
            api_key: Gemini API key
            model: Gemini model name
            timeout: Timeout for the classification call in seconds
            max_retries: Attempts made by the Gemini client
            client: Optional pre-built Gemini client

        Raises:
            ConfigurationError: If neither a client nor an API key is provided
        """
        if client is None and not api_key:
            raise ConfigurationError("GEMINI_API_KEY is required for the live disaster classifier")

        self.client = client or GeminiClient(
            api_key=api_key,
            model=model,
            timeout=timeout,
            max_retries=max_retries,
        )

    async def assess(
        self,
        image: bytes,
        lat: float,
        lng: float,
        expected_crop: str,
        ground_truth: Optional[GroundTruth] = None,
        locale: Locale = Locale.EN,
        mime_type: str = "image/jpeg",
    ) -> DisasterAssessment:
        prompt = build_prompt(lat, lng, expected_crop, ground_truth, locale)

        try:
            response = await self.client.generate_content(
                contents=[GeminiClient.image_part(image, mime_type), prompt],
                generation_config={
                    "response_mime_type": "application/json",
                    "response_schema": DISASTER_ASSESSMENT_SCHEMA,
                },
            )
            if not response:
                raise ClassifierError("Empty response from classifier")

            payload = parse_json_safely(response)
            if payload is None:
                raise ClassifierError("Classifier response is not valid JSON")

            assessment = parse_assessment(payload)
            LOGGER.info(
                "Disaster assessment received",
                extra={
                    "prompt_version": PROMPT_VERSION,
                    "disaster_type": assessment.type.value,
                    "severity": assessment.severity,
                    "confidence": assessment.confidence,
                    "is_crop_match": assessment.is_crop_match,
                },
            )
            return assessment

        except Exception as e:
            LOGGER.error(f"Disaster classification failed: {e}", exc_info=True)
            return failed_assessment(locale)


class FixedResponseClassifier(DisasterClassifier):
    """Deterministic classifier that replays one canned response.

    The response goes through the same validation as a live one, so a
    malformed canned payload produces the failure assessment.
    """

    def __init__(self, response: Union[Dict[str, Any], DisasterAssessment]):
        self.response = response
        self.calls: List[Dict[str, Any]] = []

    async def assess(
        self,
        image: bytes,
        lat: float,
        lng: float,
        expected_crop: str,
        ground_truth: Optional[GroundTruth] = None,
        locale: Locale = Locale.EN,
        mime_type: str = "image/jpeg",
    ) -> DisasterAssessment:
        self.calls.append({
            "lat": lat,
            "lng": lng,
            "expected_crop": expected_crop,
            "ground_truth": ground_truth,
            "locale": locale,
        })

        if isinstance(self.response, DisasterAssessment):
            return self.response
        try:
            return parse_assessment(self.response)
        except ClassifierError as e:
            LOGGER.error(f"Canned classifier response rejected: {e}")
            return failed_assessment(locale)
