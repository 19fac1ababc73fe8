"""Ground truth cross-verification of classifier claims.

The checks are advisory. They never reject a claim on their own; each
inconsistency escalates the fraud risk instead, because weather station and
satellite resolution can lag a real event.
"""

from typing import List

from crop_claims.schemas.claims import (
    ConsistencyFlag,
    DataSource,
    DisasterAssessment,
    DisasterType,
    FraudRisk,
    GroundTruth,
    VerificationReport,
)
from crop_claims.utils.logging import get_logger

LOGGER = get_logger(__name__)

FLOOD_MIN_RAIN_MM = 10.0
DROUGHT_MAX_RAIN_MM = 50.0
STRESSED_NDVI_CEILING = 0.3
FLOOD_NDVI_CEILING = 0.5
SEVERE_PEST_DISEASE_SEVERITY = 50

WEATHER_CHECK = "weather"
SATELLITE_CHECK = "satellite"


def _claims_vegetation_stress(assessment: DisasterAssessment) -> bool:
    if assessment.type == DisasterType.DROUGHT:
        return True
    return (
        assessment.type in (DisasterType.PEST, DisasterType.DISEASE)
        and assessment.severity >= SEVERE_PEST_DISEASE_SEVERITY
    )


def _weather_flags(assessment: DisasterAssessment, ground_truth: GroundTruth) -> List[ConsistencyFlag]:
    rain = ground_truth.weather.rain_sum_7_days
    flags = []

    if assessment.type == DisasterType.FLOOD and rain < FLOOD_MIN_RAIN_MM:
        flags.append(ConsistencyFlag(
            code="FLOOD_WITHOUT_RAIN",
            message=f"Flood claimed but only {rain:.1f} mm of rain fell in the last 7 days",
        ))
    if assessment.type == DisasterType.DROUGHT and rain > DROUGHT_MAX_RAIN_MM:
        flags.append(ConsistencyFlag(
            code="DROUGHT_WITH_RAIN",
            message=f"Drought claimed but {rain:.1f} mm of rain fell in the last 7 days",
        ))
    return flags


def _satellite_flags(assessment: DisasterAssessment, ground_truth: GroundTruth) -> List[ConsistencyFlag]:
    ndvi = ground_truth.satellite.ndvi
    flags = []

    if _claims_vegetation_stress(assessment) and ndvi >= STRESSED_NDVI_CEILING:
        flags.append(ConsistencyFlag(
            code="HEALTHY_NDVI_FOR_STRESS",
            message=f"{assessment.type.value} claimed but NDVI {ndvi:.2f} shows healthy vegetation",
        ))
    if assessment.type == DisasterType.FLOOD and ndvi >= FLOOD_NDVI_CEILING:
        flags.append(ConsistencyFlag(
            code="FLOOD_WITH_VEGETATION",
            message=f"Flood claimed but NDVI {ndvi:.2f} shows no inundation signature",
        ))
    return flags


def verify_consistency(assessment: DisasterAssessment, ground_truth: GroundTruth) -> VerificationReport:
    """Reconcile the classifier's disaster claim against weather and NDVI.

    Checks backed by fallback signals are skipped rather than evaluated
    against placeholder values.

    Args:
        assessment: Sanitised classifier output
        ground_truth: Weather and satellite signals for the claim coordinate

    Returns:
        VerificationReport listing raised flags and skipped checks
    """
    flags: List[ConsistencyFlag] = []
    skipped: List[str] = []
    weather_consistent = None

    if ground_truth.weather.source == DataSource.FALLBACK:
        skipped.append(WEATHER_CHECK)
    else:
        weather = _weather_flags(assessment, ground_truth)
        weather_consistent = not weather
        flags.extend(weather)

    if ground_truth.satellite.source == DataSource.FALLBACK:
        skipped.append(SATELLITE_CHECK)
    else:
        flags.extend(_satellite_flags(assessment, ground_truth))

    report = VerificationReport(
        flags=flags,
        skipped=skipped,
        weather_consistent=weather_consistent,
        classifier_weather_match=assessment.weather_check_match,
    )

    if report.flags:
        LOGGER.info(
            "Ground truth inconsistencies found",
            extra={"disaster_type": assessment.type.value, "flags": [f.code for f in report.flags]},
        )
    if report.classifier_disagrees:
        LOGGER.warning(
            "Classifier weather self-check disagrees with station data",
            extra={
                "classifier_weather_match": report.classifier_weather_match,
                "weather_consistent": report.weather_consistent,
            },
        )
    return report


def escalate_fraud_risk(reported: FraudRisk, report: VerificationReport) -> FraudRisk:
    """Raise the reported fraud risk one level per inconsistency flag, capped at High."""
    return reported.escalate(len(report.flags))
