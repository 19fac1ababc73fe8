from .claims import (
    Claim,
    ClaimDecision,
    ConsistencyFlag,
    CurrentWeather,
    DataSource,
    DisasterAssessment,
    DisasterType,
    Disposition,
    DispositionReason,
    FraudRisk,
    GovtDbStatus,
    GroundTruth,
    Locale,
    Policy,
    SatelliteSignal,
    Season,
    VerificationReport,
    WeatherSignal,
)

__all__ = [
    "Claim",
    "ClaimDecision",
    "ConsistencyFlag",
    "CurrentWeather",
    "DataSource",
    "DisasterAssessment",
    "DisasterType",
    "Disposition",
    "DispositionReason",
    "FraudRisk",
    "GovtDbStatus",
    "GroundTruth",
    "Locale",
    "Policy",
    "SatelliteSignal",
    "Season",
    "VerificationReport",
    "WeatherSignal",
]
