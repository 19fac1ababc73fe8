"""Domain schemas for policies, ground truth signals and claim decisions.

These models define the contract between:
- the policy store and ground truth providers
- the disaster classifier (an untrusted oracle)
- the adjudication engine and the claim ledger
"""

from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


class DisasterType(str, Enum):
    """Disaster categories recognised under PMFBY Clause 8.1."""
    DROUGHT = "Drought"
    FLOOD = "Flood"
    PEST = "Pest"
    DISEASE = "Disease"
    FIRE = "Fire"
    STORM = "Storm"
    NONE = "None"

    @classmethod
    def parse(cls, value) -> Optional["DisasterType"]:
        """Return the matching member (case-insensitive) or None."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        normalized = value.strip().lower()
        for member in cls:
            if member.value.lower() == normalized:
                return member
        return None


class FraudRisk(str, Enum):
    """Qualitative fraud escalation signal."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @property
    def level(self) -> int:
        return _FRAUD_LEVELS.index(self)

    def escalate(self, steps: int = 1) -> "FraudRisk":
        """Move up the Low < Medium < High ladder, capped at High."""
        return _FRAUD_LEVELS[min(self.level + max(steps, 0), len(_FRAUD_LEVELS) - 1)]

    @classmethod
    def parse(cls, value) -> Optional["FraudRisk"]:
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        normalized = value.strip().lower()
        for member in cls:
            if member.value.lower() == normalized:
                return member
        return None


_FRAUD_LEVELS = [FraudRisk.LOW, FraudRisk.MEDIUM, FraudRisk.HIGH]


class Season(str, Enum):
    """PMFBY growing seasons."""
    KHARIF = "Kharif"
    RABI = "Rabi"


class GovtDbStatus(str, Enum):
    """Linkage status with the government land records registry."""
    LINKED = "Linked"
    PENDING = "Pending"


class DataSource(str, Enum):
    """Provenance tag for ground truth signals."""
    LIVE = "live"
    FALLBACK = "fallback"


class Locale(str, Enum):
    """Languages the classifier can answer in."""
    EN = "en"
    KN = "kn"


class Disposition(str, Enum):
    """Terminal claim outcomes."""
    APPROVED = "Approved"
    UNDER_REVIEW = "UnderReview"
    REJECTED = "Rejected"
    DISMISSED = "Dismissed"


class DispositionReason(str, Enum):
    CROP_MISMATCH = "CropMismatch"
    NO_DISASTER = "NoDisaster"
    FRAUD_HIGH = "FraudHigh"
    ELIGIBLE = "Eligible"


# ---------------- Policy ---------------- #

class Policy(BaseModel):
    """A farmer's insurance contract for one land parcel."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Policy identifier", examples=["pol_01"])
    farmer_name: str = Field(..., description="Insured farmer")
    land_id: str = Field(..., description="Survey number from the land records", examples=["SVY-102/4"])
    crop_type: str = Field(..., description="Insured crop", examples=["Paddy (Rice)"])
    season: Season
    acres: float = Field(..., gt=0, description="Insured area in acres")
    sum_insured: int = Field(..., gt=0, description="Maximum payable amount (INR)")
    premium_paid: int = Field(..., ge=0, description="Farmer share of the premium (INR)")
    implementing_agency: str = Field(..., description="Insurer implementing the scheme")
    location: str = Field(..., description="Human readable location label")
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    govt_db_status: GovtDbStatus = GovtDbStatus.LINKED


# ---------------- Ground truth ---------------- #

class WeatherSignal(BaseModel):
    """Trailing 7-day weather history at the claim coordinate."""

    model_config = ConfigDict(frozen=True)

    rain_sum_7_days: float = Field(..., ge=0, description="Cumulative rainfall in mm")
    max_temp_7_days: float = Field(..., description="Peak temperature in °C")
    source: DataSource = DataSource.LIVE
    provider: str = Field(default="Open-Meteo API", description="Provenance label")


class SatelliteSignal(BaseModel):
    """Vegetation health index at the claim coordinate."""

    model_config = ConfigDict(frozen=True)

    ndvi: float = Field(..., ge=-1.0, le=1.0, description="Normalized Difference Vegetation Index")
    last_updated: date
    source: DataSource = DataSource.LIVE


class GroundTruth(BaseModel):
    """Weather and satellite signals resolved once per claim."""

    model_config = ConfigDict(frozen=True)

    weather: WeatherSignal
    satellite: SatelliteSignal

    @computed_field
    @property
    def degraded(self) -> bool:
        return DataSource.FALLBACK in (self.weather.source, self.satellite.source)


class CurrentWeather(BaseModel):
    """Current conditions shown on the farmer dashboard."""

    temperature: float
    humidity: float
    wind_speed: float
    condition_code: int
    source: DataSource = DataSource.LIVE


# ---------------- Classifier output ---------------- #

class DisasterAssessment(BaseModel):
    """Sanitised verdict of the disaster classifier.

    Values are range-checked by the classifier adapter before this model is
    built; the engine still treats every field as advisory input.
    """

    model_config = ConfigDict(frozen=True)

    type: DisasterType
    confidence: int = Field(..., ge=0, le=100)
    severity: int = Field(..., ge=0, le=100, description="Assessed yield loss percentage")
    is_crop_match: bool
    detected_crop: str
    fraud_risk: FraudRisk
    weather_check_match: Optional[bool] = None
    weather_analysis: str = ""
    satellite_verification: str = ""
    description: str = ""
    recommended_action: str = ""
    analysis_failed: bool = False
    validation_warnings: List[str] = Field(default_factory=list)


# ---------------- Verification ---------------- #

class ConsistencyFlag(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    message: str


class VerificationReport(BaseModel):
    """Advisory reconciliation of the classifier claim against ground truth."""

    model_config = ConfigDict(frozen=True)

    flags: List[ConsistencyFlag] = Field(default_factory=list)
    skipped: List[str] = Field(default_factory=list)
    weather_consistent: Optional[bool] = None
    classifier_weather_match: Optional[bool] = None

    @computed_field
    @property
    def consistent(self) -> bool:
        return not self.flags

    @computed_field
    @property
    def classifier_disagrees(self) -> bool:
        if self.weather_consistent is None or self.classifier_weather_match is None:
            return False
        return self.weather_consistent != self.classifier_weather_match


# ---------------- Decision & ledger ---------------- #

class ClaimDecision(BaseModel):
    """Final, auditable output of the adjudication engine."""

    model_config = ConfigDict(frozen=True)

    policy_id: str
    disposition: Disposition
    reason: DispositionReason
    computed_payout: int = Field(..., ge=0, description="Indemnity under the payout rules, kept for audit")
    settlement_amount: int = Field(..., ge=0, description="Amount released for payment")
    citation: str
    reported_fraud_risk: FraudRisk
    effective_fraud_risk: FraudRisk
    verification: VerificationReport
    assessment: DisasterAssessment


class Claim(BaseModel):
    """Persisted ledger record for one adjudicated submission."""

    model_config = ConfigDict(frozen=True)

    id: str
    policy_id: str
    created_at: datetime
    disaster_type: DisasterType
    severity: int
    status: Disposition
    reason: DispositionReason
    computed_payout: int
    payout: int
    citation: str
    weather_source: DataSource
    satellite_source: DataSource
