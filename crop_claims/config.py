"""Application configuration management."""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application Settings
    app_name: str = "Crop Claims - PMFBY claim triage service"
    app_version: str = "0.1.0"
    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # API Settings
    api_v1_prefix: str = "/api/v1"
    host: str = "0.0.0.0"
    port: int = 8000

    # Gemini API Configuration
    gemini_api_key: str = Field(
        default="",
        description="Gemini API key (required by the live disaster classifier)"
    )
    gemini_model: str = Field(
        default="gemini-2.5-flash",
        description="Gemini model name"
    )
    classifier_timeout_seconds: int = Field(
        default=60,
        description="Timeout for a single disaster classification call"
    )
    classifier_max_retries: int = Field(
        default=1,
        description="Attempts made by the Gemini client before giving up"
    )

    # Ground Truth Providers
    open_meteo_url: str = Field(
        default="https://api.open-meteo.com/v1/forecast",
        description="Open-Meteo forecast endpoint used for weather history"
    )
    weather_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout budget for the weather history fetch"
    )
    satellite_api_url: Optional[str] = Field(
        default=None,
        description="NDVI endpoint returning {'ndvi': float, 'date': 'YYYY-MM-DD'}"
    )
    satellite_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout budget for the NDVI fetch"
    )

    # Payout Rules
    drought_on_account_cap_enabled: bool = Field(
        default=False,
        description="Cap Drought payouts as an on-account payment (Clause 15.5)"
    )
    drought_on_account_cap_ratio: float = Field(
        default=0.25,
        description="Fraction of sum insured payable on account for Drought"
    )
    escalate_fraud_on_inconsistency: bool = Field(
        default=True,
        description="Raise the fraud risk one level per ground truth inconsistency"
    )

    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).resolve().parent.parent / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


def get_settings() -> Settings:
    """Get application settings instance.

    Returns:
        Settings: Application settings loaded from environment
    """
    return Settings()


# Global settings instance
settings = get_settings()
