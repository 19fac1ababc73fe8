"""Ground truth providers: weather history and satellite NDVI."""

from crop_claims.services.ground_truth.ground_truth_service import GroundTruthService
from crop_claims.services.ground_truth.satellite_service import SatelliteService
from crop_claims.services.ground_truth.weather_service import WeatherService

__all__ = ["GroundTruthService", "SatelliteService", "WeatherService"]
