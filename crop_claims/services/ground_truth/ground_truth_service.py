"""Concurrent fan-out to the weather and satellite providers."""

import asyncio
from typing import Awaitable, Callable, TypeVar

from crop_claims.schemas.claims import GroundTruth
from crop_claims.services.ground_truth.satellite_service import SatelliteService, fallback_satellite_signal
from crop_claims.services.ground_truth.weather_service import FALLBACK_WEATHER, WeatherService
from crop_claims.utils.logging import get_logger

LOGGER = get_logger(__name__)

T = TypeVar("T")


class GroundTruthService:
    """Resolves the weather and satellite signals for a claim coordinate.

    Both fetches run concurrently, each under its own timeout budget. A fetch
    that times out or fails resolves to its documented fallback signal, so
    ``fetch`` never raises and never cancels the claim.
    """

    def __init__(
        self,
        weather_service: WeatherService,
        satellite_service: SatelliteService,
        weather_timeout: float = 10.0,
        satellite_timeout: float = 10.0,
    ):
        self.weather_service = weather_service
        self.satellite_service = satellite_service
        self.weather_timeout = weather_timeout
        self.satellite_timeout = satellite_timeout

    @staticmethod
    async def _bounded(
        name: str,
        call: Awaitable[T],
        timeout: float,
        fallback: Callable[[], T],
    ) -> T:
        try:
            return await asyncio.wait_for(call, timeout=timeout)
        except asyncio.TimeoutError:
            LOGGER.warning(f"{name} fetch exceeded {timeout}s budget, using fallback")
        except Exception as e:
            LOGGER.warning(f"{name} fetch failed, using fallback: {e}")
        return fallback()

    async def fetch(self, lat: float, lng: float) -> GroundTruth:
        """Fetch both ground truth signals for a coordinate.

        Args:
            lat: Claim latitude
            lng: Claim longitude

        Returns:
            GroundTruth snapshot, possibly containing fallback signals
        """
        weather, satellite = await asyncio.gather(
            self._bounded(
                "Weather",
                self.weather_service.get_history(lat, lng),
                self.weather_timeout,
                lambda: FALLBACK_WEATHER,
            ),
            self._bounded(
                "Satellite",
                self.satellite_service.get_index(lat, lng),
                self.satellite_timeout,
                fallback_satellite_signal,
            ),
        )

        ground_truth = GroundTruth(weather=weather, satellite=satellite)
        LOGGER.info(
            "Ground truth resolved",
            extra={
                "lat": lat,
                "lng": lng,
                "weather_source": weather.source.value,
                "satellite_source": satellite.source.value,
                "degraded": ground_truth.degraded,
            },
        )
        return ground_truth
