"""Satellite vegetation index (NDVI) provider."""

import math
from datetime import date
from typing import Optional

import httpx

from crop_claims.schemas.claims import DataSource, SatelliteSignal
from crop_claims.utils.logging import get_logger

LOGGER = get_logger(__name__)

FALLBACK_NDVI = 0.0


def fallback_satellite_signal() -> SatelliteSignal:
    """Placeholder signal used when no NDVI reading could be obtained."""
    return SatelliteSignal(ndvi=FALLBACK_NDVI, last_updated=date.today(), source=DataSource.FALLBACK)


class SatelliteService:
    """Fetches the latest NDVI scalar for a coordinate.

    The upstream endpoint answers ``GET <url>?lat=..&lng=..`` with
    ``{"ndvi": 0.42, "date": "2025-07-14"}``.
    """

    def __init__(
        self,
        api_url: Optional[str],
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_url = api_url
        self.timeout = timeout
        self.client = client

    async def _fetch(self, lat: float, lng: float) -> dict:
        params = {"lat": lat, "lng": lng}
        if self.client is not None:
            response = await self.client.get(self.api_url, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(self.api_url, params=params)
            response.raise_for_status()
            return response.json()

    async def get_index(self, lat: float, lng: float) -> SatelliteSignal:
        """Return the NDVI at a coordinate, or the fallback signal on any failure.

        Args:
            lat: Claim latitude
            lng: Claim longitude

        Returns:
            SatelliteSignal with NDVI clamped to [-1, 1]
        """
        if not self.api_url:
            LOGGER.warning("Satellite API URL not configured, using fallback NDVI")
            return fallback_satellite_signal()

        try:
            data = await self._fetch(lat, lng)
            ndvi = float(data["ndvi"])
            if math.isnan(ndvi):
                raise ValueError("NDVI is not a number")
            last_updated = date.fromisoformat(data["date"]) if data.get("date") else date.today()

            signal = SatelliteSignal(
                ndvi=max(-1.0, min(1.0, ndvi)),
                last_updated=last_updated,
                source=DataSource.LIVE,
            )
            LOGGER.debug("Fetched satellite index", extra={"lat": lat, "lng": lng, "ndvi": signal.ndvi})
            return signal

        except Exception as e:
            LOGGER.warning(
                f"Satellite API failed, using fallback NDVI: {e}",
                extra={"lat": lat, "lng": lng},
            )
            return fallback_satellite_signal()
