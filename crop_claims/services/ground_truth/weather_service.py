"""Weather ground truth from the Open-Meteo forecast API.

The forecast endpoint with ``past_days=7`` is used instead of the archive
API, which lags by about five days and misses recent events.
"""

from typing import Any, Dict, Optional

import httpx

from crop_claims.schemas.claims import CurrentWeather, DataSource, WeatherSignal
from crop_claims.utils.logging import get_logger

LOGGER = get_logger(__name__)

HISTORY_DAYS = 7

FALLBACK_WEATHER = WeatherSignal(
    rain_sum_7_days=0.0,
    max_temp_7_days=30.0,
    source=DataSource.FALLBACK,
    provider="Fallback Mode",
)

FALLBACK_CURRENT_WEATHER = CurrentWeather(
    temperature=32.0,
    humidity=65.0,
    wind_speed=12.0,
    condition_code=0,
    source=DataSource.FALLBACK,
)


class WeatherService:
    """Open-Meteo client that always answers, degrading to fallback values."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize weather service.

        Args:
            base_url: Open-Meteo forecast endpoint
            timeout: Request timeout in seconds
            client: Optional shared HTTP client (one is created per call otherwise)
        """
        self.base_url = base_url
        self.timeout = timeout
        self.client = client

    async def _get_json(self, params: Dict[str, Any]) -> Dict[str, Any]:
        if self.client is not None:
            response = await self.client.get(self.base_url, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(self.base_url, params=params)
            response.raise_for_status()
            return response.json()

    async def get_history(self, lat: float, lng: float) -> WeatherSignal:
        """Fetch cumulative rainfall and peak temperature over the last 7 days.

        Args:
            lat: Claim latitude
            lng: Claim longitude

        Returns:
            WeatherSignal tagged live, or FALLBACK_WEATHER if the upstream fails
        """
        params = {
            "latitude": lat,
            "longitude": lng,
            "daily": "temperature_2m_max,precipitation_sum",
            "past_days": HISTORY_DAYS,
            "timezone": "auto",
        }
        try:
            data = await self._get_json(params)
            daily = (data or {}).get("daily")
            if not daily:
                raise ValueError("Weather data unavailable")

            # Past days come first; anything after is forecast
            rains = daily["precipitation_sum"][:HISTORY_DAYS]
            temps = [t for t in daily["temperature_2m_max"][:HISTORY_DAYS] if t is not None]
            if not temps:
                raise ValueError("No temperature readings in weather history")

            signal = WeatherSignal(
                rain_sum_7_days=sum(r or 0 for r in rains),
                max_temp_7_days=max(temps),
                source=DataSource.LIVE,
                provider="Open-Meteo API",
            )
            LOGGER.debug(
                "Fetched weather history",
                extra={"lat": lat, "lng": lng, "rain_sum_7_days": signal.rain_sum_7_days},
            )
            return signal

        except Exception as e:
            LOGGER.warning(
                f"Weather API failed, using fallback values: {e}",
                extra={"lat": lat, "lng": lng},
            )
            return FALLBACK_WEATHER

    async def get_current_weather(self, lat: float, lng: float) -> CurrentWeather:
        """Fetch current conditions for the dashboard, with fallback values."""
        params = {
            "latitude": lat,
            "longitude": lng,
            "current": "temperature_2m,relative_humidity_2m,wind_speed_10m,weather_code",
            "timezone": "auto",
        }
        try:
            data = await self._get_json(params)
            current = (data or {}).get("current")
            if not current:
                raise ValueError("Current weather data unavailable")

            return CurrentWeather(
                temperature=current["temperature_2m"],
                humidity=current["relative_humidity_2m"],
                wind_speed=current["wind_speed_10m"],
                condition_code=current["weather_code"],
                source=DataSource.LIVE,
            )
        except Exception as e:
            LOGGER.warning(f"Current weather fetch failed: {e}", extra={"lat": lat, "lng": lng})
            return FALLBACK_CURRENT_WEATHER
