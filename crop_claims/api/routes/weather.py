"""Dashboard weather API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from crop_claims.dependencies import get_weather_service
from crop_claims.schemas.claims import CurrentWeather
from crop_claims.services.ground_truth.weather_service import WeatherService

router = APIRouter()


@router.get(
    "/current",
    response_model=CurrentWeather,
    summary="Current conditions at a coordinate",
    description="Falls back to typical conditions when the weather API is unavailable.",
    operation_id="get_current_weather",
)
async def current_weather(
    weather_service: Annotated[WeatherService, Depends(get_weather_service)],
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
) -> CurrentWeather:
    return await weather_service.get_current_weather(lat, lng)
