from __future__ import annotations

import logging
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, HTTPException, Query

from app.api.v1.schemas import WeatherResponseSchema
from app.application.exceptions import ForecastProviderError, NoForecastDataError
from app.application.use_cases.resolve_weather import ResolveWeatherUseCase
from app.application.utils.date_parser import parse_instant
from app.wiring.dependencies import get_resolve_weather_use_case, get_timezone

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/weather", response_model=WeatherResponseSchema)
async def get_weather(
    date: str | None = Query(None, description="ISO-8601 date or instant"),
    location: str | None = Query(None, description='City, e.g. "Mumbai,IN"'),
    uc: ResolveWeatherUseCase = Depends(get_resolve_weather_use_case),
    timezone: ZoneInfo = Depends(get_timezone),
):
    if not date or not location or not location.strip():
        raise HTTPException(status_code=400, detail="date and location are required query params.")

    instant = parse_instant(date, timezone)
    if instant is None:
        raise HTTPException(status_code=400, detail="Invalid date format.")

    try:
        advice = await uc.execute(instant.astimezone(timezone).date(), location.strip())
    except ForecastProviderError as e:
        logger.warning("Weather lookup failed", extra={"location": location, "error": str(e)})
        raise HTTPException(status_code=500, detail=str(e))
    except NoForecastDataError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return WeatherResponseSchema.from_advice(advice)
