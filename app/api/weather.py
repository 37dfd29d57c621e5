import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.auth.security import get_current_user
from app.schemas.user import TokenData
from app.services import history
from app.services.weather import current_weather, DEFAULT_REGION

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/weather")
def read_weather(location: str = Query(..., min_length=1, description="Region name, e.g. Rift Valley")):
    logger.info("Weather requested for: %s", location)
    return current_weather(location)


@router.get("/weather-history")
def read_weather_history(
    region: Optional[str] = Query(None),
    year: Optional[int] = Query(None, ge=1900, le=2100),
    current_user: TokenData = Depends(get_current_user)
):
    logger.info("Weather history requested by: %s", current_user.email)
    summary = history.weather_summary(history.WEATHER_HISTORY)
    now = datetime.now(timezone.utc)
    return {
        "success": True,
        "data": history.WEATHER_HISTORY,
        "region": region or DEFAULT_REGION,
        "year": year or now.year,
        "totalRainfall": summary["total_rainfall"],
        "averageTemperature": summary["average_temperature"],
        "timestamp": now.isoformat(),
    }
