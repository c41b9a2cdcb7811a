from __future__ import annotations

import logging
import re
from datetime import date

from fastapi import APIRouter, HTTPException, Query, Request

from weatherservice.models import DataMessage, Message
from weatherservice.store import DuplicateTemperatureError, WeatherStore

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/weather")

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _store(request: Request) -> WeatherStore:
    return request.app.state.store


def parse_day(value: str) -> date:
    """Parse a strict ``YYYY-MM-DD`` string. Raises ValueError otherwise."""
    if not _DATE_RE.match(value):
        raise ValueError(f"Invalid date '{value}', expected YYYY-MM-DD")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValueError(f"Invalid date '{value}', expected YYYY-MM-DD") from None


@router.get("/cities")
async def list_cities(request: Request):
    cities = _store(request).list_cities()
    if cities is None:
        return DataMessage(success=False, data=[])
    return DataMessage(success=True, data=list(cities))


@router.get("/cities/{city}/temperatures")
async def get_temperatures(city: str, request: Request):
    temps = _store(request).get_temperatures(city)
    if temps is None:
        return DataMessage(success=False, data=[])
    pairs = [[day.isoformat(), value] for day, value in sorted(temps.items())]
    return DataMessage(success=True, data=pairs)


@router.put("/cities")
async def create_city(request: Request, name: str = Query(...)):
    created = _store(request).add_city(name)
    if created:
        log.info("Added city %s", name)
    else:
        log.debug("City %s already exists", name)
    return Message(success=created)


@router.post("/cities/{city}/temperatures")
async def add_temperature(
    city: str,
    request: Request,
    date: str = Query(...),
    temperature: float = Query(..., allow_inf_nan=False),
):
    try:
        day = parse_day(date)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    record = _store(request).get_city(city)
    rejected = f"{city} does not exist or already contains this temperature!"
    if record is None or record.has_temperature(day):
        log.warning("Rejected temperature %s for %s on %s", temperature, city, day)
        raise HTTPException(status_code=400, detail=rejected)

    try:
        record.add_temperature(day, temperature)
    except DuplicateTemperatureError:
        raise HTTPException(status_code=400, detail=rejected)

    log.info("Added temperature %s for %s on %s", temperature, city, day)
    return Message(success=True)
