"""City temperature store.

``WeatherStore`` is the interface the HTTP layer talks to.  The default
``InMemoryWeatherStore`` keeps everything in dicts for the lifetime of the
process; swap it with ``set_store`` or pass one to ``create_app``.
"""
from __future__ import annotations

import json
import logging
import math
from abc import ABC, abstractmethod
from datetime import date

log = logging.getLogger(__name__)


class DuplicateTemperatureError(ValueError):
    """Raised when a city already holds a reading for the given date."""


class CityRecord(ABC):
    """A named city owning at most one max temperature per date."""

    name: str

    @abstractmethod
    def temperatures(self) -> dict[date, float]:
        """Return a copy of the date -> max temperature mapping."""

    @abstractmethod
    def has_temperature(self, day: date) -> bool:
        ...

    @abstractmethod
    def add_temperature(self, day: date, value: float) -> None:
        """Store a reading; raise DuplicateTemperatureError if *day* is taken."""


class WeatherStore(ABC):
    """Backing store for cities and their temperature history."""

    @abstractmethod
    def list_cities(self) -> list[str] | None:
        """Return all city names, or None if the store cannot answer."""

    @abstractmethod
    def get_temperatures(self, city: str) -> dict[date, float] | None:
        """Return the readings for *city*, or None if it is unknown."""

    @abstractmethod
    def add_city(self, name: str) -> bool:
        """Create *name* if absent. Returns False when it already exists."""

    @abstractmethod
    def get_city(self, name: str) -> CityRecord | None:
        ...


class InMemoryCity(CityRecord):
    def __init__(self, name: str) -> None:
        self.name = name
        self._temps: dict[date, float] = {}

    def temperatures(self) -> dict[date, float]:
        return dict(self._temps)

    def has_temperature(self, day: date) -> bool:
        return day in self._temps

    def add_temperature(self, day: date, value: float) -> None:
        if day in self._temps:
            raise DuplicateTemperatureError(
                f"{self.name} already has a temperature for {day.isoformat()}"
            )
        self._temps[day] = float(value)


class InMemoryWeatherStore(WeatherStore):
    """Dict-backed store for a single-worker app."""

    def __init__(self) -> None:
        self._cities: dict[str, InMemoryCity] = {}

    def list_cities(self) -> list[str]:
        return list(self._cities.keys())

    def get_temperatures(self, city: str) -> dict[date, float] | None:
        record = self._cities.get(city)
        if record is None:
            return None
        return record.temperatures()

    def add_city(self, name: str) -> bool:
        if name in self._cities:
            return False
        self._cities[name] = InMemoryCity(name)
        return True

    def get_city(self, name: str) -> InMemoryCity | None:
        return self._cities.get(name)

    def __len__(self) -> int:
        return len(self._cities)


def load_seed(store: WeatherStore, path: str) -> int:
    """Load ``{"city": {"YYYY-MM-DD": temp, ...}, ...}`` into *store*.

    Returns the number of readings added.  Bad dates, duplicate readings and
    values that are not finite JSON numbers are logged and skipped; a root
    that is not a JSON object is an error.
    """
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, dict):
        raise ValueError(
            'Unexpected seed JSON format: expected {"city": {"YYYY-MM-DD": temp}}'
        )

    added = 0
    for name, readings in raw.items():
        store.add_city(name)
        city = store.get_city(name)
        if city is None:
            log.warning("Seed city %s could not be created, skipping", name)
            continue
        if not isinstance(readings, dict):
            log.warning("Seed readings for %s are not an object, skipping", name)
            continue
        for day_str, value in readings.items():
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                log.warning(
                    "Seed entry %s/%s skipped: %r is not a number", name, day_str, value
                )
                continue
            if not math.isfinite(value):
                log.warning(
                    "Seed entry %s/%s skipped: %r is not finite", name, day_str, value
                )
                continue
            try:
                day = date.fromisoformat(day_str)
                city.add_temperature(day, value)
            except (TypeError, ValueError) as e:
                log.warning("Seed entry %s/%s skipped: %s", name, day_str, e)
                continue
            added += 1
    return added


# Process-wide default; replaced with set_store()
_store: WeatherStore = InMemoryWeatherStore()


def get_store() -> WeatherStore:
    return _store


def set_store(store: WeatherStore) -> None:
    """Replace the process-wide store used by apps created without one."""
    global _store
    _store = store
