"""Weather provider abstractions and mock implementations."""

from __future__ import annotations

import logging
import random
from abc import ABC, abstractmethod

from models.weather import WeatherInfo


LOGGER = logging.getLogger(__name__)

MOCK_CONDITIONS = ("Sunny", "Cloudy", "Rainy", "Clear")
DEFAULT_WEATHER = WeatherInfo(
    temperature=22,
    condition="Sunny",
    location="San Francisco",
    humidity=45,
    wind_speed=12,
)


class WeatherProvider(ABC):
    """Abstract weather provider interface."""

    @abstractmethod
    def get_weather(self, location: str | None = None) -> WeatherInfo:
        """Return current conditions, for ``location`` when one is given."""


class MockWeatherProvider(WeatherProvider):
    """Random conditions for a named place; a pleasant default otherwise.

    There is no real lookup behind this provider. Pass a seeded
    :class:`random.Random` for reproducible values.
    """

    def __init__(self, rng: random.Random | None = None, default: WeatherInfo = DEFAULT_WEATHER) -> None:
        self.rng = rng or random.Random()
        self.default = default

    def get_weather(self, location: str | None = None) -> WeatherInfo:
        if location is None:
            return self.default
        if not location.strip():
            raise ValueError("location must not be blank")

        LOGGER.info("Returning mock weather", extra={"location": "[redacted]"})
        return WeatherInfo(
            temperature=self.rng.randint(15, 29),
            condition=self.rng.choice(MOCK_CONDITIONS),
            location=location.strip(),
            humidity=self.rng.randint(30, 69),
            wind_speed=self.rng.randint(5, 24),
        )


class StaticWeatherProvider(WeatherProvider):
    """Offline deterministic weather provider for tests."""

    def __init__(self, weather: WeatherInfo = DEFAULT_WEATHER) -> None:
        self.weather = weather

    def get_weather(self, location: str | None = None) -> WeatherInfo:
        return self.weather


__all__ = [
    "DEFAULT_WEATHER",
    "MOCK_CONDITIONS",
    "WeatherProvider",
    "MockWeatherProvider",
    "StaticWeatherProvider",
]
