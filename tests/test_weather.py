"""Mock weather providers."""

import random

import pytest

from models.weather import WeatherInfo
from tools.weather_provider import (
    DEFAULT_WEATHER,
    MOCK_CONDITIONS,
    MockWeatherProvider,
    StaticWeatherProvider,
    WeatherProvider,
)


def test_mock_weather_for_location_stays_in_range() -> None:
    provider = MockWeatherProvider(rng=random.Random(7))

    for _ in range(50):
        weather = provider.get_weather("  Tokyo ")
        assert weather.location == "Tokyo"
        assert 15 <= weather.temperature <= 29
        assert weather.condition in MOCK_CONDITIONS
        assert 30 <= weather.humidity <= 69
        assert 5 <= weather.wind_speed <= 24


def test_seeded_provider_is_reproducible() -> None:
    first = MockWeatherProvider(rng=random.Random(3)).get_weather("Oslo")
    second = MockWeatherProvider(rng=random.Random(3)).get_weather("Oslo")

    assert first == second


def test_default_weather_without_location() -> None:
    assert MockWeatherProvider().get_weather() == DEFAULT_WEATHER
    assert DEFAULT_WEATHER.temperature == 22 and DEFAULT_WEATHER.condition == "Sunny"


def test_blank_location_is_rejected() -> None:
    with pytest.raises(ValueError):
        MockWeatherProvider().get_weather("   ")


def test_static_provider_ignores_location() -> None:
    fixed = WeatherInfo(temperature=3, condition="Snow")
    provider = StaticWeatherProvider(fixed)

    assert isinstance(provider, WeatherProvider)
    assert provider.get_weather("Anywhere") is fixed
