"""Prompt construction for the structured outfit request and garment images."""

import itertools

import pytest

from logic.prompts import (
    FALLBACK_WEATHER_CLAUSE,
    OUTFIT_RESPONSE_SCHEMA,
    build_item_image_prompt,
    build_outfit_prompt,
    weather_clause,
)
from models.outfit import OutfitPart
from models.taxonomy import Gender, Occasion, StylePreference
from models.weather import WeatherInfo

SUNNY = WeatherInfo(temperature=22, condition="Sunny")


@pytest.mark.parametrize(
    "occasion, style, gender",
    list(itertools.product(Occasion, StylePreference, Gender)),
)
def test_prompt_contains_every_selected_tag(occasion: Occasion, style: StylePreference, gender: Gender) -> None:
    with_weather = build_outfit_prompt(occasion, SUNNY, gender, style)
    without_weather = build_outfit_prompt(occasion, None, gender, style)

    for prompt in (with_weather, without_weather):
        assert occasion.value in prompt
        assert style.value in prompt
        assert gender.value in prompt

    assert "22°C and Sunny" in with_weather
    assert FALLBACK_WEATHER_CLAUSE not in with_weather
    assert FALLBACK_WEATHER_CLAUSE in without_weather
    assert "The weather is" not in without_weather


def test_office_scenario_prompt_text() -> None:
    prompt = build_outfit_prompt(Occasion.OFFICE, SUNNY, Gender.UNISEX, StylePreference.CLASSIC)

    for fragment in ("office", "22", "Sunny", "classic", "unisex"):
        assert fragment in prompt
    assert "Suggest a complete outfit for a office occasion." in prompt
    assert "Context: The weather is 22°C and Sunny." in prompt
    assert "Target Gender/Style: unisex." in prompt
    assert "Aesthetic Preference: classic." in prompt


def test_fractional_temperature_is_kept() -> None:
    assert weather_clause(WeatherInfo(temperature=18.5, condition="Cloudy")) == "The weather is 18.5°C and Cloudy."


def test_item_image_prompt_template() -> None:
    part = OutfitPart(item="Blazer", description="Single-breasted wool blazer", color="navy")

    assert build_item_image_prompt(part) == (
        "A high-quality studio product photo of a navy Blazer. Single-breasted wool blazer. "
        "Professional fashion photography, clean white background, soft lighting."
    )


def test_response_schema_requires_all_fields() -> None:
    assert set(OUTFIT_RESPONSE_SCHEMA["required"]) == {"title", "description", "items", "accessories", "styleTip"}
    item_schema = OUTFIT_RESPONSE_SCHEMA["properties"]["items"]["items"]
    assert set(item_schema["required"]) == {"item", "description", "color"}
    assert OUTFIT_RESPONSE_SCHEMA["properties"]["accessories"]["items"]["type"] == "STRING"
