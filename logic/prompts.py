"""Prompt templates and the response schema for outfit generation."""

from __future__ import annotations

from typing import Any, Dict

from models.outfit import OutfitPart
from models.taxonomy import Gender, Occasion, StylePreference
from models.weather import WeatherInfo

FALLBACK_WEATHER_CLAUSE = "Consider a mild, pleasant day."
IMAGE_ASPECT_RATIO = "1:1"

OUTFIT_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "title": {"type": "STRING"},
        "description": {"type": "STRING"},
        "items": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "item": {"type": "STRING"},
                    "description": {"type": "STRING"},
                    "color": {"type": "STRING"},
                },
                "required": ["item", "description", "color"],
            },
        },
        "accessories": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
        },
        "styleTip": {"type": "STRING"},
    },
    "required": ["title", "description", "items", "accessories", "styleTip"],
}


def weather_clause(weather: WeatherInfo | None) -> str:
    if weather is None:
        return FALLBACK_WEATHER_CLAUSE
    return f"The weather is {weather.temperature_label}°C and {weather.condition}."


def build_outfit_prompt(
    occasion: Occasion,
    weather: WeatherInfo | None,
    gender: Gender,
    style_preference: StylePreference,
) -> str:
    """Compose the stylist instruction sent with the structured schema."""

    return (
        "You are a world-class fashion stylist.\n"
        f"Suggest a complete outfit for a {occasion.value} occasion.\n"
        f"Context: {weather_clause(weather)}\n"
        f"Target Gender/Style: {gender.value}.\n"
        f"Aesthetic Preference: {style_preference.value}.\n"
        "\n"
        "Provide the suggestion in a structured format."
    )


def build_item_image_prompt(part: OutfitPart) -> str:
    return (
        f"A high-quality studio product photo of a {part.color} {part.item}. "
        f"{part.description}. "
        "Professional fashion photography, clean white background, soft lighting."
    )


__all__ = [
    "FALLBACK_WEATHER_CLAUSE",
    "IMAGE_ASPECT_RATIO",
    "OUTFIT_RESPONSE_SCHEMA",
    "weather_clause",
    "build_outfit_prompt",
    "build_item_image_prompt",
]
