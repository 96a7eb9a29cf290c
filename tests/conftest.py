"""Shared fixtures for Stilo tests."""

from __future__ import annotations

from typing import Any, Dict

import pytest

from memory.kv_store import InMemoryKeyValueStore
from models.outfit import OutfitPart, OutfitSuggestion
from stilo_app.app import StiloApp
from stilo_app.config import StiloConfig
from tools.generative_service import MockGenerativeService
from tools.weather_provider import StaticWeatherProvider


@pytest.fixture()
def outfit_payload() -> Dict[str, Any]:
    """A schema-conforming structured response with three garments."""

    return {
        "title": "Boardroom Classic",
        "description": "A polished look for a full day at the office.",
        "items": [
            {"item": "Blazer", "description": "Single-breasted wool blazer", "color": "navy"},
            {"item": "Trousers", "description": "Tailored straight-leg trousers", "color": "charcoal"},
            {"item": "Loafers", "description": "Leather penny loafers", "color": "brown"},
        ],
        "accessories": ["Leather belt", "Silver watch"],
        "styleTip": "Match your belt to your shoes.",
    }


@pytest.fixture()
def sample_suggestion() -> OutfitSuggestion:
    return OutfitSuggestion(
        title="Weekend Ease",
        description="Relaxed layers for running errands.",
        items=(
            OutfitPart(item="Tee", description="Organic cotton crew neck", color="white",
                       image_url="data:image/png;base64,AAAA"),
            OutfitPart(item="Jeans", description="Mid-rise straight jeans", color="indigo"),
        ),
        accessories=("Canvas tote",),
        style_tip="Cuff the jeans once.",
    )


@pytest.fixture()
def stilo_app(outfit_payload: Dict[str, Any]) -> StiloApp:
    return StiloApp(
        config=StiloConfig(storage_backend="memory"),
        service=MockGenerativeService(structured=outfit_payload),
        store=InMemoryKeyValueStore(),
        weather_provider=StaticWeatherProvider(),
    )
