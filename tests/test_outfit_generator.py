"""Outfit generation: structured request, image back-fill and supersession."""

from __future__ import annotations

import asyncio
import base64
import json
from typing import Any, Dict

import pytest

from agents.outfit_generator import OutfitGenerator, OutfitRequestTracker, image_data_uri
from logic.errors import GenerationFailure, RequestSuperseded
from logic.prompts import FALLBACK_WEATHER_CLAUSE, OUTFIT_RESPONSE_SCHEMA
from models.weather import WeatherInfo
from tools.generative_service import MockGenerativeService


@pytest.mark.asyncio
async def test_every_item_gets_one_image_request_in_order(outfit_payload: Dict[str, Any]) -> None:
    service = MockGenerativeService(structured=outfit_payload, default_image=b"png-bytes")
    generator = OutfitGenerator(service)

    suggestion = await generator.generate("office", WeatherInfo(temperature=22, condition="Sunny"), "unisex", "classic")

    assert suggestion.title == "Boardroom Classic"
    assert [part.item for part in suggestion.items] == ["Blazer", "Trousers", "Loafers"]
    assert len(service.image_prompts) == 3
    assert service.aspect_ratios == ["1:1", "1:1", "1:1"]
    expected = "data:image/png;base64," + base64.b64encode(b"png-bytes").decode("ascii")
    assert all(part.image_url == expected for part in suggestion.items)
    assert suggestion.accessories == ("Leather belt", "Silver watch")
    assert suggestion.style_tip == "Match your belt to your shoes."


@pytest.mark.asyncio
async def test_structured_request_uses_prompt_and_schema(outfit_payload: Dict[str, Any]) -> None:
    service = MockGenerativeService(structured=outfit_payload)

    await OutfitGenerator(service).generate("party")

    assert len(service.structured_prompts) == 1
    prompt = service.structured_prompts[0]
    assert "party" in prompt
    assert FALLBACK_WEATHER_CLAUSE in prompt
    assert "unisex" in prompt and "classic" in prompt
    assert service.structured_schemas[0] is OUTFIT_RESPONSE_SCHEMA


@pytest.mark.asyncio
async def test_one_failing_image_does_not_affect_siblings(outfit_payload: Dict[str, Any]) -> None:
    service = MockGenerativeService(
        structured=outfit_payload,
        images={"Trousers": RuntimeError("quota exceeded")},
    )

    suggestion = await OutfitGenerator(service).generate("office")

    assert len(service.image_prompts) == 3
    blazer, trousers, loafers = suggestion.items
    assert blazer.image_url is not None
    assert trousers.image_url is None
    assert loafers.image_url is not None
    assert suggestion.illustrated_count == 2


@pytest.mark.asyncio
async def test_empty_image_payload_leaves_item_unillustrated(outfit_payload: Dict[str, Any]) -> None:
    service = MockGenerativeService(structured=outfit_payload, images={"Loafers": None})

    suggestion = await OutfitGenerator(service).generate("date")

    assert [part.image_url is None for part in suggestion.items] == [False, False, True]


@pytest.mark.asyncio
async def test_all_images_failing_still_returns_suggestion(outfit_payload: Dict[str, Any]) -> None:
    service = MockGenerativeService(structured=outfit_payload, default_image=ConnectionError("offline"))

    suggestion = await OutfitGenerator(service).generate("sport")

    assert len(suggestion.items) == 3
    assert suggestion.illustrated_count == 0


@pytest.mark.asyncio
async def test_missing_title_raises_generation_failure(outfit_payload: Dict[str, Any]) -> None:
    del outfit_payload["title"]
    service = MockGenerativeService(structured=outfit_payload)

    with pytest.raises(GenerationFailure, match="title"):
        await OutfitGenerator(service).generate("office", WeatherInfo(temperature=22, condition="Sunny"))
    assert service.image_prompts == []


@pytest.mark.asyncio
@pytest.mark.parametrize("raw", [None, "", "   ", "not json", "[]", json.dumps({"title": "Only a title"})])
async def test_unusable_structured_output_raises(raw: Any) -> None:
    service = MockGenerativeService(structured=raw)

    with pytest.raises(GenerationFailure):
        await OutfitGenerator(service).generate("casual")


@pytest.mark.asyncio
async def test_service_error_is_wrapped_as_generation_failure() -> None:
    service = MockGenerativeService(structured=TimeoutError("model unavailable"))

    with pytest.raises(GenerationFailure) as excinfo:
        await OutfitGenerator(service).generate("formal")
    assert isinstance(excinfo.value.__cause__, TimeoutError)


@pytest.mark.asyncio
async def test_unknown_occasion_is_rejected(outfit_payload: Dict[str, Any]) -> None:
    service = MockGenerativeService(structured=outfit_payload)

    with pytest.raises(ValueError, match="occasion"):
        await OutfitGenerator(service).generate("wedding")
    assert service.structured_prompts == []


@pytest.mark.asyncio
async def test_empty_item_list_needs_no_images(outfit_payload: Dict[str, Any]) -> None:
    outfit_payload["items"] = []
    service = MockGenerativeService(structured=outfit_payload)

    suggestion = await OutfitGenerator(service).generate("casual")

    assert suggestion.items == ()
    assert service.image_prompts == []


def test_image_data_uri_format() -> None:
    assert image_data_uri(b"\x00\x01") == "data:image/png;base64,AAE="


@pytest.mark.asyncio
async def test_newer_request_supersedes_older_one(outfit_payload: Dict[str, Any]) -> None:
    service = MockGenerativeService(structured=outfit_payload, delay_seconds=0.05)
    tracker = OutfitRequestTracker(OutfitGenerator(service))

    first = asyncio.ensure_future(tracker.generate("session-1", occasion="party"))
    await asyncio.sleep(0)
    second = await tracker.generate("session-1", occasion="date")

    with pytest.raises(RequestSuperseded):
        await first
    assert second.title == "Boardroom Classic"
    assert not tracker.in_flight("session-1")


@pytest.mark.asyncio
async def test_requests_for_different_sessions_run_independently(outfit_payload: Dict[str, Any]) -> None:
    service = MockGenerativeService(structured=outfit_payload, delay_seconds=0.01)
    tracker = OutfitRequestTracker(OutfitGenerator(service))

    results = await asyncio.gather(
        tracker.generate("a", occasion="office"),
        tracker.generate("b", occasion="party"),
    )

    assert [result.title for result in results] == ["Boardroom Classic", "Boardroom Classic"]
    assert len(service.structured_prompts) == 2
