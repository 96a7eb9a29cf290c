"""Outfit generation client: structured suggestion plus per-item images."""

from __future__ import annotations

import asyncio
import base64
import logging
import time
from typing import Any, Dict, Optional

from stilo_app.logging_config import get_logger, log_event, operation_context
from logic.errors import GenerationFailure, ImageFailure, RequestSuperseded
from logic.prompts import (
    IMAGE_ASPECT_RATIO,
    OUTFIT_RESPONSE_SCHEMA,
    build_item_image_prompt,
    build_outfit_prompt,
)
from logic.validation import parse_generated_outfit
from models.outfit import OutfitPart, OutfitSuggestion
from models.taxonomy import (
    DEFAULT_GENDER,
    DEFAULT_STYLE,
    Gender,
    Occasion,
    StylePreference,
    parse_gender,
    parse_occasion,
    parse_style,
)
from models.weather import WeatherInfo
from tools.generative_service import GenerativeService


LOGGER = get_logger(__name__)

IMAGE_MIME_TYPE = "image/png"


def image_data_uri(payload: bytes, mime_type: str = IMAGE_MIME_TYPE) -> str:
    """Wrap a binary image into an embeddable ``data:`` URI."""

    encoded = base64.b64encode(payload).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


class OutfitGenerator:
    """Builds one outfit suggestion per call.

    The structured request runs first and any failure there raises
    :class:`GenerationFailure`. Garment images are then requested concurrently;
    each image request settles on its own, so a failing one only leaves that
    item without an image.
    """

    def __init__(self, service: GenerativeService) -> None:
        self.service = service

    async def generate(
        self,
        occasion: Occasion | str,
        weather: WeatherInfo | None = None,
        gender: Gender | str = DEFAULT_GENDER,
        style_preference: StylePreference | str = DEFAULT_STYLE,
    ) -> OutfitSuggestion:
        occasion = parse_occasion(occasion)
        gender = parse_gender(gender)
        style_preference = parse_style(style_preference)

        with operation_context("agent:outfit_generator.generate") as correlation_id:
            start = time.perf_counter()
            log_event(
                LOGGER,
                logging.INFO,
                "outfit_generation_started",
                occasion=occasion.value,
                gender=gender.value,
                style=style_preference.value,
                has_weather=weather is not None,
                correlation_id=correlation_id,
            )

            prompt = build_outfit_prompt(occasion, weather, gender, style_preference)
            suggestion = await self._request_suggestion(prompt)

            image_urls = await asyncio.gather(*(self._illustrate(part) for part in suggestion.items))
            suggestion = suggestion.with_images(image_urls)

            log_event(
                LOGGER,
                logging.INFO,
                "outfit_generation_completed",
                item_count=len(suggestion.items),
                illustrated_count=suggestion.illustrated_count,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
                correlation_id=correlation_id,
            )
            return suggestion

    async def _request_suggestion(self, prompt: str) -> OutfitSuggestion:
        try:
            raw = await self.service.generate_structured(prompt, OUTFIT_RESPONSE_SCHEMA)
        except Exception as exc:
            log_event(LOGGER, logging.ERROR, "outfit_generation_failed", reason=str(exc), exc_info=True)
            raise GenerationFailure(f"Outfit service call failed: {exc}") from exc
        try:
            return parse_generated_outfit(raw)
        except GenerationFailure as exc:
            log_event(LOGGER, logging.ERROR, "outfit_generation_failed", reason=str(exc))
            raise

    async def _illustrate(self, part: OutfitPart) -> Optional[str]:
        try:
            payload = await self.service.generate_image(build_item_image_prompt(part), IMAGE_ASPECT_RATIO)
            if not payload:
                raise ImageFailure(part.item, "no image payload returned")
        except Exception as exc:
            failure = exc if isinstance(exc, ImageFailure) else ImageFailure(part.item, str(exc))
            log_event(
                LOGGER,
                logging.WARNING,
                "image_generation_failed",
                item=failure.item,
                reason=failure.reason,
            )
            return None
        return image_data_uri(payload)


class OutfitRequestTracker:
    """Keeps at most one in-flight generation per session key.

    Starting a new request for a key cancels the older one; whoever awaited the
    older request receives :class:`RequestSuperseded`.
    """

    def __init__(self, generator: OutfitGenerator) -> None:
        self.generator = generator
        self._inflight: Dict[str, asyncio.Task] = {}

    def in_flight(self, key: str) -> bool:
        task = self._inflight.get(key)
        return task is not None and not task.done()

    def cancel(self, key: str) -> bool:
        """Abandon the request running for ``key``; returns whether one was running."""

        task = self._inflight.pop(key, None)
        if task is None or task.done():
            return False
        task.cancel()
        return True

    async def generate(self, key: str, **kwargs: Any) -> OutfitSuggestion:
        if self.cancel(key):
            log_event(LOGGER, logging.INFO, "outfit_request_superseded", session_key=key)

        task = asyncio.ensure_future(self.generator.generate(**kwargs))
        self._inflight[key] = task
        try:
            return await task
        except asyncio.CancelledError:
            if task.cancelled() and self._inflight.get(key) is not task:
                raise RequestSuperseded(f"Outfit request for '{key}' was superseded") from None
            raise
        finally:
            if self._inflight.get(key) is task:
                del self._inflight[key]


__all__ = ["IMAGE_MIME_TYPE", "image_data_uri", "OutfitGenerator", "OutfitRequestTracker"]
