"""Generative service abstractions and implementations.

The outfit generator only needs two capabilities from a model provider:
structured JSON generation against a response schema, and single-image
generation from a text prompt.
"""

from __future__ import annotations

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional, Union

from google import genai
from google.genai import types

from stilo_app.config import StiloConfig


LOGGER = logging.getLogger(__name__)


class GenerativeService(ABC):
    """Abstract model provider interface."""

    @abstractmethod
    async def generate_structured(self, prompt: str, schema: Dict[str, Any]) -> Optional[str]:
        """Return the raw JSON text produced for ``prompt`` under ``schema``."""

    @abstractmethod
    async def generate_image(self, prompt: str, aspect_ratio: str) -> Optional[bytes]:
        """Return the first image payload, or ``None`` when the model sent none."""


class GeminiGenerativeService(GenerativeService):
    """Gemini provider using the async ``google-genai`` client."""

    def __init__(self, config: StiloConfig, client: genai.Client | None = None) -> None:
        self.config = config
        self._client = client

    @property
    def client(self) -> genai.Client:
        """SDK client, created on first use."""

        if self._client is None:
            self._client = genai.Client(api_key=self.config.api_key)
        return self._client

    async def generate_structured(self, prompt: str, schema: Dict[str, Any]) -> Optional[str]:
        LOGGER.info("Requesting structured outfit", extra={"model": self.config.text_model})
        response = await self.client.aio.models.generate_content(
            model=self.config.text_model,
            contents=prompt,
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=schema,
            ),
        )
        return response.text

    async def generate_image(self, prompt: str, aspect_ratio: str) -> Optional[bytes]:
        response = await self.client.aio.models.generate_content(
            model=self.config.image_model,
            contents=prompt,
            config=types.GenerateContentConfig(
                image_config=types.ImageConfig(aspect_ratio=aspect_ratio),
            ),
        )
        candidates = response.candidates or []
        if not candidates or candidates[0].content is None:
            return None
        for part in candidates[0].content.parts or []:
            if part.inline_data and part.inline_data.data:
                return part.inline_data.data
        return None


ScriptedStructured = Union[str, Dict[str, Any], None, BaseException]
ScriptedImage = Union[bytes, None, BaseException]


class MockGenerativeService(GenerativeService):
    """Offline scripted provider for tests and demos.

    ``images`` maps a garment name to the payload (or exception) returned when
    an image prompt mentions it; other prompts get ``default_image``.
    """

    def __init__(
        self,
        structured: ScriptedStructured = None,
        images: Mapping[str, ScriptedImage] | None = None,
        default_image: ScriptedImage = b"\x89PNG-mock",
        delay_seconds: float = 0.0,
    ) -> None:
        self.structured = structured
        self.images = dict(images or {})
        self.default_image = default_image
        self.delay_seconds = delay_seconds
        self.structured_prompts: List[str] = []
        self.structured_schemas: List[Dict[str, Any]] = []
        self.image_prompts: List[str] = []
        self.aspect_ratios: List[str] = []

    async def generate_structured(self, prompt: str, schema: Dict[str, Any]) -> Optional[str]:
        self.structured_prompts.append(prompt)
        self.structured_schemas.append(schema)
        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)
        if isinstance(self.structured, BaseException):
            raise self.structured
        if isinstance(self.structured, dict):
            return json.dumps(self.structured)
        return self.structured

    async def generate_image(self, prompt: str, aspect_ratio: str) -> Optional[bytes]:
        self.image_prompts.append(prompt)
        self.aspect_ratios.append(aspect_ratio)
        outcome = self.default_image
        for item, scripted in self.images.items():
            if item in prompt:
                outcome = scripted
                break
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


__all__ = ["GenerativeService", "GeminiGenerativeService", "MockGenerativeService"]
