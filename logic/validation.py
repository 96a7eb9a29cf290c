"""Pydantic schemas guarding every untrusted outfit payload.

Three boundaries share the same shape: the structured model response, stored
favorites and shared links. Each one converts into the immutable
:class:`~models.outfit.OutfitSuggestion` only after validation succeeds.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from logic.errors import DecodeFailure, GenerationFailure
from models.outfit import OutfitPart, OutfitSuggestion
from models.weather import WeatherInfo


class OutfitPartPayload(BaseModel):
    """Wire shape of one garment."""

    model_config = ConfigDict(populate_by_name=True)

    item: str
    description: str
    color: str
    image_url: Optional[str] = Field(default=None, alias="imageUrl")


class OutfitSuggestionPayload(BaseModel):
    """Wire shape of a full suggestion, images optional."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    description: str
    items: List[OutfitPartPayload]
    accessories: List[str]
    style_tip: str = Field(alias="styleTip")

    def to_suggestion(self, include_images: bool = True) -> OutfitSuggestion:
        return OutfitSuggestion(
            title=self.title,
            description=self.description,
            items=tuple(
                OutfitPart(
                    item=part.item,
                    description=part.description,
                    color=part.color,
                    image_url=part.image_url if include_images else None,
                )
                for part in self.items
            ),
            accessories=tuple(self.accessories),
            style_tip=self.style_tip,
        )


class WeatherPayload(BaseModel):
    """Wire shape of :class:`~models.weather.WeatherInfo`."""

    model_config = ConfigDict(populate_by_name=True)

    temperature: float = Field(alias="temp")
    condition: str = Field(min_length=1)
    location: Optional[str] = None
    humidity: Optional[float] = Field(default=None, ge=0, le=100)
    wind_speed: Optional[float] = Field(default=None, alias="windSpeed", ge=0)

    def to_weather(self) -> WeatherInfo:
        return WeatherInfo(
            temperature=self.temperature,
            condition=self.condition,
            location=self.location,
            humidity=self.humidity,
            wind_speed=self.wind_speed,
        )


def parse_generated_outfit(raw: str | Dict[str, Any] | None) -> OutfitSuggestion:
    """Validate the structured model output.

    An empty response, non-JSON text or a payload missing any required field
    raises :class:`GenerationFailure`. Image references are never trusted from
    the text model; they are filled in by the image back-fill.
    """

    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raise GenerationFailure("Outfit service returned an empty response")
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise GenerationFailure(f"Outfit service returned malformed JSON: {exc.msg}") from exc
    if not isinstance(raw, dict):
        raise GenerationFailure(f"Outfit service returned {type(raw).__name__}, expected an object")
    try:
        payload = OutfitSuggestionPayload.model_validate(raw)
    except ValidationError as exc:
        missing = [".".join(str(loc) for loc in error["loc"]) for error in exc.errors()]
        raise GenerationFailure(f"Outfit response failed schema checks: {missing}") from exc
    return payload.to_suggestion(include_images=False)


def suggestion_from_payload(data: Any, include_images: bool = True) -> OutfitSuggestion:
    """Rebuild a suggestion from stored or shared data, raising :class:`DecodeFailure`."""

    try:
        payload = OutfitSuggestionPayload.model_validate(data)
    except ValidationError as exc:
        raise DecodeFailure(f"Outfit payload failed schema checks: {exc.error_count()} error(s)") from exc
    return payload.to_suggestion(include_images=include_images)


__all__ = [
    "OutfitPartPayload",
    "OutfitSuggestionPayload",
    "WeatherPayload",
    "parse_generated_outfit",
    "suggestion_from_payload",
]
