"""Stilo app bootstrap."""

from __future__ import annotations

import logging
from typing import List, Optional

from stilo_app.config import StiloConfig
from stilo_app.logging_config import configure_logging, get_logger, log_event
from agents.outfit_generator import OutfitGenerator, OutfitRequestTracker
from logic.sharing import build_share_url, encode_share_token, extract_shared_suggestion
from memory.favorites import FavoritesStore
from memory.kv_store import (
    InMemoryKeyValueStore,
    JSONKeyValueStore,
    KeyValueStore,
    SQLiteKeyValueStore,
)
from models.outfit import OutfitSuggestion
from models.taxonomy import DEFAULT_GENDER, DEFAULT_STYLE, Gender, Occasion, StylePreference
from models.weather import WeatherInfo
from tools.generative_service import GeminiGenerativeService, GenerativeService
from tools.weather_provider import MockWeatherProvider, WeatherProvider


LOGGER = get_logger(__name__)


class StiloApp:
    """Wires together the generator, favorites, sharing and weather."""

    def __init__(
        self,
        config: StiloConfig | None = None,
        service: GenerativeService | None = None,
        store: KeyValueStore | None = None,
        weather_provider: WeatherProvider | None = None,
    ) -> None:
        self.config = config or StiloConfig.from_env()
        configure_logging()

        self.service = service or GeminiGenerativeService(self.config)
        self.store = store or self._build_store()
        self.favorites = FavoritesStore(self.store)
        self.weather_provider = weather_provider or MockWeatherProvider()
        self.generator = OutfitGenerator(self.service)
        self.requests = OutfitRequestTracker(self.generator)

    def _build_store(self) -> KeyValueStore:
        backend = self.config.storage_backend
        if backend == "sqlite":
            return SQLiteKeyValueStore(self.config.storage_path or "data/stilo_store.db")
        if backend == "memory":
            return InMemoryKeyValueStore()
        return JSONKeyValueStore(self.config.storage_path or "data/stilo_store.json")

    def current_weather(self, location: str | None = None) -> WeatherInfo:
        return self.weather_provider.get_weather(location or self.config.default_location)

    async def suggest_outfit(
        self,
        occasion: Occasion | str,
        *,
        gender: Gender | str = DEFAULT_GENDER,
        style_preference: StylePreference | str = DEFAULT_STYLE,
        weather: WeatherInfo | None = None,
        location: str | None = None,
        session_id: str | None = None,
    ) -> OutfitSuggestion:
        """Generate a suggestion, looking up mock weather when only a location is known.

        With a ``session_id`` a newer request supersedes any older one still
        running for the same session.
        """

        if weather is None and location:
            weather = self.current_weather(location)

        kwargs = {
            "occasion": occasion,
            "weather": weather,
            "gender": gender,
            "style_preference": style_preference,
        }
        if session_id:
            return await self.requests.generate(session_id, **kwargs)
        return await self.generator.generate(**kwargs)

    def list_favorites(self) -> List[OutfitSuggestion]:
        return self.favorites.list()

    def toggle_favorite(self, suggestion: OutfitSuggestion) -> bool:
        favorited = self.favorites.toggle(suggestion)
        log_event(LOGGER, logging.INFO, "favorite_toggled", favorited=favorited)
        return favorited

    def remove_favorite(self, title: str) -> List[OutfitSuggestion]:
        return self.favorites.remove(title)

    def share_token(self, suggestion: OutfitSuggestion) -> str:
        return encode_share_token(suggestion)

    def share_url(self, suggestion: OutfitSuggestion) -> str:
        return build_share_url(suggestion, self.config.share_base_url)

    def open_shared_link(self, url: str) -> Optional[OutfitSuggestion]:
        """Return the suggestion carried by a shared link, ``None`` if unusable."""

        return extract_shared_suggestion(url)


__all__ = ["StiloApp"]
