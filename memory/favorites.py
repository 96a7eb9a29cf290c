"""Favorite outfits persisted as one JSON blob in a key-value store."""

from __future__ import annotations

import json
import logging
from typing import List

from stilo_app.logging_config import get_logger, log_event
from logic.errors import DecodeFailure
from logic.validation import suggestion_from_payload
from memory.kv_store import KeyValueStore
from models.outfit import OutfitSuggestion

LOGGER = get_logger(__name__)

FAVORITES_KEY = "stilo_favorites"


class FavoritesStore:
    """Favorites keyed by suggestion title.

    Two different suggestions that share a title are treated as the same
    favorite. A blob that cannot be decoded is treated as an empty collection.
    """

    def __init__(self, store: KeyValueStore, key: str = FAVORITES_KEY) -> None:
        self.store = store
        self.key = key

    def _decode(self, blob: str) -> List[OutfitSuggestion]:
        try:
            data = json.loads(blob)
        except json.JSONDecodeError as exc:
            raise DecodeFailure(f"Favorites blob is not JSON: {exc.msg}") from exc
        if not isinstance(data, list):
            raise DecodeFailure(f"Favorites blob holds {type(data).__name__}, expected a list")
        return [suggestion_from_payload(entry) for entry in data]

    def list(self) -> List[OutfitSuggestion]:
        try:
            blob = self.store.get(self.key)
            if not blob:
                return []
            return self._decode(blob)
        except (DecodeFailure, ValueError) as exc:
            log_event(LOGGER, logging.WARNING, "favorites_decode_failed", key=self.key, reason=str(exc))
            return []

    def _save(self, favorites: List[OutfitSuggestion]) -> None:
        blob = json.dumps([suggestion.to_dict() for suggestion in favorites], separators=(",", ":"))
        self.store.set(self.key, blob)

    def is_favorite(self, title: str) -> bool:
        return any(favorite.title == title for favorite in self.list())

    def add(self, suggestion: OutfitSuggestion) -> List[OutfitSuggestion]:
        favorites = self.list()
        if not any(favorite.title == suggestion.title for favorite in favorites):
            favorites.append(suggestion)
            self._save(favorites)
        return favorites

    def remove(self, title: str) -> List[OutfitSuggestion]:
        favorites = self.list()
        remaining = [favorite for favorite in favorites if favorite.title != title]
        if len(remaining) != len(favorites):
            self._save(remaining)
        return remaining

    def toggle(self, suggestion: OutfitSuggestion) -> bool:
        """Add the suggestion, or remove it when its title is already saved.

        Returns ``True`` when the suggestion is a favorite afterwards.
        """

        if self.is_favorite(suggestion.title):
            self.remove(suggestion.title)
            return False
        self.add(suggestion)
        return True


__all__ = ["FAVORITES_KEY", "FavoritesStore"]
