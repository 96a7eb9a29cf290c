"""Outfit suggestion schemas."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Sequence, Tuple


@dataclass(frozen=True)
class OutfitPart:
    """One garment of a suggestion, optionally illustrated."""

    item: str
    description: str
    color: str
    image_url: Optional[str] = None

    def with_image(self, image_url: Optional[str]) -> "OutfitPart":
        """Attach an image reference; a part is illustrated at most once."""

        if image_url is None:
            return self
        if self.image_url is not None:
            raise ValueError(f"Item '{self.item}' already has an image")
        return replace(self, image_url=image_url)

    def to_dict(self, include_image: bool = True) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "item": self.item,
            "description": self.description,
            "color": self.color,
        }
        if include_image and self.image_url is not None:
            payload["imageUrl"] = self.image_url
        return payload


@dataclass(frozen=True)
class OutfitSuggestion:
    """A complete generated look.

    ``items`` keeps presentation order and never changes length; only each
    part's image reference can be filled in after creation.
    """

    title: str
    description: str
    items: Tuple[OutfitPart, ...] = field(default_factory=tuple)
    accessories: Tuple[str, ...] = field(default_factory=tuple)
    style_tip: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))
        object.__setattr__(self, "accessories", tuple(self.accessories))

    def with_images(self, image_urls: Sequence[Optional[str]]) -> "OutfitSuggestion":
        """Return a copy where item ``i`` carries ``image_urls[i]`` when present."""

        if len(image_urls) != len(self.items):
            raise ValueError(
                f"Expected {len(self.items)} image references, got {len(image_urls)}"
            )
        items = tuple(part.with_image(url) for part, url in zip(self.items, image_urls))
        return replace(self, items=items)

    def without_images(self) -> "OutfitSuggestion":
        return replace(self, items=tuple(replace(part, image_url=None) for part in self.items))

    @property
    def illustrated_count(self) -> int:
        return sum(1 for part in self.items if part.image_url is not None)

    def to_dict(self, include_images: bool = True) -> Dict[str, Any]:
        """Serialise with the camelCase wire names used by storage and sharing."""

        return {
            "title": self.title,
            "description": self.description,
            "items": [part.to_dict(include_image=include_images) for part in self.items],
            "accessories": list(self.accessories),
            "styleTip": self.style_tip,
        }


__all__ = ["OutfitPart", "OutfitSuggestion"]
