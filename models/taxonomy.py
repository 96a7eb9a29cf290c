"""Canonical vocabulary for occasions, aesthetic styles and gender targets.

Every label shown to a user and every tag interpolated into a prompt comes from
this module. Helper functions keep parsing consistent between the API, the CLI
and the generator.
"""

from enum import Enum
from typing import Dict, List, Type, TypeVar


def _normalize_key(value: str) -> str:
    """Normalise a free-form string into a taxonomy key."""

    return value.strip().lower().replace(" ", "_")


class Occasion(str, Enum):
    """Context the outfit is meant for."""

    CASUAL = "casual"
    OFFICE = "office"
    PARTY = "party"
    DATE = "date"
    SPORT = "sport"
    FORMAL = "formal"


class StylePreference(str, Enum):
    """Aesthetic modifier applied on top of the occasion."""

    MINIMALIST = "minimalist"
    BOHEMIAN = "bohemian"
    CLASSIC = "classic"
    STREETWEAR = "streetwear"
    VINTAGE = "vintage"
    LUXURY = "luxury"


class Gender(str, Enum):
    MASCULINE = "masculine"
    FEMININE = "feminine"
    UNISEX = "unisex"


OCCASION_LABELS: Dict[Occasion, str] = {
    Occasion.CASUAL: "Casual Day",
    Occasion.OFFICE: "Office / Work",
    Occasion.PARTY: "Party Night",
    Occasion.DATE: "Date Night",
    Occasion.SPORT: "Active / Sport",
    Occasion.FORMAL: "Formal Event",
}

STYLE_LABELS: Dict[StylePreference, str] = {style: style.value.capitalize() for style in StylePreference}
GENDER_LABELS: Dict[Gender, str] = {gender: gender.value.capitalize() for gender in Gender}

DEFAULT_GENDER = Gender.UNISEX
DEFAULT_STYLE = StylePreference.CLASSIC

E = TypeVar("E", bound=Enum)


def _parse(enum_cls: Type[E], value: "str | E", kind: str) -> E:
    if isinstance(value, enum_cls):
        return value
    key = _normalize_key(str(value))
    try:
        return enum_cls(key)
    except ValueError:
        allowed = [member.value for member in enum_cls]
        raise ValueError(f"Unsupported {kind} '{value}'. Allowed: {allowed}") from None


def parse_occasion(value: "str | Occasion") -> Occasion:
    """Validate and normalise an occasion tag.

    Raises a :class:`ValueError` if the tag is not one of the known occasions.
    """

    return _parse(Occasion, value, "occasion")


def parse_style(value: "str | StylePreference") -> StylePreference:
    """Validate and normalise a style preference tag."""

    return _parse(StylePreference, value, "style preference")


def parse_gender(value: "str | Gender") -> Gender:
    return _parse(Gender, value, "gender")


def catalog() -> Dict[str, List[Dict[str, str]]]:
    """Return the pickable options with their display labels."""

    return {
        "occasions": [{"id": occ.value, "label": label} for occ, label in OCCASION_LABELS.items()],
        "styles": [{"id": style.value, "label": label} for style, label in STYLE_LABELS.items()],
        "genders": [{"id": gender.value, "label": label} for gender, label in GENDER_LABELS.items()],
    }


__all__ = [
    "Occasion",
    "StylePreference",
    "Gender",
    "OCCASION_LABELS",
    "STYLE_LABELS",
    "GENDER_LABELS",
    "DEFAULT_GENDER",
    "DEFAULT_STYLE",
    "parse_occasion",
    "parse_style",
    "parse_gender",
    "catalog",
]
