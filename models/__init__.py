"""Model package exports."""

from models.taxonomy import *  # noqa: F401,F403
from models.outfit import OutfitPart, OutfitSuggestion
from models.weather import WeatherInfo

__all__ = ["OutfitPart", "OutfitSuggestion", "WeatherInfo"]
