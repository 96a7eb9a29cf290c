"""Weather snapshot consumed by the outfit prompt."""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class WeatherInfo:
    """Current conditions at the user's location.

    ``temperature`` is in degrees Celsius and ``wind_speed`` in km/h.
    """

    temperature: float
    condition: str
    location: Optional[str] = None
    humidity: Optional[float] = None
    wind_speed: Optional[float] = None

    @property
    def temperature_label(self) -> str:
        """Render whole degrees without a trailing ``.0``."""

        if float(self.temperature).is_integer():
            return str(int(self.temperature))
        return str(self.temperature)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "temp": self.temperature,
            "condition": self.condition,
            "location": self.location,
            "humidity": self.humidity,
            "windSpeed": self.wind_speed,
        }


__all__ = ["WeatherInfo"]
