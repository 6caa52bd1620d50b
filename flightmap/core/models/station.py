"""
Station Model

Pure data model for airports shown on the flight map.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Dict, Any


class StationRole(Enum):
    """Role a station plays for the current search."""

    ORIGIN = "origin"
    DESTINATION = "destination"
    CONNECTION = "connection"


@dataclass(frozen=True)
class Station:
    """
    Immutable data class representing an airport.

    Stations arrive pre-validated from the route data provider, so the code is
    used as an opaque key and never checked.
    """

    code: str
    lat: float
    lng: float
    name: Optional[str] = None
    city: Optional[str] = None

    @property
    def display_code(self) -> str:
        """Get the code for display, 'N/A' when the provider sent none."""
        return self.code or "N/A"

    @property
    def display_name(self) -> str:
        """Get the airport name, synthesized from the code when missing."""
        return self.name or f"Airport {self.display_code}"

    @property
    def label(self) -> str:
        """Get the short label used in tooltips (city first)."""
        return self.city or self.display_name

    @property
    def coordinates(self) -> tuple:
        """Get the (latitude, longitude) pair."""
        return (self.lat, self.lng)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Station':
        """Create Station from dictionary representation."""
        return cls(
            code=data.get("code") or "",
            lat=float(data.get("lat", data.get("latitude", 0.0))),
            lng=float(data.get("lng", data.get("longitude", 0.0))),
            name=data.get("name"),
            city=data.get("city"),
        )

    def __str__(self) -> str:
        """String representation of the station."""
        return f"{self.label} ({self.display_code})"
