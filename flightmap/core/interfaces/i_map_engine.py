"""
Map Engine Interface

Interface to the map surface that draws markers, overlays and paths.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple

from ..models.station import Station, StationRole


@dataclass(frozen=True)
class OverlayContent:
    """Inner content of a station overlay."""

    title: str
    lines: Tuple[str, ...]
    has_flights: bool


class IMapEngine(ABC):
    """
    Interface for map surface engines.

    ``on_overlay_open`` is invoked when the user asks for a marker's overlay
    and may also be invoked after ``open_overlay``; ``on_overlay_close`` is
    invoked whenever an overlay goes away, whoever closed it.
    """

    @abstractmethod
    def set_view(self, center: Tuple[float, float], zoom: int) -> None:
        """Center the view on (lat, lng) at the given zoom level."""
        pass

    @abstractmethod
    def mount_marker(self, station: Station, role: StationRole, tooltip: str,
                     on_overlay_open: Callable[[], None],
                     on_overlay_close: Callable[[], None]) -> Any:
        """
        Place a marker at the station's coordinates.

        Returns:
            Opaque marker handle
        """
        pass

    @abstractmethod
    def remove_marker(self, handle: Any) -> None:
        """Remove a marker and its overlay."""
        pass

    @abstractmethod
    def open_overlay(self, handle: Any, content: OverlayContent,
                     offset: Tuple[float, float]) -> None:
        """Open a marker's overlay displaced by offset pixels."""
        pass

    @abstractmethod
    def close_overlay(self, handle: Any) -> None:
        """Close a marker's overlay."""
        pass

    @abstractmethod
    def draw_path(self, departure: Station, arrival: Station, highlighted: bool,
                  connecting: bool, tooltip: str,
                  on_select: Optional[Callable[[], None]] = None) -> Any:
        """
        Draw a path between two stations.

        Returns:
            Opaque path handle
        """
        pass

    @abstractmethod
    def set_path_highlight(self, handle: Any, highlighted: bool) -> None:
        """Update a path's highlight flag."""
        pass

    @abstractmethod
    def remove_path(self, handle: Any) -> None:
        """Remove a path."""
        pass
