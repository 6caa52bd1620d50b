"""
Global pytest configuration and fixtures.
"""

import os
import warnings
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication

from flightmap.core.interfaces.i_map_engine import IMapEngine, OverlayContent
from flightmap.core.models.route import Route, MultiLegRoute, RouteData
from flightmap.core.models.station import Station, StationRole
from flightmap.managers.config_manager import OverlayConfig

# Suppress RuntimeWarnings globally at the Python level
warnings.filterwarnings("ignore", category=RuntimeWarning)


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication instance for UI and timer tests."""
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@dataclass(eq=False)
class FakeMarker:
    station: Station
    role: StationRole
    tooltip: str
    on_open: Callable[[], None]
    on_close: Callable[[], None]
    overlay_open: bool = False
    content: Optional[OverlayContent] = None
    offset: Optional[tuple] = None
    removed: bool = False


@dataclass(eq=False)
class FakePath:
    departure: Station
    arrival: Station
    highlighted: bool
    connecting: bool
    tooltip: str
    on_select: Optional[Callable[[], None]]


class FakeMapEngine(IMapEngine):
    """
    In-memory map engine.

    Behaves like a web map: programmatic open/close report back through the
    marker callbacks, and user gestures are simulated with click helpers.
    """

    def __init__(self):
        self.view = None
        self.markers: Dict[str, FakeMarker] = {}
        self.paths: List[FakePath] = []
        self.open_calls: List[str] = []

    def set_view(self, center, zoom):
        self.view = (center, zoom)

    def mount_marker(self, station, role, tooltip, on_overlay_open, on_overlay_close):
        marker = FakeMarker(station, role, tooltip, on_overlay_open, on_overlay_close)
        self.markers[station.code] = marker
        return marker

    def remove_marker(self, handle):
        self.close_overlay(handle)
        handle.removed = True
        if self.markers.get(handle.station.code) is handle:
            del self.markers[handle.station.code]

    def open_overlay(self, handle, content, offset):
        handle.overlay_open = True
        handle.content = content
        handle.offset = offset
        self.open_calls.append(handle.station.code)
        handle.on_open()

    def close_overlay(self, handle):
        if handle.overlay_open:
            handle.overlay_open = False
            handle.on_close()

    def draw_path(self, departure, arrival, highlighted, connecting, tooltip, on_select=None):
        path = FakePath(departure, arrival, highlighted, connecting, tooltip, on_select)
        self.paths.append(path)
        return path

    def set_path_highlight(self, handle, highlighted):
        handle.highlighted = highlighted

    def remove_path(self, handle):
        self.paths.remove(handle)

    # User gestures

    def click_marker(self, code: str) -> None:
        marker = self.markers[code]
        if marker.overlay_open:
            self.close_overlay(marker)
        else:
            marker.on_open()

    def dismiss_overlay(self, code: str) -> None:
        self.close_overlay(self.markers[code])

    def open_codes(self) -> List[str]:
        return [code for code, marker in self.markers.items() if marker.overlay_open]


@pytest.fixture
def engine():
    """Provide an in-memory map engine."""
    return FakeMapEngine()


@pytest.fixture
def fast_overlay_config():
    """Overlay config with short timers for timing tests."""
    return OverlayConfig(auto_reveal_delay_ms=150, suppression_window_ms=60)


@pytest.fixture
def airports():
    """Provide sample airports keyed by code."""
    return {
        "LHR": Station(code="LHR", name="Heathrow", city="London", lat=51.47, lng=-0.45),
        "HND": Station(code="HND", name="Haneda", city="Tokyo", lat=35.55, lng=139.78),
        "DXB": Station(code="DXB", name="Dubai International", city="Dubai", lat=25.25, lng=55.36),
        "HKG": Station(code="HKG", name="Hong Kong International", city="Hong Kong", lat=22.31, lng=113.91),
        "ICN": Station(code="ICN", name="Incheon", city="Seoul", lat=37.46, lng=126.44),
    }


def make_route(route_id, departure, arrival, **kwargs):
    return Route(
        id=route_id,
        departure_station=departure,
        arrival_station=arrival,
        departure_time=kwargs.get("departure_time", "2025-05-01T09:00:00"),
        arrival_time=kwargs.get("arrival_time", "2025-05-02T06:00:00"),
        duration=kwargs.get("duration", "13h 00m"),
        flight_number=kwargs.get("flight_number", f"FL{route_id}"),
        airline=kwargs.get("airline", "Test Air"),
        price=kwargs.get("price"),
    )


@pytest.fixture
def route_factory():
    """Provide a factory for direct flights with default schedule fields."""
    return make_route


@pytest.fixture
def route_data(airports):
    """Provide one direct flight and one two-leg connection LHR -> HND."""
    lhr, hnd, dxb = airports["LHR"], airports["HND"], airports["DXB"]
    return RouteData(
        direct_routes=(make_route("d1", lhr, hnd, price=900.0),),
        multi_leg_routes=(
            MultiLegRoute(
                id="c1",
                legs=(make_route("c1-1", lhr, dxb), make_route("c1-2", dxb, hnd)),
                price=600.0,
            ),
        ),
    )
