"""
Map Surface Component

Composition root of the flight map: owns the overlay coordinator and the
route selection, mounts one marker per station and one path per segment,
and forwards selection and overlay events upward.
"""

import logging
from dataclasses import replace
from typing import Dict, List, Optional
from PySide6.QtCore import QObject, Signal

from ...core.interfaces.i_map_engine import IMapEngine
from ...core.models.route import RouteData, AnyRoute
from ...core.services.route_renderer import RouteRenderer, PathSegment, is_segment_highlighted
from ...managers.config_manager import OverlayConfig, MapConfig
from ..formatters.schedule_formatter import ScheduleFormatter
from ..state.overlay_coordinator import OverlayCoordinator
from ..state.selection_state import SelectionState
from .station_marker import StationMarker

logger = logging.getLogger(__name__)


class MapSurface(QObject):
    """
    Mounts stations and flight paths on a map engine.

    The surface is rebuilt from scratch on every new set of route data;
    overlay state never carries over between searches.
    """

    # Signals
    route_selected = Signal(object)  # Route or MultiLegRoute
    overlay_activation_changed = Signal(object)  # station code or None

    def __init__(self, engine: IMapEngine, overlay_config: Optional[OverlayConfig] = None,
                 map_config: Optional[MapConfig] = None, parent=None):
        """
        Initialize the map surface.

        Args:
            engine: Map engine to draw on
            overlay_config: Overlay timing and placement settings
            map_config: Initial viewport settings
            parent: Parent QObject
        """
        super().__init__(parent)
        self.engine = engine
        self.overlay_config = overlay_config or OverlayConfig()
        self.map_config = map_config or MapConfig()

        self.coordinator = OverlayCoordinator(self.overlay_config.suppression_window_ms, self)
        self.selection = SelectionState(self)
        self.renderer = RouteRenderer()
        self.formatter = ScheduleFormatter()

        self._route_data = RouteData.empty()
        self._loading = False
        self._markers: Dict[str, StationMarker] = {}
        self._paths: List[tuple] = []  # (segment, engine handle)

        self.coordinator.activation_changed.connect(self.overlay_activation_changed)
        self.selection.selection_changed.connect(self._apply_highlight)

        self.engine.set_view(self.map_config.center, self.map_config.zoom)

    @property
    def markers(self) -> Dict[str, StationMarker]:
        """Get the mounted markers keyed by station code."""
        return dict(self._markers)

    @property
    def segments(self) -> List[PathSegment]:
        """Get the mounted path segments with their current highlight."""
        return [segment for segment, _ in self._paths]

    @property
    def route_data(self) -> RouteData:
        return self._route_data

    @property
    def is_loading(self) -> bool:
        return self._loading

    def set_loading(self, loading: bool) -> None:
        """Hide all content while a search is running."""
        if loading == self._loading:
            return
        self._loading = loading
        if loading:
            self._unmount_all()
        else:
            self._mount_all()

    def set_route_data(self, route_data: RouteData) -> None:
        """Replace everything on the map with a new search result."""
        logger.info(f"Displaying {len(route_data.direct_routes)} direct flights and "
                    f"{len(route_data.multi_leg_routes)} connections")
        self._unmount_all()
        self._route_data = route_data
        self.selection.clear()
        if not self._loading:
            self._mount_all()

    def select_route(self, route: AnyRoute) -> None:
        """Select a route and notify listeners."""
        logger.debug(f"Selected flight: {route.id}")
        self.selection.select(route.id)
        self.route_selected.emit(route)

    def clear(self) -> None:
        """Remove all content from the map."""
        self._unmount_all()
        self._route_data = RouteData.empty()

    def _mount_all(self) -> None:
        data = self._route_data
        roles = self.renderer.assign_roles(data)

        for station in self.renderer.derive_stations(data):
            role = roles[station.code]
            marker = StationMarker(
                station,
                role,
                self.coordinator,
                self.engine,
                flights=self.renderer.station_flights(data, station.code),
                other_station=self.renderer.associated_station(data, station.code, role),
                overlay_config=self.overlay_config,
                formatter=self.formatter,
                parent=self,
            )
            self._markers[station.code] = marker
            marker.mount()

        for segment in self.renderer.derive_segments(data, self.selection.selected_route_id):
            handle = self.engine.draw_path(
                segment.departure,
                segment.arrival,
                segment.highlighted,
                segment.is_connecting,
                self._path_tooltip(segment),
                self._make_select_callback(segment),
            )
            self._paths.append((segment, handle))

        logger.debug(f"Mounted {len(self._markers)} markers and {len(self._paths)} paths")

    def _unmount_all(self) -> None:
        for marker in self._markers.values():
            marker.unmount()
            marker.deleteLater()
        self._markers.clear()

        for _, handle in self._paths:
            self.engine.remove_path(handle)
        self._paths.clear()

        self.coordinator.reset()

    def _make_select_callback(self, segment: PathSegment):
        def on_select():
            self.select_route(segment.route)
        return on_select

    def _apply_highlight(self, selected_route_id: Optional[str]) -> None:
        """Re-apply the highlight flag of every mounted path."""
        updated = []
        for segment, handle in self._paths:
            highlighted = is_segment_highlighted(segment, selected_route_id)
            if highlighted != segment.highlighted:
                self.engine.set_path_highlight(handle, highlighted)
                segment = replace(segment, highlighted=highlighted)
            updated.append((segment, handle))
        self._paths = updated

    @staticmethod
    def _path_tooltip(segment: PathSegment) -> str:
        rows = []
        for info in segment.flight_info:
            row = " ".join(part for part in (info.airline, info.flight_number) if part)
            if info.duration:
                row += f" ({info.duration})"
            if info.price is not None:
                row += f"  {info.price:.0f}"
            rows.append(row.strip())
        header = f"{segment.departure.display_code} → {segment.arrival.display_code}"
        return "\n".join([header] + rows)
