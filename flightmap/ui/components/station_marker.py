"""
Station Marker Component

Binds one station to the map engine and the overlay coordinator. The marker
keeps a local view of whether its overlay is open, forwards user gestures to
the coordinator and arms the one-shot auto-reveal for origin stations.
"""

import logging
from contextlib import contextmanager
from typing import Any, List, Optional, Tuple
from PySide6.QtCore import QObject, Signal, QTimer

from ...core.interfaces.i_map_engine import IMapEngine, OverlayContent
from ...core.models.route import Route, MultiLegRoute
from ...core.models.station import Station, StationRole
from ...core.services.geometry_offset import compute_offset
from ...core.services.route_renderer import StationFlights
from ...managers.config_manager import OverlayConfig
from ..formatters.schedule_formatter import ScheduleFormatter
from ..state.overlay_coordinator import OverlayCoordinator, Subscription

logger = logging.getLogger(__name__)


class StationMarker(QObject):
    """Map marker for a single station with a coordinated overlay."""

    # Signals
    overlay_state_changed = Signal(str, bool)  # station code, is open

    def __init__(
        self,
        station: Station,
        role: StationRole,
        coordinator: OverlayCoordinator,
        engine: IMapEngine,
        flights: Optional[StationFlights] = None,
        other_station: Optional[Station] = None,
        overlay_config: Optional[OverlayConfig] = None,
        formatter: Optional[ScheduleFormatter] = None,
        parent=None,
    ):
        """
        Initialize the station marker.

        Args:
            station: Station to show
            role: Role of the station in the current search
            coordinator: Shared overlay coordinator
            engine: Map engine the marker is drawn on
            flights: Flights departing, arriving and connecting at the station
            other_station: Station the overlay should keep clear of
            overlay_config: Timing and placement settings
            formatter: Overlay content formatter
            parent: Parent QObject
        """
        super().__init__(parent)
        self.station = station
        self.role = role
        self.coordinator = coordinator
        self.engine = engine
        self.flights = flights or StationFlights()
        self.other_station = other_station
        self.overlay_config = overlay_config or OverlayConfig()
        self.formatter = formatter or ScheduleFormatter()

        self._handle: Any = None
        self._subscription: Optional[Subscription] = None
        self._overlay_open = False
        self._handling = False

        self._auto_reveal_timer = QTimer(self)
        self._auto_reveal_timer.setObjectName(f"auto_reveal_{station.code}")
        self._auto_reveal_timer.setSingleShot(True)
        self._auto_reveal_timer.setInterval(self.overlay_config.auto_reveal_delay_ms)
        self._auto_reveal_timer.timeout.connect(self._on_auto_reveal_timeout)

    @property
    def code(self) -> str:
        return self.station.code

    @property
    def is_mounted(self) -> bool:
        return self._subscription is not None

    @property
    def is_overlay_open(self) -> bool:
        """Check if this marker's overlay is open."""
        return self._overlay_open

    @property
    def auto_reveal_pending(self) -> bool:
        """Check if the auto-reveal timer is armed."""
        return self._auto_reveal_timer.isActive()

    @property
    def has_flights(self) -> bool:
        """
        Check if the station has flight data of its own for this role.

        Connections only count for destinations and connection points; an
        origin needs at least one direct departure.
        """
        flights, connections = self.flights_for_role()
        if self.role is StationRole.ORIGIN:
            return bool(flights)
        return bool(flights or connections)

    def flights_for_role(self) -> Tuple[List[Route], List[MultiLegRoute]]:
        """
        Select the direct flights and connections the overlay lists.

        Origins list departures, destinations list arrivals, connection points
        list only the connections passing through them.
        """
        connections = list(self.flights.connections)
        if self.role is StationRole.ORIGIN:
            return list(self.flights.departures), connections
        if self.role is StationRole.DESTINATION:
            return list(self.flights.arrivals), connections
        return [], connections

    def tooltip_text(self) -> str:
        """Get the hover text for the marker."""
        if self.role is StationRole.ORIGIN:
            return f"Click to view flights from {self.station.label}"
        if self.role is StationRole.DESTINATION:
            return f"Click to view flights to {self.station.label}"
        return f"Click to view connections via {self.station.label}"

    def overlay_offset(self) -> Tuple[float, float]:
        """Get the pixel offset for the overlay."""
        config = self.overlay_config
        return compute_offset(
            self.station,
            self.other_station,
            self.role,
            distance=config.offset_distance,
            default_offset_x=config.default_offset_x,
            origin_default_offset_y=config.origin_default_offset_y,
            origin_offset_y=config.origin_offset_y,
        )

    def overlay_content(self) -> OverlayContent:
        """Build the overlay content through the schedule formatter."""
        flights, connections = self.flights_for_role()
        return self.formatter.format_overlay(self.station, self.role, flights, connections)

    def mount(self) -> None:
        """Place the marker on the map and register with the coordinator."""
        if self.is_mounted:
            return

        self._handle = self.engine.mount_marker(
            self.station,
            self.role,
            self.tooltip_text(),
            self.on_overlay_opened,
            self.on_overlay_closed,
        )
        self._subscription = self.coordinator.subscribe(
            self.station.code, self.role, self._on_overlay_state
        )

        if self._is_auto_reveal_eligible():
            self._auto_reveal_timer.start()
            logger.debug(f"Auto-reveal armed for {self.station.display_code} "
                         f"({self._auto_reveal_timer.interval()}ms)")

        # Pick up an overlay that was activated before this marker existed
        if self.coordinator.is_open(self.station.code):
            self._open_overlay()

    def unmount(self) -> None:
        """Cancel timers, deregister and remove the marker from the map."""
        self._auto_reveal_timer.stop()
        if self._subscription is not None:
            self.coordinator.unsubscribe(self._subscription)
            self._subscription = None
        if self._handle is not None:
            with self._handling_event():
                self.engine.remove_marker(self._handle)
            self._handle = None
        self._set_overlay_open(False)

    def on_overlay_opened(self) -> None:
        """Handle the user opening the overlay (or the engine reporting it open)."""
        if self._handling or not self.is_mounted:
            return
        logger.debug(f"Overlay open gesture for {self.station.display_code}")
        with self._handling_event():
            self.coordinator.request_open(self.station.code)
        # The engine may only have reported the gesture without showing anything
        if self.coordinator.is_open(self.station.code) and not self._overlay_open:
            self._open_overlay()

    def on_overlay_closed(self) -> None:
        """Handle the engine reporting that the overlay was closed."""
        if self._handling or not self.is_mounted:
            return
        with self._handling_event():
            self._set_overlay_open(False)
            logger.debug(f"Overlay closed for {self.station.display_code}")
            self.coordinator.request_close(self.station.code)

    def _on_overlay_state(self, active_key: Optional[str], suppressed: bool) -> None:
        """Sync the local overlay with the coordinator's state."""
        if self._auto_reveal_timer.isActive() and (active_key is not None or suppressed):
            self._auto_reveal_timer.stop()
            logger.debug(f"Auto-reveal cancelled for {self.station.display_code}")

        if active_key == self.station.code and not self._overlay_open:
            self._open_overlay()
        elif active_key != self.station.code and self._overlay_open:
            self._close_overlay()

    def _on_auto_reveal_timeout(self) -> None:
        """Handle the auto-reveal timer firing."""
        if not self.is_mounted or self._handling:
            return
        # Opening is applied through the coordinator's notification
        self.coordinator.request_auto_reveal(self.station.code)

    def _is_auto_reveal_eligible(self) -> bool:
        return (
            self.role is StationRole.ORIGIN
            and self.has_flights
            and self.coordinator.active_key is None
            and not self.coordinator.is_suppressed()
        )

    def _open_overlay(self) -> None:
        with self._handling_event():
            self.engine.open_overlay(self._handle, self.overlay_content(), self.overlay_offset())
            self._set_overlay_open(True)
        logger.debug(f"Opening overlay for {self.station.display_code} by coordinator")

    def _close_overlay(self) -> None:
        with self._handling_event():
            self.engine.close_overlay(self._handle)
            self._set_overlay_open(False)
        logger.debug(f"Closing overlay for {self.station.display_code} by coordinator")

    def _set_overlay_open(self, is_open: bool) -> None:
        if is_open != self._overlay_open:
            self._overlay_open = is_open
            self.overlay_state_changed.emit(self.station.code, is_open)

    @contextmanager
    def _handling_event(self):
        """Mark engine events raised inside the block as echoes of our own calls."""
        previous = self._handling
        self._handling = True
        try:
            yield
        finally:
            self._handling = previous
