"""
Selection State Management for the FlightMap application.

Holds the id of the route the user last selected on the map.
"""

import logging
from typing import Optional
from PySide6.QtCore import QObject, Signal

logger = logging.getLogger(__name__)


class SelectionState(QObject):
    """Manages the selected route id for the map surface."""

    # Signals
    selection_changed = Signal(object)  # Emitted with the new route id or None

    def __init__(self, parent=None):
        """Initialize selection state."""
        super().__init__(parent)
        self._selected_route_id: Optional[str] = None

    @property
    def selected_route_id(self) -> Optional[str]:
        """Get the selected route id."""
        return self._selected_route_id

    def select(self, route_id: Optional[str]) -> None:
        """Select a route by id."""
        if route_id != self._selected_route_id:
            self._selected_route_id = route_id
            self.selection_changed.emit(route_id)
            logger.debug(f"Selected route updated: {route_id}")

    def clear(self) -> None:
        """Clear the selection."""
        self.select(None)
