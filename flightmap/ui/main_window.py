"""
Main window for the FlightMap application.

Hosts the search bar and the flight map, and wires the route manager's
results into the map surface.
"""

import logging
from typing import Optional
from PySide6.QtWidgets import (
    QMainWindow,
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QStatusBar,
)
from ..core.models.route import RouteData
from ..managers.config_manager import ConfigData
from ..managers.route_manager import RouteManager
from .components.map_surface import MapSurface
from .widgets.graphics_map_engine import GraphicsMapEngine
from version import __app_display_name__

logger = logging.getLogger(__name__)

NOTIFICATION_TIMEOUT_MS = 6000


class MainWindow(QMainWindow):
    """Main application window with a search bar above the flight map."""

    def __init__(self, config: ConfigData, route_manager: Optional[RouteManager] = None):
        """
        Initialize the main window.

        Args:
            config: Application configuration
            route_manager: Route manager, created from config if omitted
        """
        super().__init__()
        self.config = config
        self.route_manager = route_manager or RouteManager(config)

        self.setWindowTitle(__app_display_name__)
        self.resize(*config.display.window_size)
        self.setStyleSheet("QMainWindow { background-color: #1a1a1a; }")

        self.engine = GraphicsMapEngine(config.map.scene_width, config.map.scene_height)
        self.map_surface = MapSurface(self.engine, config.overlay, config.map, self)

        self._setup_ui()
        self._connect_signals()
        logger.debug("MainWindow initialized")

    def _setup_ui(self) -> None:
        central = QWidget(self)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(8, 8, 8, 8)

        search_bar = QHBoxLayout()
        search_bar.addWidget(QLabel("From:"))
        self.origin_input = QLineEdit(self.config.search.default_origin)
        self.origin_input.setMaxLength(3)
        search_bar.addWidget(self.origin_input)
        search_bar.addWidget(QLabel("To:"))
        self.destination_input = QLineEdit(self.config.search.default_destination)
        self.destination_input.setMaxLength(3)
        search_bar.addWidget(self.destination_input)
        self.search_button = QPushButton("Search")
        search_bar.addWidget(self.search_button)
        search_bar.addStretch()
        layout.addLayout(search_bar)

        layout.addWidget(self.engine.view, 1)
        self.setCentralWidget(central)

        self.setStatusBar(QStatusBar(self))

    def _connect_signals(self) -> None:
        self.search_button.clicked.connect(self.on_search_clicked)
        self.origin_input.returnPressed.connect(self.on_search_clicked)

        self.route_manager.loading_changed.connect(self.on_loading_changed)
        self.route_manager.routes_updated.connect(self.on_routes_updated)
        self.route_manager.search_failed.connect(self.show_notification)
        self.route_manager.no_routes_found.connect(self.show_notification)
        self.route_manager.status_changed.connect(self.show_notification)

        self.map_surface.route_selected.connect(self.on_route_selected)
        self.map_surface.overlay_activation_changed.connect(self.on_overlay_activation_changed)

    def on_search_clicked(self) -> None:
        """Start a search from the input fields."""
        origin = self.origin_input.text().strip().upper()
        destination = self.destination_input.text().strip().upper()
        if not origin:
            self.show_notification("Enter a departure airport code.")
            return
        self.route_manager.search(origin, destination or None)

    def on_loading_changed(self, loading: bool) -> None:
        """Disable searching and hide map content while loading."""
        self.search_button.setEnabled(not loading)
        if loading:
            self.map_surface.set_route_data(RouteData.empty())
        self.map_surface.set_loading(loading)

    def on_routes_updated(self, route_data: RouteData) -> None:
        """Show a new search result on the map."""
        self.map_surface.set_route_data(route_data)

    def on_route_selected(self, route) -> None:
        """Show the selected flight in the status bar."""
        self.show_notification(f"Selected flight {route.id}")

    def on_overlay_activation_changed(self, code) -> None:
        logger.debug(f"Active overlay: {code}")

    def show_notification(self, message: str) -> None:
        """Show a non-blocking message in the status bar."""
        self.statusBar().showMessage(message, NOTIFICATION_TIMEOUT_MS)
