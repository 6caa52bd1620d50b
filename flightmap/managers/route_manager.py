"""
Route data management for the FlightMap application.

Runs route searches against the provider in a background thread and reports
results back to the UI through Qt signals.
"""

import asyncio
import logging
import threading
from typing import Optional

from PySide6.QtCore import QObject, Signal

from ..api.route_api_manager import RouteAPIManager, APIException
from ..core.models.route import RouteData
from .config_manager import ConfigData

logger = logging.getLogger(__name__)


class RouteManager(QObject):
    """
    Coordinates route searches.

    A failed search is reported through ``search_failed`` and always
    followed by an empty ``routes_updated`` so the map never shows a
    partial result.
    """

    # Signals
    routes_updated = Signal(object)  # RouteData
    search_failed = Signal(str)  # Error message
    no_routes_found = Signal(str)  # Warning message
    status_changed = Signal(str)  # Status message
    loading_changed = Signal(bool)

    def __init__(self, config: ConfigData):
        """
        Initialize route manager.

        Args:
            config: Application configuration
        """
        super().__init__()
        self.config = config
        self.is_fetching = False
        self.last_result: Optional[RouteData] = None
        self._fetch_lock = threading.Lock()

    def search(self, origin: str, destination: Optional[str] = None) -> bool:
        """
        Start a route search in the background.

        Args:
            origin: Departure airport code
            destination: Arrival airport code, defaults to the configured one

        Returns:
            bool: False if another search is still running
        """
        destination = destination or self.config.search.default_destination
        if self.is_fetching:
            logger.warning("Another search is already in progress, skipping")
            return False

        logger.info(f"Searching flights from {origin} to {destination}")
        self.is_fetching = True
        self.loading_changed.emit(True)

        def run_async():
            if not self._fetch_lock.acquire(blocking=False):
                logger.warning("Another search is already in progress, skipping")
                return
            loop = asyncio.new_event_loop()
            try:
                asyncio.set_event_loop(loop)
                loop.run_until_complete(self.fetch_routes(origin, destination))
            except Exception as e:
                logger.error(f"Error in search thread: {e}")
                self._report_failure(f"Search error: {e}")
            finally:
                loop.close()
                self._fetch_lock.release()

        thread = threading.Thread(target=run_async, daemon=True)
        thread.start()
        return True

    async def fetch_routes(self, origin: str, destination: str) -> RouteData:
        """
        Fetch routes and emit the outcome.

        Returns:
            RouteData: The result, empty on failure
        """
        self.is_fetching = True
        self.status_changed.emit(f"Searching flights {origin} → {destination}...")
        try:
            async with RouteAPIManager(self.config.api) as api:
                route_data = await api.get_routes(origin, destination)
        except APIException as e:
            logger.error(f"Error searching flights: {e}")
            self._report_failure("Failed to search flights. Please try again.")
            return RouteData.empty()

        self.last_result = route_data
        self.is_fetching = False
        self.routes_updated.emit(route_data)
        self.loading_changed.emit(False)

        if route_data.is_empty:
            self.no_routes_found.emit(
                "No flights found. Try another departure airport or check back later."
            )
        else:
            self.status_changed.emit(
                f"Found {len(route_data.direct_routes)} direct and "
                f"{len(route_data.multi_leg_routes)} connecting flights"
            )
        return route_data

    def _report_failure(self, message: str) -> None:
        self.last_result = RouteData.empty()
        self.is_fetching = False
        self.search_failed.emit(message)
        self.routes_updated.emit(RouteData.empty())
        self.loading_changed.emit(False)
