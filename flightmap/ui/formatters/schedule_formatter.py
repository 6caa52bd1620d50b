"""
Schedule Formatter

Builds the text content of a station overlay from the flights it lists.
"""

import logging
from typing import Sequence

from ...core.interfaces.i_map_engine import OverlayContent
from ...core.models.route import Route, MultiLegRoute
from ...core.models.station import Station, StationRole

NO_FLIGHTS_MESSAGE = "No flight information available for this airport."


class ScheduleFormatter:
    """Formats flight schedules for overlay display."""

    titles = {
        StationRole.ORIGIN: "All Flights to Destination",
        StationRole.DESTINATION: "Arriving Flights",
        StationRole.CONNECTION: "Connecting Flights",
    }

    def __init__(self):
        """Initialize the schedule formatter."""
        self.logger = logging.getLogger(__name__)

    def format_overlay(self, station: Station, role: StationRole,
                       flights: Sequence[Route],
                       connections: Sequence[MultiLegRoute]) -> OverlayContent:
        """
        Build overlay content for a station.

        Args:
            station: Station the overlay belongs to
            role: Station role, selects the heading
            flights: Direct flights to list
            connections: Connections to list

        Returns:
            OverlayContent, with the no-flights message if both lists are empty
        """
        title = f"{station.label} ({station.display_code})"
        if not flights and not connections:
            return OverlayContent(title=title, lines=(NO_FLIGHTS_MESSAGE,), has_flights=False)

        lines = [self.titles[role]]
        lines.extend(self.format_flight(flight) for flight in flights)
        lines.extend(self.format_connection(connection) for connection in connections)
        self.logger.debug(f"Formatted {len(lines) - 1} schedule rows for {station.display_code}")
        return OverlayContent(title=title, lines=tuple(lines), has_flights=True)

    def format_flight(self, flight: Route) -> str:
        """Format one direct flight as a schedule row."""
        carrier = " ".join(part for part in (flight.airline, flight.flight_number) if part)
        row = (f"{flight.format_departure_time()} {flight.departure_station.display_code} → "
               f"{flight.format_arrival_time()} {flight.arrival_station.display_code}")
        if carrier:
            row += f"  {carrier}"
        if flight.duration:
            row += f" ({flight.duration})"
        return row

    def format_connection(self, connection: MultiLegRoute) -> str:
        """Format a connection as a schedule row."""
        first, last = connection.legs[0], connection.legs[-1]
        via = ", ".join(station.display_code for station in connection.via_stations)
        row = (f"{first.format_departure_time()} {first.departure_station.display_code} → "
               f"{last.format_arrival_time()} {last.arrival_station.display_code}  via {via}")
        if connection.price:
            row += f"  {connection.price:.0f}"
        return row
