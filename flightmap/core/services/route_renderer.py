"""
Route Renderer

Derives the drawable content of a route search: the deduplicated station set,
the path segments for direct flights and connection legs, the role of every
station and the flights each station's overlay lists.
"""

import logging
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Tuple

from ..models.route import Route, MultiLegRoute, RouteData
from ..models.station import Station, StationRole

logger = logging.getLogger(__name__)

DIRECT = "direct"
CONNECTING = "connecting"


@dataclass(frozen=True)
class FlightInfo:
    """One row of a path segment's informational tooltip."""

    flight_number: Optional[str]
    airline: Optional[str]
    departure_time: Optional[str]
    arrival_time: Optional[str]
    duration: Optional[str]
    price: Optional[float]

    @classmethod
    def from_route(cls, route: Route, price: Optional[float]) -> 'FlightInfo':
        return cls(
            flight_number=route.flight_number,
            airline=route.airline,
            departure_time=route.departure_time,
            arrival_time=route.arrival_time,
            duration=route.duration,
            price=price,
        )


@dataclass(frozen=True)
class PathSegment:
    """A drawable line between two stations."""

    key: str
    kind: str
    route: Route
    departure: Station
    arrival: Station
    highlighted: bool = False
    connection: Optional[MultiLegRoute] = None
    flight_info: Tuple[FlightInfo, ...] = ()

    @property
    def is_connecting(self) -> bool:
        return self.kind == CONNECTING


@dataclass(frozen=True)
class StationFlights:
    """Flights relevant to one station, split the way overlays list them."""

    departures: Tuple[Route, ...] = ()
    arrivals: Tuple[Route, ...] = ()
    connections: Tuple[MultiLegRoute, ...] = ()


def is_segment_highlighted(segment: PathSegment, selected_route_id: Optional[str]) -> bool:
    """
    Check whether a segment is highlighted for the given selection.

    Selecting a connection or any one of its legs highlights every leg.
    """
    if selected_route_id is None:
        return False
    if segment.connection is not None:
        return (selected_route_id == segment.connection.id
                or any(leg.id == selected_route_id for leg in segment.connection.legs))
    return selected_route_id == segment.route.id


class RouteRenderer:
    """Turns route search results into stations and path segments."""

    def derive_stations(self, route_data: RouteData) -> List[Station]:
        """
        Collect every station of every flight, keyed by code.

        The first occurrence of a code wins; order follows first appearance.
        """
        stations: Dict[str, Station] = {}
        for leg in route_data.all_legs():
            for station in (leg.departure_station, leg.arrival_station):
                if station is not None and station.code not in stations:
                    stations[station.code] = station
        logger.debug(f"Derived {len(stations)} stations from route data")
        return list(stations.values())

    def derive_segments(self, route_data: RouteData,
                        selected_route_id: Optional[str] = None) -> List[PathSegment]:
        """Build one segment per direct flight and per connection leg."""
        segments: List[PathSegment] = []

        for route in route_data.direct_routes:
            segment = PathSegment(
                key=f"direct-{route.id}",
                kind=DIRECT,
                route=route,
                departure=route.departure_station,
                arrival=route.arrival_station,
                flight_info=(FlightInfo.from_route(route, route.price),),
            )
            segments.append(self._with_highlight(segment, selected_route_id))

        for connection in route_data.multi_leg_routes:
            segments.extend(self._connection_segments(connection, selected_route_id))

        return segments

    def _connection_segments(self, connection: MultiLegRoute,
                             selected_route_id: Optional[str]) -> List[PathSegment]:
        # Every leg's tooltip lists the whole itinerary at an equal price split
        info = tuple(FlightInfo.from_route(leg, connection.leg_price) for leg in connection.legs)
        legs = connection.legs
        segments = []
        for index, leg in enumerate(legs):
            is_last = index == len(legs) - 1
            # Draw to the next leg's departure so gaps in the feed do not show
            endpoint = leg.arrival_station if is_last else legs[index + 1].departure_station
            segment = PathSegment(
                key=f"connection-leg-{leg.id}-{index}",
                kind=CONNECTING,
                route=leg,
                departure=leg.departure_station,
                arrival=endpoint,
                connection=connection,
                flight_info=info,
            )
            segments.append(self._with_highlight(segment, selected_route_id))
        return segments

    @staticmethod
    def _with_highlight(segment: PathSegment, selected_route_id: Optional[str]) -> PathSegment:
        return replace(segment, highlighted=is_segment_highlighted(segment, selected_route_id))

    def assign_roles(self, route_data: RouteData) -> Dict[str, StationRole]:
        """
        Work out the role of every station in the result.

        Origins depart a direct flight or a connection's first leg, destinations
        are reached by a direct flight or a connection's last leg, and every
        other station is a connection point. Origin wins over destination.
        """
        origins = set()
        destinations = set()
        for route in route_data.direct_routes:
            origins.add(route.departure_station.code)
            destinations.add(route.arrival_station.code)
        for connection in route_data.multi_leg_routes:
            origins.add(connection.departure_station.code)
            destinations.add(connection.arrival_station.code)

        roles: Dict[str, StationRole] = {}
        for station in self.derive_stations(route_data):
            if station.code in origins:
                roles[station.code] = StationRole.ORIGIN
            elif station.code in destinations:
                roles[station.code] = StationRole.DESTINATION
            else:
                roles[station.code] = StationRole.CONNECTION
        return roles

    def station_flights(self, route_data: RouteData, code: str) -> StationFlights:
        """Get the flights departing, arriving and connecting at a station."""
        departures = tuple(r for r in route_data.direct_routes if r.departure_station.code == code)
        arrivals = tuple(r for r in route_data.direct_routes if r.arrival_station.code == code)
        connections = tuple(
            c for c in route_data.multi_leg_routes
            if any(code in (leg.departure_station.code, leg.arrival_station.code) for leg in c.legs)
        )
        return StationFlights(departures=departures, arrivals=arrivals, connections=connections)

    def associated_station(self, route_data: RouteData, code: str,
                           role: StationRole) -> Optional[Station]:
        """
        Get the station an overlay should keep clear of.

        Origins pair with the first destination they reach and destinations
        with the first origin reaching them. Connection points have none.
        """
        if role is StationRole.ORIGIN:
            for route in route_data.direct_routes:
                if route.departure_station.code == code:
                    return route.arrival_station
            for connection in route_data.multi_leg_routes:
                if connection.departure_station.code == code:
                    return connection.arrival_station
        elif role is StationRole.DESTINATION:
            for route in route_data.direct_routes:
                if route.arrival_station.code == code:
                    return route.departure_station
            for connection in route_data.multi_leg_routes:
                if connection.arrival_station.code == code:
                    return connection.departure_station
        return None
