"""
Route Models

Direct flights, multi-leg connections and the route data bundle returned by
the route data provider.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Tuple, Dict, Any, Union
from .station import Station


def _format_time(value: Optional[str]) -> str:
    """Format an ISO timestamp as HH:MM, passing other strings through."""
    if not value:
        return ""
    try:
        return datetime.fromisoformat(value).strftime("%H:%M")
    except ValueError:
        return value


@dataclass(frozen=True)
class Route:
    """
    Represents a single direct flight between two stations.
    """

    id: str
    departure_station: Station
    arrival_station: Station
    departure_time: Optional[str] = None
    arrival_time: Optional[str] = None
    duration: Optional[str] = None
    flight_number: Optional[str] = None
    airline: Optional[str] = None
    price: Optional[float] = None

    def format_departure_time(self) -> str:
        """Format departure time for display."""
        return _format_time(self.departure_time)

    def format_arrival_time(self) -> str:
        """Format arrival time for display."""
        return _format_time(self.arrival_time)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Route':
        """Create Route from the provider's dictionary representation."""
        departure = data.get("departureAirport", data.get("departure_station"))
        arrival = data.get("arrivalAirport", data.get("arrival_station"))
        if not departure or not arrival:
            raise ValueError(f"Flight {data.get('id')} is missing an airport")

        price = data.get("price")
        return cls(
            id=str(data["id"]),
            departure_station=Station.from_dict(departure),
            arrival_station=Station.from_dict(arrival),
            departure_time=data.get("departureTime", data.get("departure_time")),
            arrival_time=data.get("arrivalTime", data.get("arrival_time")),
            duration=data.get("duration"),
            flight_number=data.get("flightNumber", data.get("flight_number")),
            airline=data.get("airline"),
            price=float(price) if price is not None else None,
        )


@dataclass(frozen=True)
class MultiLegRoute:
    """
    Represents an itinerary made of two or more consecutive flights.

    Leg boundaries are not required to be spatially continuous; only the
    endpoints of each leg are used for drawing.
    """

    id: str
    legs: Tuple[Route, ...]
    price: float = 0.0

    def __post_init__(self):
        """Validate the leg sequence."""
        if not isinstance(self.legs, tuple):
            object.__setattr__(self, 'legs', tuple(self.legs))
        if len(self.legs) < 2:
            raise ValueError(f"Connection {self.id} needs at least two legs")

    @property
    def leg_price(self) -> float:
        """Get the price shown for each leg (equal split of the total)."""
        return self.price / len(self.legs)

    @property
    def departure_station(self) -> Station:
        """Get the first leg's departure station."""
        return self.legs[0].departure_station

    @property
    def arrival_station(self) -> Station:
        """Get the last leg's arrival station."""
        return self.legs[-1].arrival_station

    @property
    def via_stations(self) -> List[Station]:
        """Get the stations where the itinerary changes flights."""
        return [leg.departure_station for leg in self.legs[1:]]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MultiLegRoute':
        """Create MultiLegRoute from the provider's dictionary representation."""
        legs = data.get("flights", data.get("legs", []))
        return cls(
            id=str(data["id"]),
            legs=tuple(Route.from_dict(leg) for leg in legs),
            price=float(data.get("price") or 0.0),
        )


AnyRoute = Union[Route, MultiLegRoute]


@dataclass(frozen=True)
class RouteData:
    """Result of one route search: direct flights and connections."""

    direct_routes: Tuple[Route, ...] = field(default_factory=tuple)
    multi_leg_routes: Tuple[MultiLegRoute, ...] = field(default_factory=tuple)

    def __post_init__(self):
        """Freeze the route sequences."""
        object.__setattr__(self, 'direct_routes', tuple(self.direct_routes))
        object.__setattr__(self, 'multi_leg_routes', tuple(self.multi_leg_routes))

    @property
    def is_empty(self) -> bool:
        """Check if the search returned nothing."""
        return not self.direct_routes and not self.multi_leg_routes

    def all_legs(self) -> List[Route]:
        """Get direct routes followed by every leg of every connection."""
        legs = list(self.direct_routes)
        for connection in self.multi_leg_routes:
            legs.extend(connection.legs)
        return legs

    def find_route(self, route_id: str) -> Optional[AnyRoute]:
        """Find a direct route, connection or connection leg by id."""
        for route in self.direct_routes:
            if route.id == route_id:
                return route
        for connection in self.multi_leg_routes:
            if connection.id == route_id:
                return connection
            for leg in connection.legs:
                if leg.id == route_id:
                    return leg
        return None

    @classmethod
    def empty(cls) -> 'RouteData':
        """Create an empty result."""
        return cls()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RouteData':
        """Create RouteData from the provider's response payload."""
        direct = data.get("directFlights", data.get("direct_routes")) or []
        connecting = data.get("connectingFlights", data.get("multi_leg_routes")) or []
        return cls(
            direct_routes=tuple(Route.from_dict(item) for item in direct),
            multi_leg_routes=tuple(MultiLegRoute.from_dict(item) for item in connecting),
        )
