"""
Core Package

Models, interfaces and pure services for the flight map.
"""

from .interfaces import IMapEngine, OverlayContent
from .models import Station, StationRole, Route, MultiLegRoute, RouteData
from .services import RouteRenderer, PathSegment, compute_offset

__all__ = [
    # Interfaces
    'IMapEngine',
    'OverlayContent',

    # Models
    'Station',
    'StationRole',
    'Route',
    'MultiLegRoute',
    'RouteData',

    # Services
    'RouteRenderer',
    'PathSegment',
    'compute_offset',
]
