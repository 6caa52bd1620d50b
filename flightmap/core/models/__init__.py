"""
Core Models Package

Data models for airports, flights and connections.
"""

from .station import Station, StationRole
from .route import Route, MultiLegRoute, RouteData, AnyRoute

__all__ = [
    'Station',
    'StationRole',
    'Route',
    'MultiLegRoute',
    'RouteData',
    'AnyRoute',
]
