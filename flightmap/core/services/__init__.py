"""
Core Services Package

Pure services for overlay geometry and route rendering.
"""

from .geometry_offset import compute_offset, bearing_degrees
from .route_renderer import (
    RouteRenderer, PathSegment, FlightInfo, StationFlights, is_segment_highlighted,
    DIRECT, CONNECTING,
)

__all__ = [
    'compute_offset',
    'bearing_degrees',
    'RouteRenderer',
    'PathSegment',
    'FlightInfo',
    'StationFlights',
    'is_segment_highlighted',
    'DIRECT',
    'CONNECTING',
]
