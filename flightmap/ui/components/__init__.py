"""
UI Components Package

Map surface and the station markers it mounts.
"""

from .station_marker import StationMarker
from .map_surface import MapSurface

__all__ = ['StationMarker', 'MapSurface']
