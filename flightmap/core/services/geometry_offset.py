"""
Overlay placement geometry.

Computes the pixel offset of a station's overlay so that it sits away from
the line between the station and its associated destination.
"""

import math
from typing import Optional, Tuple

from ..models.station import Station, StationRole

DEFAULT_OFFSET_X = -200.0
ORIGIN_DEFAULT_OFFSET_Y = 60.0
ORIGIN_OFFSET_Y = 100.0
OFFSET_DISTANCE = 160.0


def bearing_degrees(station: Station, other: Station) -> float:
    """
    Get the planar bearing from station to other in degrees.

    Identical coordinates give 0.0 (atan2(0, 0) is defined as 0).
    """
    return math.degrees(math.atan2(other.lat - station.lat, other.lng - station.lng))


def compute_offset(
    station: Station,
    other: Optional[Station],
    role: StationRole,
    distance: float = OFFSET_DISTANCE,
    default_offset_x: float = DEFAULT_OFFSET_X,
    origin_default_offset_y: float = ORIGIN_DEFAULT_OFFSET_Y,
    origin_offset_y: float = ORIGIN_OFFSET_Y,
) -> Tuple[float, float]:
    """
    Compute the overlay offset (dx, dy) in pixels for a station.

    Args:
        station: The station owning the overlay
        other: The associated station, if any
        role: Role of the owning station
        distance: Horizontal displacement scale
        default_offset_x: dx used when there is no directional cue
        origin_default_offset_y: dy for an origin without a directional cue
        origin_offset_y: dy for an origin with a directional cue

    Returns:
        Tuple of (dx, dy)
    """
    if other is None or role is StationRole.CONNECTION:
        dy = origin_default_offset_y if role is StationRole.ORIGIN else 0.0
        return (default_offset_x, dy)

    angle = bearing_degrees(station, other)

    if role is StationRole.ORIGIN:
        return (math.cos(math.radians(angle)) * -distance, origin_offset_y)

    # Destination mirrors the origin's displacement
    return (math.cos(math.radians(angle + 180.0)) * -distance, 0.0)
