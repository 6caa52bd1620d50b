"""
Tests for overlay placement geometry.
"""

import math
import pytest

from flightmap.core.models.station import Station, StationRole
from flightmap.core.services.geometry_offset import compute_offset, bearing_degrees


A = Station(code="AAA", lat=0.0, lng=0.0)
B = Station(code="BBB", lat=0.0, lng=1.0)
NORTH = Station(code="NNN", lat=1.0, lng=0.0)


class TestComputeOffset:
    """Test compute_offset for every role."""

    def test_origin_towards_east(self):
        """Origin with destination due east is pushed left and down."""
        assert compute_offset(A, B, StationRole.ORIGIN) == pytest.approx((-160.0, 100.0))

    def test_destination_mirrors_origin(self):
        """Destination facing its origin due west uses angle + 180."""
        assert compute_offset(B, A, StationRole.DESTINATION) == pytest.approx((-160.0, 0.0))

    def test_origin_towards_west(self):
        assert compute_offset(B, A, StationRole.ORIGIN) == pytest.approx((160.0, 100.0))

    def test_origin_towards_north_has_no_horizontal_push(self):
        dx, dy = compute_offset(A, NORTH, StationRole.ORIGIN)
        assert dx == pytest.approx(0.0, abs=1e-9)
        assert dy == 100.0

    def test_default_without_other(self):
        """Without a directional cue the overlay goes up-left."""
        assert compute_offset(A, None, StationRole.ORIGIN) == (-200.0, 60.0)
        assert compute_offset(A, None, StationRole.DESTINATION) == (-200.0, 0.0)
        assert compute_offset(A, None, StationRole.CONNECTION) == (-200.0, 0.0)

    def test_connection_ignores_other(self):
        assert compute_offset(A, B, StationRole.CONNECTION) == (-200.0, 0.0)

    def test_identical_coordinates_do_not_raise(self):
        twin = Station(code="TWN", lat=0.0, lng=0.0)
        assert bearing_degrees(A, twin) == 0.0
        assert compute_offset(A, twin, StationRole.ORIGIN) == pytest.approx((-160.0, 100.0))
        assert compute_offset(A, twin, StationRole.DESTINATION) == pytest.approx((160.0, 0.0))

    def test_custom_parameters(self):
        dx, dy = compute_offset(A, B, StationRole.ORIGIN, distance=80.0, origin_offset_y=40.0)
        assert (dx, dy) == pytest.approx((-80.0, 40.0))
        assert compute_offset(A, None, StationRole.ORIGIN, default_offset_x=-50.0,
                              origin_default_offset_y=10.0) == (-50.0, 10.0)

    def test_bearing_degrees(self):
        assert bearing_degrees(A, B) == pytest.approx(0.0)
        assert bearing_degrees(A, NORTH) == pytest.approx(90.0)
        assert bearing_degrees(B, A) == pytest.approx(180.0)
        diagonal = Station(code="DIA", lat=1.0, lng=1.0)
        dx, _ = compute_offset(A, diagonal, StationRole.ORIGIN)
        assert dx == pytest.approx(math.cos(math.radians(45.0)) * -160.0)
