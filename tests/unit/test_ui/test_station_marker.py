"""
Tests for StationMarker: mounting, user gestures, coordinator sync and the
one-shot auto-reveal timer.
"""

import pytest
from PySide6.QtTest import QTest

from flightmap.core.models.station import StationRole
from flightmap.core.services.geometry_offset import compute_offset
from flightmap.core.services.route_renderer import StationFlights
from flightmap.managers.config_manager import OverlayConfig
from flightmap.ui.components.station_marker import StationMarker
from flightmap.ui.formatters.schedule_formatter import NO_FLIGHTS_MESSAGE
from flightmap.ui.state.overlay_coordinator import OverlayCoordinator


@pytest.fixture
def coordinator(qapp):
    coordinator = OverlayCoordinator(suppression_window_ms=300)
    yield coordinator
    coordinator.reset()


@pytest.fixture
def origin_flights(route_data):
    return StationFlights(
        departures=route_data.direct_routes,
        connections=route_data.multi_leg_routes,
    )


@pytest.fixture
def make_marker(coordinator, engine):
    created = []

    def factory(station, role, flights=None, other=None, config=None):
        marker = StationMarker(
            station, role, coordinator, engine,
            flights=flights, other_station=other,
            overlay_config=config or OverlayConfig(),
        )
        created.append(marker)
        return marker

    yield factory
    for marker in created:
        marker.unmount()


class TestMounting:
    """Test mount and unmount."""

    def test_mount_places_marker_and_subscribes(self, make_marker, engine, coordinator, airports):
        marker = make_marker(airports["HND"], StationRole.DESTINATION)
        marker.mount()

        assert marker.is_mounted
        assert coordinator.is_subscribed("HND")
        assert engine.markers["HND"].tooltip == "Click to view flights to Tokyo"

    def test_tooltips_by_role(self, make_marker, airports):
        assert make_marker(airports["LHR"], StationRole.ORIGIN).tooltip_text() == \
            "Click to view flights from London"
        assert make_marker(airports["DXB"], StationRole.CONNECTION).tooltip_text() == \
            "Click to view connections via Dubai"

    def test_unmount_cancels_timer_and_deregisters(self, make_marker, engine, coordinator,
                                                   airports, origin_flights):
        marker = make_marker(airports["LHR"], StationRole.ORIGIN, origin_flights)
        marker.mount()
        assert marker.auto_reveal_pending

        marker.unmount()

        assert not marker.auto_reveal_pending
        assert not coordinator.is_subscribed("LHR")
        assert "LHR" not in engine.markers

    def test_coordinator_reset_closes_open_overlay(self, make_marker, engine, coordinator, airports):
        marker = make_marker(airports["HND"], StationRole.DESTINATION)
        marker.mount()
        engine.click_marker("HND")
        assert marker.is_overlay_open

        coordinator.reset()

        assert not marker.is_overlay_open
        assert engine.open_codes() == []

    def test_unmount_of_open_marker_releases_overlay(self, make_marker, coordinator, airports):
        marker = make_marker(airports["HND"], StationRole.DESTINATION)
        marker.mount()
        coordinator.request_open("HND")

        marker.unmount()

        assert coordinator.active_key is None
        assert not marker.is_overlay_open


class TestUserGestures:
    """Test opening and closing overlays through the engine."""

    def test_click_opens_and_closes_others(self, make_marker, engine, coordinator, airports):
        lhr = make_marker(airports["LHR"], StationRole.ORIGIN)
        hnd = make_marker(airports["HND"], StationRole.DESTINATION)
        lhr.mount()
        hnd.mount()

        engine.click_marker("LHR")
        assert engine.open_codes() == ["LHR"]
        assert lhr.is_overlay_open

        engine.click_marker("HND")
        assert engine.open_codes() == ["HND"]
        assert not lhr.is_overlay_open
        assert hnd.is_overlay_open
        assert coordinator.active_key == "HND"

    def test_open_does_not_echo(self, make_marker, engine, airports):
        marker = make_marker(airports["HND"], StationRole.DESTINATION)
        marker.mount()

        engine.click_marker("HND")

        assert engine.open_calls == ["HND"]

    def test_dismissing_origin_suppresses_auto_reveal(self, make_marker, engine, coordinator, airports):
        marker = make_marker(airports["LHR"], StationRole.ORIGIN)
        marker.mount()
        engine.click_marker("LHR")

        engine.dismiss_overlay("LHR")

        assert coordinator.active_key is None
        assert coordinator.is_suppressed()
        assert not marker.is_overlay_open

    def test_overlay_state_signal(self, make_marker, engine, airports):
        marker = make_marker(airports["HND"], StationRole.DESTINATION)
        received = []
        marker.overlay_state_changed.connect(lambda code, is_open: received.append((code, is_open)))
        marker.mount()

        engine.click_marker("HND")
        engine.click_marker("HND")

        assert received == [("HND", True), ("HND", False)]

    def test_external_activation_opens_with_offset(self, make_marker, engine, coordinator, airports,
                                                   origin_flights):
        marker = make_marker(airports["LHR"], StationRole.ORIGIN, origin_flights, other=airports["HND"])
        marker.mount()

        coordinator.request_open("LHR")

        handle = engine.markers["LHR"]
        assert handle.overlay_open
        assert handle.offset == compute_offset(airports["LHR"], airports["HND"], StationRole.ORIGIN)
        assert handle.content.title == "London (LHR)"
        assert handle.content.has_flights


class TestOverlayContent:
    """Test role-based flight selection for overlay content."""

    def test_origin_lists_departures_and_connections(self, make_marker, airports, origin_flights):
        marker = make_marker(airports["LHR"], StationRole.ORIGIN, origin_flights)
        content = marker.overlay_content()
        assert content.lines[0] == "All Flights to Destination"
        assert len(content.lines) == 3

    def test_connection_without_connections_has_no_flights(self, make_marker, airports, origin_flights):
        flights = StationFlights(departures=origin_flights.departures)
        marker = make_marker(airports["DXB"], StationRole.CONNECTION, flights)
        content = marker.overlay_content()
        assert not marker.has_flights
        assert content.lines == (NO_FLIGHTS_MESSAGE,)
        assert not content.has_flights


class TestAutoReveal:
    """Test the one-shot auto-reveal timer."""

    def test_armed_only_for_origin_with_flights(self, make_marker, airports, origin_flights):
        origin = make_marker(airports["LHR"], StationRole.ORIGIN, origin_flights)
        empty_origin = make_marker(airports["ICN"], StationRole.ORIGIN)
        destination = make_marker(airports["HND"], StationRole.DESTINATION,
                                  StationFlights(arrivals=origin_flights.departures))
        for marker in (origin, empty_origin, destination):
            marker.mount()

        assert origin.auto_reveal_pending
        assert not empty_origin.auto_reveal_pending
        assert not destination.auto_reveal_pending

    def test_not_armed_for_origin_with_only_connections(self, make_marker, airports, route_data):
        marker = make_marker(airports["LHR"], StationRole.ORIGIN,
                             StationFlights(connections=route_data.multi_leg_routes))
        marker.mount()

        assert not marker.has_flights
        assert not marker.auto_reveal_pending
        assert marker.overlay_content().has_flights

    def test_connections_count_for_connection_points(self, make_marker, airports, route_data):
        marker = make_marker(airports["DXB"], StationRole.CONNECTION,
                             StationFlights(connections=route_data.multi_leg_routes))
        assert marker.has_flights

    def test_not_armed_when_overlay_already_open(self, make_marker, coordinator, airports,
                                                 origin_flights):
        coordinator.request_open("HND")
        marker = make_marker(airports["LHR"], StationRole.ORIGIN, origin_flights)
        marker.mount()
        assert not marker.auto_reveal_pending

    def test_timeout_opens_overlay(self, make_marker, engine, coordinator, airports, origin_flights):
        marker = make_marker(airports["LHR"], StationRole.ORIGIN, origin_flights)
        marker.mount()

        marker._on_auto_reveal_timeout()

        assert coordinator.is_open("LHR")
        assert marker.is_overlay_open
        assert engine.open_codes() == ["LHR"]

    def test_cancelled_when_another_station_opens(self, make_marker, engine, coordinator,
                                                  airports, origin_flights):
        lhr = make_marker(airports["LHR"], StationRole.ORIGIN, origin_flights)
        hnd = make_marker(airports["HND"], StationRole.DESTINATION)
        lhr.mount()
        hnd.mount()

        engine.click_marker("HND")

        assert not lhr.auto_reveal_pending
        lhr._on_auto_reveal_timeout()
        assert engine.open_codes() == ["HND"]

    def test_cancelled_by_suppression(self, make_marker, engine, coordinator, airports, origin_flights):
        lhr = make_marker(airports["LHR"], StationRole.ORIGIN, origin_flights)
        lhr.mount()
        other = make_marker(airports["ICN"], StationRole.ORIGIN)
        other.mount()
        engine.click_marker("ICN")
        engine.dismiss_overlay("ICN")

        assert coordinator.is_suppressed()
        assert not lhr.auto_reveal_pending

    def test_timeout_after_unmount_is_ignored(self, make_marker, coordinator, airports, origin_flights):
        marker = make_marker(airports["LHR"], StationRole.ORIGIN, origin_flights)
        marker.mount()
        marker.unmount()

        marker._on_auto_reveal_timeout()

        assert coordinator.active_key is None

    def test_fires_after_delay(self, make_marker, engine, coordinator, airports, origin_flights,
                               fast_overlay_config):
        marker = make_marker(airports["LHR"], StationRole.ORIGIN, origin_flights,
                             config=fast_overlay_config)
        marker.mount()

        QTest.qWait(50)
        assert not marker.is_overlay_open

        QTest.qWait(300)
        assert marker.is_overlay_open
        assert coordinator.is_open("LHR")

    def test_does_not_fire_after_intervening_open(self, make_marker, engine, coordinator, airports,
                                                  origin_flights, fast_overlay_config):
        lhr = make_marker(airports["LHR"], StationRole.ORIGIN, origin_flights,
                          config=fast_overlay_config)
        hnd = make_marker(airports["HND"], StationRole.DESTINATION, config=fast_overlay_config)
        lhr.mount()
        hnd.mount()

        QTest.qWait(50)
        coordinator.request_open("HND")
        QTest.qWait(300)

        assert not lhr.is_overlay_open
        assert engine.open_codes() == ["HND"]

    def test_one_shot_after_dismissal(self, make_marker, engine, coordinator, airports, origin_flights):
        marker = make_marker(airports["LHR"], StationRole.ORIGIN, origin_flights)
        marker.mount()
        marker._on_auto_reveal_timeout()

        engine.dismiss_overlay("LHR")
        coordinator._on_suppression_elapsed()

        assert not marker.auto_reveal_pending
        assert coordinator.active_key is None
