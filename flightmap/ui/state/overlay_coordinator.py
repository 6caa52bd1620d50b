"""
Overlay Coordinator for the FlightMap application.

Arbitrates which single station overlay is open on the map, runs the
suppression window that follows a dismissed origin overlay, and decides
whether a timed auto-reveal may open an overlay.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional
from PySide6.QtCore import QObject, Signal, QTimer

from ...core.models.station import StationRole

logger = logging.getLogger(__name__)

OverlayListener = Callable[[Optional[str], bool], None]


@dataclass
class OverlayRequestState:
    """The shared overlay state. Mutated only by OverlayCoordinator."""

    active_key: Optional[str] = None
    suppressed: bool = False


@dataclass(eq=False)
class Subscription:
    """A station registered for overlay notifications."""

    code: str
    role: StationRole
    listener: OverlayListener
    active: bool = True


class OverlayCoordinator(QObject):
    """
    Enforces the single-active-overlay rule across all station markers.

    Listeners are called synchronously with ``(active_key, suppressed)``
    before the triggering operation returns. Operations issued while that
    fan-out is in progress are ignored.
    """

    # Signals
    activation_changed = Signal(object)  # station code or None
    suppression_changed = Signal(bool)

    def __init__(self, suppression_window_ms: int = 300, parent=None):
        """
        Initialize the coordinator.

        Args:
            suppression_window_ms: How long auto-reveal stays disabled after
                an origin overlay is closed
            parent: Parent QObject
        """
        super().__init__(parent)
        self._state = OverlayRequestState()
        self._subscriptions: List[Subscription] = []
        self._notifying = False

        self._suppression_timer = QTimer(self)
        self._suppression_timer.setObjectName("overlay_suppression_timer")
        self._suppression_timer.setSingleShot(True)
        self._suppression_timer.setInterval(suppression_window_ms)
        self._suppression_timer.timeout.connect(self._on_suppression_elapsed)

    @property
    def active_key(self) -> Optional[str]:
        """Get the code of the station whose overlay is open."""
        return self._state.active_key

    @property
    def suppression_window_ms(self) -> int:
        return self._suppression_timer.interval()

    def is_open(self, code: str) -> bool:
        """Check if the given station owns the open overlay."""
        return self._state.active_key is not None and self._state.active_key == code

    def is_suppressed(self) -> bool:
        """Check if auto-reveal is currently disabled."""
        return self._state.suppressed

    def is_subscribed(self, code: str) -> bool:
        return any(sub.code == code for sub in self._subscriptions)

    def subscribe(self, code: str, role: StationRole, listener: OverlayListener) -> Subscription:
        """Register a station for overlay notifications."""
        subscription = Subscription(code=code, role=role, listener=listener)
        self._subscriptions.append(subscription)
        logger.debug(f"Station {code} subscribed as {role.value}")
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        """
        Deregister a station.

        If it owned the open overlay and no other subscriber shares its code,
        the overlay is released without starting a suppression window.
        """
        subscription.active = False
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)
        logger.debug(f"Station {subscription.code} unsubscribed")

        if self.is_open(subscription.code) and not self.is_subscribed(subscription.code):
            self._state.active_key = None
            if not self._notifying:
                self._notify()
                self.activation_changed.emit(None)

    def request_open(self, code: str) -> None:
        """Make the given station's overlay the open one."""
        if self._notifying:
            logger.debug(f"Ignoring open request for {code} during notification")
            return
        if self._state.active_key == code:
            return

        logger.debug(f"Overlay open requested for {code} (was {self._state.active_key})")
        self._set_active(code)

    def request_close(self, code: str) -> None:
        """
        Close the given station's overlay if it is the open one.

        Closing an origin overlay starts the suppression window.
        """
        if self._notifying:
            logger.debug(f"Ignoring close request for {code} during notification")
            return
        if not self.is_open(code):
            return

        logger.debug(f"Overlay close requested for {code}")
        self._state.active_key = None
        if self._role_of(code) is StationRole.ORIGIN:
            self._start_suppression()
        self._notify()
        self.activation_changed.emit(None)

    def request_auto_reveal(self, code: str) -> bool:
        """
        Open the given station's overlay on behalf of a timer.

        Returns:
            True if the overlay was opened
        """
        if self._notifying:
            logger.debug(f"Ignoring auto-reveal for {code} during notification")
            return False
        if not self.is_subscribed(code):
            logger.debug(f"Auto-reveal for {code} dropped, station no longer mounted")
            return False
        if self._state.active_key is not None or self._state.suppressed:
            logger.debug(f"Auto-reveal for {code} blocked "
                         f"(active={self._state.active_key}, suppressed={self._state.suppressed})")
            return False

        logger.info(f"Auto-revealing overlay for {code}")
        self._set_active(code)
        return True

    def reset(self) -> None:
        """
        Clear all overlay state, e.g. before a new set of stations is mounted.

        Stations still subscribed are notified so an open overlay closes.
        """
        self._suppression_timer.stop()
        previous = self._state
        self._state = OverlayRequestState()
        if previous.active_key is not None or previous.suppressed:
            self._notify()
        if previous.active_key is not None:
            self.activation_changed.emit(None)
        if previous.suppressed:
            self.suppression_changed.emit(False)
        logger.debug("Overlay state reset")

    def _set_active(self, code: str) -> None:
        self._state.active_key = code
        self._notify()
        self.activation_changed.emit(code)

    def _start_suppression(self) -> None:
        self._state.suppressed = True
        self._suppression_timer.start()
        self.suppression_changed.emit(True)

    def _on_suppression_elapsed(self) -> None:
        """Handle the end of the suppression window."""
        if not self._state.suppressed:
            return
        self._state.suppressed = False
        logger.debug("Overlay suppression window elapsed")
        self._notify()
        self.suppression_changed.emit(False)

    def _role_of(self, code: str) -> Optional[StationRole]:
        for sub in self._subscriptions:
            if sub.code == code:
                return sub.role
        return None

    def _notify(self) -> None:
        """Deliver the current state to every live subscriber."""
        if self._notifying:
            return
        self._notifying = True
        try:
            active_key, suppressed = self._state.active_key, self._state.suppressed
            for sub in list(self._subscriptions):
                if sub.active:
                    sub.listener(active_key, suppressed)
        finally:
            self._notifying = False
