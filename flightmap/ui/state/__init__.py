"""
UI State Management Package

State objects shared by the map surface and its markers.
"""

from .overlay_coordinator import OverlayCoordinator, OverlayRequestState, Subscription
from .selection_state import SelectionState

__all__ = [
    'OverlayCoordinator',
    'OverlayRequestState',
    'Subscription',
    'SelectionState',
]
