"""
UI Widgets Package

Qt widgets and scene items for the flight map.
"""

from .graphics_map_engine import GraphicsMapEngine, MarkerItem, OverlayItem, PathItem

__all__ = ['GraphicsMapEngine', 'MarkerItem', 'OverlayItem', 'PathItem']
