"""
Core Interfaces Package

Abstract interfaces for the collaborators the map layer drives.
"""

from .i_map_engine import IMapEngine, OverlayContent

__all__ = [
    'IMapEngine',
    'OverlayContent',
]
