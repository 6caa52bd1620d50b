"""
FlightMap application

A PySide6 desktop application that draws direct and connecting flights
between two airports on a world map.

Features:
- One schedule overlay open at a time across the whole map
- Overlays placed away from the line to the destination
- Timed first-look reveal of the origin schedule
- Route selection highlighting every leg of a connection
"""

__version__ = "1.0.0"
__author__ = "FlightMap Development Team"
__description__ = "FlightMap flight route viewer"
