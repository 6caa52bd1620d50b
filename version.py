"""
Version information for FlightMap application.

Centralized version management for the application and its packaging.
"""

# Core application information
__version__ = "1.0.0"
__version_info__ = (1, 0, 0)
__app_name__ = "FlightMap"
__app_display_name__ = "FlightMap - Flights Between Airports"
__author__ = "FlightMap Development Team"
__company__ = "FlightMap"
__description__ = "Interactive map of direct and connecting flights between two airports"

# License information
__license__ = "GPL v3"
__license_qt_compliance__ = "LGPL v3 (PySide6)"


def get_version_string() -> str:
    """Get formatted version string."""
    return f"{__app_name__} v{__version__}"

