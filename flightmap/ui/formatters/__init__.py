"""
UI Formatters

Text formatting for overlay content.
"""

from .schedule_formatter import ScheduleFormatter, NO_FLIGHTS_MESSAGE

__all__ = ['ScheduleFormatter', 'NO_FLIGHTS_MESSAGE']
