"""
UI Package

Qt user interface: main window, map surface, markers and scene widgets.
"""
