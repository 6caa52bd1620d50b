"""
Managers Package

Configuration and route data management.
"""
