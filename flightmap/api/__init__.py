"""
API Package

Client for the route data provider.
"""

from .route_api_manager import RouteAPIManager, APIException, NetworkException

__all__ = ['RouteAPIManager', 'APIException', 'NetworkException']
