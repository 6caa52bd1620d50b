"""
Route API manager for fetching flight route data.

This module handles all communication with the route data provider,
including retries, error handling, and response parsing.
"""

import asyncio
import aiohttp
import logging
from typing import Optional
from ..core.models.route import RouteData
from ..managers.config_manager import APIConfig

logger = logging.getLogger(__name__)


class APIException(Exception):
    """Base exception for API-related errors."""

    pass


class NetworkException(APIException):
    """Exception for network-related errors."""

    pass


class RouteAPIManager:
    """
    Handles route data provider communications with retries and error handling.

    Use as an async context manager so the HTTP session is always closed.
    """

    def __init__(self, config: APIConfig):
        """
        Initialize API manager.

        Args:
            config: Provider connection settings
        """
        self.config = config
        self.session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self):
        """Async context manager entry."""
        timeout = aiohttp.ClientTimeout(total=self.config.timeout_seconds)
        self.session = aiohttp.ClientSession(
            timeout=timeout, headers={"User-Agent": "FlightMap/1.0"}
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        if self.session:
            await self.session.close()
            self.session = None

    async def get_routes(self, origin: str, destination: str) -> RouteData:
        """
        Fetch direct flights and connections between two airports.

        Args:
            origin: Departure airport code
            destination: Arrival airport code

        Returns:
            RouteData: Parsed search result

        Raises:
            APIException: For provider errors or malformed responses
            NetworkException: For network-related errors
        """
        url = f"{self.config.base_url}/routes"
        params = {"from": origin, "to": destination}

        for attempt in range(self.config.max_retries):
            try:
                if not self.session:
                    raise NetworkException("Session not initialized")

                logger.info(
                    f"Fetching routes {origin} -> {destination} "
                    f"(attempt {attempt + 1}/{self.config.max_retries})"
                )

                async with self.session.get(url, params=params) as response:
                    if response.status == 200:
                        data = await response.json()
                        route_data = self._parse_routes_response(data)
                        logger.info(
                            f"Fetched {len(route_data.direct_routes)} direct and "
                            f"{len(route_data.multi_leg_routes)} connecting flights"
                        )
                        return route_data
                    else:
                        error_text = await response.text()
                        raise APIException(f"API error {response.status}: {error_text}")

            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                if attempt == self.config.max_retries - 1:
                    raise NetworkException(f"Network error: {str(e)}")

                wait_time = 2**attempt  # Exponential backoff
                logger.warning(
                    f"Network error on attempt {attempt + 1}, retrying in {wait_time}s: {e}"
                )
                await asyncio.sleep(wait_time)

        return RouteData.empty()

    def _parse_routes_response(self, data) -> RouteData:
        """Parse the provider payload into RouteData."""
        if not isinstance(data, dict):
            raise APIException("Unexpected response format")
        try:
            return RouteData.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise APIException(f"Malformed route data: {e}")
