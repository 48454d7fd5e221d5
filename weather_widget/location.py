# ABOUTME: Resolves the location to show at startup from a geolocation capability.
# ABOUTME: Falls back to a fixed city whenever no position can be obtained, without surfacing an error.

import logging
from typing import Protocol

import httpx
from pydantic import ValidationError

from weather_widget.config import DEFAULT_FALLBACK_CITY
from weather_widget.errors import GeolocationUnavailable
from weather_widget.models import CityQuery, CoordsQuery, Position

logger = logging.getLogger(__name__)

IP_GEOLOCATION_URL = "https://ipapi.co/json/"


class Geolocator(Protocol):
    async def get_current_position(self) -> Position:
        """Return a one-shot position, or raise GeolocationUnavailable."""


class IpGeolocator:
    """Geolocator backed by an IP lookup service, for hosts without device positioning."""

    def __init__(self, client: httpx.AsyncClient, url: str = IP_GEOLOCATION_URL):
        self._client = client
        self._url = url

    async def get_current_position(self) -> Position:
        try:
            resp = await self._client.get(self._url)
            resp.raise_for_status()
            data = resp.json()
            return Position(latitude=float(data["latitude"]), longitude=float(data["longitude"]))
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            raise GeolocationUnavailable(f"IP geolocation failed: {e}") from e


async def resolve_default_location(
    geolocator: Geolocator | None,
    fallback_city: str = DEFAULT_FALLBACK_CITY,
) -> CityQuery | CoordsQuery:
    """Pick the startup location: the device position if available, else the fallback city.

    Permission denial and transient failures are treated the same way.
    """
    if geolocator is None:
        logger.info("Geolocation not available, using fallback city %s", fallback_city)
        return CityQuery(name=fallback_city)

    try:
        position = await geolocator.get_current_position()
    except Exception as e:
        logger.info("Geolocation error: %r; using fallback city %s", e, fallback_city)
        return CityQuery(name=fallback_city)

    try:
        return CoordsQuery(lat=position.latitude, lon=position.longitude)
    except ValidationError:
        logger.info("Geolocation returned an out-of-range position; using fallback city %s", fallback_city)
        return CityQuery(name=fallback_city)
