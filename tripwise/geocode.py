"""
Geocoding utilities for TripWise.

This module provides a thin wrapper around the `geopy` library to
convert a location name into geographic coordinates. It uses
OpenStreetMap's Nominatim service via geopy's API. A small cache is
maintained in memory to avoid repeated queries for the same name.

Example usage:

    from tripwise.geocode import geocode_address
    lat, lon = geocode_address("Liberty Bell, Philadelphia")

The geocode function returns ``None`` if the name cannot be geocoded.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from geopy.exc import GeocoderServiceError, GeocoderTimedOut
from geopy.geocoders import Nominatim

from tripwise import config
from tripwise.models import Coordinate

LOGGER = logging.getLogger(__name__)

_geocoder: Optional[Nominatim] = None


def _get_geocoder() -> Nominatim:
    """Return a singleton Nominatim geocoder instance."""
    global _geocoder
    if _geocoder is None:
        # Nominatim's usage policy requires a custom user agent.
        _geocoder = Nominatim(user_agent=config.GEOCODER_USER_AGENT)
    return _geocoder


@lru_cache(maxsize=128)
def geocode_address(address: str) -> Optional[Coordinate]:
    """Geocode a location name and return (latitude, longitude) or ``None``.

    If a timeout occurs, the request is retried once with a longer
    timeout.
    """
    geocoder = _get_geocoder()
    try:
        location = geocoder.geocode(address, timeout=10)
    except GeocoderTimedOut:
        LOGGER.info("Geocoding %r timed out, retrying", address)
        try:
            location = geocoder.geocode(address, timeout=20)
        except GeocoderServiceError as exc:
            LOGGER.warning("Geocoding %r failed: %s", address, exc)
            return None
    except GeocoderServiceError as exc:
        LOGGER.warning("Geocoding %r failed: %s", address, exc)
        return None
    if location is None:
        LOGGER.warning("No geocoding result for %r", address)
        return None
    return location.latitude, location.longitude
