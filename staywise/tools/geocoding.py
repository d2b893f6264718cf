from typing import Optional
import os

import httpx

from staywise.errors import GeocodeFailed
from staywise.schemas import Coordinates

import logging

logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)
_level = os.getenv("STAYWISE_LOG_LEVEL", "INFO").upper()
logger.setLevel(getattr(logging, _level, logging.INFO))
logger.propagate = False


class GeocodingClient:
    """Resolve free-text place names to coordinates with the Google Geocoding API."""

    GEOCODE_ENDPOINT = "https://maps.googleapis.com/maps/api/geocode/json"

    def __init__(
        self,
        *,
        api_key: Optional[str] = None,
        language: str = "en",
        timeout: float = 10.0,
    ):
        self.api_key = api_key or os.getenv("GOOGLE_MAPS_API_KEY")
        self.language = language
        self.timeout = timeout

    async def geocode(self, address: str) -> Coordinates:
        """Return the first match for ``address``.

        Raises ``GeocodeFailed`` on a blank address, a missing API key, a
        transport error, a non-``OK`` provider status or an empty result list.
        """
        address = (address or "").strip()
        if not address:
            raise GeocodeFailed("Cannot geocode an empty address")
        if not self.api_key:
            raise GeocodeFailed("GOOGLE_MAPS_API_KEY environment variable not configured")

        params = {"address": address, "key": self.api_key, "language": self.language}
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(self.GEOCODE_ENDPOINT, params=params)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as exc:
            raise GeocodeFailed(f"Geocoding request for '{address}' failed: {exc}") from exc
        except ValueError as exc:
            raise GeocodeFailed(f"Geocoding '{address}' returned a body that is not JSON") from exc
        if not isinstance(data, dict):
            raise GeocodeFailed(f"Geocoding '{address}' returned an unexpected payload")

        status = data.get("status")
        results = data.get("results") or []
        if not isinstance(results, list):
            raise GeocodeFailed(f"Geocoding '{address}' returned an unexpected result list")
        if status != "OK" or not results:
            raise GeocodeFailed(f"Geocoding '{address}' returned status {status} with {len(results)} result(s)")

        first = results[0] if isinstance(results[0], dict) else {}
        geometry = first.get("geometry") if isinstance(first.get("geometry"), dict) else {}
        location = geometry.get("location") or {}
        try:
            coords = Coordinates.model_validate(location)
        except ValueError as exc:
            raise GeocodeFailed(f"Geocoding '{address}' returned no usable location") from exc
        logger.info("Geocoded '%s' to %.5f,%.5f", address, coords.lat, coords.lng)
        return coords
