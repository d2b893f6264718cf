from typing import Any, Dict, Iterable, List, Optional
from urllib.parse import urlencode
import os

import httpx
from pydantic import ValidationError

from staywise.errors import SearchFailed
from staywise.schemas import Coordinates, HotelCandidate

import logging

logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)
_level = os.getenv("STAYWISE_LOG_LEVEL", "INFO").upper()
logger.setLevel(getattr(logging, _level, logging.INFO))
logger.propagate = False

DEFAULT_RADIUS_METERS = 50_000


class PlacesClient:
    """
    Lodging search over the Google Places web service. Results come back in
    provider order; this client never re-sorts them.
    """
    BASE_URL = "https://maps.googleapis.com/maps/api/place"

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

    async def search_nearby(
        self,
        coordinates: Coordinates,
        radius_meters: int = DEFAULT_RADIUS_METERS,
        type_filter: str = "lodging",
        keyword: Optional[str] = None,
    ) -> List[HotelCandidate]:
        params: Dict[str, Any] = {
            "location": f"{coordinates.lat},{coordinates.lng}",
            "radius": radius_meters,
            "type": type_filter,
        }
        if keyword:
            params["keyword"] = keyword
        return await self._query("nearbysearch", params)

    async def search_by_text(self, query: str) -> List[HotelCandidate]:
        if not (query or "").strip():
            raise SearchFailed("Text search needs a non-empty query")
        return await self._query("textsearch", {"query": query})

    def photo_url(self, reference: str, max_width: int = 400) -> str:
        params = {"maxwidth": max_width, "photoreference": reference}
        if self.api_key:
            params["key"] = self.api_key
        return f"{self.BASE_URL}/photo?{urlencode(params)}"

    async def _query(self, endpoint: str, params: Dict[str, Any]) -> List[HotelCandidate]:
        if not self.api_key:
            raise SearchFailed("GOOGLE_MAPS_API_KEY environment variable not configured")

        payload = {**params, "key": self.api_key, "language": self.language}
        url = f"{self.BASE_URL}/{endpoint}/json"
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(url, params=payload)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as exc:
            raise SearchFailed(f"Places {endpoint} request failed: {exc}") from exc
        except ValueError as exc:
            raise SearchFailed(f"Places {endpoint} returned a body that is not JSON") from exc
        if not isinstance(data, dict):
            raise SearchFailed(f"Places {endpoint} returned an unexpected payload")

        status = data.get("status")
        if status == "ZERO_RESULTS":
            logger.info("Places %s returned no results", endpoint)
            return []
        if status != "OK":
            detail = data.get("error_message") or ""
            raise SearchFailed(f"Places {endpoint} returned status {status} {detail}".strip())

        results = data.get("results") or []
        if not isinstance(results, list):
            raise SearchFailed(f"Places {endpoint} returned an unexpected result list")
        candidates = self._parse_results(results)
        logger.info("Places %s produced %d candidate(s)", endpoint, len(candidates))
        return candidates

    @staticmethod
    def _parse_results(results: Iterable[Dict[str, Any]]) -> List[HotelCandidate]:
        parsed: List[HotelCandidate] = []
        for record in results:
            if not isinstance(record, dict):
                continue
            try:
                parsed.append(HotelCandidate.from_place(record))
            except ValidationError:
                logger.warning("Skipping malformed place record %s", record.get("place_id"), exc_info=True)
        return parsed
