# staywise/orchestrator.py
from __future__ import annotations

import os
from typing import Iterable, List, Protocol, Sequence, Union
import logging

from staywise.agents.city_segmentation import (
    CityResolver,
    average_distance,
    group_by_city,
    recommended_area,
)
from staywise.agents.recommendation_composer import DistancePolicy, compose
from staywise.errors import GeocodeFailed, InvalidCriteria, NoItineraryFound, SearchFailed
from staywise.schemas import (
    CityHotelRecommendation,
    Coordinates,
    DegradedResult,
    HotelCandidate,
    HotelRecommendation,
    ItineraryItem,
    RealResult,
    RecommendationCriteria,
    RecommendationSet,
)
from staywise.tools.places import DEFAULT_RADIUS_METERS

logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)
_level = os.getenv("STAYWISE_LOG_LEVEL", "INFO").upper()
logger.setLevel(getattr(logging, _level, logging.INFO))
logger.propagate = False

FLAT_LIMIT = 6
CITY_LIMIT = 4
MAX_NEARBY_ACTIVITIES = 5


class Geocoder(Protocol):
    async def geocode(self, address: str) -> Coordinates:
        ...


class PlaceSearch(Protocol):
    async def search_nearby(
        self,
        coordinates: Coordinates,
        radius_meters: int = ...,
        type_filter: str = ...,
        keyword: str | None = ...,
    ) -> List[HotelCandidate]:
        ...

    async def search_by_text(self, query: str) -> List[HotelCandidate]:
        ...

    def photo_url(self, reference: str, max_width: int = ...) -> str:
        ...


class HotelRecommendationEngine:
    """Search, score and rank hotels for a destination or a whole itinerary.

    Upstream provider failures never escape: the search degrades from a
    nearby search to a text search and finally to placeholder hotels, and the
    result is tagged with the stage that produced it.
    """

    def __init__(
        self,
        geocoder: Geocoder,
        places: PlaceSearch,
        *,
        distance_policy: DistancePolicy = DistancePolicy.AREA_LOOKUP,
        flat_limit: int = FLAT_LIMIT,
        city_limit: int = CITY_LIMIT,
        city_resolver: CityResolver | None = None,
    ):
        self.geocoder = geocoder
        self.places = places
        self.distance_policy = distance_policy
        self.flat_limit = flat_limit
        self.city_limit = city_limit
        self.city_resolver = city_resolver

    # ---------- degrade chain ----------
    async def search_hotels(self, destination: str) -> Union[RealResult, DegradedResult]:
        """Run geocode -> nearby -> text -> mock until a stage yields hotels."""
        try:
            coords = await self.geocoder.geocode(destination)
        except GeocodeFailed as exc:
            logger.warning("Geocoding failed for %s (%s); skipping nearby search", destination, exc)
        else:
            try:
                nearby = await self.places.search_nearby(
                    coords,
                    radius_meters=DEFAULT_RADIUS_METERS,
                    type_filter="lodging",
                    keyword="hotel",
                )
            except SearchFailed as exc:
                logger.warning("Nearby search failed for %s (%s); trying text search", destination, exc)
            else:
                if nearby:
                    logger.info("Nearby search found %d hotel(s) for %s", len(nearby), destination)
                    return RealResult(source="nearby", candidates=nearby)
                logger.warning("Nearby search returned no hotels for %s; trying text search", destination)

        query = f"hotels in {destination}"
        try:
            found = await self.places.search_by_text(query)
        except SearchFailed as exc:
            logger.warning("Text search '%s' failed (%s); using placeholder hotels", query, exc)
        else:
            if found:
                logger.info("Text search '%s' found %d hotel(s)", query, len(found))
                return RealResult(source="text", candidates=found)
            logger.warning("Text search '%s' returned no hotels; using placeholder hotels", query)

        return DegradedResult(candidates=_placeholder_hotels(destination))

    # ---------- ranking ----------
    def rank(
        self,
        candidates: Iterable[HotelCandidate],
        criteria: RecommendationCriteria,
        limit: int,
    ) -> List[HotelRecommendation]:
        """Compose every candidate, order budget matches first then by proximity."""
        composed = [
            compose(
                candidate,
                criteria,
                photo_url=self.places.photo_url,
                distance_policy=self.distance_policy,
            )
            for candidate in candidates
        ]
        # sorted() is stable, so ties keep provider order
        ranked = sorted(composed, key=lambda rec: (not rec.budget_match, -rec.proximity_score))
        return ranked[:limit]

    # ---------- flat mode ----------
    async def recommend(self, criteria: RecommendationCriteria) -> RecommendationSet:
        destination = (criteria.destination or "").strip()
        if not destination:
            raise InvalidCriteria("A destination is required to search for hotels")

        logger.info(
            "Recommending hotels in %s (budget=%s, styles=%s, %d itinerary location(s))",
            destination,
            criteria.budget or "n/a",
            ", ".join(criteria.travel_style) or "none",
            len(criteria.itinerary_locations),
        )
        outcome = await self.search_hotels(destination)
        hotels = self.rank(outcome.candidates, criteria, self.flat_limit)
        logger.info(
            "Returning %d recommendation(s) for %s from %s search%s",
            len(hotels),
            destination,
            outcome.source,
            " (placeholder data)" if outcome.degraded else "",
        )
        return RecommendationSet(
            destination=destination,
            source=outcome.source,
            degraded=outcome.degraded,
            hotels=hotels,
        )

    async def get_recommendations(self, criteria: RecommendationCriteria) -> List[HotelRecommendation]:
        result = await self.recommend(criteria)
        return result.hotels

    # ---------- itinerary mode ----------
    async def generate_city_based_recommendations(
        self,
        itinerary: Sequence[ItineraryItem],
        budget: str = "",
        travel_style: Sequence[str] = (),
        preferences: str = "",
        travelers: int = 2,
    ) -> List[CityHotelRecommendation]:
        """Recommend hotels for each city the itinerary visits, one city at a time."""
        if not itinerary:
            raise NoItineraryFound("Itinerary-based recommendations need at least one itinerary item")

        cities = group_by_city(itinerary, self.city_resolver)
        results: List[CityHotelRecommendation] = []
        for city, stay in cities.items():
            logger.info("Searching hotels in %s for a %d-day stay", city, stay.duration_days)
            criteria = RecommendationCriteria(
                destination=city,
                budget=budget,
                travel_style=list(travel_style),
                preferences=preferences,
                itinerary_locations=stay.activities,
                check_in=stay.check_in,
                check_out=stay.check_out,
                travelers=travelers,
            )
            outcome = await self.search_hotels(city)
            hotels = self.rank(outcome.candidates, criteria, self.city_limit)
            if not hotels:
                logger.warning("No hotels found for %s; leaving it out of the results", city)
                continue

            results.append(
                CityHotelRecommendation(
                    city=city,
                    stay_duration=max(1, stay.duration_days),
                    check_in=stay.check_in,
                    check_out=stay.check_out,
                    nearby_activities=_unique(stay.activities)[:MAX_NEARBY_ACTIVITIES],
                    hotels=hotels,
                    average_distance=average_distance(hotels),
                    recommended_area=recommended_area(city, stay.activities),
                    source=outcome.source,
                )
            )

        logger.info(
            "Built hotel recommendations for %d of %d cit%s",
            len(results),
            len(cities),
            "y" if len(cities) == 1 else "ies",
        )
        return results


# ---------- helpers ----------
def _placeholder_hotels(destination: str) -> List[HotelCandidate]:
    """Three stand-in hotels so the caller always has something to show."""
    logger.warning("Generating placeholder hotels for %s", destination)
    blueprints = (
        ("Hotel Premium", "Centro", 4.5, 234, 3),
        ("Pousada Aconchego", "Zona Sul", 4.2, 156, 2),
        ("Resort Luxo", "Beira Mar", 4.8, 445, 4),
    )
    return [
        HotelCandidate(
            id=f"mock_hotel_{index}",
            name=f"{label} {destination}",
            formatted_address=f"{area}, {destination}",
            vicinity=f"{area}, {destination}",
            rating=rating,
            user_ratings_total=reviews,
            price_level=tier,
            types=["lodging", "establishment"],
            photo_references=[f"mock_photo_{index}"],
        )
        for index, (label, area, rating, reviews, tier) in enumerate(blueprints, 1)
    ]


def _unique(values: Iterable[str]) -> List[str]:
    seen = set()
    out: List[str] = []
    for value in values:
        trimmed = value.strip()
        if not trimmed or trimmed.lower() in seen:
            continue
        seen.add(trimmed.lower())
        out.append(trimmed)
    return out
