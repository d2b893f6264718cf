from __future__ import annotations

import os
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from fastapi import Body, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from staywise.agents.city_segmentation import itinerary_locations
from staywise.agents.recommendation_composer import DistancePolicy
from staywise.agents.refinement import SortKey, filter_recommendations, sort_recommendations
from staywise.errors import InvalidCriteria, NoItineraryFound
from staywise.orchestrator import HotelRecommendationEngine
from staywise.schemas import ItineraryHotelRequest, ItineraryItem, RecommendationCriteria
from staywise.tools.geocoding import GeocodingClient
from staywise.tools.places import PlacesClient

# Load .env file if present
load_dotenv()

app = FastAPI(title="Staywise Hotel Recommendation API")

raw_origins = os.getenv("STAYWISE_ALLOWED_ORIGINS") or "*"
allowed_origins = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]
if not allowed_origins:
    allowed_origins = ["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_engine: HotelRecommendationEngine | None = None


def build_engine() -> HotelRecommendationEngine:
    """Wire provider clients from the environment into a fresh engine."""
    api_key = os.getenv("GOOGLE_MAPS_API_KEY")
    language = os.getenv("STAYWISE_LANGUAGE") or "en"
    timeout = float(os.getenv("STAYWISE_HTTP_TIMEOUT") or 10.0)
    try:
        policy = DistancePolicy(os.getenv("STAYWISE_DISTANCE_POLICY") or DistancePolicy.AREA_LOOKUP.value)
    except ValueError:
        policy = DistancePolicy.AREA_LOOKUP
    return HotelRecommendationEngine(
        GeocodingClient(api_key=api_key, language=language, timeout=timeout),
        PlacesClient(api_key=api_key, language=language, timeout=timeout),
        distance_policy=policy,
    )


def get_engine() -> HotelRecommendationEngine:
    global _engine
    if _engine is None:
        _engine = build_engine()
    return _engine


class RecommendationRequest(RecommendationCriteria):
    """Flat-mode criteria; itinerary items may stand in for explicit locations."""

    itinerary: List[ItineraryItem] = []


@app.post("/api/hotels/recommendations")
async def api_hotel_recommendations(
    payload: Dict[str, Any] = Body(...),
    sort_by: Optional[SortKey] = Query(None),
    price_level: Optional[int] = Query(None, ge=1, le=4),
    min_rating: Optional[float] = Query(None, ge=0, le=5),
    min_proximity: Optional[int] = Query(None, ge=0, le=100),
) -> Dict[str, Any]:
    """Ranked hotels for a single destination."""
    try:
        request = RecommendationRequest.model_validate(payload)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.errors(include_url=False)) from exc

    criteria_data = request.model_dump(exclude={"itinerary"})
    if not request.itinerary_locations and request.itinerary:
        criteria_data["itinerary_locations"] = itinerary_locations(request.itinerary)
    criteria = RecommendationCriteria(**criteria_data)

    try:
        result = await get_engine().recommend(criteria)
    except InvalidCriteria as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    hotels = filter_recommendations(
        result.hotels,
        price_level=price_level,
        min_rating=min_rating,
        min_proximity=min_proximity,
    )
    if sort_by:
        hotels = sort_recommendations(hotels, sort_by)
    return result.model_copy(update={"hotels": hotels}).model_dump(mode="json", by_alias=True)


@app.post("/api/hotels/itinerary")
async def api_itinerary_hotels(payload: Dict[str, Any] = Body(...)) -> List[Dict[str, Any]]:
    """Per-city hotel recommendations for a multi-city itinerary."""
    try:
        request = ItineraryHotelRequest.model_validate(payload)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.errors(include_url=False)) from exc

    try:
        cities = await get_engine().generate_city_based_recommendations(
            request.itinerary,
            budget=request.budget,
            travel_style=request.travel_style,
            preferences=request.preferences,
            travelers=request.travelers,
        )
    except NoItineraryFound as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return [city.model_dump(mode="json", by_alias=True) for city in cities]
