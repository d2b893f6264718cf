"""Turn raw lodging candidates into annotated hotel recommendations."""
from __future__ import annotations

from enum import Enum
from typing import Callable, Iterable, List, Optional, Tuple
from urllib.parse import quote_plus

from staywise.agents import budget_classifier, proximity_scorer
from staywise.schemas import (
    AttractionDistance,
    HotelCandidate,
    HotelRecommendation,
    RecommendationCriteria,
)

MAX_AMENITIES = 6
MAX_ATTRACTIONS = 3
DEFAULT_RATING = 4.0
BOOKING_SEARCH_URL = "https://www.booking.com/search.html?ss={name}"

_BASE_AMENITIES: Tuple[str, ...] = ("Free Wi-Fi", "Air conditioning")

_TYPE_AMENITIES: Tuple[Tuple[str, str], ...] = (
    ("spa", "Spa"),
    ("gym", "Gym"),
    ("restaurant", "Restaurant"),
    ("bar", "Bar"),
    ("lodging", "Parking"),
    ("pool", "Pool"),
    ("swimming_pool", "Pool"),
    ("business_center", "Business center"),
)

_STYLE_AMENITIES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("luxury", ("Concierge", "Room service")),
    ("business", ("Business center", "Meeting room")),
    ("family", ("Pool", "Kids area")),
    ("romantic", ("Spa", "Romantic dinner")),
)

# Rough distance / walking time from a hotel to well-known areas.
_AREA_DISTANCES: Tuple[Tuple[str, str, str], ...] = (
    ("copacabana", "0.5-2 km", "5-20 min"),
    ("ipanema", "1-3 km", "10-30 min"),
    ("corcovado", "5-15 km", "Transport needed"),
    ("urca", "2-8 km", "20-40 min"),
)
_UNKNOWN_DISTANCE = ("Calculating...", "Calculating...")
_FLAT_DISTANCE = ("1.2 km", "15 min")

FALLBACK_REASON = "A solid option for your trip"


class DistancePolicy(str, Enum):
    AREA_LOOKUP = "area_lookup"
    FLAT = "flat"


def compose(
    candidate: HotelCandidate,
    criteria: RecommendationCriteria,
    *,
    photo_url: Optional[Callable[[str], str]] = None,
    distance_policy: DistancePolicy = DistancePolicy.AREA_LOOKUP,
) -> HotelRecommendation:
    """Score and annotate one candidate for the given criteria. No I/O."""
    styles = {style.lower() for style in criteria.travel_style}
    budget = budget_classifier.parse_budget(criteria.budget)
    tier = candidate.price_level or budget_classifier.DEFAULT_TIER
    rating = candidate.rating if candidate.rating is not None else DEFAULT_RATING
    reviews = candidate.user_ratings_total or 0

    proximity = proximity_scorer.score(candidate.location_text, criteria.itinerary_locations)
    budget_match = budget_classifier.budget_matches(budget, tier)

    photo_builder = photo_url or _bare_photo_url
    return HotelRecommendation(
        id=candidate.id,
        name=candidate.name,
        address=candidate.formatted_address or candidate.vicinity,
        rating=rating,
        price_level=tier,
        price_range=budget_classifier.price_range_label(tier),
        vicinity=candidate.vicinity or candidate.formatted_address,
        photos=[photo_builder(ref) for ref in candidate.photo_references],
        amenities=_amenities(candidate.types, styles),
        proximity_score=proximity,
        budget_match=budget_match,
        ai_recommendation_reason=_reason(rating, tier, proximity, budget, styles),
        distance_to_attractions=_distances(criteria.itinerary_locations, distance_policy),
        booking_url=BOOKING_SEARCH_URL.format(name=quote_plus(candidate.name)),
        reviews_count=reviews,
        highlights=_highlights(rating, reviews, styles),
    )


def _amenities(types: Iterable[str], styles: set[str]) -> List[str]:
    type_set = set(types)
    amenities: List[str] = list(_BASE_AMENITIES)
    amenities.extend(label for place_type, label in _TYPE_AMENITIES if place_type in type_set)
    for style, labels in _STYLE_AMENITIES:
        if style in styles:
            amenities.extend(labels)
    return list(dict.fromkeys(amenities))[:MAX_AMENITIES]


def _reason(rating: float, tier: int, proximity: int, budget: float | None, styles: set[str]) -> str:
    reasons: List[str] = []
    if tier <= budget_classifier.classify_budget(budget):
        reasons.append("Fits your budget")
    if proximity > 30:
        reasons.append("Near your points of interest")
    if rating >= 4.5:
        reasons.append("Excellent guest rating")
    elif rating >= 4.0:
        reasons.append("Good guest rating")
    if "luxury" in styles and tier >= 3:
        reasons.append("Matches your luxury style")
    if "cultural" in styles:
        reasons.append("Ideal for exploring local culture")
    return ", ".join(reasons) if reasons else FALLBACK_REASON


def _distances(locations: Iterable[str], policy: DistancePolicy) -> List[AttractionDistance]:
    estimates: List[AttractionDistance] = []
    for location in list(locations)[:MAX_ATTRACTIONS]:
        if policy is DistancePolicy.FLAT:
            distance, walk = _FLAT_DISTANCE
        else:
            distance, walk = _area_distance(location)
        estimates.append(AttractionDistance(attraction=location, distance=distance, walk_time=walk))
    return estimates


def _area_distance(location: str) -> Tuple[str, str]:
    key = (location or "").lower()
    for area, distance, walk in _AREA_DISTANCES:
        if area in key:
            return distance, walk
    return _UNKNOWN_DISTANCE


def _highlights(rating: float, reviews: int, styles: set[str]) -> List[str]:
    highlights: List[str] = []
    if rating >= 4.5:
        highlights.append("Highly rated")
    if reviews > 100:
        highlights.append("Many reviews")
    if "luxury" in styles:
        highlights.append("Premium experience")
    if "family" in styles:
        highlights.append("Family friendly")
    return highlights


def _bare_photo_url(reference: str) -> str:
    return f"https://maps.googleapis.com/maps/api/place/photo?maxwidth=400&photoreference={quote_plus(reference)}"
