"""Split an itinerary into per-city stays.

Each itinerary item lands in exactly one city bucket. The stay length of a
city is the number of items assigned to it, which stands in for days.
"""
from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Pattern, Protocol, Sequence, Tuple
import logging
import os

from staywise.schemas import CityStay, HotelRecommendation, ItineraryItem

logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)
_level = os.getenv("STAYWISE_LOG_LEVEL", "INFO").upper()
logger.setLevel(getattr(logging, _level, logging.INFO))
logger.propagate = False

MAIN_DESTINATION = "Main Destination"

_CITY_PATTERNS: Tuple[Tuple[str, str], ...] = (
    (r"\bparis\b", "Paris"),
    (r"\b(london|londres)\b", "London"),
    (r"\b(rome|roma)\b", "Rome"),
    (r"\bbarcelona\b", "Barcelona"),
    (r"\bmadrid\b", "Madrid"),
    (r"\bamsterdam\b", "Amsterdam"),
    (r"\b(berlin|berlim)\b", "Berlin"),
    (r"\b(prague|praga)\b", "Prague"),
    (r"\b(vienna|viena)\b", "Vienna"),
    (r"\b(rio de janeiro|rio)\b", "Rio de Janeiro"),
    (r"\b(são paulo|sao paulo)\b", "São Paulo"),
    (r"\bsalvador\b", "Salvador"),
    (r"\brecife\b", "Recife"),
    (r"\bfortaleza\b", "Fortaleza"),
    (r"\b(new york|nova york)\b", "New York"),
    (r"\blos angeles\b", "Los Angeles"),
    (r"\bmiami\b", "Miami"),
    (r"\b(tokyo|tóquio)\b", "Tokyo"),
    (r"\b(kyoto|quioto)\b", "Kyoto"),
    (r"\bosaka\b", "Osaka"),
)

_ACTIVITY_KEYWORDS: Tuple[str, ...] = (
    "museu", "museum", "praia", "beach", "restaurante", "restaurant",
    "parque", "park", "igreja", "church", "shopping", "mercado", "market",
    "teatro", "theater", "galeria", "gallery", "monumento", "monument",
    "torre", "tower", "palácio", "palace", "castelo", "castle",
)

# City -> (activity keyword, neighbourhood) pairs, checked in order.
_CITY_AREAS: Dict[str, Tuple[Tuple[str, str], ...]] = {
    "Paris": (
        ("louvre", "Marais/Châtelet"),
        ("eiffel", "Champs-Élysées"),
        ("montmartre", "Montmartre"),
        ("latin", "Quartier Latin"),
    ),
    "London": (
        ("tower", "City/Tower Bridge"),
        ("buckingham", "Westminster"),
        ("covent", "Covent Garden"),
        ("british", "Bloomsbury"),
    ),
    "Rio de Janeiro": (
        ("copacabana", "Copacabana"),
        ("ipanema", "Ipanema"),
        ("corcovado", "Cosme Velho"),
        ("centro", "Centro"),
    ),
    "Rome": (
        ("colosseum", "Colosseo"),
        ("vatican", "Vaticano"),
        ("trevi", "Centro Storico"),
    ),
}
_CITY_DEFAULT_AREAS: Dict[str, str] = {
    "Paris": "Central Paris",
    "London": "Central London",
    "Rio de Janeiro": "Zona Sul",
    "Rome": "Central Rome",
}


class CityResolver(Protocol):
    """Anything that can name the city an itinerary item takes place in."""

    def resolve(self, item: ItineraryItem) -> Optional[str]:
        ...


class PatternCityResolver:
    """Match an item's text against an ordered list of city patterns."""

    def __init__(self, patterns: Sequence[Tuple[str, str]] = _CITY_PATTERNS):
        self._patterns: List[Tuple[Pattern[str], str]] = [
            (re.compile(pattern, re.IGNORECASE), city) for pattern, city in patterns
        ]

    def resolve(self, item: ItineraryItem) -> Optional[str]:
        text = " ".join(part for part in (item.title, item.location, item.description) if part)
        for pattern, city in self._patterns:
            if pattern.search(text):
                return city
        return None


def group_by_city(
    itinerary: Iterable[ItineraryItem],
    resolver: CityResolver | None = None,
) -> Dict[str, CityStay]:
    """Bucket itinerary items by city in date order.

    Cities come back in order of first appearance. ``check_out`` of a bucket is
    the date of its last item and ``duration_days`` is its item count.
    """
    resolver = resolver or PatternCityResolver()
    ordered = _sort_by_date(list(itinerary))

    cities: Dict[str, CityStay] = {}
    for item in ordered:
        city = extract_city(item, resolver)
        day = _display_date(item.date)
        stay = cities.get(city)
        if stay is None:
            stay = CityStay(city=city, check_in=day, check_out=day)
            cities[city] = stay
        stay.items.append(item)
        stay.activities.extend(extract_activities(item))
        stay.check_out = day
        stay.duration_days = len(stay.items)

    logger.info(
        "Grouped %d itinerary item(s) into %d city stay(s): %s",
        len(ordered),
        len(cities),
        ", ".join(f"{name} ({stay.duration_days})" for name, stay in cities.items()),
    )
    return cities


def extract_city(item: ItineraryItem, resolver: CityResolver) -> str:
    city = resolver.resolve(item)
    if city:
        return city
    location = (item.location or "").strip()
    if location:
        first = location.split(",")[0].strip()
        if first:
            return first
    return MAIN_DESTINATION


def extract_activities(item: ItineraryItem) -> List[str]:
    activities: List[str] = []
    if item.title:
        activities.append(item.title)
    if item.location:
        activities.append(item.location)
    if item.description:
        description = item.description.lower()
        activities.extend(keyword for keyword in _ACTIVITY_KEYWORDS if keyword in description)
    return activities


def recommended_area(city: str, activities: Iterable[str]) -> str:
    areas = _CITY_AREAS.get(city)
    if not areas:
        return f"Central {city}"
    text = " ".join(activities).lower()
    for keyword, area in areas:
        if keyword in text:
            return area
    return _CITY_DEFAULT_AREAS[city]


def average_distance(hotels: Sequence[HotelRecommendation]) -> str:
    """Bucket the mean proximity score of ``hotels`` into a distance label."""
    if not hotels:
        return "N/A"
    mean = sum(hotel.proximity_score for hotel in hotels) / len(hotels)
    if mean > 60:
        return "0.5-1 km"
    if mean > 30:
        return "1-2 km"
    if mean > 10:
        return "2-5 km"
    return "5+ km"


def itinerary_locations(items: Iterable[ItineraryItem]) -> List[str]:
    """Unique, non-blank item locations in their original order."""
    seen: Dict[str, None] = {}
    for item in items:
        location = (item.location or "").strip()
        if location:
            seen.setdefault(location, None)
    return list(seen)


def _sort_by_date(items: List[ItineraryItem]) -> List[ItineraryItem]:
    # Items without a readable date keep their relative order after dated ones.
    def key(item: ItineraryItem) -> Tuple[int, datetime]:
        parsed = _safe_parse(item.date)
        return (0, parsed) if parsed else (1, datetime.min)

    return sorted(items, key=key)


def _display_date(value: str | None) -> str:
    parsed = _safe_parse(value)
    return parsed.date().isoformat() if parsed else (value or "")


def _safe_parse(value: str | None) -> datetime | None:
    if not value:
        return None
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        try:
            parsed = datetime.strptime(text, "%Y-%m-%d")
        except ValueError:
            return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed
