"""Keyword proximity between a hotel's location text and itinerary stops.

This is a textual heuristic: no coordinates are compared here.
"""
from __future__ import annotations

from typing import Dict, Iterable, Tuple

MAX_SCORE = 100
DIRECT_MATCH_POINTS = 20
NEIGHBOUR_POINTS = 15

# Area named in an itinerary stop -> neighbourhoods considered close to it.
NEIGHBOURHOODS: Dict[str, Tuple[str, ...]] = {
    "copacabana": ("copacabana", "leme", "ipanema"),
    "ipanema": ("ipanema", "copacabana", "leblon"),
    "leblon": ("leblon", "ipanema", "gávea"),
    "urca": ("urca", "botafogo", "flamengo"),
    "corcovado": ("cosme velho", "laranjeiras", "tijuca"),
    "centro": ("centro", "lapa", "cinelândia"),
    "barra": ("barra", "recreio", "jacarepaguá"),
}


def score(candidate_location: str, itinerary_locations: Iterable[str]) -> int:
    """Return a 0-100 closeness score for ``candidate_location``."""
    hotel_text = (candidate_location or "").strip().lower()
    if not hotel_text:
        return 0

    total = 0
    for location in itinerary_locations:
        stop = (location or "").strip().lower()
        if not stop:
            continue
        if stop in hotel_text or hotel_text in stop:
            total += DIRECT_MATCH_POINTS
        for area, neighbours in NEIGHBOURHOODS.items():
            if area not in stop:
                continue
            total += NEIGHBOUR_POINTS * sum(1 for keyword in neighbours if keyword in hotel_text)
    return min(total, MAX_SCORE)
