"""Display-side filtering and re-ordering of recommendation lists."""
from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Literal, Optional

from staywise.schemas import HotelRecommendation

SortKey = Literal["score", "price", "rating", "proximity"]

_SORTERS: Dict[str, Callable[[HotelRecommendation], float]] = {
    # combined score weights a full star like 20 proximity points
    "score": lambda h: -(h.rating * 20 + h.proximity_score),
    "price": lambda h: h.price_level,
    "rating": lambda h: -h.rating,
    "proximity": lambda h: -h.proximity_score,
}


def filter_recommendations(
    hotels: Iterable[HotelRecommendation],
    *,
    price_level: Optional[int] = None,
    min_rating: Optional[float] = None,
    min_proximity: Optional[int] = None,
) -> List[HotelRecommendation]:
    kept: List[HotelRecommendation] = []
    for hotel in hotels:
        if price_level is not None and hotel.price_level != price_level:
            continue
        if min_rating is not None and hotel.rating < min_rating:
            continue
        if min_proximity is not None and hotel.proximity_score < min_proximity:
            continue
        kept.append(hotel)
    return kept


def sort_recommendations(hotels: Iterable[HotelRecommendation], by: SortKey = "score") -> List[HotelRecommendation]:
    """Stable sort by one of the display orders; unknown keys fall back to ``score``."""
    return sorted(hotels, key=_SORTERS.get(by, _SORTERS["score"]))
