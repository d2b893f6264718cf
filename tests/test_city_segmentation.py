from typing import Optional

from staywise.agents.city_segmentation import (
    MAIN_DESTINATION,
    PatternCityResolver,
    average_distance,
    extract_activities,
    group_by_city,
    itinerary_locations,
    recommended_area,
)
from staywise.schemas import HotelRecommendation, ItineraryItem


def _item(date: str, title: str, location: str = "", description: str = "") -> ItineraryItem:
    return ItineraryItem(date=date, title=title, location=location, description=description)


def _two_city_itinerary():
    return [
        _item("2025-05-03", "Colosseum tour", "Piazza del Colosseo, Roma"),
        _item("2025-05-01", "Eiffel Tower at sunset", "Champ de Mars, Paris"),
        _item("2025-05-02", "Louvre highlights", "Rue de Rivoli, Paris", "Museum morning then a cafe"),
        _item("2025-05-04", "Vatican Museums", "Vatican City, Rome"),
        _item("2025-05-05", "Trevi Fountain", "Rome", "Evening walk past the market"),
    ]


def test_group_by_city_partitions_every_item():
    itinerary = _two_city_itinerary()
    cities = group_by_city(itinerary)

    assert list(cities) == ["Paris", "Rome"]
    assert sum(len(stay.items) for stay in cities.values()) == len(itinerary)
    grouped_titles = [item.title for stay in cities.values() for item in stay.items]
    assert sorted(grouped_titles) == sorted(item.title for item in itinerary)


def test_stay_windows_follow_item_dates():
    cities = group_by_city(_two_city_itinerary())

    paris, rome = cities["Paris"], cities["Rome"]
    assert (paris.check_in, paris.check_out, paris.duration_days) == ("2025-05-01", "2025-05-02", 2)
    assert (rome.check_in, rome.check_out, rome.duration_days) == ("2025-05-03", "2025-05-05", 3)


def test_unknown_city_falls_back_to_location_then_sentinel():
    cities = group_by_city(
        [
            _item("2025-01-01", "Harbour walk", "Valletta, Malta"),
            _item("2025-01-02", "Rest day"),
        ]
    )

    assert set(cities) == {"Valletta", MAIN_DESTINATION}


def test_sort_is_stable_and_undated_items_go_last():
    cities = group_by_city(
        [
            _item("", "Free afternoon", "Paris"),
            _item("2025-05-02T10:00:00Z", "Orsay", "Paris"),
            _item("2025-05-01", "Arrival", "Paris"),
            _item("2025-05-02T10:00:00+00:00", "Seine cruise", "Paris"),
        ]
    )

    titles = [item.title for item in cities["Paris"].items]
    assert titles == ["Arrival", "Orsay", "Seine cruise", "Free afternoon"]


def test_pattern_resolver_does_not_match_inside_words():
    resolver = PatternCityResolver()

    assert resolver.resolve(_item("2025-01-01", "Dinner at Mario's", "Trattoria")) is None
    assert resolver.resolve(_item("2025-01-01", "Christ the Redeemer", "Rio de Janeiro")) == "Rio de Janeiro"


def test_custom_resolver_can_replace_patterns():
    class ReverseGeocodeStub:
        def resolve(self, item: ItineraryItem) -> Optional[str]:
            return "Lisbon" if "Belém" in (item.location or "") else None

    cities = group_by_city(
        [_item("2025-03-01", "Pastéis", "Belém"), _item("2025-03-02", "Sintra day trip", "Sintra")],
        resolver=ReverseGeocodeStub(),
    )

    assert list(cities) == ["Lisbon", "Sintra"]


def test_extract_activities_collects_keywords_from_description():
    item = _item("2025-05-02", "Copacabana", "Avenida Atlântica", "Beach morning, then the park and a market")

    assert extract_activities(item) == ["Copacabana", "Avenida Atlântica", "beach", "park", "market"]


def test_itinerary_item_accepts_store_field_names():
    item = ItineraryItem.model_validate(
        {"date": "2025-05-01", "activity": "Sagrada Família", "notes": "Gaudí church", "city": "Barcelona"}
    )

    assert item.title == "Sagrada Família"
    assert item.description == "Gaudí church"


def test_recommended_area_uses_city_table():
    assert recommended_area("Paris", ["Eiffel Tower at sunset"]) == "Champs-Élysées"
    assert recommended_area("Paris", ["Picnic"]) == "Central Paris"
    assert recommended_area("Salvador", ["Pelourinho"]) == "Central Salvador"


def _rec(score: int) -> HotelRecommendation:
    return HotelRecommendation(
        id=f"h{score}",
        name="Hotel",
        address="",
        rating=4.0,
        price_level=2,
        price_range="R$ 150-300",
        vicinity="",
        proximity_score=score,
        budget_match=True,
        ai_recommendation_reason="",
        booking_url="",
    )


def test_average_distance_buckets():
    assert average_distance([]) == "N/A"
    assert average_distance([_rec(80), _rec(60)]) == "0.5-1 km"
    assert average_distance([_rec(40)]) == "1-2 km"
    assert average_distance([_rec(20), _rec(0)]) == "5+ km"
    assert average_distance([_rec(15)]) == "2-5 km"


def test_itinerary_locations_are_unique_and_ordered():
    items = [
        _item("2025-01-01", "A", "Copacabana"),
        _item("2025-01-02", "B", ""),
        _item("2025-01-03", "C", "Ipanema"),
        _item("2025-01-04", "D", "Copacabana"),
    ]

    assert itinerary_locations(items) == ["Copacabana", "Ipanema"]


def test_paris_pattern_needs_the_whole_name():
    resolver = PatternCityResolver()

    assert resolver.resolve(_item("2025-01-01", "Arrival", "Gare du Nord, Paris")) == "Paris"
    assert resolver.resolve(_item("2025-01-01", "Pari-mutuel races", "Hippodrome")) is None
