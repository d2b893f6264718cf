import pytest
from pydantic import TypeAdapter, ValidationError

from staywise.schemas import (
    DegradedResult,
    HotelCandidate,
    ItineraryHotelRequest,
    RealResult,
    RecommendationCriteria,
    SearchOutcome,
)


def test_criteria_accept_camel_and_snake_case():
    camel = RecommendationCriteria.model_validate(
        {"destination": "Rio de Janeiro", "travelStyle": ["luxury"], "itineraryLocations": ["Copacabana"]}
    )
    snake = RecommendationCriteria.model_validate(
        {"destination": "Rio de Janeiro", "travel_style": ["luxury"], "itinerary_locations": ["Copacabana"]}
    )

    assert camel == snake
    assert camel.travelers == 2
    assert camel.budget == ""


def test_criteria_require_destination():
    with pytest.raises(ValidationError):
        RecommendationCriteria.model_validate({"budget": "1500"})


def test_itinerary_request_defaults_to_empty_list():
    request = ItineraryHotelRequest.model_validate({"budget": "900"})

    assert request.itinerary == []
    assert request.travel_style == []


def test_candidate_from_place_record():
    candidate = HotelCandidate.from_place(
        {
            "place_id": "ChIJ123",
            "name": "Hotel Lutetia",
            "formatted_address": "45 Bd Raspail, 75006 Paris",
            "geometry": {"location": {"lat": 48.851, "lng": 2.327}, "viewport": {}},
            "photos": [{"photo_reference": "p1"}, {"height": 10}, {"photo_reference": "p2"}],
            "business_status": "OPERATIONAL",
        }
    )

    assert candidate.id == "ChIJ123"
    assert candidate.location.lat == pytest.approx(48.851)
    assert candidate.photo_references == ["p1", "p2"]
    assert candidate.location_text == "45 Bd Raspail, 75006 Paris"
    assert candidate.rating is None


def test_search_outcome_discriminates_on_kind():
    adapter = TypeAdapter(SearchOutcome)

    real = adapter.validate_python({"kind": "real", "source": "text", "candidates": []})
    degraded = adapter.validate_python({"kind": "degraded", "candidates": []})

    assert isinstance(real, RealResult) and real.degraded is False
    assert isinstance(degraded, DegradedResult) and degraded.source == "mock"
    assert degraded.degraded is True
    with pytest.raises(ValidationError):
        adapter.validate_python({"kind": "real", "source": "mock"})
