"""Regression tests for the keyword proximity heuristic."""

from staywise.agents.proximity_scorer import score


def test_direct_match_awards_points():
    result = score("Copacabana, Rio de Janeiro", ["Copacabana", "Ipanema"])

    # direct match on Copacabana, plus neighbour keywords for both stops
    assert result >= 20
    assert result <= 100


def test_itinerary_stop_containing_hotel_text_counts_as_match():
    assert score("Leme", ["Leme beach walk"]) == 20


def test_neighbourhood_table_rewards_adjacent_areas():
    # "leblon" stop lists ipanema as a neighbour; no direct match
    assert score("Rua Visconde de Pirajá, Ipanema", ["Leblon"]) == 15


def test_score_is_clamped_no_matter_how_many_stops():
    stops = ["Copacabana", "Ipanema", "Leblon"] * 20
    assert score("Copacabana Ipanema Leme Leblon", stops) == 100


def test_score_grows_with_matches_until_cap():
    hotel = "Avenida Atlântica, Copacabana"
    scores = [score(hotel, ["Copacabana"] * n) for n in range(0, 8)]
    assert scores == sorted(scores)
    assert scores[0] == 0
    assert max(scores) == 100


def test_blank_inputs_score_zero():
    assert score("", ["Copacabana"]) == 0
    assert score("Copacabana", ["", "   "]) == 0
    assert score("Copacabana", []) == 0


def test_unrelated_locations_score_zero():
    assert score("Shinjuku, Tokyo", ["Eiffel Tower", "Louvre"]) == 0
