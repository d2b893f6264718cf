import pytest

from staywise.agents.budget_classifier import (
    PRICE_RANGE_LABELS,
    budget_matches,
    classify_budget,
    parse_budget,
    price_range_label,
)


@pytest.mark.parametrize(
    "budget, tier",
    [(0, 1), (799.99, 1), (800, 2), (1999, 2), (2000, 3), (3999, 3), (4000, 4), (250_000, 4)],
)
def test_classify_budget_thresholds(budget, tier):
    assert classify_budget(budget) == tier


def test_classify_budget_is_monotonic_and_bounded():
    tiers = [classify_budget(float(b)) for b in range(-500, 10_000, 50)]
    assert tiers == sorted(tiers)
    assert set(tiers) <= {1, 2, 3, 4}


def test_missing_budget_behaves_like_tier_two():
    assert classify_budget(None) == 2
    assert budget_matches(None, 1) is True
    assert budget_matches(None, 2) is True
    assert budget_matches(None, 3) is False


def test_budget_matches_compares_against_tier_cost():
    assert budget_matches(2000, 2) is True
    assert budget_matches(100, 4) is False
    assert budget_matches(500, 3) is True
    assert budget_matches(499, 3) is False


def test_unknown_tier_is_costed_like_tier_two():
    assert budget_matches(300, None) is True
    assert budget_matches(299, 7) is False


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1500", 1500.0),
        (" 2000 ", 2000.0),
        ("R$ 1.500", 1500.0),
        ("2,000.50", 2000.5),
        ("1.500,75", 1500.75),
        ("12,5", 12.5),
        (3200, 3200.0),
        ("", None),
        ("flexible", None),
        (None, None),
    ],
)
def test_parse_budget_is_permissive(raw, expected):
    assert parse_budget(raw) == expected


def test_price_range_labels_default_to_tier_two():
    assert price_range_label(1) == "R$ 80-150"
    assert price_range_label(4) == "R$ 500+"
    assert price_range_label(None) == "R$ 150-300"
    assert price_range_label(9) == "R$ 150-300"
    assert PRICE_RANGE_LABELS == {"R$ 80-150", "R$ 150-300", "R$ 300-500", "R$ 500+"}
