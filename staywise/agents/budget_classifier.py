"""Budget tiers and price labels for lodging candidates."""
from __future__ import annotations

import re
from typing import Any, Dict

DEFAULT_TIER = 2

# Upper bounds (exclusive) of the traveller's stated budget for tiers 1-3.
_TIER_THRESHOLDS = ((800, 1), (2000, 2), (4000, 3))

# Representative cost of a stay at each provider price tier, in budget units.
_TIER_COST: Dict[int, float] = {1: 150, 2: 300, 3: 500, 4: 1000}

_PRICE_RANGES: Dict[int, str] = {
    1: "R$ 80-150",
    2: "R$ 150-300",
    3: "R$ 300-500",
    4: "R$ 500+",
}
PRICE_RANGE_LABELS = frozenset(_PRICE_RANGES.values())


def parse_budget(value: Any) -> float | None:
    """Return the numeric budget or ``None`` when it cannot be read.

    Accepts numbers and strings such as ``"1500"``, ``"R$ 1.500"`` or
    ``"2,000.50"``; anything else yields ``None`` rather than raising.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    text = re.sub(r"[^\d.,-]", "", str(value))
    if not text:
        return None
    if "," in text and "." in text:
        # whichever separator comes last is the decimal one
        if text.rfind(",") > text.rfind("."):
            text = text.replace(".", "").replace(",", ".")
        else:
            text = text.replace(",", "")
    elif "," in text:
        head, _, tail = text.rpartition(",")
        text = f"{head.replace(',', '')}.{tail}" if len(tail) != 3 else text.replace(",", "")
    elif text.count(".") > 1 or re.fullmatch(r"\d{1,3}\.\d{3}", text):
        text = text.replace(".", "")
    try:
        return float(text)
    except ValueError:
        return None


def classify_budget(numeric_budget: float | None) -> int:
    if numeric_budget is None:
        return DEFAULT_TIER
    for upper, tier in _TIER_THRESHOLDS:
        if numeric_budget < upper:
            return tier
    return 4


def estimated_cost(tier: int | None) -> float:
    return _TIER_COST.get(tier or DEFAULT_TIER, _TIER_COST[DEFAULT_TIER])


def budget_matches(numeric_budget: float | None, candidate_tier: int | None) -> bool:
    budget = numeric_budget if numeric_budget is not None else _TIER_COST[DEFAULT_TIER]
    return budget >= estimated_cost(candidate_tier)


def price_range_label(tier: int | None) -> str:
    return _PRICE_RANGES.get(tier or DEFAULT_TIER, _PRICE_RANGES[DEFAULT_TIER])
