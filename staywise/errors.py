"""Failures raised by the recommendation pipeline.

Upstream failures (``GeocodeFailed``, ``SearchFailed``) are transient and are
always absorbed by the engine's degrade chain. ``NoItineraryFound`` and
``InvalidCriteria`` are caller precondition violations and reach the API layer.
"""


class StaywiseError(Exception):
    """Base class for recommendation errors."""


class GeocodeFailed(StaywiseError):
    """The geocoding provider could not resolve a place name."""


class SearchFailed(StaywiseError):
    """The place search provider reported an error or was unreachable."""


class NoItineraryFound(StaywiseError):
    """Itinerary-based recommendations were requested without any itinerary items."""


class InvalidCriteria(StaywiseError):
    """Criteria cannot be searched at all (e.g. a blank destination)."""
