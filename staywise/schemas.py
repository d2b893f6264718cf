from typing import Annotated, List, Literal, Optional, Union

from pydantic import AliasChoices, AliasPath, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Output models speak camelCase to the UI; Python code uses snake_case names.
_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class Coordinates(BaseModel):
    lat: float
    lng: float


# ------- Request models -------
class RecommendationCriteria(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True, extra="ignore")

    destination: str
    budget: str = ""  # numeric string, parsed permissively
    travel_style: List[str] = Field(default_factory=list)
    preferences: str = ""
    itinerary_locations: List[str] = Field(default_factory=list)
    check_in: str = ""
    check_out: str = ""
    travelers: int = 2


class ItineraryItem(BaseModel):
    # The itinerary store names these activity/notes; the UI uses title/description.
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    date: str = ""
    title: Optional[str] = Field("", validation_alias=AliasChoices("title", "activity"))
    location: Optional[str] = ""
    description: Optional[str] = Field("", validation_alias=AliasChoices("description", "notes"))


class ItineraryHotelRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    itinerary: List[ItineraryItem] = Field(default_factory=list)
    budget: str = ""
    travel_style: List[str] = Field(default_factory=list)
    preferences: str = ""
    travelers: int = 2


# ------- Provider records -------
class HotelCandidate(BaseModel):
    """A lodging result as returned by the place search provider."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    id: str = Field(..., validation_alias=AliasChoices("place_id", "id"))
    name: str
    formatted_address: str = ""
    location: Optional[Coordinates] = Field(
        None, validation_alias=AliasChoices(AliasPath("geometry", "location"), "location")
    )
    rating: Optional[float] = None
    user_ratings_total: Optional[int] = 0
    price_level: Optional[int] = None
    photo_references: List[str] = Field(default_factory=list)
    types: List[str] = Field(default_factory=list)
    vicinity: str = ""

    @classmethod
    def from_place(cls, record: dict) -> "HotelCandidate":
        """Build a candidate from a raw Places record (photos nested as dicts)."""
        data = dict(record)
        photos = data.pop("photos", None) or []
        data["photo_references"] = [
            p.get("photo_reference") for p in photos if isinstance(p, dict) and p.get("photo_reference")
        ]
        return cls.model_validate(data)

    @property
    def location_text(self) -> str:
        return self.vicinity or self.formatted_address


class RealResult(BaseModel):
    kind: Literal["real"] = "real"
    source: Literal["nearby", "text"]
    candidates: List[HotelCandidate] = Field(default_factory=list)

    @property
    def degraded(self) -> bool:
        return False


class DegradedResult(BaseModel):
    kind: Literal["degraded"] = "degraded"
    source: Literal["mock"] = "mock"
    candidates: List[HotelCandidate] = Field(default_factory=list)

    @property
    def degraded(self) -> bool:
        return True


SearchOutcome = Annotated[Union[RealResult, DegradedResult], Field(discriminator="kind")]


# ------- Response models -------
class AttractionDistance(BaseModel):
    model_config = _CAMEL

    attraction: str
    distance: str
    walk_time: str


class HotelRecommendation(BaseModel):
    model_config = _CAMEL

    id: str
    name: str
    address: str
    rating: float
    price_level: int
    price_range: str
    vicinity: str
    photos: List[str] = Field(default_factory=list)
    amenities: List[str] = Field(default_factory=list)
    proximity_score: int = Field(0, ge=0, le=100)
    budget_match: bool
    ai_recommendation_reason: str
    distance_to_attractions: List[AttractionDistance] = Field(default_factory=list)
    booking_url: str
    reviews_count: int = 0
    highlights: List[str] = Field(default_factory=list)


class RecommendationSet(BaseModel):
    model_config = _CAMEL

    destination: str
    source: Literal["nearby", "text", "mock"]
    degraded: bool = False
    hotels: List[HotelRecommendation] = Field(default_factory=list)


class CityStay(BaseModel):
    """Items of an itinerary that fall in one city, in date order."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    city: str
    items: List[ItineraryItem] = Field(default_factory=list)
    activities: List[str] = Field(default_factory=list)
    check_in: str = ""
    check_out: str = ""
    duration_days: int = 0


class CityHotelRecommendation(BaseModel):
    model_config = _CAMEL

    city: str
    stay_duration: int = Field(1, ge=1)
    check_in: str
    check_out: str
    nearby_activities: List[str] = Field(default_factory=list)
    hotels: List[HotelRecommendation] = Field(default_factory=list)
    average_distance: str
    recommended_area: str
    source: Literal["nearby", "text", "mock"] = "nearby"
