"""Request-scoped data models for the urgent care aggregation."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True, slots=True)
class SearchQuery:
    """Raw coordinate strings as received from the client."""

    latitude: str
    longitude: str

    @property
    def location(self) -> str:
        return f"{self.latitude},{self.longitude}"


@dataclass(frozen=True, slots=True)
class FacilityCandidate:
    """A facility returned by the nearby search, before enrichment."""

    place_id: str
    name: str
    location: Dict[str, Any]
    icon: Optional[str] = None
    rating: Optional[float] = None
    user_ratings_total: Optional[int] = None

    @classmethod
    def from_result(cls, result: Dict[str, Any]) -> "FacilityCandidate":
        return cls(
            place_id=result["place_id"],
            name=result.get("name"),
            location=result["geometry"]["location"],
            icon=result.get("icon"),
            rating=result.get("rating"),
            user_ratings_total=result.get("user_ratings_total"),
        )

    @property
    def destination(self) -> str:
        return f"{self.location['lat']},{self.location['lng']}"


@dataclass(frozen=True, slots=True)
class DistanceInfo:
    distance_text: str
    duration_text: str

    @classmethod
    def from_element(cls, element: Dict[str, Any]) -> "DistanceInfo":
        return cls(
            distance_text=element["distance"]["text"],
            duration_text=element["duration"]["text"],
        )


@dataclass(frozen=True, slots=True)
class EnrichedFacility:
    """Merged facility returned to the client."""

    id: str
    name: str
    location: Dict[str, Any]
    icon: Optional[str]
    image: Optional[str]
    rating: Optional[float]
    user_ratings_total: Optional[int]
    address: str
    phone: str
    open_now: bool
    open_hours: str
    distance: str
    duration: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
