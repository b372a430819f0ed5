"""Utilities for merging Google Maps responses into facility records."""

from typing import Any, Dict, Optional

from ucare.models import DistanceInfo, EnrichedFacility, FacilityCandidate

HOURS_NOT_AVAILABLE = "Hours not available"
ALWAYS_OPEN = "24 hours"
ADDRESS_NOT_AVAILABLE = "Address not available"
PHONE_NOT_AVAILABLE = "Not available"


def _minutes_of_day(hhmm: str) -> int:
    return int(hhmm[:2]) * 60 + int(hhmm[2:])


def _format_hours(hours: float) -> str:
    if hours.is_integer():
        return f"{int(hours)} hours"
    return f"{hours} hours"


def calculate_open_hours(opening_hours: Optional[Dict[str, Any]]) -> str:
    """Summarize how long a facility is open, based on the first schedule period.

    Later periods are ignored and a close time before the open time is not
    moved to the next day, so overnight periods report a negative duration.
    """
    if not opening_hours or not opening_hours.get("periods"):
        return HOURS_NOT_AVAILABLE

    periods = opening_hours["periods"]
    if opening_hours.get("open_now") and len(periods) == 1 and "close" not in periods[0]:
        return ALWAYS_OPEN

    first = periods[0]
    open_minutes = _minutes_of_day(first["open"]["time"])
    close_minutes = _minutes_of_day(first["close"]["time"])
    return _format_hours((close_minutes - open_minutes) / 60)


def first_photo_reference(details: Dict[str, Any]) -> Optional[str]:
    photos = details.get("photos") or []
    if not photos:
        return None
    return photos[0].get("photo_reference")


def resolve_image(photo_url: Optional[str], candidate: FacilityCandidate) -> Optional[str]:
    return photo_url or candidate.icon


def to_facility(
    candidate: FacilityCandidate,
    details: Dict[str, Any],
    distance: DistanceInfo,
    photo_url: Optional[str] = None,
) -> EnrichedFacility:
    opening_hours = details.get("opening_hours") or {}
    open_now = opening_hours.get("open_now")

    return EnrichedFacility(
        id=candidate.place_id,
        name=candidate.name,
        location=candidate.location,
        icon=candidate.icon,
        image=resolve_image(photo_url, candidate),
        rating=candidate.rating,
        user_ratings_total=candidate.user_ratings_total,
        address=details.get("formatted_address") or ADDRESS_NOT_AVAILABLE,
        phone=details.get("formatted_phone_number") or PHONE_NOT_AVAILABLE,
        open_now=open_now if open_now is not None else False,
        open_hours=calculate_open_hours(details.get("opening_hours")),
        distance=distance.distance_text,
        duration=distance.duration_text,
    )
