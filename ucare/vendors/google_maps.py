"""Client utilities for the Google Maps Places and Distance Matrix APIs."""

import logging
from typing import Any, Dict, Optional
from urllib.parse import urlencode

import requests

logger = logging.getLogger(__name__)
_SESSION = requests.Session()
_BASE_URL = "https://maps.googleapis.com/maps/api"

SEARCH_RADIUS = 5000
SEARCH_KEYWORD = "urgent care"
SEARCH_TYPE = "hospital"
DETAIL_FIELDS = "formatted_phone_number,formatted_address,opening_hours,photos"
PHOTO_MAX_WIDTH = 400


class GoogleMapsError(RuntimeError):
    """Raised when a Google Maps API returns a non-successful response."""


def _get(path: str, params: Dict[str, Any], timeout: float) -> Dict[str, Any]:
    response = _SESSION.get(f"{_BASE_URL}/{path}", params=params, timeout=timeout)
    response.raise_for_status()
    return response.json()


def _check_status(operation: str, payload: Dict[str, Any], allowed=frozenset({"OK", "ZERO_RESULTS"})) -> None:
    status = payload.get("status")
    if status not in allowed:
        logger.error("%s failed: status=%s, error_message=%s", operation, status, payload.get("error_message"))
        raise GoogleMapsError(payload.get("error_message") or status)


def nearby_search(location: str, api_key: str, timeout: float = 10) -> Dict[str, Any]:
    params = {
        "location": location,
        "radius": SEARCH_RADIUS,
        "keyword": SEARCH_KEYWORD,
        "type": SEARCH_TYPE,
        "key": api_key,
    }
    payload = _get("place/nearbysearch/json", params, timeout)
    _check_status("nearby_search", payload)
    return payload


def place_details(place_id: str, api_key: str, timeout: float = 10) -> Dict[str, Any]:
    params = {"place_id": place_id, "fields": DETAIL_FIELDS, "key": api_key}
    payload = _get("place/details/json", params, timeout)
    _check_status("place_details", payload, allowed=frozenset({"OK"}))
    return payload["result"]


def distance_matrix(origin: str, destination: str, api_key: str, timeout: float = 10) -> Dict[str, Any]:
    """Return the first element of the first row for a single origin/destination pair.

    Elements carry their own status; anything other than ``OK`` has no
    distance or duration and is reported as an error.
    """
    params = {"origins": origin, "destinations": destination, "key": api_key}
    payload = _get("distancematrix/json", params, timeout)
    _check_status("distance_matrix", payload, allowed=frozenset({"OK"}))
    element = payload["rows"][0]["elements"][0]
    if element.get("status", "OK") != "OK":
        logger.error("distance_matrix element failed: status=%s, destination=%s", element.get("status"), destination)
        raise GoogleMapsError(f"distance element status {element.get('status')}")
    return element


def photo_url(photo_reference: Optional[str], api_key: str) -> Optional[str]:
    if not photo_reference:
        return None
    params = {"maxwidth": PHOTO_MAX_WIDTH, "photoreference": photo_reference, "key": api_key}
    return f"{_BASE_URL}/place/photo?{urlencode(params)}"
