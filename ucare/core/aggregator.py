"""Nearby urgent care lookup with per-facility enrichment."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from ucare.core.config import Settings, get_settings
from ucare.etl.transform import first_photo_reference, to_facility
from ucare.models import DistanceInfo, EnrichedFacility, FacilityCandidate, SearchQuery
from ucare.vendors import google_maps

logger = logging.getLogger(__name__)


def enrich_candidate(candidate: FacilityCandidate, origin: str, settings: Settings) -> EnrichedFacility:
    """Fetch details and travel distance for one candidate and merge them."""
    api_key = settings.google_api_key
    timeout = settings.request_timeout

    details = google_maps.place_details(candidate.place_id, api_key, timeout=timeout)
    element = google_maps.distance_matrix(origin, candidate.destination, api_key, timeout=timeout)
    photo = google_maps.photo_url(first_photo_reference(details), api_key)

    return to_facility(candidate, details, DistanceInfo.from_element(element), photo_url=photo)


def find_nearby_urgent_cares(
    query: SearchQuery,
    *,
    settings: Optional[Settings] = None,
) -> List[EnrichedFacility]:
    """Search around ``query`` and enrich every result concurrently.

    Every candidate gets its own worker so all enrichments are in flight at
    once. Results keep the nearby-search order. The first failing enrichment
    is re-raised and no partial list is returned.
    """
    settings = settings or get_settings()
    origin = query.location

    payload = google_maps.nearby_search(origin, settings.google_api_key, timeout=settings.request_timeout)
    candidates = [FacilityCandidate.from_result(result) for result in payload["results"]]
    if not candidates:
        raise google_maps.GoogleMapsError(f"no facilities found near {origin}")

    logger.info("Enriching %d facilities near %s", len(candidates), origin)

    with ThreadPoolExecutor(max_workers=len(candidates)) as pool:
        return list(pool.map(lambda candidate: enrich_candidate(candidate, origin, settings), candidates))
