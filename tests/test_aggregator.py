import threading
import time

import pytest

from ucare.core import aggregator
from ucare.core.config import Settings
from ucare.models import SearchQuery
from ucare.vendors import google_maps

SETTINGS = Settings(google_api_key="test-key")
DELAYS = {"a": 0.03, "b": 0.02, "c": 0.01}


def _result(place_id, lat=37.0, lng=-122.0):
    return {
        "place_id": place_id,
        "name": f"Clinic {place_id}",
        "geometry": {"location": {"lat": lat, "lng": lng}},
        "icon": f"https://icons.example/{place_id}.png",
        "rating": 4.0,
        "user_ratings_total": 12,
    }


@pytest.fixture
def fake_maps(monkeypatch):
    state = {"results": [_result("a"), _result("b"), _result("c")], "fail": set(), "calls": []}
    lock = threading.Lock()

    def fake_nearby_search(location, api_key, timeout=10):
        state["calls"].append(("nearby", location))
        return {"status": "OK", "results": state["results"]}

    def fake_place_details(place_id, api_key, timeout=10):
        # Earlier candidates finish last so order must be restored by the fan-out.
        time.sleep(DELAYS.get(place_id, 0))
        if place_id in state["fail"]:
            raise google_maps.GoogleMapsError("details exploded")
        with lock:
            state["calls"].append(("details", place_id))
        return {"formatted_address": f"{place_id} street", "photos": [{"photo_reference": f"ref-{place_id}"}]}

    def fake_distance_matrix(origin, destination, api_key, timeout=10):
        with lock:
            state["calls"].append(("distance", origin, destination))
        return {"status": "OK", "distance": {"text": "1 km"}, "duration": {"text": "3 mins"}}

    monkeypatch.setattr(aggregator.google_maps, "nearby_search", fake_nearby_search)
    monkeypatch.setattr(aggregator.google_maps, "place_details", fake_place_details)
    monkeypatch.setattr(aggregator.google_maps, "distance_matrix", fake_distance_matrix)
    return state


def test_results_keep_search_order(fake_maps):
    facilities = aggregator.find_nearby_urgent_cares(SearchQuery("37.7", "-122.4"), settings=SETTINGS)

    assert [facility.id for facility in facilities] == ["a", "b", "c"]
    assert fake_maps["calls"][0] == ("nearby", "37.7,-122.4")
    assert ("distance", "37.7,-122.4", "37.0,-122.0") in fake_maps["calls"]
    assert facilities[0].image.startswith("https://maps.googleapis.com/maps/api/place/photo?")
    assert "photoreference=ref-a" in facilities[0].image
    assert facilities[1].address == "b street"
    assert facilities[1].phone == "Not available"


def test_every_enrichment_runs_at_once(fake_maps, monkeypatch):
    fake_maps["results"] = [_result(f"p{index}") for index in range(20)]
    barrier = threading.Barrier(20, timeout=5)

    def blocking_place_details(place_id, api_key, timeout=10):
        # Breaks with BrokenBarrierError unless all twenty are running together.
        barrier.wait()
        return {}

    monkeypatch.setattr(aggregator.google_maps, "place_details", blocking_place_details)
    facilities = aggregator.find_nearby_urgent_cares(SearchQuery("1", "2"), settings=SETTINGS)

    assert [facility.id for facility in facilities] == [f"p{index}" for index in range(20)]


def test_single_failing_enrichment_fails_everything(fake_maps):
    fake_maps["fail"] = {"b"}
    with pytest.raises(google_maps.GoogleMapsError, match="details exploded"):
        aggregator.find_nearby_urgent_cares(SearchQuery("1", "2"), settings=SETTINGS)


def test_empty_search_results_fail(fake_maps):
    fake_maps["results"] = []
    with pytest.raises(google_maps.GoogleMapsError):
        aggregator.find_nearby_urgent_cares(SearchQuery("1", "2"), settings=SETTINGS)


def test_missing_photo_falls_back_to_icon(fake_maps, monkeypatch):
    monkeypatch.setattr(aggregator.google_maps, "place_details", lambda place_id, api_key, timeout=10: {})
    facilities = aggregator.find_nearby_urgent_cares(SearchQuery("1", "2"), settings=SETTINGS)
    assert [facility.image for facility in facilities] == [
        "https://icons.example/a.png",
        "https://icons.example/b.png",
        "https://icons.example/c.png",
    ]
