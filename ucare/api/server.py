"""HTTP entrypoint serving nearby urgent care facilities to the web client."""

from __future__ import annotations

import logging
from typing import Any

from flask import Flask, jsonify, request

from ucare.core.aggregator import find_nearby_urgent_cares
from ucare.core.config import get_settings
from ucare.models import SearchQuery

# ---------- Logging ----------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

FETCH_ERROR_MESSAGE = "Failed to fetch hospital data"

# ---------- App ----------
app = Flask(__name__)
app.json.sort_keys = False


@app.after_request
def add_cors_headers(response):
    response.headers["Access-Control-Allow-Origin"] = get_settings().cors_origin
    response.headers.add("Vary", "Origin")
    return response


# ---------- Routes ----------


@app.get("/")
def root() -> Any:
    """Simple root to avoid 404 on GET /"""
    return "ok", 200


@app.get("/healthz")
def healthcheck() -> Any:
    """Lightweight health endpoint; never calls Google."""
    settings = get_settings()
    return (
        jsonify(
            {
                "status": "ok",
                "port_config": settings.port,
                "api_key_configured": bool(settings.google_api_key),
            }
        ),
        200,
    )


@app.get("/api/nearbyUrgentCares")
def nearby_urgent_cares() -> Any:
    """
    Nearby urgent care facilities with details, distance and image.
    Query params: latitude, longitude (passed through unvalidated)
    """
    query = SearchQuery(
        latitude=request.args.get("latitude", ""),
        longitude=request.args.get("longitude", ""),
    )

    try:
        facilities = find_nearby_urgent_cares(query)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Error fetching hospital data: %s", exc)
        return jsonify({"error": FETCH_ERROR_MESSAGE}), 500

    return jsonify([facility.to_dict() for facility in facilities]), 200


def main() -> None:
    settings = get_settings()
    logger.info("[BOOT] Binding on 0.0.0.0:%d", settings.port)
    app.run(host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
