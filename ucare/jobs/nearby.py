"""CLI job that runs one nearby urgent care lookup and prints the result."""

import argparse
import json
import logging
import sys

from ucare.core.aggregator import find_nearby_urgent_cares
from ucare.core.config import get_settings
from ucare.models import SearchQuery

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Look up urgent care facilities near a coordinate")
    parser.add_argument("--latitude", dest="latitude", required=True, help="Origin latitude")
    parser.add_argument("--longitude", dest="longitude", required=True, help="Origin longitude")
    parser.add_argument("--indent", dest="indent", type=int, default=None, help="Pretty-print JSON output")
    return parser


def run_lookup(latitude: str, longitude: str, indent=None) -> str:
    settings = get_settings()
    if not settings.google_api_key:
        raise RuntimeError("GOOGLE_API_KEY is required")

    facilities = find_nearby_urgent_cares(SearchQuery(latitude=latitude, longitude=longitude), settings=settings)
    logger.info("Found %d facilities", len(facilities))
    return json.dumps([facility.to_dict() for facility in facilities], indent=indent)


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    parser = build_parser()
    args = parser.parse_args()

    sys.stdout.write(run_lookup(args.latitude, args.longitude, indent=args.indent) + "\n")


if __name__ == "__main__":
    main()
