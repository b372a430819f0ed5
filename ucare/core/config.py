"""Application configuration helpers."""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_CORS_ORIGIN = "https://u-care.netlify.app"


@dataclass(frozen=True)
class Settings:
    google_api_key: str
    port: int = 5002
    cors_origin: str = DEFAULT_CORS_ORIGIN
    request_timeout: float = 10


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""
    load_dotenv()

    google_api_key = os.getenv("GOOGLE_API_KEY") or os.getenv("API_KEY", "")
    port = int(os.getenv("PORT", "5002"))
    cors_origin = os.getenv("CORS_ORIGIN", DEFAULT_CORS_ORIGIN).strip()
    request_timeout = float(os.getenv("GOOGLE_REQUEST_TIMEOUT", "10"))

    if not google_api_key:
        logger.warning("GOOGLE_API_KEY is not configured; Google Maps requests will fail.")

    return Settings(
        google_api_key=google_api_key,
        port=port,
        cors_origin=cors_origin,
        request_timeout=request_timeout,
    )
