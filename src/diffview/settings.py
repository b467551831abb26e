"""Application-wide settings and environment loading."""

import logging
import os
from functools import lru_cache

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

load_dotenv()
logger.debug("Environment variables loaded from .env if present")

DEFAULT_PUBLISH_URL = "http://diffy.org/api/new"
DEFAULT_HTTP_TIMEOUT = 30.0


@lru_cache(maxsize=1)
def get_publish_url() -> str:
    """Return the endpoint diffs are published to."""
    url = os.getenv("DIFFVIEW_PUBLISH_URL") or DEFAULT_PUBLISH_URL
    logger.debug("Publish endpoint resolved", extra={"url": url})
    return url


@lru_cache(maxsize=1)
def get_http_timeout() -> float:
    """Return the timeout in seconds for the publish request."""
    raw = os.getenv("DIFFVIEW_HTTP_TIMEOUT")
    if not raw:
        return DEFAULT_HTTP_TIMEOUT
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring invalid DIFFVIEW_HTTP_TIMEOUT", extra={"value": raw})
        return DEFAULT_HTTP_TIMEOUT


def get_api_host() -> str:
    """Return the interface the API server binds to."""
    return os.getenv("DIFFVIEW_API_HOST", "127.0.0.1")


def get_api_port() -> int:
    """Return the port the API server listens on."""
    raw = os.getenv("DIFFVIEW_API_PORT", "8000")
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring invalid DIFFVIEW_API_PORT", extra={"value": raw})
        return 8000
