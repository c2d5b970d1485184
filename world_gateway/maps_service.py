"""
Access policy for the map provider key handed to the map pages.
"""

import logging
from typing import Optional, Tuple
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)


def request_origin(origin: Optional[str], referer: Optional[str]) -> Optional[str]:
    """Origin of the calling page: the Origin header, else derived from Referer."""
    if origin and origin != "null":
        return origin.rstrip("/")
    if referer:
        parts = urlsplit(referer)
        if parts.scheme and parts.netloc:
            return f"{parts.scheme}://{parts.netloc}"
    return None


def is_origin_allowed(
    allowed_origins: Tuple[str, ...], origin: Optional[str], referer: Optional[str]
) -> bool:
    """
    Whether the key may be served to this caller.

    An empty allow-list leaves the key unrestricted.
    """
    if not allowed_origins:
        return True

    caller = request_origin(origin, referer)
    if caller is None:
        logger.warning("Maps key requested without Origin or Referer header")
        return False
    if caller not in allowed_origins:
        logger.warning("Maps key requested from disallowed origin %s", caller)
        return False
    return True
