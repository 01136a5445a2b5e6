# fetch.py
from __future__ import annotations

import logging
from typing import Optional

import requests

from .conf import cfg
from .exceptions import ImageFetchError

logger = logging.getLogger(__name__)


def fetch_image(url: str, timeout: Optional[float] = None) -> bytes:
    """
    GET the image at `url` and return the raw body.
    One request, no retries, no custom headers. Every transport failure
    (DNS, connect, timeout, non-2xx, empty body) is raised as ImageFetchError.
    """
    if timeout is None:
        timeout = cfg()["IMAGE_FETCH_TIMEOUT"]

    try:
        resp = requests.get(url, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as e:
        logger.warning("image fetch failed url=%s err=%r", url, e)
        raise ImageFetchError(f"could not fetch image from {url}: {e}") from e

    data = resp.content
    if not data:
        raise ImageFetchError(f"empty response body from {url}")
    logger.debug("image fetched url=%s bytes=%d", url, len(data))
    return data
