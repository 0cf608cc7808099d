"""Download a ChatGPT share page."""

from __future__ import annotations

import logging

import httpx

from .config import REQUEST_TIMEOUT, USER_AGENT
from .errors import FetchError

logger = logging.getLogger(__name__)


def fetch_page(url: str, client: httpx.Client | None = None) -> str:
    """GET ``url`` and return the HTML body.

    Timeouts, transport errors and non-2xx responses raise FetchError.
    No retries are attempted.
    """
    headers = {"User-Agent": USER_AGENT}
    try:
        if client is not None:
            response = client.get(url, headers=headers, timeout=REQUEST_TIMEOUT)
        else:
            with httpx.Client(follow_redirects=True, timeout=REQUEST_TIMEOUT) as own_client:
                response = own_client.get(url, headers=headers)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise FetchError(f"HTTP {e.response.status_code} from {url}") from e
    except httpx.HTTPError as e:
        raise FetchError(str(e) or type(e).__name__) from e

    logger.debug("Fetched %d bytes from %s", len(response.content), url)
    return response.text
