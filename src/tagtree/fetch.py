"""Load a document over HTTP."""

from __future__ import annotations

import logging

import httpx

from .errors import FetchError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


async def load(url: str, *, client: httpx.AsyncClient | None = None, timeout: float = DEFAULT_TIMEOUT) -> str:
    """Fetch ``url`` and return the response body as text.

    A caller-supplied ``client`` is used as-is and left open.

    Raises:
        FetchError: On transport errors and non-2xx responses.
    """
    try:
        if client is not None:
            resp = await client.get(url, timeout=timeout)
        else:
            async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as own_client:
                resp = await own_client.get(url)
    except httpx.HTTPError as e:
        logger.warning("[httpx] request error %s for %s", e, url)
        raise FetchError(url, detail=str(e)) from e

    if not resp.is_success:
        logger.warning("[httpx] status %d for %s", resp.status_code, url)
        raise FetchError(url, status_code=resp.status_code)

    logger.debug("[httpx] fetched %d characters from %s", len(resp.text), url)
    return resp.text
