from __future__ import annotations

import logging

import httpx

from ..config import Settings, get_settings
from ..exceptions import FetchError
from ..http_client import get_http_client

logger = logging.getLogger(__name__)


async def fetch_source_html(
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
    settings: Settings | None = None,
) -> str:
    """Fetch the listing page once and return its body as text.

    There are no retries; the scheduler that runs the job decides when to try
    again.
    """
    settings = settings or get_settings()
    client = client or await get_http_client()
    logger.debug("Fetching %s", url)
    # timeout and user agent come from the settings of this run, not from the
    # shared or injected client
    try:
        response = await client.get(
            url,
            headers={"User-Agent": settings.http_user_agent},
            timeout=settings.http_timeout,
            follow_redirects=True,
        )
    except httpx.TimeoutException as exc:
        raise FetchError(url, None, f"timed out after {settings.http_timeout}s") from exc
    except httpx.HTTPError as exc:
        raise FetchError(url, None, str(exc) or type(exc).__name__) from exc

    if not response.is_success:
        raise FetchError(url, response.status_code, response.reason_phrase)

    logger.info("Fetched %s (%d bytes)", url, len(response.content))
    return response.text
