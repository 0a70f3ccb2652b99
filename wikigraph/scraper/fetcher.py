"""HTTP fetcher for Wikipedia article pages."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from wikigraph.config import settings
from wikigraph.errors import FetchError
from wikigraph.scraper.models import RawPage

logger = logging.getLogger(__name__)


def _is_supported_mime(content_type: Optional[str]) -> bool:
    """Accept ``text/*``, ``application/xml`` and ``application/*+xml``.

    A response without a ``Content-Type`` header is accepted as well.
    """
    if not content_type:
        return True
    mime = content_type.split(";", 1)[0].strip().lower()
    return (
        mime.startswith("text/")
        or mime == "application/xml"
        or (mime.startswith("application/") and mime.endswith("+xml"))
    )


def fetch_page(
    url: str,
    *,
    user_agent: Optional[str] = None,
    timeout: Optional[float] = None,
    referrer: Optional[str] = None,
) -> RawPage:
    """Fetch *url* once (redirects followed) and return a :class:`RawPage`.

    Raises:
        FetchError: On a non-2xx status (``reason="status"``), an unsupported
            content type (``"mime"``) or a timeout/transport error
            (``"network"``).
    """
    headers = {
        "User-Agent": user_agent or settings.user_agent,
        "Referer": referrer or settings.referrer,
    }

    try:
        with httpx.Client(
            headers=headers,
            timeout=timeout if timeout is not None else settings.request_timeout,
            follow_redirects=True,
        ) as client:
            response = client.get(url)
            response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        code = exc.response.status_code
        raise FetchError(
            f"Failed to fetch URL ({code}): {url}", reason="status", status_code=code
        ) from exc
    except httpx.TimeoutException as exc:
        raise FetchError(f"Timed out fetching URL: {url}", reason="network") from exc
    except httpx.RequestError as exc:
        raise FetchError(f"I/O error fetching URL: {url}", reason="network") from exc

    content_type = response.headers.get("content-type")
    if not _is_supported_mime(content_type):
        raise FetchError(f"Unsupported content type for URL: {url}", reason="mime")

    logger.debug("Fetched %s (HTTP %d, %d bytes)", url, response.status_code, len(response.content))
    return RawPage(
        url=url,
        html=response.text,
        status_code=response.status_code,
        content_type=content_type,
    )
