"""
HTTP utilities for the site data pipeline.

Provides HTTP fetching with retry on transient failures and
proper error handling.
"""

from typing import Optional

import httpx
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)
from loguru import logger

from pipeline.config import settings


# Default headers for requests
DEFAULT_HEADERS = {
    "User-Agent": "AquacultureSites/1.0 (site data service)",
    "Accept": "text/csv, text/plain, */*",
}


class HTTPError(Exception):
    """Custom HTTP error with status code."""

    def __init__(self, message: str, status_code: int = None, response: httpx.Response = None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response


@retry(
    stop=stop_after_attempt(settings.pipeline.http_max_retries),
    wait=wait_exponential(multiplier=settings.pipeline.http_retry_delay, min=1, max=60),
    retry=retry_if_exception_type((httpx.TimeoutException, httpx.ConnectError)),
    reraise=True,
)
def fetch_with_retry(
    url: str,
    headers: Optional[dict] = None,
    params: Optional[dict] = None,
    timeout: Optional[int] = None,
) -> httpx.Response:
    """
    GET a URL with automatic retry on timeouts and connection errors.

    Args:
        url: URL to fetch
        headers: Additional headers to include
        params: Query parameters
        timeout: Request timeout in seconds

    Returns:
        httpx.Response object

    Raises:
        HTTPError: For HTTP errors (4xx, 5xx)
        httpx.TimeoutException: On timeout after retries
    """
    request_headers = {**DEFAULT_HEADERS, **(headers or {})}
    timeout = timeout or settings.pipeline.http_timeout

    logger.debug(f"Fetching GET {url}")

    with httpx.Client(timeout=timeout, follow_redirects=True) as client:
        response = client.get(url, headers=request_headers, params=params)

    if response.status_code >= 400:
        raise HTTPError(
            f"HTTP {response.status_code} for {url}: {response.text[:200]}",
            status_code=response.status_code,
            response=response,
        )

    logger.debug(f"Fetched {url} ({response.status_code}, {len(response.content)} bytes)")
    return response
