"""
HTTP client for MOHRE and the UAE legislation portal.
Fetches pages as text, one attempt per request.
"""
import logging
from typing import Optional

import requests

from uae_laws.core.config import HTTP_TIMEOUT, HTTP_USER_AGENT
from uae_laws.core.exceptions import TransportError

logger = logging.getLogger(__name__)


class HttpClient:
    """
    Plain page fetcher over a shared requests session.

    Non-success responses and network failures both surface as TransportError.
    """

    def __init__(
        self,
        timeout: Optional[int] = None,
        user_agent: Optional[str] = None,
    ):
        """
        Initialize the client.

        Args:
            timeout: Request timeout in seconds (defaults to config)
            user_agent: User-Agent header (defaults to config)
        """
        self.timeout = timeout or HTTP_TIMEOUT
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": user_agent or HTTP_USER_AGENT})

    def fetch(self, url: str) -> str:
        """
        GET a page and return its text.

        Args:
            url: Page URL

        Returns:
            Response body as text

        Raises:
            TransportError: If the request fails or the response is not 2xx
        """
        logger.debug(f"GET {url}")
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError(f"GET {url} failed: {e}", url=url) from e

        if not 200 <= response.status_code < 300:
            raise TransportError(
                f"GET {url} -> {response.status_code}",
                status_code=response.status_code,
                url=url,
            )
        return response.text

    def close(self):
        """Close the HTTP session."""
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
