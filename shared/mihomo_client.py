"""
Mihomo client for fetching public Star Rail player profiles.

The API service proxies profile lookups through this client so the
frontend never talks to the third-party API directly.
"""

import logging

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from shared.config import get_settings
from shared.errors import ErrorCategory, get_error_logger

logger = logging.getLogger(__name__)
error_logger = get_error_logger()


class MihomoClient:
    """
    Client for the Mihomo parsed-profile endpoint.

    Returns the upstream status code and raw JSON body unchanged so the
    route can pass them straight through.
    """

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None):
        """Initialize client with base URL and timeout from settings."""
        settings = get_settings()
        self.api_url = settings.MIHOMO_API_URL.rstrip("/")
        self.timeout = settings.MIHOMO_TIMEOUT_SECONDS
        self._transport = transport

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        retry=retry_if_exception_type(httpx.TransportError),
        reraise=True,
    )
    async def fetch_profile(self, uid: str, lang: str = "en") -> tuple[int, bytes]:
        """
        Fetch a parsed player profile.

        Args:
            uid: In-game player UID
            lang: Response language

        Returns:
            Tuple of (status_code, body)

        Raises:
            httpx.HTTPError: Upstream could not be reached after retries
        """
        async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
            try:
                response = await client.get(
                    f"{self.api_url}/sr_info_parsed/{uid}",
                    params={"lang": lang},
                )
            except httpx.HTTPError as e:
                error_logger.log_error(
                    error=e,
                    category=ErrorCategory.EXTERNAL_API_ERROR,
                    context={"operation": "fetch profile", "uid": uid, "service": "mihomo"},
                    exc_info=False,
                )
                raise

        logger.debug(f"Mihomo profile {uid}: HTTP {response.status_code}")
        return response.status_code, response.content
