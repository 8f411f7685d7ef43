"""Rate-limited, retrying GET helper for index and metadata lookups."""

import logging
from typing import Any, Optional

import requests
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from proteome_grabber.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


class RestClient:
    def __init__(
        self,
        session: requests.Session,
        rate_limiter: RateLimiter,
        timeout: float = 30.0,
    ):
        self._session = session
        self._limiter = rate_limiter
        self._timeout = timeout

    def get(self, url: str, params: Optional[dict] = None) -> Optional[requests.Response]:
        """GET ``url``; return None (and log) on any HTTP or transport failure."""
        try:
            return self._get_with_retry(url, params or {})
        except Exception:
            logger.warning("HTTP GET failed: %s", url, exc_info=True)
            return None

    def get_json(self, url: str, params: Optional[dict] = None) -> Optional[Any]:
        resp = self.get(url, params)
        if resp is None:
            return None
        try:
            return resp.json()
        except ValueError:
            logger.warning("Response from %s is not valid JSON", url)
            return None

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout)),
    )
    def _get_with_retry(self, url: str, params: dict) -> requests.Response:
        self._limiter.acquire()
        resp = self._session.get(url, params=params, timeout=self._timeout)
        if resp.status_code == 429:
            raise requests.ConnectionError("Rate limited (429)")
        resp.raise_for_status()
        return resp
