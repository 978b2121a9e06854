"""Rate-limited HTTP client for Slov-Lex static statute pages."""

from __future__ import annotations

import logging
import time
from typing import Callable
from urllib.parse import urljoin

import httpx

from .config import Settings, get_settings
from .types import FetchResult

logger = logging.getLogger(__name__)

_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"


class FetchError(RuntimeError):
    """Raised when a page cannot be fetched with HTTP 200."""

    def __init__(self, message: str, url: str, status: int | None = None):
        super().__init__(message)
        self.url = url
        self.status = status


class RateLimiter:
    """Enforces a minimum interval between consecutive requests.

    Each fetcher owns its own limiter, so independent pipelines (and tests)
    never share timing state.

    Args:
        min_interval: Minimum number of seconds between two requests.
        clock: Monotonic clock, injectable for tests.
        sleep: Sleep function, injectable for tests.
    """

    def __init__(
        self,
        min_interval: float = 1.2,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._last_request_at: float | None = None

    def wait(self) -> None:
        """Block until the next request is allowed."""
        if self._last_request_at is not None:
            elapsed = self._clock() - self._last_request_at
            if elapsed < self.min_interval:
                self._sleep(self.min_interval - elapsed)
        self._last_request_at = self._clock()


class PageFetcher:
    """Fetches statute pages with rate limiting and retry on 429/5xx.

    Args:
        settings: Settings with request spacing, retry and timeout values.
        client: Optional preconfigured httpx.Client (e.g. with a mock transport).
        rate_limiter: Optional limiter; a new one is created per fetcher by default.
        sleep: Sleep function used for retry backoff.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.Client | None = None,
        rate_limiter: RateLimiter | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.settings = settings or get_settings()
        self.client = client or httpx.Client(
            timeout=self.settings.request_timeout_seconds,
            follow_redirects=True,
            headers={"User-Agent": self.settings.user_agent, "Accept": _ACCEPT},
        )
        self.rate_limiter = rate_limiter or RateLimiter(self.settings.request_min_interval_seconds)
        self._sleep = sleep

    def fetch(self, url: str) -> FetchResult:
        """
        Fetch a URL, following redirects.

        HTTP 429 and 5xx responses are retried with exponential backoff
        (base delay doubling per attempt).

        Returns:
            FetchResult with the final URL, status, body and content type.

        Raises:
            FetchError: On any non-200 final status, exhausted retries or
                transport failure.
        """
        max_retries = self.settings.request_max_retries
        for attempt in range(max_retries + 1):
            self.rate_limiter.wait()
            logger.info("Fetching %s", url)
            try:
                response = self.client.get(url)
            except httpx.HTTPError as e:
                raise FetchError(f"Request failed for {url}: {e}", url=url) from e

            status = response.status_code
            retryable = status == 429 or status >= 500
            if retryable and attempt < max_retries:
                delay = self.settings.request_backoff_base_seconds * (2 ** attempt)
                logger.info("Retry %d for %s in %.1fs (HTTP %d)", attempt + 1, url, delay, status)
                self._sleep(delay)
                continue

            if status != 200:
                suffix = f" after {attempt + 1} attempts" if retryable else ""
                raise FetchError(f"HTTP {status} for {url}{suffix}", url=url, status=status)

            return FetchResult(
                url=str(response.url),
                status=status,
                body=response.text,
                content_type=response.headers.get("content-type", ""),
            )

        # Unreachable: the last attempt always returns or raises.
        raise FetchError(f"Failed to fetch {url}", url=url)

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> PageFetcher:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def resolve_relative_url(base_url: str, href: str) -> str:
    """Resolve a history-page link against the history URL."""
    return urljoin(base_url, href)
