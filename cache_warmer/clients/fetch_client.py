# ==============================================================================
# fetch_client.py — HTTP fetch client
# ==============================================================================
# Purpose: One logical GET with relative URL resolution, redirects and retries
# Sections: Imports, Public API, Main Classes
# ==============================================================================

# ==============================================================================
# Imports
# ==============================================================================

# Standard Library -----
import asyncio
from typing import Any, Awaitable, Callable, Optional

# Third Party -----
import aiohttp

# Cache Warmer ----
from cache_warmer.exceptions import (
    FetchError,
    FetchConnectionError,
    FetchTimeoutError,
    HttpStatusError,
    InvalidUrlError,
    TooManyRedirectsError,
)
from cache_warmer.models.config_models import CrawlerConfig
from cache_warmer.models.crawl_models import FetchAttempt, FetchOutcome
from cache_warmer.utils.logger import CrawlLogger, logger as default_logger
from cache_warmer.utils.url_utils import has_scheme, to_absolute_url, validate_url

# ==============================================================================
# Public exports
# ==============================================================================
__all__ = ["FetchClient", "ACCEPT_HEADER", "ACCEPT_ENCODING_HEADER"]

ACCEPT_HEADER = "text/html,application/xhtml+xml,application/xml"
ACCEPT_ENCODING_HEADER = "gzip, deflate"

# ==============================================================================
# Main Classes
# ==============================================================================

class FetchClient:
    """
    Async HTTP client performing one logical GET per call.

    A logical fetch resolves scheme-less URLs against the configured base,
    follows up to ``max_redirects`` redirects itself and retries the whole
    redirect-aware fetch ``retry_count`` times, waiting ``retry_delay``
    seconds between attempts. The last error wins when every attempt fails.

    Each redirect hop runs its own retry loop, so a failing chain of n hops
    can issue up to sum((retry_count + 1) ** k for k in 1..n) requests.
    """

    def __init__(
        self,
        config: CrawlerConfig,
        logger: Optional[CrawlLogger] = None,
        session: Optional[aiohttp.ClientSession] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self._config = config
        self._logger = logger or default_logger
        self._session = session
        self._owns_session = session is None
        self._sleep = sleep

        self.default_headers = {
            'User-Agent': config.user_agent,
            'Accept': ACCEPT_HEADER,
            'Accept-Encoding': ACCEPT_ENCODING_HEADER,
        }

    async def __aenter__(self):
        """Async context manager for HTTP session lifecycle."""
        if self._session is None:
            self._session = aiohttp.ClientSession(headers=self.default_headers)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Close the session if this client created it."""
        if self._owns_session and self._session:
            await self._session.close()
            self._session = None

    @property
    def config(self) -> CrawlerConfig:
        return self._config

    async def fetch(self, target_url: str, redirect_depth: int = 0) -> str:
        """
        Fetch a URL and return its body as text.

        Args:
            target_url: Absolute URL, or a path resolved against ``base_url``
            redirect_depth: Number of redirects already followed to reach this URL

        Returns:
            The response body of the final 200 response

        Raises:
            TooManyRedirectsError: If ``redirect_depth`` exceeds ``max_redirects``; no request is issued
            InvalidUrlError: If the URL is not http(s)
            FetchError: The last attempt's error once the retry budget is spent
        """
        if not self._session:
            raise RuntimeError("FetchClient must be used as async context manager")

        if redirect_depth > self._config.max_redirects:
            raise TooManyRedirectsError(target_url, self._config.max_redirects)

        url = self._resolve(target_url)

        last_error: Optional[FetchError] = None
        total_attempts = self._config.total_attempts

        for retry_attempt in range(total_attempts):
            if retry_attempt > 0:
                await self._sleep(self._config.retry_delay)

            attempt = FetchAttempt(url=url, redirect_depth=redirect_depth, retry_attempt=retry_attempt)
            try:
                return await self._attempt(attempt)
            except FetchError as e:
                last_error = e
                # The final error is reported by the caller
                if retry_attempt < total_attempts - 1:
                    self._logger.error(
                        f"Error fetching {url} (attempt {retry_attempt + 1}/{total_attempts}): {e.message}"
                    )

        raise last_error

    async def fetch_outcome(self, target_url: str) -> FetchOutcome:
        """Fetch a URL, returning a FetchOutcome instead of raising FetchError."""
        try:
            body = await self.fetch(target_url)
        except FetchError as e:
            return FetchOutcome.failure(e.url, e.kind, e.message, e.status_code)
        return FetchOutcome.success(target_url, body)

    def _resolve(self, target_url: str) -> str:
        """Turn a scheme-less URL into an absolute one and validate it."""
        url = target_url
        if not has_scheme(url):
            url = to_absolute_url(url, self._config.base_url)
            self._logger.info(f"Converted relative URL to absolute: {url}")
        return validate_url(url)

    async def _attempt(self, attempt: FetchAttempt) -> str:
        """Issue a single GET; follow a redirect through ``fetch`` with one more hop."""
        url = attempt.url
        retry_note = ""
        if attempt.retry_attempt > 0:
            retry_note = f" (retry {attempt.retry_attempt}/{self._config.retry_count})"
        self._logger.info(f"Fetching: {url}{retry_note}")

        timeout = aiohttp.ClientTimeout(total=self._config.request_timeout)
        redirect_url: Optional[str] = None

        try:
            async with self._session.get(
                url,
                headers=self.default_headers,
                allow_redirects=False,
                timeout=timeout,
            ) as response:
                location = response.headers.get("Location")
                if 300 <= response.status < 400 and location:
                    self._logger.info(f"Following redirect ({response.status}) from {url} to: {location}")
                    redirect_url = location
                elif response.status != 200:
                    raise HttpStatusError(url, response.status)
                else:
                    body = await response.text(errors="replace")
                    self._logger.info(f"Successfully fetched: {url} ({len(body)} characters)")
                    return body
        except asyncio.TimeoutError as e:
            raise FetchTimeoutError(url) from e
        except aiohttp.InvalidURL as e:
            raise InvalidUrlError(url, str(e)) from e
        except aiohttp.ClientError as e:
            raise FetchConnectionError(url, f"{type(e).__name__}: {e}") from e

        # Connection released before following the redirect
        return await self.fetch(redirect_url, attempt.redirect_depth + 1)
