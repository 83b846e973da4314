"""Exceptions raised by the fetch client."""

from typing import Optional

from cache_warmer.models.crawl_models import ErrorKind


class FetchError(Exception):
    """Raised when a logical fetch cannot produce a response body."""

    kind: ErrorKind = ErrorKind.CONNECTION_ERROR

    def __init__(self, url: str, message: str, status_code: Optional[int] = None):
        self.url = url
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class InvalidUrlError(FetchError):
    """Raised for URLs that cannot be parsed or use a scheme other than http/https."""

    kind = ErrorKind.INVALID_URL

    def __init__(self, url: str, reason: str = "unsupported URL"):
        self.reason = reason
        super().__init__(url, f"Invalid URL: {url} ({reason})")


class FetchTimeoutError(FetchError):
    """Raised when a request exceeds the configured timeout."""

    kind = ErrorKind.TIMEOUT

    def __init__(self, url: str):
        super().__init__(url, f"Request timed out for {url}")


class FetchConnectionError(FetchError):
    """Raised when the transport fails (DNS, refused connection, reset, ...)."""

    kind = ErrorKind.CONNECTION_ERROR


class HttpStatusError(FetchError):
    """Raised for a final response whose status is neither 200 nor a followable redirect."""

    kind = ErrorKind.HTTP_STATUS

    def __init__(self, url: str, status_code: int):
        super().__init__(url, f"Status Code: {status_code} for {url}", status_code=status_code)


class TooManyRedirectsError(FetchError):
    """Raised before issuing a request once the redirect chain exceeds its bound."""

    kind = ErrorKind.TOO_MANY_REDIRECTS

    def __init__(self, url: str, max_redirects: int):
        self.max_redirects = max_redirects
        super().__init__(url, f"Too many redirects (>{max_redirects}) for {url}")
