# ==============================================================================
# url_utils.py — URL Processing Utilities
# ==============================================================================
# Purpose: Relative URL resolution and validation for the fetch client
# Sections: Imports, Public API
# ==============================================================================

# ==============================================================================
# Imports
# ==============================================================================

# Standard Library -----
from urllib.parse import urlparse

# Cache Warmer ----
from cache_warmer.exceptions import InvalidUrlError

# ==============================================================================
# Public exports
# ==============================================================================
__all__ = [
    'SUPPORTED_SCHEMES',
    'join_url',
    'has_scheme',
    'to_absolute_url',
    'validate_url',
]

SUPPORTED_SCHEMES = ("http", "https")

# ==============================================================================
# Public API Functions
# ==============================================================================

def join_url(base_url: str, path: str) -> str:
    """
    Join a base origin and a path with exactly one separating slash.

    Args:
        base_url: Origin such as ``http://localhost:81`` (trailing slashes ignored)
        path: Path with or without a leading slash

    Returns:
        The concatenated URL
    """
    base = base_url.rstrip("/")
    return base + (path if path.startswith("/") else f"/{path}")

def has_scheme(url: str) -> bool:
    """Check whether the URL carries its own scheme."""
    try:
        return bool(urlparse(url).scheme)
    except ValueError:
        return False

def to_absolute_url(url: str, base_url: str) -> str:
    """
    Resolve a scheme-less URL against the base origin by concatenation.

    Absolute URLs are returned unchanged.
    """
    if has_scheme(url):
        return url
    return join_url(base_url, url)

def validate_url(url: str) -> str:
    """
    Validate that a URL is absolute http(s) with a host.

    Raises:
        InvalidUrlError: If the URL cannot be parsed, uses another scheme or has no host
    """
    try:
        parsed = urlparse(url)
    except ValueError as e:
        raise InvalidUrlError(url, str(e)) from e

    if parsed.scheme.lower() not in SUPPORTED_SCHEMES:
        raise InvalidUrlError(url, f"unsupported scheme '{parsed.scheme}'")
    if not parsed.netloc:
        raise InvalidUrlError(url, "missing host")

    return url
