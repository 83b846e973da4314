# ==============================================================================
# clients/__init__.py — HTTP Clients
# ==============================================================================
# Purpose: Network clients used by the crawler
# ==============================================================================

from .fetch_client import FetchClient

__all__ = [
    'FetchClient',
]
