# ==============================================================================
# __init__.py — Model layer exports
# ==============================================================================
# Purpose: Export Pydantic models for easy importing
# Sections: Imports, Public exports
# ==============================================================================

from .crawl_models import (
    ErrorKind,
    CrawlState,
    SitemapKind,
    CrawlTarget,
    SitemapDocument,
    FetchAttempt,
    FetchOutcome,
    CrawlTally,
    CrawlSummary
)

from .config_models import (
    CrawlerConfig,
    DEFAULT_BASE_URL,
    DEFAULT_SITEMAP_PATH,
    DEFAULT_USER_AGENT
)

# ==============================================================================
# Public exports
# ==============================================================================
__all__ = [
    # Crawl Models
    "ErrorKind",
    "CrawlState",
    "SitemapKind",
    "CrawlTarget",
    "SitemapDocument",
    "FetchAttempt",
    "FetchOutcome",
    "CrawlTally",
    "CrawlSummary",

    # Config Models
    "CrawlerConfig",
    "DEFAULT_BASE_URL",
    "DEFAULT_SITEMAP_PATH",
    "DEFAULT_USER_AGENT"
]
