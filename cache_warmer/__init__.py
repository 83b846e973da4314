# ==============================================================================
# cache_warmer/__init__.py — Sitemap Cache Warmer
# ==============================================================================
# Purpose: Main package with public API
# ==============================================================================

# Version information
__version__ = "1.0.0"

# Models
from .models import (
    CrawlerConfig,
    CrawlSummary,
    CrawlTally,
    ErrorKind,
    FetchOutcome,
    SitemapDocument,
)

# Errors
from .exceptions import FetchError

# Clients and crawler components
from .clients import FetchClient
from .crawler import RegexSitemapParser, SitemapResolver

# Service layer
from .services import ConfigService, CrawlOrchestrator, run_crawl

__all__ = [
    # Models
    'CrawlerConfig',
    'CrawlSummary',
    'CrawlTally',
    'ErrorKind',
    'FetchOutcome',
    'SitemapDocument',

    # Errors
    'FetchError',

    # Components
    'FetchClient',
    'RegexSitemapParser',
    'SitemapResolver',

    # Services
    'ConfigService',
    'CrawlOrchestrator',
    'run_crawl',

    # Metadata
    '__version__',
]
