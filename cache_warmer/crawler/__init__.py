# ==============================================================================
# crawler/__init__.py — Sitemap Components
# ==============================================================================
# Purpose: Components for parsing sitemaps and resolving page URLs
# ==============================================================================

from .sitemap_parser import SitemapParser, RegexSitemapParser
from .sitemap_resolver import SitemapResolver

__all__ = [
    'SitemapParser',
    'RegexSitemapParser',
    'SitemapResolver',
]
