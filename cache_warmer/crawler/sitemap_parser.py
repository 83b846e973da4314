# ==============================================================================
# sitemap_parser.py — Sitemap body parsing
# ==============================================================================
# Purpose: Extract <loc> entries and classify a sitemap as index or leaf
# Sections: Imports, Public API, Main Classes
# ==============================================================================

# ==============================================================================
# Imports
# ==============================================================================

# Standard Library -----
import re
from typing import List, Optional, Protocol

# Cache Warmer ----
from cache_warmer.models.crawl_models import SitemapDocument
from cache_warmer.utils.logger import CrawlLogger, logger as default_logger

# ==============================================================================
# Public exports
# ==============================================================================
__all__ = [
    "SitemapParser",
    "RegexSitemapParser",
    "SITEMAP_INDEX_MARKER",
    "decode_entities",
    "extract_locs",
]

# ==============================================================================
# Constants
# ==============================================================================

SITEMAP_INDEX_MARKER = "<sitemapindex"

# `.` does not cross newlines: a <loc> split over several lines is not matched
LOC_PATTERN = re.compile(r"<loc>(.*?)</loc>")

XML_ENTITIES = {
    "amp": "&",
    "lt": "<",
    "gt": ">",
    "quot": '"',
    "apos": "'",
}

ENTITY_PATTERN = re.compile(r"&(amp|lt|gt|quot|apos);")

# ==============================================================================
# Public API Functions
# ==============================================================================

def decode_entities(text: str) -> str:
    """Decode the five predefined XML entities in a single pass."""
    return ENTITY_PATTERN.sub(lambda match: XML_ENTITIES[match.group(1)], text)

def extract_locs(content: str) -> List[str]:
    """Return every trimmed, entity-decoded <loc> value in document order."""
    return [decode_entities(match.strip()) for match in LOC_PATTERN.findall(content)]

# ==============================================================================
# Main Classes
# ==============================================================================

class SitemapParser(Protocol):
    """Turns a fetched sitemap body into a SitemapDocument."""

    def parse(self, content: str) -> SitemapDocument: ...


class RegexSitemapParser:
    """
    Pattern-based sitemap parser.

    A body is a sitemap index when it contains ``<sitemapindex`` and at least
    one ``<loc>``; otherwise every ``<loc>`` is a page URL. No well-formedness
    checks are made, so markers inside comments or CDATA still count.
    """

    def __init__(self, logger: Optional[CrawlLogger] = None):
        self._logger = logger or default_logger

    def parse(self, content: str) -> SitemapDocument:
        if not content or not content.strip():
            self._logger.warning("Warning: Empty XML content received")
            return SitemapDocument.leaf([])

        urls = extract_locs(content)

        if SITEMAP_INDEX_MARKER in content and urls:
            self._logger.info(f"Found sitemap index with {len(urls)} sub-sitemaps")
            return SitemapDocument.index(urls)

        if not urls:
            self._logger.warning("Warning: No <loc> entries found in sitemap content")
        else:
            self._logger.info(f"Found {len(urls)} URLs in sitemap")
        return SitemapDocument.leaf(urls)
