# ==============================================================================
# sitemap_resolver.py — Recursive sitemap resolution
# ==============================================================================
# Purpose: Flatten a sitemap (or sitemap index tree) into a list of page URLs
# Sections: Imports, Public API, Main Classes
# ==============================================================================

# ==============================================================================
# Imports
# ==============================================================================

# Standard Library -----
from typing import List, Optional

# Cache Warmer ----
from cache_warmer.clients.fetch_client import FetchClient
from cache_warmer.crawler.sitemap_parser import RegexSitemapParser, SitemapParser
from cache_warmer.exceptions import FetchError
from cache_warmer.utils.logger import CrawlLogger, logger as default_logger

# ==============================================================================
# Public exports
# ==============================================================================
__all__ = ["SitemapResolver"]

# ==============================================================================
# Main Classes
# ==============================================================================

class SitemapResolver:
    """
    Resolves a sitemap URL into page URLs, descending into sitemap indexes.

    Children of an index are resolved one after another, depth-first and in
    document order. Failures never leave ``resolve``: a sitemap that cannot be
    fetched contributes no URLs and its siblings are still processed.
    """

    def __init__(
        self,
        fetch_client: FetchClient,
        parser: Optional[SitemapParser] = None,
        logger: Optional[CrawlLogger] = None,
    ):
        self._fetch_client = fetch_client
        self._logger = logger or default_logger
        self._parser = parser or RegexSitemapParser(logger=self._logger)

    async def resolve(self, sitemap_url: str) -> List[str]:
        """Return the page URLs reachable from ``sitemap_url``, in traversal order."""
        self._logger.info(f"Processing sitemap: {sitemap_url}")

        try:
            content = await self._fetch_client.fetch(sitemap_url)
        except FetchError as e:
            self._logger.error(f"Error processing sitemap {sitemap_url}: {e.message}")
            await self._probe(sitemap_url)
            return []

        document = self._parser.parse(content)
        if not document.is_index:
            return list(document.page_urls)

        all_urls: List[str] = []
        for child_url in document.child_urls:
            try:
                all_urls.extend(await self.resolve(child_url))
            except Exception as e:
                self._logger.error(f"Error processing sub-sitemap {child_url}: {e}")
        return all_urls

    async def _probe(self, sitemap_url: str) -> None:
        """Fetch the sitemap once more without parsing; only the log is affected."""
        self._logger.info(f"Testing connection to {sitemap_url} without parsing...")
        try:
            await self._fetch_client.fetch(sitemap_url)
        except FetchError as e:
            self._logger.error(f"Connection test to {sitemap_url} also failed: {e.message}")
        else:
            self._logger.info(f"Connection to {sitemap_url} successful, but XML parsing failed")
