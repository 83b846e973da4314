# ==============================================================================
# crawl_orchestrator.py — Cache priming crawl
# ==============================================================================
# Purpose: Connectivity check, sitemap resolution and batched page fetching
# Sections: Imports, Public API, Main Classes
# ==============================================================================

# ==============================================================================
# Imports
# ==============================================================================

# Standard Library -----
import asyncio
from typing import Any, Awaitable, Callable, List, Optional

# Cache Warmer ----
from cache_warmer.clients.fetch_client import FetchClient
from cache_warmer.crawler.sitemap_resolver import SitemapResolver
from cache_warmer.exceptions import FetchError
from cache_warmer.models.config_models import CrawlerConfig
from cache_warmer.models.crawl_models import CrawlState, CrawlSummary, CrawlTally, CrawlTarget
from cache_warmer.utils.batch_processor import batch_count, process_in_batches
from cache_warmer.utils.logger import CrawlLogger, logger as default_logger

# ==============================================================================
# Public exports
# ==============================================================================
__all__ = ["CrawlOrchestrator", "run_crawl"]

BANNER = "=" * 40

# ==============================================================================
# Public API
# ==============================================================================

async def run_crawl(config: CrawlerConfig, logger: Optional[CrawlLogger] = None) -> CrawlSummary:
    """Run a complete crawl with a fresh HTTP session."""
    async with FetchClient(config, logger=logger) as fetch_client:
        orchestrator = CrawlOrchestrator(config, fetch_client, logger=logger)
        return await orchestrator.run()

# ==============================================================================
# Main Classes
# ==============================================================================

class CrawlOrchestrator:
    """
    Drives one crawl run: Idle -> ConnectivityCheck -> Resolving -> Crawling -> Done.

    Page fetches run in batches of ``concurrent_requests``; a batch starts only
    after the previous one has fully settled and ``batch_delay`` has elapsed.
    Page failures are counted, never raised.
    """

    def __init__(
        self,
        config: CrawlerConfig,
        fetch_client: FetchClient,
        resolver: Optional[SitemapResolver] = None,
        logger: Optional[CrawlLogger] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self._config = config
        self._fetch_client = fetch_client
        self._logger = logger or default_logger
        self._resolver = resolver or SitemapResolver(fetch_client, logger=self._logger)
        self._sleep = sleep

        self.state = CrawlState.IDLE
        self.tally = CrawlTally()

    async def run(self) -> CrawlSummary:
        sitemap_url = self._config.sitemap_url

        self._logger.info(BANNER)
        self._logger.info(f"Starting sitemap crawl for: {sitemap_url}")
        self._logger.info(BANNER)

        self.state = CrawlState.CONNECTIVITY_CHECK
        connectivity_ok = await self.check_connectivity()
        if not connectivity_ok:
            self._logger.warning("WARNING: Initial connectivity test failed. Will try to continue anyway.")

        self.state = CrawlState.RESOLVING
        urls = await self._resolver.resolve(sitemap_url)

        summary = CrawlSummary(
            sitemap_url=sitemap_url,
            connectivity_ok=connectivity_ok,
            discovered_urls=len(urls),
        )

        if not urls:
            self._logger.warning("No URLs found to crawl. Sitemap may be empty or inaccessible.")
            self.state = CrawlState.DONE
            return summary

        self._logger.info(f"Found total of {len(urls)} URLs to crawl")

        self.state = CrawlState.CRAWLING
        summary.batches = await self.crawl_pages(urls)

        self.state = CrawlState.DONE
        summary.success_count = self.tally.success_count
        summary.fail_count = self.tally.fail_count

        self._logger.info(BANNER)
        self._logger.info(f"Crawl completed. Success: {self.tally.success_count}, Failed: {self.tally.fail_count}")
        self._logger.info(BANNER)
        return summary

    async def check_connectivity(self) -> bool:
        """Fetch the bare base URL once; the result is diagnostic only."""
        base_url = self._config.base_url
        self._logger.info(f"Testing connectivity to: {base_url}")
        try:
            await self._fetch_client.fetch(base_url)
        except FetchError as e:
            self._logger.error(f"Initial connectivity test failed: {e.message}")
            return False
        self._logger.info("Base URL connectivity test successful")
        return True

    async def crawl_pages(self, urls: List[str]) -> int:
        """Fetch every page URL in paced batches; returns the number of batches run."""
        batch_size = self._config.concurrent_requests
        targets = [CrawlTarget(url=url) for url in urls]
        total = len(targets)

        def announce(number: int, total_batches: int, batch: List[CrawlTarget]) -> None:
            self._logger.info(f"Processing batch {number}/{total_batches} ({len(batch)} URLs)")

        async def crawl_page(index: int, target: CrawlTarget) -> bool:
            self._logger.info(f"[{index + 1}/{total}] Crawling: {target.url}")
            outcome = await self._fetch_client.fetch_outcome(target.url)
            if outcome.ok:
                self._logger.info(f"✓ Success: {target.url}")
            else:
                self._logger.error(f"✗ Failed to fetch {target.url}: {outcome.message}")
            return outcome.ok

        await process_in_batches(
            targets,
            crawl_page,
            batch_size=batch_size,
            batch_delay=self._config.batch_delay,
            sleep=self._sleep,
            on_batch_start=announce,
            on_batch_settled=self.tally.record_batch,
        )
        return batch_count(total, batch_size)
