#!/usr/bin/env python3
# ==============================================================================
# main.py — Command-line entry point
# ==============================================================================
# Purpose: Parse arguments, build configuration and run the crawl
# ==============================================================================

"""
Sitemap crawler for cache priming.

Crawls a sitemap.xml (following sitemap indexes) and requests every page
URL it lists so a downstream HTTP cache gets warmed.

Usage:
    python -m cache_warmer [base_url] [sitemap_path]
    python -m cache_warmer https://example.com /sitemap.xml --concurrency 5
"""

import argparse
import asyncio
from pathlib import Path
from typing import List, Optional

from cache_warmer.models.config_models import DEFAULT_BASE_URL, DEFAULT_SITEMAP_PATH
from cache_warmer.services.config_service import ConfigService
from cache_warmer.services.crawl_orchestrator import run_crawl
from cache_warmer.utils.logger import CrawlLogger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cache-warmer",
        description="Crawl a sitemap and request every listed page to prime the cache.",
    )
    parser.add_argument("base_url", nargs="?", default=None,
                        help=f"Site origin (default: {DEFAULT_BASE_URL})")
    parser.add_argument("sitemap_path", nargs="?", default=None,
                        help=f"Sitemap path below the origin (default: {DEFAULT_SITEMAP_PATH})")
    parser.add_argument("--config", type=Path, help="YAML configuration file (default: config/crawler.yaml)")
    parser.add_argument("--concurrency", type=int, dest="concurrent_requests",
                        help="Pages fetched concurrently per batch")
    parser.add_argument("--batch-delay", type=float, help="Seconds to wait between batches")
    parser.add_argument("--timeout", type=float, dest="request_timeout", help="Request timeout in seconds")
    parser.add_argument("--retries", type=int, dest="retry_count", help="Retries after a failed attempt")
    parser.add_argument("--retry-delay", type=float, help="Seconds to wait between attempts")
    parser.add_argument("--max-redirects", type=int, help="Maximum redirects to follow")
    parser.add_argument("--user-agent", help="User-Agent header")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point; returns the process exit code."""
    args = build_parser().parse_args(argv)
    overrides = {key: value for key, value in vars(args).items() if key != "config"}

    logger = CrawlLogger()
    try:
        config_service = ConfigService(config_path=args.config)
        logger = CrawlLogger(level=config_service.log_level)
        config = config_service.load_config(overrides)
        asyncio.run(run_crawl(config, logger=logger))
    except Exception as e:
        logger.error(f"Fatal error crawling sitemap: {e}")
        logger.error("Crawl process terminated abnormally")
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
