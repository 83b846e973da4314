from .config_service import ConfigService
from .crawl_orchestrator import CrawlOrchestrator, run_crawl

__all__ = [
    'ConfigService',
    'CrawlOrchestrator',
    'run_crawl',
]
