# ==============================================================================
# utils/__init__.py — Utils Package
# ==============================================================================
# Purpose: Logging, URL handling and batching helpers
# ==============================================================================

from .logger import CrawlLogger, Severity, logger
from .url_utils import join_url, to_absolute_url, validate_url
from .batch_processor import chunked, process_in_batches

__all__ = [
    'CrawlLogger',
    'Severity',
    'logger',
    'join_url',
    'to_absolute_url',
    'validate_url',
    'chunked',
    'process_in_batches',
]
