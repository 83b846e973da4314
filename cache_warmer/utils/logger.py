# ==============================================================================
# logger.py — Timestamped console logging
# ==============================================================================
# Purpose: Line-oriented crawl log, info to stdout and warnings/errors to stderr
# Sections: Imports, Severity, Main Classes
# ==============================================================================

# ==============================================================================
# Imports
# ==============================================================================

# Standard Library -----
import os
import sys
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

# ==============================================================================
# Public exports
# ==============================================================================
__all__ = ["Severity", "CrawlLogger", "logger"]

# ==============================================================================
# Severity
# ==============================================================================

class Severity(str, Enum):
    """Severity of a log line"""
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"

    @property
    def rank(self) -> int:
        return _RANKS[self]

_RANKS = {Severity.INFO: 0, Severity.WARNING: 1, Severity.ERROR: 2}

# ==============================================================================
# Main Classes
# ==============================================================================

class CrawlLogger:
    """
    Writes ``[<ISO8601 timestamp>] <message>`` lines.

    Informational lines go to stdout, warnings and errors to stderr. Lines
    below the configured level are dropped; errors are always written.
    """

    def __init__(self, level: Optional[str] = None):
        raw_level = (level or os.getenv("LOG_LEVEL", "INFO")).strip().upper()
        try:
            self.level = Severity(raw_level)
        except ValueError:
            self.level = Severity.INFO

    @staticmethod
    def timestamp() -> str:
        """UTC timestamp with millisecond precision and a ``Z`` suffix."""
        now = datetime.now(timezone.utc)
        return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")

    def format(self, message: str) -> str:
        return f"[{self.timestamp()}] {message}"

    def enabled(self, severity: Severity) -> bool:
        return severity == Severity.ERROR or severity.rank >= self.level.rank

    def log(self, message: str, severity: Severity = Severity.INFO) -> None:
        if not self.enabled(severity):
            return
        stream = sys.stdout if severity == Severity.INFO else sys.stderr
        print(self.format(message), file=stream, flush=True)

    def info(self, message: str) -> None:
        self.log(message, Severity.INFO)

    def warning(self, message: str) -> None:
        self.log(message, Severity.WARNING)

    def error(self, message: str) -> None:
        self.log(message, Severity.ERROR)


# Global instance
logger = CrawlLogger()
