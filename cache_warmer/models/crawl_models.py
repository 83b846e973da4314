from typing import List, Optional
from pydantic import BaseModel, Field
from enum import Enum
from datetime import datetime

class ErrorKind(str, Enum):
    """Failure categories surfaced by the fetch client"""
    INVALID_URL = "invalid_url"
    TIMEOUT = "timeout"
    CONNECTION_ERROR = "connection_error"
    HTTP_STATUS = "http_status"
    TOO_MANY_REDIRECTS = "too_many_redirects"
    PARSE_EMPTY = "parse_empty"

class CrawlState(str, Enum):
    """Lifecycle of a single crawl run"""
    IDLE = "idle"
    CONNECTIVITY_CHECK = "connectivity_check"
    RESOLVING = "resolving"
    CRAWLING = "crawling"
    DONE = "done"

class SitemapKind(str, Enum):
    INDEX = "index"
    LEAF = "leaf"

class CrawlTarget(BaseModel):
    """A URL to be fetched, either a sitemap or a page"""
    url: str

    class Config:
        frozen = True

class SitemapDocument(BaseModel):
    """Parsed body of one fetched sitemap"""
    kind: SitemapKind
    urls: List[str] = Field(default_factory=list)
    issue: Optional[ErrorKind] = None  # PARSE_EMPTY when the body yielded no <loc>

    @classmethod
    def index(cls, child_urls: List[str]) -> "SitemapDocument":
        return cls(kind=SitemapKind.INDEX, urls=list(child_urls))

    @classmethod
    def leaf(cls, page_urls: List[str]) -> "SitemapDocument":
        issue = None if page_urls else ErrorKind.PARSE_EMPTY
        return cls(kind=SitemapKind.LEAF, urls=list(page_urls), issue=issue)

    @property
    def is_index(self) -> bool:
        return self.kind == SitemapKind.INDEX

    @property
    def child_urls(self) -> List[str]:
        """Sub-sitemap URLs; empty for a leaf sitemap"""
        return self.urls if self.is_index else []

    @property
    def page_urls(self) -> List[str]:
        """Page URLs; empty for a sitemap index"""
        return [] if self.is_index else self.urls

class FetchAttempt(BaseModel):
    """One HTTP round-trip within a logical fetch"""
    url: str
    redirect_depth: int = 0
    retry_attempt: int = 0

    class Config:
        frozen = True

class FetchOutcome(BaseModel):
    """Terminal result of a logical fetch: a body or a failure"""
    url: str
    body: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    message: Optional[str] = None
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.error_kind is None

    @classmethod
    def success(cls, url: str, body: str) -> "FetchOutcome":
        return cls(url=url, body=body)

    @classmethod
    def failure(cls, url: str, error_kind: ErrorKind, message: str, status_code: Optional[int] = None) -> "FetchOutcome":
        return cls(url=url, error_kind=error_kind, message=message, status_code=status_code)

class CrawlTally(BaseModel):
    """Running success/failure counters for processed page URLs"""
    success_count: int = 0
    fail_count: int = 0

    @property
    def processed(self) -> int:
        return self.success_count + self.fail_count

    def record_batch(self, results: List[bool]) -> None:
        """Apply the settled outcomes of one batch"""
        successes = sum(1 for result in results if result)
        self.success_count += successes
        self.fail_count += len(results) - successes

class CrawlSummary(BaseModel):
    """Result of a finished crawl run"""
    sitemap_url: str
    connectivity_ok: bool
    discovered_urls: int
    batches: int = 0
    success_count: int = 0
    fail_count: int = 0
    completed_at: datetime = Field(default_factory=datetime.now)

    class Config:
        json_encoders = {
            datetime: lambda v: v.isoformat() if v else None
        }
