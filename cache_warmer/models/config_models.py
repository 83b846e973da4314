from pydantic import BaseModel, Field, field_validator

DEFAULT_BASE_URL = "http://localhost:81"
DEFAULT_SITEMAP_PATH = "/sitemap.xml"
DEFAULT_USER_AGENT = "Mozilla/5.0 AposCMSDeploymentCache/1.0"

class CrawlerConfig(BaseModel):
    """Immutable tunables for a crawl run, shared by every component"""
    base_url: str = Field(default=DEFAULT_BASE_URL, description="Origin used for connectivity checks and relative URLs")
    sitemap_path: str = Field(default=DEFAULT_SITEMAP_PATH, description="Path of the root sitemap below base_url")
    max_redirects: int = Field(default=5, ge=0, description="Maximum number of redirects to follow")
    request_timeout: float = Field(default=30.0, gt=0, description="Per-request timeout in seconds")
    concurrent_requests: int = Field(default=3, ge=1, description="Page URLs fetched concurrently per batch")
    batch_delay: float = Field(default=1.0, ge=0, description="Seconds to wait between batches")
    user_agent: str = Field(default=DEFAULT_USER_AGENT, description="User-Agent header sent with every request")
    retry_count: int = Field(default=3, ge=0, description="Retries after the first failed attempt")
    retry_delay: float = Field(default=2.0, ge=0, description="Seconds to wait between attempts")

    class Config:
        frozen = True
        extra = "forbid"

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("base_url must not be empty")
        return value.rstrip("/")

    @property
    def sitemap_url(self) -> str:
        """Root sitemap URL: base_url and sitemap_path joined by exactly one slash"""
        # url_utils imports the models package via exceptions
        from cache_warmer.utils.url_utils import join_url

        return join_url(self.base_url, self.sitemap_path)

    @property
    def total_attempts(self) -> int:
        return self.retry_count + 1
