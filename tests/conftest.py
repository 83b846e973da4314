# ==============================================================================
# conftest.py — Shared test fixtures
# ==============================================================================
# Purpose: In-process HTTP site, log capture and sleep recording
# Sections: Imports, Helpers, Fixtures
# ==============================================================================

# ==============================================================================
# Imports
# ==============================================================================

# Standard Library -----
import asyncio
from typing import Dict, List, Optional, Tuple

# Third Party -----
import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

# Cache Warmer ----
from cache_warmer.models.config_models import CrawlerConfig
from cache_warmer.utils.logger import CrawlLogger, Severity

# ==============================================================================
# Helpers
# ==============================================================================

class MemoryLogger(CrawlLogger):
    """Keeps log lines in memory instead of printing them."""

    def __init__(self):
        super().__init__(level="INFO")
        self.records: List[Tuple[Severity, str]] = []

    def log(self, message: str, severity: Severity = Severity.INFO) -> None:
        self.records.append((severity, message))

    def messages(self, severity: Optional[Severity] = None) -> List[str]:
        return [message for level, message in self.records if severity is None or level == severity]


class RecordingSleep:
    """Async sleep replacement that records requested delays without waiting."""

    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
        await asyncio.sleep(0)


class FakeSite:
    """
    Scripted HTTP origin served by aiohttp's TestServer.

    Each path maps to a list of replies consumed one per request; the last
    reply repeats. Unknown paths answer 404.
    """

    def __init__(self):
        self.routes: Dict[str, List[dict]] = {}
        self.requests: List[str] = []
        self.headers: List[dict] = []
        self.base_url = ""

    def add(self, path: str, status: int = 200, body: str = "", headers: Optional[dict] = None, delay: float = 0.0):
        self.routes[path] = [dict(status=status, body=body, headers=headers or {}, delay=delay)]

    def add_sequence(self, path: str, replies: List[dict]):
        self.routes[path] = [
            dict(status=r.get("status", 200), body=r.get("body", ""), headers=r.get("headers", {}), delay=r.get("delay", 0.0))
            for r in replies
        ]

    def redirect(self, path: str, location: str, status: int = 302):
        self.add(path, status=status, headers={"Location": location})

    def url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    async def handle(self, request: web.Request) -> web.Response:
        self.requests.append(request.path_qs)
        self.headers.append(dict(request.headers))

        replies = self.routes.get(request.path)
        if not replies:
            return web.Response(status=404, text="not found")

        reply = replies.pop(0) if len(replies) > 1 else replies[0]
        if reply["delay"]:
            await asyncio.sleep(reply["delay"])
        return web.Response(status=reply["status"], text=reply["body"], headers=reply["headers"])


def urlset(*urls: str) -> str:
    entries = "".join(f"<url><loc>{url}</loc></url>" for url in urls)
    return f'<?xml version="1.0" encoding="UTF-8"?><urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">{entries}</urlset>'


def sitemapindex(*urls: str) -> str:
    entries = "".join(f"<sitemap><loc>{url}</loc></sitemap>" for url in urls)
    return f'<?xml version="1.0" encoding="UTF-8"?><sitemapindex xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">{entries}</sitemapindex>'

# ==============================================================================
# Fixtures
# ==============================================================================

@pytest.fixture
def memory_logger() -> MemoryLogger:
    return MemoryLogger()


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest_asyncio.fixture
async def site():
    fake = FakeSite()
    app = web.Application()
    app.router.add_route("GET", "/{tail:.*}", fake.handle)

    server = TestServer(app)
    await server.start_server()
    fake.base_url = f"http://{server.host}:{server.port}"
    yield fake
    await server.close()


@pytest.fixture
def make_config(site):
    """Config pointing at the fake site with no real waiting."""

    def _make(**overrides) -> CrawlerConfig:
        settings = dict(
            base_url=site.base_url,
            retry_count=0,
            retry_delay=0.0,
            batch_delay=0.0,
            request_timeout=5.0,
        )
        settings.update(overrides)
        return CrawlerConfig(**settings)

    return _make
