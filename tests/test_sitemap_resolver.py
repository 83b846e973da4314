# ==============================================================================
# test_sitemap_resolver.py — Recursive sitemap resolution tests
# ==============================================================================

from typing import Dict, List, Union

import pytest

from cache_warmer.clients.fetch_client import FetchClient
from cache_warmer.crawler.sitemap_resolver import SitemapResolver
from cache_warmer.exceptions import FetchError, HttpStatusError
from cache_warmer.utils.logger import Severity

from conftest import sitemapindex, urlset


class ScriptedFetchClient:
    """Returns canned bodies or raises canned errors per URL."""

    def __init__(self, responses: Dict[str, Union[str, FetchError]]):
        self.responses = responses
        self.calls: List[str] = []

    async def fetch(self, url: str, redirect_depth: int = 0) -> str:
        self.calls.append(url)
        response = self.responses[url]
        if isinstance(response, FetchError):
            raise response
        return response


@pytest.mark.asyncio
async def test_leaf_sitemap_returns_page_urls(memory_logger):
    client = ScriptedFetchClient({"http://h/sitemap.xml": urlset("http://h/a", "http://h/b")})

    urls = await SitemapResolver(client, logger=memory_logger).resolve("http://h/sitemap.xml")

    assert urls == ["http://h/a", "http://h/b"]


@pytest.mark.asyncio
async def test_index_is_flattened_depth_first_in_order(memory_logger):
    client = ScriptedFetchClient({
        "http://h/index.xml": sitemapindex("http://h/nested.xml", "http://h/s3.xml"),
        "http://h/nested.xml": sitemapindex("http://h/s1.xml", "http://h/s2.xml"),
        "http://h/s1.xml": urlset("http://h/1", "http://h/2"),
        "http://h/s2.xml": urlset("http://h/3"),
        "http://h/s3.xml": urlset("http://h/4", "http://h/1"),
    })

    urls = await SitemapResolver(client, logger=memory_logger).resolve("http://h/index.xml")

    assert urls == ["http://h/1", "http://h/2", "http://h/3", "http://h/4", "http://h/1"]
    assert client.calls == [
        "http://h/index.xml",
        "http://h/nested.xml",
        "http://h/s1.xml",
        "http://h/s2.xml",
        "http://h/s3.xml",
    ]


@pytest.mark.asyncio
async def test_failing_child_contributes_nothing(memory_logger):
    client = ScriptedFetchClient({
        "http://h/index.xml": sitemapindex("http://h/s1.xml", "http://h/broken.xml", "http://h/s3.xml"),
        "http://h/s1.xml": urlset("http://h/1"),
        "http://h/broken.xml": HttpStatusError("http://h/broken.xml", 500),
        "http://h/s3.xml": urlset("http://h/3"),
    })

    urls = await SitemapResolver(client, logger=memory_logger).resolve("http://h/index.xml")

    assert urls == ["http://h/1", "http://h/3"]
    # Failed child is fetched again once as a diagnostic probe
    assert client.calls.count("http://h/broken.xml") == 2
    assert "Testing connection to http://h/broken.xml without parsing..." in memory_logger.messages()


@pytest.mark.asyncio
async def test_root_failure_returns_empty_and_probes_once(memory_logger):
    client = ScriptedFetchClient({"http://h/sitemap.xml": HttpStatusError("http://h/sitemap.xml", 503)})

    urls = await SitemapResolver(client, logger=memory_logger).resolve("http://h/sitemap.xml")

    assert urls == []
    assert client.calls == ["http://h/sitemap.xml", "http://h/sitemap.xml"]
    errors = memory_logger.messages(Severity.ERROR)
    assert errors[0] == "Error processing sitemap http://h/sitemap.xml: Status Code: 503 for http://h/sitemap.xml"
    assert errors[1].startswith("Connection test to http://h/sitemap.xml also failed")


@pytest.mark.asyncio
async def test_probe_success_does_not_change_result(memory_logger):
    class FlakyClient(ScriptedFetchClient):
        async def fetch(self, url: str, redirect_depth: int = 0) -> str:
            self.calls.append(url)
            if len(self.calls) == 1:
                raise HttpStatusError(url, 500)
            return urlset("http://h/1")

    client = FlakyClient({})

    urls = await SitemapResolver(client, logger=memory_logger).resolve("http://h/sitemap.xml")

    assert urls == []
    assert "Connection to http://h/sitemap.xml successful, but XML parsing failed" in memory_logger.messages()


@pytest.mark.asyncio
async def test_empty_body_resolves_to_nothing(memory_logger):
    client = ScriptedFetchClient({"http://h/sitemap.xml": ""})

    urls = await SitemapResolver(client, logger=memory_logger).resolve("http://h/sitemap.xml")

    assert urls == []
    assert memory_logger.messages(Severity.WARNING)
    assert memory_logger.messages(Severity.ERROR) == []


@pytest.mark.asyncio
async def test_resolves_nested_index_over_http(site, make_config, memory_logger):
    site.add("/sitemap.xml", body=sitemapindex("/pages.xml", site.url("/posts.xml")))
    site.add("/pages.xml", body=urlset(site.url("/about"), site.url("/contact")))
    site.add("/posts.xml", body=urlset(site.url("/post?id=1&amp;lang=en")))

    async with FetchClient(make_config(), logger=memory_logger) as client:
        urls = await SitemapResolver(client, logger=memory_logger).resolve(site.url("/sitemap.xml"))

    assert urls == [site.url("/about"), site.url("/contact"), site.url("/post?id=1&lang=en")]
