# ==============================================================================
# test_cli.py — Command-line entry point and console output tests
# ==============================================================================

import re

import pytest

from cache_warmer.main import build_parser, main
from cache_warmer.models.config_models import CrawlerConfig
from cache_warmer.utils.logger import CrawlLogger

LINE_PATTERN = re.compile(r"^\[\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z\] ")


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for field in CrawlerConfig.model_fields:
        monkeypatch.delenv(f"CACHE_WARMER_{field.upper()}", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)


def test_logger_routes_by_severity(capsys):
    logger = CrawlLogger(level="INFO")
    logger.info("hello")
    logger.warning("careful")
    logger.error("broken")

    captured = capsys.readouterr()
    out_lines = captured.out.splitlines()
    err_lines = captured.err.splitlines()
    assert len(out_lines) == 1 and out_lines[0].endswith("] hello")
    assert [line.split("] ", 1)[1] for line in err_lines] == ["careful", "broken"]
    assert all(LINE_PATTERN.match(line) for line in out_lines + err_lines)


def test_logger_level_filters_but_keeps_errors(capsys):
    logger = CrawlLogger(level="ERROR")
    logger.info("quiet")
    logger.warning("quiet too")
    logger.error("loud")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.strip().endswith("loud")


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.base_url is None and args.sitemap_path is None

    args = build_parser().parse_args(["https://example.test", "/custom.xml", "--concurrency", "4"])
    assert args.base_url == "https://example.test"
    assert args.sitemap_path == "/custom.xml"
    assert args.concurrent_requests == 4


def test_unreachable_site_still_exits_zero(capsys):
    exit_code = main(["http://127.0.0.1:1", "/sitemap.xml", "--retries", "0", "--timeout", "2"])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert "Starting sitemap crawl for: http://127.0.0.1:1/sitemap.xml" in captured.out
    assert "No URLs found to crawl" in captured.err


def test_setup_error_exits_one(capsys):
    exit_code = main(["http://127.0.0.1:1", "--concurrency", "0"])

    captured = capsys.readouterr()
    assert exit_code == 1
    assert "Fatal error crawling sitemap" in captured.err
    assert "Crawl process terminated abnormally" in captured.err


def test_missing_config_file_exits_one(tmp_path, capsys):
    exit_code = main([
        "http://127.0.0.1:1", "--config", str(tmp_path / "typo.yaml"), "--retries", "0", "--timeout", "1",
    ])

    captured = capsys.readouterr()
    assert exit_code == 1
    assert "Configuration file not found" in captured.err
    assert "Starting sitemap crawl" not in captured.out
