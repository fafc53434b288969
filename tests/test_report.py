# File: tests/test_report.py
import json

import pytest

from micrawl.config import CrawlConfig
from micrawl.crawler.models import CrawlResult, DiscoveredLink, ScopeTag
from micrawl.report import render_json, render_text


@pytest.fixture()
def crawl_result() -> CrawlResult:
    return CrawlResult(
        seed="http://example.com/",
        links=[
            DiscoveredLink("http://example.com/a", ScopeTag.INTERNAL),
            DiscoveredLink("http://example.com/logo.png", ScopeTag.INTERNAL),
            DiscoveredLink("http://other.com/", ScopeTag.EXTERNAL),
            DiscoveredLink("http://example.com/submit", ScopeTag.FORM),
        ],
        statuses={"http://example.com/a": 200},
        robots="User-agent: *\nDisallow: /admin",
        elapsed=3.042,
    )


def test_render_text_layout(tmp_path, crawl_result):
    config = CrawlConfig(seed="http://example.com", threads=4, list_external=True)
    path = render_text(crawl_result, config, tmp_path / "out" / "report.txt")

    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "[Micrawl report for http://example.com/]"
    assert "[~] Crawling URL: http://example.com/" in lines
    assert "[~] Running with 4 threads" in lines
    assert "[~] Listing external links" in lines
    start = lines.index("--- robots.txt ---")
    assert lines[start + 1 : start + 3] == ["User-agent: *", "Disallow: /admin"]
    assert lines[start + 3] == "--- end robots.txt ---"
    assert "[200] http://example.com/a" in lines
    assert "[internal] http://example.com/logo.png" in lines
    assert "[external] http://other.com/" in lines
    assert "[form] http://example.com/submit" in lines
    assert lines[-1] == "Found 4 links in 3.042 sec."


def test_render_text_without_robots(tmp_path, crawl_result):
    crawl_result.robots = None
    config = CrawlConfig(seed="http://example.com")
    text = render_text(crawl_result, config, tmp_path / "report.txt").read_text(encoding="utf-8")
    assert "robots.txt ---" not in text


def test_render_text_unwritable_path_raises_oserror(tmp_path, crawl_result):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    config = CrawlConfig(seed="http://example.com")
    with pytest.raises(OSError):
        render_text(crawl_result, config, blocker / "report.txt")


def test_render_json(tmp_path, crawl_result):
    path = render_json(crawl_result, tmp_path / "report.json")
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["seed"] == "http://example.com/"
    assert data["links"][0] == {"url": "http://example.com/a", "scope": "internal", "status": 200}
    assert data["links"][3]["scope"] == "form"
    assert data["links"][3]["status"] is None
    assert data["elapsed"] == 3.042


@pytest.mark.parametrize(
    "elapsed,expected",
    [(0.0, "0.000"), (3.042, "3.042"), (12.5, "12.500"), (1.9996, "2.000")],
)
def test_elapsed_display(elapsed, expected):
    assert CrawlResult(seed="http://example.com/", elapsed=elapsed).elapsed_display == expected
