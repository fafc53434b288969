# File: tests/test_cli.py
"""Тесты для CLI (`micrawl.cli`) с использованием click.testing.CliRunner.
Проверяют запуск обхода, отчёты, `--version` и коды выхода при ошибках.
"""
import json

import pytest
from click.testing import CliRunner

import micrawl.cli as cli_module
from micrawl.config import ConfigError
from micrawl.crawler.models import CrawlResult, DiscoveredLink, ScopeTag
from micrawl.cli import cli


@pytest.fixture(autouse=True)
def patch_network(monkeypatch):
    """Патчим проверку хоста и обход, чтобы не ходить в сеть."""
    calls = {"configs": []}

    async def fake_check(cfg):
        return None

    async def fake_crawl(cfg):
        calls["configs"].append(cfg)
        return CrawlResult(
            seed=cfg.seed_url,
            links=[DiscoveredLink("http://example.com/a", ScopeTag.INTERNAL)],
            statuses={"http://example.com/a": 200},
            elapsed=1.5,
        )

    monkeypatch.setattr(cli_module, "check_reachable", fake_check)
    monkeypatch.setattr(cli_module, "start_crawl", fake_crawl)
    return calls


def test_version_option():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "Micrawl" in result.output


def test_crawl_prints_config_and_summary(patch_network):
    runner = CliRunner()
    result = runner.invoke(cli, ["-u", "http://example.com", "-t", "5", "-e", "-r"])
    assert result.exit_code == 0, result.output
    assert "[~] Crawling URL: http://example.com/" in result.output
    assert "[~] Running with 5 threads" in result.output
    assert "Found 1 links in 1.500 sec." in result.output

    cfg = patch_network["configs"][0]
    assert cfg.threads == 5
    assert cfg.list_external is True
    assert cfg.extract_robots is True


def test_crawl_writes_reports(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    runner = CliRunner()
    result = runner.invoke(
        cli, ["-u", "http://example.com", "-o", "report.txt", "--json", "report.json"]
    )
    assert result.exit_code == 0, result.output

    text = (tmp_path / "report.txt").read_text(encoding="utf-8")
    assert text.startswith("[Micrawl report for http://example.com/]")
    assert "[200] http://example.com/a" in text
    data = json.loads((tmp_path / "report.json").read_text(encoding="utf-8"))
    assert data["links"][0]["url"] == "http://example.com/a"


def test_config_file_supplies_seed(tmp_path):
    cfg_file = tmp_path / "micrawl.yaml"
    cfg_file.write_text("seed: http://example.com\nthreads: 3\n", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "-t", "8"])
    assert result.exit_code == 0, result.output
    assert "[~] Running with 8 threads" in result.output


def test_missing_url():
    runner = CliRunner()
    result = runner.invoke(cli, [])
    assert result.exit_code == 1
    assert "--url" in result.output


@pytest.mark.parametrize(
    "args",
    [
        ["-u", "example.com"],
        ["-u", "http://example.com", "-t", "0"],
        ["-u", "http://example.com", "-t", "31"],
        ["-u", "http://example.com", "-t", "many"],
    ],
)
def test_invalid_configuration_exits_with_1(args):
    runner = CliRunner()
    result = runner.invoke(cli, args)
    assert result.exit_code == 1
    assert "Terminating" in result.output


def test_unreachable_host_exits_with_1(monkeypatch):
    async def unreachable(cfg):
        raise ConfigError("Failed to connect to host")

    monkeypatch.setattr(cli_module, "check_reachable", unreachable)
    runner = CliRunner()
    result = runner.invoke(cli, ["-u", "http://example.com"])
    assert result.exit_code == 1
    assert "Failed to connect to host" in result.output


def test_unwritable_output_exits_with_1(tmp_path):
    runner = CliRunner()
    result = runner.invoke(cli, ["-u", "http://example.com", "-o", str(tmp_path / "no" / "r.txt")])
    assert result.exit_code == 1
    assert "Failed to create output file" in result.output


def test_report_failure_is_only_a_warning(monkeypatch, tmp_path):
    def broken_render(result, cfg, path):
        raise OSError("disk full")

    monkeypatch.setattr(cli_module, "render_text", broken_render)
    runner = CliRunner()
    result = runner.invoke(cli, ["-u", "http://example.com", "-o", str(tmp_path / "r.txt")])
    assert result.exit_code == 0
    assert "Found 1 links" in result.output
