# File: tests/test_cli.py
"""Тесты для CLI с использованием click.testing.CliRunner.
Проверяют команды `scrape`, `config`, `--version`, а также обработку ошибок.
"""
import csv
import json
import logging

import pytest
from click.testing import CliRunner

import get_linked_data.engine as engine_module
from get_linked_data.aggregator import ResultSink
from get_linked_data.cli import cli
from get_linked_data.crawler.models import ExtractionRecord, FailedRequest
from get_linked_data.engine import start_scan as real_start_scan
from get_linked_data.logger import LOGGER_NAME

SELECTOR = 'script[type="application/ld+json"]'


@pytest.fixture(autouse=True)
def detach_log_handlers():
    """CliRunner closes its streams, so handlers bound to them are removed after each test."""
    yield
    lg = logging.getLogger(LOGGER_NAME)
    for handler in list(lg.handlers):
        lg.removeHandler(handler)
    lg.propagate = True


@pytest.fixture(autouse=True)
def patch_start_scan(monkeypatch):
    """Патчим start_scan, чтобы не выполнять реальные запросы."""
    calls = []

    async def fake_scan(policy, urls, *, events=None, scan_timeout=None):
        calls.append((policy, list(urls), scan_timeout))
        sink = ResultSink()
        sink.add_records([ExtractionRecord(urls[0], '"widget"')])
        if len(urls) > 1:
            sink.add_failure(FailedRequest(urls[1], None, "request timed out"))
        return sink

    monkeypatch.setattr(engine_module, "start_scan", fake_scan)
    return calls


@pytest.fixture()
def seeds(tmp_path):
    path = tmp_path / "urls.csv"
    path.write_text("http://a.example/x\nhttp://a.example/x\nhttp://b.example/y\n", encoding="utf-8")
    return path


def test_version_option():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "get-linked-data" in result.output


def test_scrape_writes_outputs(tmp_path, seeds, patch_start_scan):
    out = tmp_path / "data.csv"
    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["scrape", "-i", str(seeds), "-e", SELECTOR, "-q", ".name", "-o", str(out),
         "-p", "5", "-w", "0", "-t", "3", "--scan-timeout", "30"],
    )
    assert result.exit_code == 0, result.output
    policy, urls, scan_timeout = patch_start_scan[0]
    assert urls == ["http://a.example/x", "http://b.example/y"]
    assert policy.query == ".name"
    assert policy.parallelism == 5
    assert policy.wait_time == 0
    assert policy.timeout == 3.0
    assert scan_timeout == 30.0
    assert out.read_text(encoding="utf-8") == '"""widget"""\n'
    with (tmp_path / "data_failed.csv").open(newline="", encoding="utf-8") as f:
        assert list(csv.reader(f)) == [["http://b.example/y"]]
    assert "Failed URLs: 1" in result.output


def test_scrape_uses_config_file(tmp_path, seeds, patch_start_scan):
    cfg = tmp_path / "config.yaml"
    cfg.write_text("selector: '//script'\nmode: xml\nparallelism: 9\n", encoding="utf-8")
    out = tmp_path / "data.csv"
    runner = CliRunner()
    result = runner.invoke(
        cli, ["--config", str(cfg), "scrape", "-i", str(seeds), "-o", str(out), "--keep-alive"]
    )
    assert result.exit_code == 0, result.output
    policy = patch_start_scan[0][0]
    assert policy.mode == "xml"
    assert policy.parallelism == 9
    assert policy.disable_keep_alive is False


def test_scrape_missing_selector(tmp_path, seeds):
    runner = CliRunner()
    result = runner.invoke(cli, ["scrape", "-i", str(seeds), "-o", str(tmp_path / "o.csv")])
    assert result.exit_code == 1
    assert "Invalid configuration" in result.output


def test_scrape_bad_delimiter(tmp_path, seeds):
    runner = CliRunner()
    result = runner.invoke(
        cli, ["scrape", "-i", str(seeds), "-e", SELECTOR, "-o", str(tmp_path / "o.csv"), "-d", ";;"]
    )
    assert result.exit_code == 1
    assert "Invalid configuration" in result.output


def test_scrape_missing_input_is_fatal(tmp_path):
    out = tmp_path / "o.csv"
    runner = CliRunner()
    result = runner.invoke(
        cli, ["scrape", "-i", str(tmp_path / "missing.csv"), "-e", SELECTOR, "-o", str(out)]
    )
    assert result.exit_code == 1
    assert "does not exist" in result.output
    assert not out.exists()


def test_scrape_scope_error_is_fatal(tmp_path, monkeypatch):
    monkeypatch.setattr(engine_module, "start_scan", real_start_scan)
    seeds = tmp_path / "urls.csv"
    seeds.write_text("http://ok.example.com/\nnot a url\n", encoding="utf-8")
    out = tmp_path / "o.csv"
    runner = CliRunner()
    result = runner.invoke(cli, ["scrape", "-i", str(seeds), "-e", SELECTOR, "-o", str(out)])
    assert result.exit_code == 1
    assert "URL parse failed" in result.output
    assert not out.exists()


def test_show_config(tmp_path):
    cfg = tmp_path / "config.json"
    cfg.write_text(json.dumps({"selector": SELECTOR, "query": ".name", "wait_time": 10}), encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg), "config"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["selector"] == SELECTOR
    assert data["query"] == ".name"
    assert data["wait_time"] == 10
    assert data["parallelism"] == 100
