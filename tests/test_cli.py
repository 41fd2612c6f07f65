"""Tests for the Typer CLI."""

import sys

import httpx
from typer.testing import CliRunner

import cli.main as cli_main
from adapters.html_page import HtmlTwinPage
from adapters.servers import build_servers
from cli.main import app
from core.services.collection import DeathbatCollection
from core.services.twin_fetcher import TwinFetcher

runner = CliRunner()


def test_show_prints_source_and_twin(collection_file):
    result = runner.invoke(app, ["show", "1", "--collection", str(collection_file)])

    assert result.exit_code == 0
    assert "Deathbat #1" in result.output
    assert "Deathbat #2" in result.output


def test_show_unknown_token_fails(collection_file):
    result = runner.invoke(app, ["show", "77", "--collection", str(collection_file)])

    assert result.exit_code == 1
    assert "not found" in result.output


def test_show_missing_collection_fails(tmp_path):
    result = runner.invoke(app, ["show", "1", "--collection", str(tmp_path / "nope.json")])

    assert result.exit_code == 1


def test_export_page_writes_template(tmp_path):
    out = tmp_path / "index.html"

    result = runner.invoke(app, ["export-page", "--output", str(out)])

    assert result.exit_code == 0
    assert 'id="token_id"' in out.read_text(encoding="utf-8")


def _fake_fetcher(handler):
    def build(settings):
        return TwinFetcher(settings, transport=httpx.MockTransport(handler))

    return build


def test_fetch_writes_rendered_page(tmp_path, monkeypatch, sample_payload):
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json=sample_payload)

    monkeypatch.setattr(cli_main, "TwinFetcher", _fake_fetcher(handler))
    out = tmp_path / "out.html"

    result = runner.invoke(
        app, ["fetch", "1", "--api-url", "http://twins.local/twin", "--output", str(out)]
    )

    assert result.exit_code == 0
    assert seen == ["http://twins.local/twin?token_id=1"]
    page = HtmlTwinPage.from_path(out)
    assert page.token_id == "1"
    assert page.text("twin_hyperlink") == "Opensea.io/.../2"


def test_fetch_failure_exits_1_and_still_writes_page(tmp_path, monkeypatch):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    monkeypatch.setattr(cli_main, "TwinFetcher", _fake_fetcher(handler))
    out = tmp_path / "out.html"

    result = runner.invoke(app, ["fetch", "1", "--output", str(out)])

    assert result.exit_code == 1
    assert HtmlTwinPage.from_path(out).text("source_name") == ""


def test_fetch_page_without_token_field_is_bad_parameter(tmp_path):
    page = tmp_path / "page.html"
    page.write_text('<h3 id="source_name"></h3>', encoding="utf-8")

    result = runner.invoke(app, ["fetch", "1", "--page", str(page), "--output", str(tmp_path / "o.html")])

    assert result.exit_code == 2
    assert not (tmp_path / "o.html").exists()


def test_fetch_missing_page_file_is_bad_parameter(tmp_path):
    result = runner.invoke(
        app, ["fetch", "1", "--page", str(tmp_path / "nope.html"), "--output", str(tmp_path / "o.html")]
    )

    assert result.exit_code == 2
    assert not (tmp_path / "o.html").exists()


def test_setup_opensea_stores_key(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    monkeypatch.setattr(sys, "platform", "linux")

    result = runner.invoke(app, ["doctor", "setup-opensea"], input="secret-key\n")

    assert result.exit_code == 0
    env_file = tmp_path / "deathbat-twin" / ".env"
    assert "DEATHBAT_TWIN_OPENSEA_API_KEY=secret-key" in env_file.read_text(encoding="utf-8").splitlines()


def test_doctor_run_reports_checks(collection_file, monkeypatch):
    monkeypatch.setenv("DEATHBAT_TWIN_COLLECTION_PATH", str(collection_file))
    monkeypatch.setenv("DEATHBAT_TWIN_TWIN_API_URL", "http://127.0.0.1:9/twin")

    result = runner.invoke(app, ["doctor", "run"])

    assert result.exit_code == 0
    assert "Collection" in result.output
    assert "FAIL" in result.output


def test_build_servers_binds_both_ports(collection_file, settings):
    servers = build_servers(settings, DeathbatCollection.load(collection_file))

    assert [server.config.port for server in servers] == [6660, 6661]
