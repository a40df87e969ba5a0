"""Tests for the pwnedapi command line."""

import functools
import json

import httpx
import pytest
from click.testing import CliRunner

from pwnedapi import Client
from pwnedapi import cli


@pytest.fixture
def run(monkeypatch):
    """Invoke the CLI with requests answered by ``handler``."""
    def _run(handler, *args):
        monkeypatch.setattr(
            cli, "Client", functools.partial(Client, transport=httpx.MockTransport(handler))
        )
        return CliRunner().invoke(cli.main, list(args))
    return _run


def test_dataclasses_json(run):
    result = run(lambda request: httpx.Response(200, json=["Email addresses", "Passwords"]),
                 "dataclasses", "--json")

    assert result.exit_code == 0
    assert json.loads(result.output) == ["Email addresses", "Passwords"]


def test_user_agent_option_is_sent(run):
    agents = []

    def handler(request):
        agents.append(request.headers["User-Agent"])
        return httpx.Response(200, json=[])

    result = run(handler, "--user-agent", "my-tool/2.0", "dataclasses")

    assert result.exit_code == 0
    assert agents == ["my-tool/2.0"]


def test_invalid_user_agent_is_usage_error(run):
    result = run(lambda request: httpx.Response(200, json=[]), "--user-agent", "", "dataclasses")
    assert result.exit_code == 2


def test_invalid_base_url_is_usage_error(run):
    result = run(lambda request: httpx.Response(200, json=[]), "--base-url", "http://[::1", "dataclasses")
    assert result.exit_code == 2


def test_breaches_table(run, breach_payload):
    result = run(lambda request: httpx.Response(200, json=breach_payload), "breaches")

    assert result.exit_code == 0
    assert "Total Breaches:" in result.output
    assert "Adobe" in result.output


def test_account_not_found(run):
    result = run(lambda request: httpx.Response(404), "account", "nobody@example.com")

    assert result.exit_code == 0
    assert "No breaches found" in result.output


def test_account_truncated(run):
    params = []

    def handler(request):
        params.append(request.url.params["truncateResponse"])
        return httpx.Response(200, json=[{"Name": "Adobe"}])

    result = run(handler, "account", "user@example.com", "--truncate")

    assert result.exit_code == 0
    assert params == ["true"]
    assert "- Adobe" in result.output


def test_breach_not_found_exits_nonzero(run):
    result = run(lambda request: httpx.Response(404), "breach", "Nope")

    assert result.exit_code == 1
    assert "Breach not found" in result.output


def test_pastes_none(run):
    result = run(lambda request: httpx.Response(404), "pastes", "nobody@example.com")

    assert result.exit_code == 0
    assert "No pastes found" in result.output


def test_api_error_exits_nonzero(run):
    result = run(lambda request: httpx.Response(503, text="down"), "breaches")

    assert result.exit_code == 1
    assert "HTTP 503" in result.output


def test_network_error_exits_nonzero(run):
    def handler(request):
        raise httpx.ConnectError("Connection refused", request=request)

    result = run(handler, "pastes", "user@example.com")

    assert result.exit_code == 1
    assert "Connection refused" in result.output
