"""Tests for the social-login-github CLI."""

import json
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner
from pytest import MonkeyPatch

from social_login.auth.contracts import AdapterError
from social_login.auth.url_utils import compute_state_token
from social_login.cli import cli
from social_login.cli.utils import format_error
from social_login.config import CONFIG_ENV_VAR
from tests.auth.provider_adapter_testkit import (
    FakeAsyncHttpClient,
    FakeResponse,
    patch_http_client,
    viewer_payload,
)

REDIRECT_URI = "https://app.example.com/login"


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant: {name}")


def parse_strict_json(output: str) -> Any:
    """Parse the JSON document in CLI output, rejecting NaN and Infinity."""
    document = output[output.index("{") : output.rindex("}") + 1]
    return json.loads(document, parse_constant=_reject_constant)


@pytest.fixture
def runner():
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture
def redirect_config(tmp_path: Path) -> Path:
    path = tmp_path / "config.yml"
    path.write_text(
        f"""
github:
  app_id: cid
  redirect_uri: {REDIRECT_URI}
  relay_base_url: https://gatekeeper.example.com
"""
    )
    return path


@pytest.fixture
def direct_config(tmp_path: Path) -> Path:
    path = tmp_path / "direct.yml"
    path.write_text("github:\n  app_id: app-token\n")
    return path


def test_cli_without_subcommand_shows_help(runner: CliRunner) -> None:
    result = runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "whoami" in result.output


def test_url_prints_authorization_url(runner: CliRunner, redirect_config: Path) -> None:
    result = runner.invoke(cli, ["url", "--config", str(redirect_config), "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["status"] == "ok"
    assert payload["result"]["authorization_url"].startswith(
        "https://github.com/login/oauth/authorize?client_id=cid"
    )
    assert payload["result"]["state"] == compute_state_token(REDIRECT_URI)


def test_url_fails_in_direct_token_mode(runner: CliRunner, direct_config: Path) -> None:
    result = runner.invoke(cli, ["url", "--config", str(direct_config)])

    assert result.exit_code != 0
    assert "Redirect flow is not configured" in result.output


def test_missing_config_file_is_reported(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(cli, ["url", "--config", str(tmp_path / "nope.yml"), "--json"])

    assert result.exit_code != 0
    assert '"status": "error"' in result.output


def test_whoami_with_token_needs_no_config(
    runner: CliRunner, tmp_path: Path, monkeypatch: MonkeyPatch
) -> None:
    monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "absent.yml"))
    fake_client = FakeAsyncHttpClient(post_response=FakeResponse(200, viewer_payload()))
    patch_http_client(monkeypatch, fake_client)

    result = runner.invoke(cli, ["whoami", "--token", "pat-123", "--json"])

    assert result.exit_code == 0, result.output
    user = parse_strict_json(result.stdout)["result"]
    assert user["profile"]["firstName"] == "Ada Lovelace"
    assert user["token"]["accessToken"] == "pat-123"
    assert user["token"]["expiresAt"] is None
    assert fake_client.post_calls[0].headers["Authorization"] == "Bearer pat-123"


def test_whoami_reports_adapter_errors(
    runner: CliRunner, direct_config: Path, monkeypatch: MonkeyPatch
) -> None:
    fake_client = FakeAsyncHttpClient(
        post_response=FakeResponse(401, {"message": "Bad credentials"})
    )
    patch_http_client(monkeypatch, fake_client)

    result = runner.invoke(cli, ["whoami", "--config", str(direct_config), "--json"])

    assert result.exit_code != 0
    payload = parse_strict_json(result.output)
    assert payload["status"] == "error"
    assert payload["provider"] == "github"
    assert payload["type"] == "check_login"
    assert payload["error"] == "Failed to fetch user data"
    assert payload["cause"] == {"message": "Bad credentials"}
    assert fake_client.post_calls[0].headers["Authorization"] == "Bearer app-token"


def test_login_opens_browser_in_redirect_mode(
    runner: CliRunner, redirect_config: Path, monkeypatch: MonkeyPatch
) -> None:
    opened: list[str] = []
    monkeypatch.setattr("webbrowser.open", opened.append)

    result = runner.invoke(cli, ["login", "--config", str(redirect_config), "--open"])

    assert result.exit_code == 0, result.output
    assert len(opened) == 1
    assert opened[0].startswith("https://github.com/login/oauth/authorize?")
    assert f"authorization_url: {opened[0]}" in result.output


def test_login_direct_mode_prints_user(
    runner: CliRunner, direct_config: Path, monkeypatch: MonkeyPatch
) -> None:
    fake_client = FakeAsyncHttpClient(post_response=FakeResponse(200, viewer_payload()))
    patch_http_client(monkeypatch, fake_client)

    result = runner.invoke(cli, ["login", "--config", str(direct_config)])

    assert result.exit_code == 0, result.output
    assert "profile:" in result.output
    assert "email: ada@example.com" in result.output


def test_callback_exchanges_code_and_prints_user(
    runner: CliRunner, redirect_config: Path, monkeypatch: MonkeyPatch
) -> None:
    fake_client = FakeAsyncHttpClient(
        get_response=FakeResponse(200, {"token": "t1"}),
        post_response=FakeResponse(200, viewer_payload()),
    )
    patch_http_client(monkeypatch, fake_client)
    state = compute_state_token(REDIRECT_URI)

    result = runner.invoke(
        cli,
        [
            "callback",
            f"{REDIRECT_URI}?rslCallback=github&code=ABC123&state={state}",
            "--config",
            str(redirect_config),
            "--json",
        ],
    )

    assert result.exit_code == 0, result.output
    user = parse_strict_json(result.stdout)["result"]
    assert user["token"]["accessToken"] == "t1"
    assert user["token"]["expiresAt"] is None
    assert fake_client.get_calls[0].url == "https://gatekeeper.example.com/authenticate/ABC123"


def test_callback_requires_callback_marker(runner: CliRunner, redirect_config: Path) -> None:
    result = runner.invoke(
        cli, ["callback", f"{REDIRECT_URI}?code=ABC123", "--config", str(redirect_config)]
    )

    assert result.exit_code != 0
    assert "does not carry a GitHub authorization callback" in result.output


def test_format_error_carries_adapter_error_cause() -> None:
    transport = ConnectionError("connection refused")
    error = AdapterError(
        "github", "access_token", "Failed to fetch access token due to transport error", transport
    )

    info = format_error(error)

    assert info == {
        "error": "Failed to fetch access token due to transport error",
        "provider": "github",
        "type": "access_token",
        "cause": "ConnectionError: connection refused",
    }
