import uuid
from urllib.parse import parse_qs, urlsplit

import pytest

from social_login.auth.url_utils import (
    build_authorize_url,
    build_callback_url,
    compute_state_token,
    get_query_params,
    get_query_string_value,
)


def test_build_callback_url_appends_marker() -> None:
    assert (
        build_callback_url("https://app.example.com/login", "github")
        == "https://app.example.com/login?rslCallback=github"
    )


def test_build_callback_url_keeps_existing_query_and_fragment() -> None:
    url = build_callback_url("https://app.example.com/login?next=%2Fhome#top", "github")
    parts = urlsplit(url)
    assert parse_qs(parts.query) == {"next": ["/home"], "rslCallback": ["github"]}
    assert parts.fragment == "top"


def test_build_callback_url_replaces_stale_marker() -> None:
    url = build_callback_url("https://app.example.com/login?rslCallback=google", "github")
    assert parse_qs(urlsplit(url).query) == {"rslCallback": ["github"]}


def test_compute_state_token_is_deterministic_per_redirect_uri() -> None:
    first = compute_state_token("https://app.example.com/login")
    again = compute_state_token("https://app.example.com/login")
    other = compute_state_token("https://app.example.com/other")
    assert first == again
    assert first != other
    assert uuid.UUID(first).version == 5


def test_build_authorize_url_encodes_callback() -> None:
    url = build_authorize_url(
        oauth_host="https://github.com/",
        client_id="cid",
        callback_url="https://app.example.com/login?rslCallback=github",
        scope="user",
        state="s1",
    )
    assert url.startswith("https://github.com/login/oauth/authorize?")
    assert "redirect_uri=https%3A%2F%2Fapp.example.com%2Flogin%3FrslCallback%3Dgithub" in url
    query = parse_qs(urlsplit(url).query)
    assert query == {
        "client_id": ["cid"],
        "redirect_uri": ["https://app.example.com/login?rslCallback=github"],
        "scope": ["user"],
        "state": ["s1"],
    }


@pytest.mark.parametrize(
    "location",
    [
        "https://app.example.com/login?rslCallback=github&code=ABC123#frag",
        "/login?rslCallback=github&code=ABC123",
        "?rslCallback=github&code=ABC123",
        "rslCallback=github&code=ABC123",
        {"rslCallback": "github", "code": ["ABC123", "ignored"]},
    ],
)
def test_get_query_params_accepts_urls_query_strings_and_mappings(location: object) -> None:
    params = get_query_params(location)  # type: ignore[arg-type]
    assert params["rslCallback"] == "github"
    assert params["code"] == "ABC123"


def test_get_query_params_first_value_wins() -> None:
    assert get_query_params("https://app.example.com/?code=a&code=b") == {"code": "a"}


def test_get_query_string_value_treats_blank_as_missing() -> None:
    assert get_query_string_value("https://app.example.com/?code=", "code") is None
    assert get_query_string_value("https://app.example.com/", "code") is None
    assert get_query_string_value(None, "code") is None
    assert get_query_string_value({"code": []}, "code") is None
