"""URL helpers for the redirect-based OAuth flow.

Covers the three URLs the flow depends on: the callback URL GitHub sends the
user back to, the authorization URL the user is sent to, and the navigation
context (current URL or query mapping) inspected when resuming after a
redirect.
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

# Query parameter the redirect target echoes back to mark a pending callback
CALLBACK_PARAM = "rslCallback"


def build_callback_url(redirect_uri: str, provider: str) -> str:
    """Append the callback marker for ``provider`` to ``redirect_uri``.

    Existing query parameters and fragments on the redirect URI are kept.

    Example:
        >>> build_callback_url("https://app.example.com/login", "github")
        'https://app.example.com/login?rslCallback=github'
    """
    parts = urlsplit(redirect_uri)
    params = parse_qsl(parts.query, keep_blank_values=True)
    params = [(key, value) for key, value in params if key != CALLBACK_PARAM]
    params.append((CALLBACK_PARAM, provider))
    return urlunsplit(
        (parts.scheme, parts.netloc, parts.path, urlencode(params), parts.fragment)
    )


def compute_state_token(redirect_uri: str) -> str:
    """Derive the anti-forgery state token from the redirect URI.

    The token is a name-based UUID (version 5, URL namespace), so a reloaded
    page rebuilds the same value for the same redirect target and can still
    match the ``state`` GitHub echoes back.
    """
    return str(uuid.uuid5(uuid.NAMESPACE_URL, redirect_uri))


def build_authorize_url(
    *,
    oauth_host: str,
    client_id: str,
    callback_url: str,
    scope: str,
    state: str,
) -> str:
    params: list[tuple[str, str]] = [
        ("client_id", client_id),
        ("redirect_uri", callback_url),
        ("scope", scope),
        ("state", state),
    ]
    return f"{oauth_host.rstrip('/')}/login/oauth/authorize?{urlencode(params)}"


def get_query_params(location: str | Mapping[str, Any] | None) -> dict[str, str]:
    """Flatten a navigation context into a ``{name: value}`` mapping.

    ``location`` may be a full URL, a bare query string (with or without the
    leading ``?``) or an already parsed mapping.  For repeated parameters the
    first value wins.
    """
    if location is None:
        return {}

    if isinstance(location, Mapping):
        params: dict[str, str] = {}
        for key, value in location.items():
            if isinstance(value, (list, tuple)):
                if not value:
                    continue
                value = value[0]
            if value is not None:
                params[str(key)] = str(value)
        return params

    parts = urlsplit(location)
    if parts.scheme or parts.netloc or parts.path.startswith("/"):
        query = parts.query
    else:
        query = location.split("?", 1)[-1].split("#", 1)[0]

    params = {}
    for key, value in parse_qsl(query, keep_blank_values=True):
        params.setdefault(key, value)
    return params


def get_query_string_value(location: str | Mapping[str, Any] | None, name: str) -> str | None:
    """Return a single query parameter from the navigation context, or ``None``."""
    value = get_query_params(location).get(name)
    if value == "":
        return None
    return value


__all__ = [
    "CALLBACK_PARAM",
    "build_authorize_url",
    "build_callback_url",
    "compute_state_token",
    "get_query_params",
    "get_query_string_value",
]
