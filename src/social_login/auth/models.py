"""Pydantic models for the GitHub login adapter.

These types cover adapter configuration, the per-adapter session state and the
normalized user data handed back to the host aggregator.

## Security-relevant configuration fields

- ``redirect_uri``: where GitHub sends the user back; it also seeds the state token.
- ``relay_base_url``: the service trusted to exchange authorization codes for tokens.
- ``scope``: what permissions are requested from GitHub.

Treat changes to these fields as security-sensitive and ensure they are covered by
tests and documented behavior.
"""

from __future__ import annotations

import math
from enum import Enum

from pydantic import AliasChoices, ConfigDict, Field, model_validator

from social_login.models import LoginBaseModel

GITHUB_OAUTH_HOST = "https://github.com"
GITHUB_GRAPHQL_URL = "https://api.github.com/graphql"


class AdapterMode(str, Enum):
    """How the adapter obtains a bearer credential."""

    DIRECT_TOKEN = "direct_token"
    REDIRECT_OAUTH = "redirect_oauth"


class GitHubLoginConfigModel(LoginBaseModel):
    """GitHub login adapter configuration.

    Without ``relay_base_url`` the adapter runs in direct-token mode and uses
    ``app_id`` itself as the bearer credential.  With it, the full redirect
    flow is enabled and ``redirect_uri`` becomes mandatory.

    The camelCase names used by browser-side hosts (``appId``, ``redirect``,
    ``gatekeeper``) are accepted as aliases.
    """

    app_id: str = Field(min_length=1, validation_alias=AliasChoices("app_id", "appId"))
    redirect_uri: str | None = Field(
        default=None,
        validation_alias=AliasChoices("redirect_uri", "redirectUri", "redirect"),
    )
    relay_base_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("relay_base_url", "relayBaseUrl", "gatekeeper"),
    )
    oauth_host: str = GITHUB_OAUTH_HOST
    graphql_url: str = GITHUB_GRAPHQL_URL
    scope: str = "user"
    timeout: float = Field(default=30.0, gt=0)

    @model_validator(mode="after")
    def _require_redirect_for_oauth(self) -> GitHubLoginConfigModel:
        if self.relay_base_url and not self.redirect_uri:
            raise ValueError("redirect_uri is required when relay_base_url is set")
        return self

    @property
    def mode(self) -> AdapterMode:
        if self.relay_base_url:
            return AdapterMode.REDIRECT_OAUTH
        return AdapterMode.DIRECT_TOKEN


class SessionState(LoginBaseModel):
    """Mutable state owned by a single adapter instance."""

    # Written by load() and by the callback exchange
    model_config = ConfigDict(extra="forbid", frozen=False, validate_assignment=True)

    config: GitHubLoginConfigModel | None = None
    mode: AdapterMode | None = None
    access_token: str | None = None
    authorization_url: str | None = None
    state_token: str | None = None


class GitHubViewer(LoginBaseModel):
    """The ``viewer`` object returned by the GraphQL probe."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    name: str | None = None
    email: str | None = None
    avatar_url: str | None = Field(
        default=None, validation_alias=AliasChoices("avatarUrl", "avatar_url")
    )


class _ViewerData(LoginBaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    viewer: GitHubViewer


class ViewerResponse(LoginBaseModel):
    """Successful GraphQL response: ``{"data": {"viewer": {...}}}``."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    data: _ViewerData

    @property
    def viewer(self) -> GitHubViewer:
        return self.data.viewer


class AuthorizationRedirect(LoginBaseModel):
    """Returned by ``login()`` when the user must authorize on GitHub first."""

    url: str
    state: str


class UserProfile(LoginBaseModel):
    id: str
    name: str | None = None
    first_name: str | None = Field(default=None, serialization_alias="firstName")
    last_name: str | None = Field(default=None, serialization_alias="lastName")
    email: str | None = None
    profile_pic_url: str | None = Field(default=None, serialization_alias="profilePicURL")


class TokenInfo(LoginBaseModel):
    access_token: str = Field(serialization_alias="accessToken")
    # GitHub does not report an expiry for OAuth app tokens
    expires_at: float = Field(default=math.inf, serialization_alias="expiresAt")


class CanonicalUser(LoginBaseModel):
    """Normalized user record expected by the host aggregator.

    Dump with ``model_dump(by_alias=True)`` to get the host's camelCase keys.
    """

    profile: UserProfile
    token: TokenInfo


__all__ = [
    "GITHUB_GRAPHQL_URL",
    "GITHUB_OAUTH_HOST",
    "AdapterMode",
    "AuthorizationRedirect",
    "CanonicalUser",
    "GitHubLoginConfigModel",
    "GitHubViewer",
    "SessionState",
    "TokenInfo",
    "UserProfile",
    "ViewerResponse",
]
