"""GitHub login adapter for the social login host.

The adapter runs in one of two modes, picked when :meth:`GitHubLoginAdapter.load`
is called:

- **direct token**: only ``app_id`` is configured and it is used as the bearer
  credential for the GraphQL probe.  No redirect, no code exchange.
- **redirect OAuth**: a relay (``relay_base_url``) is configured.  ``login()``
  suspends the flow by returning the GitHub authorization URL; the flow is
  resumed by handing the callback back to ``load(location=...)`` or
  ``complete_authorization()``, which exchanges the code for a token through
  ``GET {relay}/authenticate/{code}``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any, NoReturn
from urllib.parse import quote

import httpx
from pydantic import ConfigDict, ValidationError

from social_login.models import LoginBaseModel

from ..contracts import AdapterError, AdapterErrorType, LoginAdapter
from ..http import create_http_client
from ..models import (
    AdapterMode,
    AuthorizationRedirect,
    CanonicalUser,
    GitHubLoginConfigModel,
    SessionState,
    TokenInfo,
    UserProfile,
    ViewerResponse,
)
from ..url_utils import (
    CALLBACK_PARAM,
    build_authorize_url,
    build_callback_url,
    compute_state_token,
    get_query_string_value,
)

logger = logging.getLogger(__name__)

VIEWER_QUERY = "query { viewer { id, name, email, avatarUrl } }"


class _RelayTokenResponse(LoginBaseModel):
    """Body returned by the code-exchange relay (successful or error)."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    token: str | None = None
    error: Any = None


class GitHubLoginAdapter(LoginAdapter):
    """GitHub implementation of the ``load/login/check_login/generate_user`` contract.

    Each instance owns its session state, so several adapters (or tests) can
    coexist in one process.  ``navigator`` is called with the authorization URL
    when ``login()`` needs the user to authorize on GitHub, e.g.
    ``webbrowser.open``.
    """

    provider_name = "github"

    def __init__(self, navigator: Callable[[str], Any] | None = None):
        self._state = SessionState()
        self._navigator = navigator

    # ── state accessors ─────────────────────────────────────────────────────
    @property
    def config(self) -> GitHubLoginConfigModel | None:
        return self._state.config

    @property
    def mode(self) -> AdapterMode | None:
        return self._state.mode

    @property
    def access_token(self) -> str | None:
        return self._state.access_token

    @property
    def authorization_url(self) -> str | None:
        return self._state.authorization_url

    @property
    def state_token(self) -> str | None:
        return self._state.state_token

    # ── LoginAdapter interface ──────────────────────────────────────────────
    async def load(
        self,
        config: GitHubLoginConfigModel | Mapping[str, Any],
        *,
        location: str | Mapping[str, Any] | None = None,
    ) -> str | None:
        """Validate ``config`` and resume a pending callback found in ``location``.

        Returns the access token when ``location`` carries a GitHub callback,
        otherwise ``None``.
        """
        if self._state.config is not None:
            self._fail("load", "Adapter is already loaded")

        try:
            if isinstance(config, GitHubLoginConfigModel):
                cfg = config
            else:
                cfg = GitHubLoginConfigModel.model_validate(config)
        except ValidationError as exc:
            missing_app_id = any(
                err["loc"][:1] in (("app_id",), ("appId",)) for err in exc.errors()
            )
            description = (
                "Cannot load adapter without app_id"
                if missing_app_id
                else "Invalid adapter configuration"
            )
            logger.warning(
                "GitHub adapter configuration rejected",
                extra={"provider": self.provider_name, "error_count": exc.error_count()},
            )
            raise AdapterError(self.provider_name, "load", description, exc) from exc

        mode = cfg.mode
        if mode is AdapterMode.DIRECT_TOKEN:
            self._state.config = cfg
            self._state.mode = mode
            logger.info(
                "GitHub adapter loaded",
                extra={"provider": self.provider_name, "mode": mode.value},
            )
            return None

        assert cfg.redirect_uri is not None
        callback_url = build_callback_url(cfg.redirect_uri, self.provider_name)
        state_token = compute_state_token(cfg.redirect_uri)
        self._state.config = cfg
        self._state.mode = mode
        self._state.state_token = state_token
        self._state.authorization_url = build_authorize_url(
            oauth_host=cfg.oauth_host,
            client_id=cfg.app_id,
            callback_url=callback_url,
            scope=cfg.scope,
            state=state_token,
        )
        logger.info(
            "GitHub adapter loaded",
            extra={"provider": self.provider_name, "mode": mode.value},
        )

        if get_query_string_value(location, CALLBACK_PARAM) != self.provider_name:
            return None

        logger.debug("GitHub authorization callback detected")
        return await self.complete_authorization(
            code=get_query_string_value(location, "code"),
            state=get_query_string_value(location, "state"),
        )

    async def complete_authorization(self, code: str | None, state: str | None = None) -> str:
        """Resume the redirect flow with the callback's ``code`` (and ``state``).

        Exchanges the code through the relay, records the resulting token and
        returns it.
        """
        self._require_config()
        if self._state.mode is not AdapterMode.REDIRECT_OAUTH:
            self._fail("access_token", "OAuth redirect flow is not configured")
        if not code:
            self._fail("access_token", "Authorization code not found")
        if state is not None and state != self._state.state_token:
            logger.warning(
                "GitHub callback state mismatch",
                extra={"provider": self.provider_name, "endpoint": "callback"},
            )
            self._fail("access_token", "State mismatch")

        token = await self._get_access_token(code)
        self._state.access_token = token
        return token

    async def check_login(
        self, auto_login: bool = False
    ) -> ViewerResponse | AuthorizationRedirect:
        """Confirm the cached credential by querying the GraphQL ``viewer``."""
        if auto_login:
            return await self.login()

        cfg = self._require_config()
        if self._state.mode is AdapterMode.REDIRECT_OAUTH and not self._state.access_token:
            self._fail("access_token", "No access token available")

        bearer = self._state.access_token or cfg.app_id
        try:
            async with create_http_client(timeout=cfg.timeout) as client:
                resp = await client.post(
                    cfg.graphql_url,
                    headers={"Authorization": f"Bearer {bearer}"},
                    json={"query": VIEWER_QUERY},
                )
        except httpx.RequestError as exc:
            logger.warning(
                "GitHub GraphQL request failed",
                extra={
                    "provider": self.provider_name,
                    "endpoint": "graphql",
                    "error_type": exc.__class__.__name__,
                },
            )
            raise AdapterError(
                self.provider_name,
                "check_login",
                "Failed to fetch user data due to transport error",
            ) from exc

        try:
            payload = resp.json()
        except ValueError as exc:
            logger.warning(
                "GitHub GraphQL endpoint returned invalid JSON",
                extra={
                    "provider": self.provider_name,
                    "endpoint": "graphql",
                    "status_code": resp.status_code,
                },
            )
            raise AdapterError(
                self.provider_name,
                "check_login",
                "Failed to fetch user data due to transport error",
            ) from exc

        return self._parse_viewer_response(payload, status_code=resp.status_code)

    async def login(self) -> ViewerResponse | AuthorizationRedirect:
        """Return the current session, or suspend for authorization on GitHub.

        In direct-token mode a failed probe is re-raised unchanged.  In redirect
        mode the authorization URL is passed to ``navigator`` (if any) and an
        :class:`AuthorizationRedirect` is returned instead of an error.
        """
        try:
            return await self.check_login()
        except AdapterError:
            if self._state.mode is not AdapterMode.REDIRECT_OAUTH:
                raise

        assert self._state.authorization_url is not None
        assert self._state.state_token is not None
        redirect = AuthorizationRedirect(
            url=self._state.authorization_url, state=self._state.state_token
        )
        logger.info(
            "GitHub authorization required, redirecting",
            extra={"provider": self.provider_name, "endpoint": "authorize"},
        )
        if self._navigator is not None:
            self._navigator(redirect.url)
        return redirect

    def generate_user(self, response: ViewerResponse | Mapping[str, Any]) -> CanonicalUser:
        """Map a successful probe response to the host's canonical user."""
        cfg = self._require_config()
        if not isinstance(response, ViewerResponse):
            response = ViewerResponse.model_validate(response)
        viewer = response.viewer

        # GitHub exposes a single display name
        return CanonicalUser(
            profile=UserProfile(
                id=viewer.id,
                name=viewer.name,
                first_name=viewer.name,
                last_name=viewer.name,
                email=viewer.email,
                profile_pic_url=viewer.avatar_url,
            ),
            token=TokenInfo(access_token=self._state.access_token or cfg.app_id),
        )

    # ── helpers ─────────────────────────────────────────────────────────────
    def _fail(
        self, type: AdapterErrorType, description: str, cause: Any = None
    ) -> NoReturn:
        raise AdapterError(self.provider_name, type, description, cause)

    def _require_config(self) -> GitHubLoginConfigModel:
        if self._state.config is None:
            self._fail("load", "Adapter has not been loaded")
        return self._state.config

    async def _get_access_token(self, code: str) -> str:
        cfg = self._require_config()
        assert cfg.relay_base_url is not None
        url = f"{cfg.relay_base_url.rstrip('/')}/authenticate/{quote(code, safe='')}"

        try:
            async with create_http_client(timeout=cfg.timeout) as client:
                resp = await client.get(url, headers={"Accept": "application/json"})
        except httpx.RequestError as exc:
            logger.warning(
                "Relay token request failed",
                extra={
                    "provider": self.provider_name,
                    "endpoint": "relay",
                    "error_type": exc.__class__.__name__,
                },
            )
            raise AdapterError(
                self.provider_name,
                "access_token",
                "Failed to fetch access token due to transport error",
                exc,
            ) from exc

        try:
            payload = resp.json()
        except ValueError as exc:
            logger.warning(
                "Relay returned invalid JSON",
                extra={
                    "provider": self.provider_name,
                    "endpoint": "relay",
                    "status_code": resp.status_code,
                },
            )
            raise AdapterError(
                self.provider_name,
                "access_token",
                "Failed to fetch access token due to transport error",
                exc,
            ) from exc

        if not isinstance(payload, dict):
            self._fail("access_token", "Got error from fetch access token", payload)

        try:
            body = _RelayTokenResponse.model_validate(payload)
        except ValidationError as exc:
            raise AdapterError(
                self.provider_name, "access_token", "Got error from fetch access token", payload
            ) from exc

        if body.error or not body.token:
            logger.warning(
                "Relay returned an error instead of a token",
                extra={
                    "provider": self.provider_name,
                    "endpoint": "relay",
                    "status_code": resp.status_code,
                },
            )
            self._fail("access_token", "Got error from fetch access token", payload)

        logger.info("GitHub access token obtained", extra={"provider": self.provider_name})
        return body.token

    def _parse_viewer_response(self, payload: Any, *, status_code: int) -> ViewerResponse:
        if not isinstance(payload, dict) or payload.get("message") or payload.get("errors"):
            logger.warning(
                "GitHub GraphQL endpoint returned an error payload",
                extra={
                    "provider": self.provider_name,
                    "endpoint": "graphql",
                    "status_code": status_code,
                },
            )
            self._fail("check_login", "Failed to fetch user data", payload)

        try:
            return ViewerResponse.model_validate(payload)
        except ValidationError as exc:
            raise AdapterError(
                self.provider_name, "check_login", "Failed to fetch user data", payload
            ) from exc
