"""Contracts and shared types for social login provider adapters."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal, Protocol, runtime_checkable

AdapterErrorType = Literal["load", "access_token", "check_login"]


class AdapterError(Exception):
    """Standardized adapter error reported to the host aggregator.

    ``type`` says which stage failed: ``load`` (bad configuration),
    ``access_token`` (code exchange or missing cached token) or
    ``check_login`` (profile probe).  ``cause`` carries the provider payload or
    transport error when one is available.
    """

    def __init__(
        self,
        provider: str,
        type: AdapterErrorType,
        description: str,
        cause: Any = None,
    ):
        super().__init__(description)
        self.provider = provider
        self.type = type
        self.description = description
        self.cause = cause

    def __repr__(self) -> str:
        return (
            f"AdapterError(provider={self.provider!r}, type={self.type!r}, "
            f"description={self.description!r})"
        )

    def to_dict(self) -> dict[str, Any]:
        cause = self.cause
        if isinstance(cause, BaseException):
            cause = f"{cause.__class__.__name__}: {cause}"
        return {
            "provider": self.provider,
            "type": self.type,
            "description": self.description,
            "error": cause,
        }


@runtime_checkable
class LoginAdapter(Protocol):
    """Interface every social login adapter exposes to the host aggregator."""

    provider_name: str

    async def load(
        self, config: Any, *, location: str | Mapping[str, Any] | None = None
    ) -> str | None:
        """Validate configuration and resume a pending authorization callback."""

    async def login(self) -> Any:
        """Return the current session, or start the interactive login flow."""

    async def check_login(self, auto_login: bool = False) -> Any:
        """Probe the provider to confirm the cached credential."""

    def generate_user(self, response: Any) -> Any:
        """Normalize a successful probe response into a canonical user."""


__all__ = [
    "AdapterError",
    "AdapterErrorType",
    "LoginAdapter",
]
