"""HTTP client factory shared by provider adapters.

Adapters open one client per request through :func:`create_http_client`;
tests replace it with a fake async client.
"""

from __future__ import annotations

import httpx

DEFAULT_TIMEOUT = 30.0


def create_http_client(timeout: float | httpx.Timeout | None = None) -> httpx.AsyncClient:
    """Create an ``httpx.AsyncClient`` with the package defaults.

    Redirects are followed and a 30 second timeout applies unless ``timeout``
    is given.
    """
    return httpx.AsyncClient(
        follow_redirects=True,
        timeout=httpx.Timeout(DEFAULT_TIMEOUT if timeout is None else timeout),
    )
