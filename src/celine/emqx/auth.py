"""Authorization header strategies.

A strategy is a request hook of shape ``(httpx.Request) -> None``. The
builder installs at most one of them as the transport's request event hook,
so it runs before every request is sent.
"""

from __future__ import annotations

import base64
from typing import Callable

import httpx

AuthHook = Callable[[httpx.Request], None]


def basic_credentials(api_key: str, api_secret: str) -> str:
    """Build the HTTP Basic header value for ``api_key:api_secret``."""
    # Characters outside latin-1 are sent as "?"
    userpass = f"{api_key}:{api_secret}".encode("latin-1", errors="replace")
    return "Basic " + base64.b64encode(userpass).decode("ascii")


def basic_auth(api_key: str, api_secret: str) -> AuthHook:
    """Authenticate with an EMQX API key and secret."""
    credentials = basic_credentials(api_key, api_secret)

    def hook(request: httpx.Request) -> None:
        request.headers["Authorization"] = credentials

    return hook


def bearer_auth(token: str) -> AuthHook:
    """Authenticate with a bearer token (JWT)."""
    value = f"Bearer {token}"

    def hook(request: httpx.Request) -> None:
        request.headers["Authorization"] = value

    return hook
