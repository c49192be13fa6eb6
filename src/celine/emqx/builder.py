"""Assembly of :class:`EmqxClient` instances.

Example:
    client = (
        EmqxClient.builder()
        .with_base_url("http://localhost:18083/api/v5")
        .with_basic_auth("key", "secret")
        .build()
    )
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from celine.emqx.auth import AuthHook, basic_auth, bearer_auth
from celine.emqx.client import EmqxClient, EmqxConfigError
from celine.emqx.codec import JsonCodec
from celine.emqx.config import EmqxSettings

logger = logging.getLogger(__name__)


def build_client(
    base_url: str | None,
    *,
    codec: JsonCodec | None = None,
    auth: AuthHook | None = None,
    timeout: float | None = None,
    transport: httpx.BaseTransport | None = None,
) -> EmqxClient:
    """Validate the configuration and create a client.

    Args:
        base_url: API base URL without trailing slash
        codec: JSON codec, defaults to :class:`JsonCodec`
        auth: Request hook adding the Authorization header, if any
        timeout: Request timeout in seconds, httpx default if None
        transport: Custom httpx transport (proxies, tests, ...)

    Raises:
        EmqxConfigError: If base_url is None or blank
    """
    if base_url is None or not base_url.strip():
        raise EmqxConfigError("base_url must be set")

    options: dict[str, Any] = {"follow_redirects": True}
    if auth is not None:
        options["event_hooks"] = {"request": [auth]}
    if timeout is not None:
        options["timeout"] = timeout
    if transport is not None:
        options["transport"] = transport

    logger.debug("Creating EMQX client for %s", base_url)
    return EmqxClient(base_url, httpx.Client(**options), codec or JsonCodec())


@dataclass
class EmqxClientBuilder:
    """Mutable configuration for :func:`build_client`.

    Only one authentication hook is kept: the last ``with_*_auth`` call wins.
    """

    base_url: str | None = None
    codec: JsonCodec | None = None
    auth: AuthHook | None = None
    timeout: float | None = None
    transport: httpx.BaseTransport | None = None

    def with_base_url(self, base_url: str) -> "EmqxClientBuilder":
        """Set the EMQX base URL (e.g. http://localhost:18083/api/v5)."""
        self.base_url = base_url
        return self

    def with_codec(self, codec: JsonCodec) -> "EmqxClientBuilder":
        """Override the default JSON codec."""
        self.codec = codec
        return self

    def with_basic_auth(self, api_key: str, api_secret: str) -> "EmqxClientBuilder":
        """Use HTTP Basic auth with an API key and secret."""
        self.auth = basic_auth(api_key, api_secret)
        return self

    def with_bearer_auth(self, token: str) -> "EmqxClientBuilder":
        """Use bearer token auth."""
        self.auth = bearer_auth(token)
        return self

    def with_timeout(self, timeout: float) -> "EmqxClientBuilder":
        self.timeout = timeout
        return self

    def with_transport(self, transport: httpx.BaseTransport) -> "EmqxClientBuilder":
        self.transport = transport
        return self

    def build(self) -> EmqxClient:
        """Build the client.

        Raises:
            EmqxConfigError: If base_url is not set
        """
        return build_client(
            self.base_url,
            codec=self.codec,
            auth=self.auth,
            timeout=self.timeout,
            transport=self.transport,
        )


def client_from_settings(
    settings: EmqxSettings | None = None,
    transport: httpx.BaseTransport | None = None,
) -> EmqxClient:
    """Build a client from settings (environment variables by default).

    API key credentials are applied before the token, so a configured token
    takes precedence.
    """
    settings = settings or EmqxSettings()
    builder = EmqxClientBuilder(timeout=settings.timeout, transport=transport)
    if settings.base_url:
        builder.with_base_url(settings.base_url)
    if settings.has_basic_credentials:
        builder.with_basic_auth(settings.api_key, settings.api_secret)
    if settings.has_token:
        builder.with_bearer_auth(settings.token)
    return builder.build()
