"""Pytest configuration and fixtures."""

from typing import Any, Callable

import httpx
import pytest

from celine.emqx import EmqxClient, build_client

BASE_URL = "http://localhost:18083/api/v5"


@pytest.fixture
def base_url() -> str:
    """EMQX API base URL used by the fake broker."""
    return BASE_URL


@pytest.fixture
def seen_requests() -> list[httpx.Request]:
    """Requests received by the fake broker, in order."""
    return []


@pytest.fixture
def make_client(base_url, seen_requests):
    """Factory for clients talking to an in-memory fake broker.

    Either pass a ``handler`` taking an ``httpx.Request``, or a canned
    ``status_code`` and ``json`` body returned for every request.
    """
    created: list[EmqxClient] = []

    def _make(
        status_code: int = 200,
        json: Any = None,
        handler: Callable[[httpx.Request], httpx.Response] | None = None,
        **kwargs: Any,
    ) -> EmqxClient:
        def canned(request: httpx.Request) -> httpx.Response:
            if json is None:
                return httpx.Response(status_code)
            return httpx.Response(status_code, json=json)

        def recording(request: httpx.Request) -> httpx.Response:
            seen_requests.append(request)
            return (handler or canned)(request)

        client = build_client(
            kwargs.pop("url", base_url),
            transport=httpx.MockTransport(recording),
            **kwargs,
        )
        created.append(client)
        return client

    yield _make

    for client in created:
        client.close()


@pytest.fixture
def sample_client_info() -> dict:
    """A connected client as returned by EMQX 5."""
    return {
        "clientid": "sensor-01",
        "username": "alice",
        "node": "emqx@127.0.0.1",
        "connected": True,
        "proto_ver": 5,
        "ip_address": "10.0.0.12",
        "port": 53012,
        "keepalive": 60,
        "subscriptions_cnt": 2,
    }


@pytest.fixture
def sample_node_info() -> dict:
    """A cluster node as returned by EMQX 5."""
    return {
        "node": "emqx@127.0.0.1",
        "node_status": "running",
        "version": "5.8.0",
        "uptime": 3600000,
        "connections": 12,
        "role": "core",
    }
