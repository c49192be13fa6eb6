"""Tests for client construction and settings."""

import httpx
import pytest

from celine.emqx import (
    EmqxClient,
    EmqxConfigError,
    EmqxSettings,
    JsonCodec,
    build_client,
    client_from_settings,
)


@pytest.mark.parametrize("base_url", [None, "", "   ", "\t\n"])
def test_build_client_requires_base_url(base_url):
    with pytest.raises(EmqxConfigError) as e:
        build_client(base_url)
    assert "base_url" in str(e.value)


def test_config_error_is_a_value_error():
    with pytest.raises(ValueError):
        build_client("")


def test_builder_without_base_url_fails_before_any_request():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200)

    builder = EmqxClient.builder().with_bearer_auth("t").with_transport(
        httpx.MockTransport(handler)
    )

    with pytest.raises(EmqxConfigError):
        builder.build()
    assert calls == []


def test_builder_builds_client(base_url):
    with EmqxClient.builder().with_base_url(base_url).build() as client:
        assert isinstance(client, EmqxClient)
        assert client.base_url == base_url
        assert isinstance(client.codec, JsonCodec)


def test_base_url_kept_verbatim():
    with build_client(" http://broker:18083/api/v5") as client:
        assert client.base_url == " http://broker:18083/api/v5"


def test_custom_codec_is_used(make_client):
    class RecordingCodec(JsonCodec):
        def __init__(self):
            super().__init__()
            self.decoded = []

        def decode(self, data, type_):
            self.decoded.append(type_)
            return super().decode(data, type_)

    codec = RecordingCodec()
    client = make_client(json=[], codec=codec)

    client.list_nodes()

    assert client.codec is codec
    assert len(codec.decoded) == 1


def test_timeout_configures_transport():
    with build_client("http://broker/api/v5", timeout=2.5) as client:
        assert client._http.timeout == httpx.Timeout(2.5)


def test_default_timeout_is_httpx_default():
    with build_client("http://broker/api/v5") as client:
        assert client._http.timeout == httpx.Timeout(5.0)


def _settings(**kwargs) -> EmqxSettings:
    return EmqxSettings(_env_file=None, **kwargs)


def _capture(seen):
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[])

    return httpx.MockTransport(handler)


def test_client_from_settings_basic(base_url, seen_requests, monkeypatch):
    monkeypatch.delenv("CELINE_EMQX_TOKEN", raising=False)
    settings = _settings(base_url=base_url, api_key="k", api_secret="s")

    with client_from_settings(settings, transport=_capture(seen_requests)) as client:
        client.list_nodes()

    assert seen_requests[0].headers["Authorization"] == "Basic azpz"


def test_client_from_settings_token_wins(base_url, seen_requests):
    settings = _settings(base_url=base_url, api_key="k", api_secret="s", token="t")

    with client_from_settings(settings, transport=_capture(seen_requests)) as client:
        client.list_nodes()

    assert seen_requests[0].headers["Authorization"] == "Bearer t"


def test_client_from_settings_requires_base_url(monkeypatch):
    monkeypatch.delenv("CELINE_EMQX_BASE_URL", raising=False)
    with pytest.raises(EmqxConfigError):
        client_from_settings(_settings())


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("CELINE_EMQX_BASE_URL", "http://emqx:18083/api/v5")
    monkeypatch.setenv("CELINE_EMQX_API_KEY", "key")
    monkeypatch.setenv("CELINE_EMQX_API_SECRET", "secret")
    monkeypatch.setenv("CELINE_EMQX_TIMEOUT", "5")

    settings = _settings()

    assert settings.base_url == "http://emqx:18083/api/v5"
    assert settings.has_basic_credentials
    assert settings.timeout == 5.0


def test_settings_with_overrides_keeps_unset_values():
    settings = _settings(base_url="http://a/api/v5", api_key="k", api_secret="s")

    updated = settings.with_overrides(base_url="http://b/api/v5", token="t")

    assert updated.base_url == "http://b/api/v5"
    assert updated.api_key == "k"
    assert updated.token == "t"
    # Original is untouched
    assert settings.base_url == "http://a/api/v5"
    assert settings.token is None
