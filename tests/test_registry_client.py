"""Tests for the registry HTTP client."""

import asyncio
import base64

import httpx
import pytest
import respx

from mock_data import MOCK_PUBLIC_REGISTRY, mock_registry
from registry_client import (
    API_CALL_LOG_LIMIT,
    DecodeError,
    FetchError,
    HttpStatusError,
    RegistryManager,
    TransportError,
    sort_tags_by_timestamp,
)

from support import REGISTRY


@pytest.mark.asyncio
async def test_catalog_keeps_server_order(manager: RegistryManager, respx_mock: respx.Router) -> None:
    respx_mock.get(f"{REGISTRY}/v2/_catalog").respond(
        json={"repositories": ["redis", "mysql", "alpine"]}
    )
    assert await manager.fetch_catalog(REGISTRY) == ["redis", "mysql", "alpine"]


@pytest.mark.asyncio
async def test_catalog_empty(manager: RegistryManager, respx_mock: respx.Router) -> None:
    respx_mock.get(f"{REGISTRY}/v2/_catalog").respond(json={"repositories": []})
    assert await manager.fetch_catalog(REGISTRY) == []


@pytest.mark.asyncio
async def test_catalog_trailing_slash(manager: RegistryManager, respx_mock: respx.Router) -> None:
    route = respx_mock.get(f"{REGISTRY}/v2/_catalog").respond(json={"repositories": ["busybox"]})
    assert await manager.fetch_catalog(REGISTRY + "/") == ["busybox"]
    assert route.called


@pytest.mark.asyncio
async def test_catalog_not_found(manager: RegistryManager, respx_mock: respx.Router) -> None:
    respx_mock.get(f"{REGISTRY}/v2/_catalog").respond(404, json={"errors": []})
    with pytest.raises(HttpStatusError) as excinfo:
        await manager.fetch_catalog(REGISTRY)
    assert excinfo.value.status_code == 404
    assert "catalog not found" in excinfo.value.message


@pytest.mark.asyncio
async def test_catalog_server_error(manager: RegistryManager, respx_mock: respx.Router) -> None:
    # A 500 with a perfectly good body is still a failure
    respx_mock.get(f"{REGISTRY}/v2/_catalog").respond(500, json={"repositories": ["redis"]})
    with pytest.raises(HttpStatusError) as excinfo:
        await manager.fetch_catalog(REGISTRY)
    assert excinfo.value.status_code == 500
    assert "500" in str(excinfo.value)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "kwargs",
    [
        {"text": "not json"},
        {"json": ["redis"]},
        {"json": {"repos": ["redis"]}},
        {"json": {"repositories": "redis"}},
        {"json": {"repositories": ["redis", 3]}},
        {"json": {"repositories": None}},
    ],
)
async def test_catalog_malformed(manager: RegistryManager, respx_mock: respx.Router, kwargs) -> None:
    respx_mock.get(f"{REGISTRY}/v2/_catalog").respond(200, **kwargs)
    with pytest.raises(DecodeError):
        await manager.fetch_catalog(REGISTRY)


@pytest.mark.asyncio
async def test_connection_error(manager: RegistryManager, respx_mock: respx.Router) -> None:
    respx_mock.get(f"{REGISTRY}/v2/_catalog").mock(side_effect=httpx.ConnectError)
    with pytest.raises(TransportError):
        await manager.fetch_catalog(REGISTRY)

    call = manager.api_call_log[-1]
    assert call["status_code"] == 0
    assert call["url"] == f"{REGISTRY}/v2/_catalog"


@pytest.mark.asyncio
async def test_invalid_url(manager: RegistryManager) -> None:
    with pytest.raises(TransportError):
        await manager.fetch_catalog("not-a-registry")


@pytest.mark.asyncio
async def test_total_timeout() -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(5)
        return httpx.Response(200, json={"repositories": []})

    manager = RegistryManager(timeout=0.05, transport=httpx.MockTransport(handler))
    with pytest.raises(TransportError) as excinfo:
        await manager.fetch_catalog(REGISTRY)
    assert "Timed out" in excinfo.value.message


@pytest.mark.asyncio
async def test_every_failure_is_a_fetch_error(manager: RegistryManager, respx_mock: respx.Router) -> None:
    respx_mock.get(f"{REGISTRY}/v2/_catalog").respond(503)
    with pytest.raises(FetchError):
        await manager.fetch_catalog(REGISTRY)


@pytest.mark.asyncio
async def test_bearer_challenge(manager: RegistryManager, respx_mock: respx.Router) -> None:
    challenge = (
        'Bearer realm="https://auth.example.com/token",'
        'service="registry.example.com",scope="registry:catalog:*"'
    )
    respx_mock.get(
        f"{REGISTRY}/v2/_catalog", headers={"Authorization": "Bearer some-token"}
    ).respond(json={"repositories": ["private/app"]})
    respx_mock.get(f"{REGISTRY}/v2/_catalog").respond(
        401, headers={"WWW-Authenticate": challenge}
    )
    token_route = respx_mock.get(host="auth.example.com", path="/token").respond(
        json={"token": "some-token"}
    )

    assert await manager.fetch_catalog(REGISTRY) == ["private/app"]
    request = token_route.calls.last.request
    assert request.url.params["service"] == "registry.example.com"
    assert request.url.params["scope"] == "registry:catalog:*"
    assert manager.api_call_log[-1]["status_code"] == 200


@pytest.mark.asyncio
async def test_bearer_challenge_rejected(manager: RegistryManager, respx_mock: respx.Router) -> None:
    respx_mock.get(f"{REGISTRY}/v2/_catalog").respond(
        401, headers={"WWW-Authenticate": 'Bearer realm="https://auth.example.com/token"'}
    )
    respx_mock.get(host="auth.example.com", path="/token").respond(403)

    with pytest.raises(HttpStatusError) as excinfo:
        await manager.fetch_catalog(REGISTRY)
    assert excinfo.value.status_code == 401
    assert "Authentication required" in excinfo.value.message


@pytest.mark.asyncio
async def test_basic_auth(manager: RegistryManager, respx_mock: respx.Router) -> None:
    credentials = base64.b64encode(b"user:secret").decode()
    respx_mock.get(
        f"{REGISTRY}/v2/_catalog", headers={"Authorization": f"Basic {credentials}"}
    ).respond(json={"repositories": ["team/api"]})

    manager.set_registry_config(REGISTRY, username="user", password="secret", auth_type="basic")
    assert await manager.fetch_catalog(REGISTRY) == ["team/api"]


@pytest.mark.asyncio
async def test_tags(manager: RegistryManager, respx_mock: respx.Router) -> None:
    respx_mock.get(f"{REGISTRY}/v2/library/redis/tags/list").respond(
        json={"name": "library/redis", "tags": ["latest", "7.2", "Alpine"]}
    )
    tags = await manager.fetch_tags(REGISTRY, "library/redis")
    assert tags == ["7.2", "Alpine", "latest"]


@pytest.mark.asyncio
async def test_tags_null(manager: RegistryManager, respx_mock: respx.Router) -> None:
    respx_mock.get(f"{REGISTRY}/v2/redis/tags/list").respond(json={"name": "redis", "tags": None})
    assert await manager.fetch_tags(REGISTRY, "redis") == []


def test_sort_tags_by_timestamp() -> None:
    manifest = {
        "sha256:a": {"tag": ["old"], "timeUploadedMs": "1000", "timeCreatedMs": "0"},
        "sha256:b": {"tag": ["new"], "timeUploadedMs": "0", "timeCreatedMs": "5000"},
    }
    assert sort_tags_by_timestamp(["old", "new", "untracked"], manifest) == ["new", "old", "untracked"]
    assert sort_tags_by_timestamp(["b", "A"]) == ["A", "b"]


@pytest.mark.asyncio
async def test_api_call_log(manager: RegistryManager, respx_mock: respx.Router) -> None:
    respx_mock.get(f"{REGISTRY}/v2/_catalog").respond(
        json={"repositories": ["redis"]}, headers={"Set-Cookie": "session=abc"}
    )
    await manager.fetch_catalog(REGISTRY)

    call = manager.api_call_log[-1]
    assert call["method"] == "GET"
    assert call["status_code"] == 200
    assert "redis" in call["content_preview"]
    assert "set-cookie" not in {key.lower() for key in call["headers"]}


def test_api_call_log_is_bounded() -> None:
    manager = RegistryManager()
    for i in range(API_CALL_LOG_LIMIT + 5):
        manager.add_api_call({"url": f"{REGISTRY}/v2/_catalog", "index": i})
    assert len(manager.api_call_log) == API_CALL_LOG_LIMIT
    assert manager.api_call_log[0]["index"] == 5


@pytest.mark.asyncio
async def test_mock_registries(mock_manager: RegistryManager) -> None:
    expected = mock_registry.registries[MOCK_PUBLIC_REGISTRY]["repositories"]
    assert await mock_manager.fetch_catalog(MOCK_PUBLIC_REGISTRY) == expected
    assert await mock_manager.fetch_catalog("http://empty.mock") == []

    with pytest.raises(HttpStatusError):
        await mock_manager.fetch_catalog("http://broken.mock")
    with pytest.raises(DecodeError):
        await mock_manager.fetch_catalog("http://malformed.mock")
    with pytest.raises(HttpStatusError):
        await mock_manager.fetch_tags(MOCK_PUBLIC_REGISTRY, "does-not-exist")

    tags = await mock_manager.fetch_tags(MOCK_PUBLIC_REGISTRY, "arm64v8/redis")
    assert "latest" in tags
    assert "7.2-alpine" in tags


def test_mock_serves_only_catalog_and_tags() -> None:
    request = httpx.Request("GET", f"{MOCK_PUBLIC_REGISTRY}/v2/")
    assert mock_registry.handle_request(request).status_code == 404
