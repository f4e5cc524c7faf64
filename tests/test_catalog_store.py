"""Tests for the catalog fetch lifecycle."""

import asyncio
from typing import List

import pytest

from catalog_store import CatalogEntry, CatalogStore, Failed, Idle, Loading, Succeeded, TagStore
from registry_client import FetchError, HttpStatusError

from support import REGISTRY


class GatedClient:
    """Registry client whose fetches wait until the test releases them"""

    def __init__(self, result=None, error: Exception = None):
        self.result = result if result is not None else []
        self.error = error
        self.gate = asyncio.Event()
        self.calls: List[tuple] = []

    async def _answer(self):
        await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.result

    async def fetch_catalog(self, registry_url: str):
        self.calls.append(("catalog", registry_url))
        return await self._answer()

    async def fetch_tags(self, registry_url: str, repository: str):
        self.calls.append(("tags", registry_url, repository))
        return await self._answer()


def test_new_store_is_idle() -> None:
    store = CatalogStore()
    assert store.current_status() == Idle()
    assert store.entries() == []
    assert not store.is_discarded


@pytest.mark.asyncio
async def test_fetch_succeeds() -> None:
    client = GatedClient(result=["mysql", "redis"])
    store = CatalogStore()
    seen = []
    store.subscribe(seen.append)

    task = store.begin_fetch_if_idle(client, REGISTRY)
    assert store.current_status() == Loading()

    client.gate.set()
    await task

    assert store.current_status() == Succeeded(("mysql", "redis"))
    assert store.entries() == [CatalogEntry("mysql"), CatalogEntry("redis")]
    assert seen == [Loading(), Succeeded(("mysql", "redis"))]
    assert client.calls == [("catalog", REGISTRY)]


@pytest.mark.asyncio
async def test_second_begin_does_not_fetch_again() -> None:
    client = GatedClient(result=["alpine"])
    store = CatalogStore()

    task = store.begin_fetch_if_idle(client, REGISTRY)
    assert store.begin_fetch_if_idle(client, REGISTRY) is None

    client.gate.set()
    await task
    assert store.begin_fetch_if_idle(client, REGISTRY) is None
    assert len(client.calls) == 1


@pytest.mark.asyncio
async def test_fetch_fails() -> None:
    error = HttpStatusError(500, f"{REGISTRY}/v2/_catalog")
    client = GatedClient(error=error)
    store = CatalogStore()

    task = store.begin_fetch_if_idle(client, REGISTRY)
    client.gate.set()
    await task

    assert store.current_status() == Failed(error.message)
    assert store.entries() == []

    # Failed is terminal; a new attempt needs a new store
    assert store.begin_fetch_if_idle(client, REGISTRY) is None
    assert len(client.calls) == 1


@pytest.mark.asyncio
async def test_unexpected_error_becomes_failure() -> None:
    client = GatedClient(error=KeyError("boom"))
    store = CatalogStore()

    task = store.begin_fetch_if_idle(client, REGISTRY)
    client.gate.set()
    await task

    status = store.current_status()
    assert isinstance(status, Failed)
    assert status.message.startswith("Unexpected error")


@pytest.mark.asyncio
async def test_discard_drops_late_result() -> None:
    client = GatedClient(result=["redis"])
    store = CatalogStore()
    seen = []
    store.subscribe(seen.append)

    task = store.begin_fetch_if_idle(client, REGISTRY)
    store.discard()
    client.gate.set()
    await task

    assert store.is_discarded
    assert store.current_status() == Loading()
    assert seen == [Loading()]
    assert store.begin_fetch_if_idle(client, REGISTRY) is None


@pytest.mark.asyncio
async def test_cancelled_fetch() -> None:
    client = GatedClient(result=["redis"])
    store = CatalogStore()

    task = store.begin_fetch_if_idle(client, REGISTRY)
    await asyncio.sleep(0)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    assert store.current_status() == Loading()


def test_result_outside_loading_is_ignored() -> None:
    store = CatalogStore()
    assert store.on_fetch_resolved(["redis"]) is False
    assert store.current_status() == Idle()


def test_stale_generation_is_ignored() -> None:
    started = []

    def spawn(coroutine):
        coroutine.close()
        started.append(coroutine)
        return "worker"

    store = CatalogStore(spawn=spawn)
    assert store.begin_fetch_if_idle(GatedClient(), REGISTRY) == "worker"
    assert len(started) == 1

    assert store.on_fetch_resolved(["redis"], generation=7) is False
    assert store.current_status() == Loading()

    assert store.on_fetch_resolved(["redis"], generation=0) is True
    assert store.current_status() == Succeeded(("redis",))

    # A settled store keeps its outcome
    assert store.on_fetch_resolved(FetchError("late")) is False
    assert store.current_status() == Succeeded(("redis",))


def test_unsubscribe() -> None:
    store = CatalogStore(spawn=lambda coroutine: coroutine.close())
    seen = []
    unsubscribe = store.subscribe(seen.append)
    unsubscribe()
    unsubscribe()

    store.begin_fetch_if_idle(GatedClient(), REGISTRY)
    assert seen == []


@pytest.mark.asyncio
async def test_tag_store() -> None:
    client = GatedClient(result=["latest", "7.2"])
    store = TagStore("library/redis")
    assert store.tags() == []

    task = store.begin_fetch_if_idle(client, REGISTRY)
    client.gate.set()
    await task

    assert client.calls == [("tags", REGISTRY, "library/redis")]
    assert store.current_status() == Succeeded(("latest", "7.2"))
    assert store.tags() == ["latest", "7.2"]
