"""Tests for route resolution and navigation."""

import pytest

from router import CATALOG_PATH, CatalogList, ImageDetail, Router, path_for, resolve


@pytest.mark.parametrize(
    "path,expected",
    [
        ("/images", CatalogList()),
        ("/images/", CatalogList()),
        ("/images/busybox", ImageDetail("busybox")),
        ("/images/busybox/", ImageDetail("busybox")),
        ("/images/library/redis", ImageDetail("library/redis")),
        ("/images/my%20image", ImageDetail("my image")),
        ("/images/redis?tab=tags", ImageDetail("redis")),
        ("/", CatalogList()),
        ("", CatalogList()),
        ("/somewhere/else", CatalogList()),
        ("/imagesfoo", CatalogList()),
    ],
)
def test_resolve(path: str, expected) -> None:
    assert resolve(path) == expected


def test_resolve_is_stable() -> None:
    assert resolve("/images/busybox") == resolve("/images/busybox")


def test_path_for() -> None:
    assert path_for(CatalogList()) == CATALOG_PATH
    assert path_for(ImageDetail("library/redis")) == "/images/library/redis"
    assert path_for(ImageDetail("my image")) == "/images/my%20image"
    assert resolve(path_for(ImageDetail("my image"))) == ImageDetail("my image")


def test_path_for_names_ending_in_slash() -> None:
    assert path_for(ImageDetail("tools/")) == "/images/tools%2F"
    for name in ("tools/", "/", "team/app//"):
        assert resolve(path_for(ImageDetail(name))) == ImageDetail(name)

    router = Router()
    router.navigate_to(ImageDetail("tools/"))
    assert router.current() == ImageDetail("tools/")


def test_navigate_and_back() -> None:
    router = Router()
    seen = []
    router.subscribe(seen.append)
    assert router.current() == CatalogList()

    router.navigate_to(ImageDetail("redis"))
    assert router.current() == ImageDetail("redis")
    assert router.path == "/images/redis"

    router.navigate_to(ImageDetail("nginx"))
    assert router.back() is True
    assert router.current() == ImageDetail("redis")
    assert router.back() is True
    assert router.current() == CatalogList()
    assert router.back() is False

    assert seen == [ImageDetail("redis"), ImageDetail("nginx"), ImageDetail("redis"), CatalogList()]


def test_navigate_to_current_location() -> None:
    router = Router("/images/redis")
    seen = []
    router.subscribe(seen.append)

    router.navigate_to(ImageDetail("redis"))
    assert seen == []
    assert router.history == []


def test_back_from_deep_link() -> None:
    router = Router("/images/redis/")
    assert router.path == "/images/redis"
    assert router.back() is True
    assert router.current() == CatalogList()


def test_unknown_initial_path() -> None:
    assert Router("/nowhere").path == CATALOG_PATH


def test_unsubscribe() -> None:
    router = Router()
    seen = []
    unsubscribe = router.subscribe(seen.append)
    unsubscribe()
    router.navigate_to(ImageDetail("redis"))
    assert seen == []
