from __future__ import annotations

import pytest

from gtfs_archive.app.services.view_cache import DerivedViewCache, ViewKey, ViewKind
from gtfs_archive.domain.files import GtfsFile


def test_get_or_compute_calls_producer_once_per_key() -> None:
    cache = DerivedViewCache()
    calls: list[str] = []

    def producer() -> tuple[str, ...]:
        calls.append("x")
        return ("a", "b")

    key = ViewKey(file=GtfsFile.STOPS, kind=ViewKind.ALL)
    first = cache.get_or_compute(key, producer)
    second = cache.get_or_compute(key, producer)

    assert first is second
    assert calls == ["x"]
    assert cache.misses == 1
    assert cache.hits == 1
    assert key in cache
    assert len(cache) == 1


def test_keys_differ_by_kind_and_field() -> None:
    cache = DerivedViewCache()
    by_stop = ViewKey(file=GtfsFile.STOPS, kind=ViewKind.BY_KEY, field="stop_id")
    by_parent = ViewKey(file=GtfsFile.STOPS, kind=ViewKind.GROUP, field="parent_station")

    cache.get_or_compute(by_stop, lambda: {"S1": 1})
    cache.get_or_compute(by_parent, lambda: {"S1": (1,)})

    assert len(cache) == 2
    assert ViewKey(file=GtfsFile.STOPS, kind=ViewKind.BY_KEY, field="stop_id") in cache


def test_failed_producer_is_not_cached() -> None:
    cache = DerivedViewCache()
    key = ViewKey(file=GtfsFile.SHAPES, kind=ViewKind.ALL)

    def boom() -> tuple[()]:
        raise RuntimeError("read failed")

    with pytest.raises(RuntimeError):
        cache.get_or_compute(key, boom)

    assert key not in cache
    assert cache.get_or_compute(key, lambda: ()) == ()
