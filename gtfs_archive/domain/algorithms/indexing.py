from __future__ import annotations

from typing import Callable, Hashable, Iterable, TypeVar

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)


def index_by(records: Iterable[T], key: Callable[[T], K]) -> dict[K, T]:
    """Map each key to its record in a single pass.

    When several records share a key, the last one in iteration order wins.
    """

    out: dict[K, T] = {}
    for record in records:
        out[key(record)] = record
    return out


def group_by(records: Iterable[T], key: Callable[[T], K]) -> dict[K, tuple[T, ...]]:
    """Group records by key, keeping their original relative order."""

    tmp: dict[K, list[T]] = {}
    for record in records:
        tmp.setdefault(key(record), []).append(record)
    return {k: tuple(v) for k, v in tmp.items()}
