from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, TypeVar

from gtfs_archive.domain.files import GtfsFile

logger = logging.getLogger(__name__)

V = TypeVar("V")


class ViewKind(str, Enum):
    ALL = "all"
    BY_KEY = "by_key"
    GROUP = "group"


@dataclass(frozen=True, slots=True)
class ViewKey:
    file: GtfsFile
    kind: ViewKind
    field: str | None = None


@dataclass(slots=True)
class DerivedViewCache:
    """Memoizes derived views over an archive's files.

    Each distinct key is computed once and kept for the lifetime of the cache;
    there is no eviction. Not thread-safe.
    """

    _entries: dict[ViewKey, Any] = field(default_factory=dict, init=False, repr=False)
    hits: int = field(default=0, init=False)
    misses: int = field(default=0, init=False)

    def get_or_compute(self, key: ViewKey, producer: Callable[[], V]) -> V:
        try:
            value = self._entries[key]
        except KeyError:
            pass
        else:
            self.hits += 1
            logger.debug("View cache hit: %s", key)
            return value

        self.misses += 1
        value = producer()
        self._entries[key] = value
        return value

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
