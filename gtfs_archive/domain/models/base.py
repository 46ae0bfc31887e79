from __future__ import annotations

import weakref
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Mapping

if TYPE_CHECKING:
    from gtfs_archive.app.services.gtfs_archive import GtfsArchive


@dataclass(frozen=True, slots=True)
class GtfsRecord:
    """Common base for every typed feed record.

    ``archive_ref`` is a weak reference to the archive the row was read from.
    It does not keep the archive alive and takes no part in equality.
    """

    archive_ref: weakref.ReferenceType[Any] | None = field(
        default=None, kw_only=True, compare=False, repr=False
    )

    @property
    def archive(self) -> GtfsArchive | None:
        if self.archive_ref is None:
            return None
        return self.archive_ref()

    @classmethod
    def from_row(
        cls, row: Mapping[str, str], archive_ref: weakref.ReferenceType[Any] | None = None
    ) -> GtfsRecord:
        raise NotImplementedError
