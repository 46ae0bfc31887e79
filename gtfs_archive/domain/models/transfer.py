from __future__ import annotations

import weakref
from dataclasses import dataclass
from typing import Any, Mapping

from ._fields import opt_int, text
from .base import GtfsRecord


@dataclass(frozen=True, slots=True)
class Transfer(GtfsRecord):
    """Row of transfers.txt. ``min_transfer_time`` is in seconds."""

    from_stop_id: str
    to_stop_id: str
    transfer_type: int | None = None
    min_transfer_time: int | None = None
    from_route_id: str = ""
    to_route_id: str = ""
    from_trip_id: str = ""
    to_trip_id: str = ""

    @classmethod
    def from_row(
        cls, row: Mapping[str, str], archive_ref: weakref.ReferenceType[Any] | None = None
    ) -> Transfer:
        return cls(
            from_stop_id=text(row, "from_stop_id"),
            to_stop_id=text(row, "to_stop_id"),
            transfer_type=opt_int(row, "transfer_type"),
            min_transfer_time=opt_int(row, "min_transfer_time"),
            from_route_id=text(row, "from_route_id"),
            to_route_id=text(row, "to_route_id"),
            from_trip_id=text(row, "from_trip_id"),
            to_trip_id=text(row, "to_trip_id"),
            archive_ref=archive_ref,
        )
