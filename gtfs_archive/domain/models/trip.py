from __future__ import annotations

import weakref
from dataclasses import dataclass
from typing import Any, Mapping

from ._fields import opt_int, text
from .base import GtfsRecord


@dataclass(frozen=True, slots=True)
class Trip(GtfsRecord):
    """Row of trips.txt."""

    route_id: str
    service_id: str
    trip_id: str
    trip_headsign: str = ""
    trip_short_name: str = ""
    direction_id: int | None = None
    block_id: str = ""
    shape_id: str = ""
    wheelchair_accessible: int | None = None
    bikes_allowed: int | None = None

    @classmethod
    def from_row(
        cls, row: Mapping[str, str], archive_ref: weakref.ReferenceType[Any] | None = None
    ) -> Trip:
        return cls(
            route_id=text(row, "route_id"),
            service_id=text(row, "service_id"),
            trip_id=text(row, "trip_id"),
            trip_headsign=text(row, "trip_headsign"),
            trip_short_name=text(row, "trip_short_name"),
            direction_id=opt_int(row, "direction_id"),
            block_id=text(row, "block_id"),
            shape_id=text(row, "shape_id"),
            wheelchair_accessible=opt_int(row, "wheelchair_accessible"),
            bikes_allowed=opt_int(row, "bikes_allowed"),
            archive_ref=archive_ref,
        )
