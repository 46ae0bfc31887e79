from __future__ import annotations

import weakref
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Mapping

from ._fields import opt_float, opt_int, text
from .base import GtfsRecord
from .geo import GeoPoint


class LocationType(IntEnum):
    STOP = 0
    STATION = 1
    ENTRANCE = 2
    GENERIC_NODE = 3
    BOARDING_AREA = 4


@dataclass(frozen=True, slots=True)
class Stop(GtfsRecord):
    """Row of stops.txt.

    Coordinates are optional for generic nodes and boarding areas, so both
    ``stop_lat`` and ``stop_lon`` may be None.
    """

    stop_id: str
    stop_code: str = ""
    stop_name: str = ""
    stop_desc: str = ""
    stop_lat: float | None = None
    stop_lon: float | None = None
    zone_id: str = ""
    stop_url: str = ""
    location_type: int | None = None
    parent_station: str = ""
    stop_timezone: str = ""
    wheelchair_boarding: int | None = None
    level_id: str = ""
    platform_code: str = ""

    @property
    def location(self) -> GeoPoint | None:
        return GeoPoint.maybe(self.stop_lat, self.stop_lon)

    @property
    def is_station(self) -> bool:
        return self.location_type == LocationType.STATION

    @classmethod
    def from_row(
        cls, row: Mapping[str, str], archive_ref: weakref.ReferenceType[Any] | None = None
    ) -> Stop:
        return cls(
            stop_id=text(row, "stop_id"),
            stop_code=text(row, "stop_code"),
            stop_name=text(row, "stop_name"),
            stop_desc=text(row, "stop_desc"),
            stop_lat=opt_float(row, "stop_lat"),
            stop_lon=opt_float(row, "stop_lon"),
            zone_id=text(row, "zone_id"),
            stop_url=text(row, "stop_url"),
            location_type=opt_int(row, "location_type"),
            parent_station=text(row, "parent_station"),
            stop_timezone=text(row, "stop_timezone"),
            wheelchair_boarding=opt_int(row, "wheelchair_boarding"),
            level_id=text(row, "level_id"),
            platform_code=text(row, "platform_code"),
            archive_ref=archive_ref,
        )
