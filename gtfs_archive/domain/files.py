from __future__ import annotations

import weakref
from dataclasses import fields
from enum import Enum
from typing import Any, Callable, Mapping

from .models import (
    Agency,
    CalendarDate,
    CalendarEntry,
    FeedInfo,
    Frequency,
    GtfsRecord,
    Route,
    ShapePoint,
    Stop,
    StopTime,
    Transfer,
    Trip,
)

RecordFactory = Callable[[Mapping[str, str], "weakref.ReferenceType[Any] | None"], GtfsRecord]


class GtfsFile(str, Enum):
    """Component files with a typed record.

    fare_attributes.txt, fare_rules.txt, pathways.txt and levels.txt are part
    of the format but are not read by this library.
    """

    AGENCY = "agency.txt"
    STOPS = "stops.txt"
    ROUTES = "routes.txt"
    TRIPS = "trips.txt"
    STOP_TIMES = "stop_times.txt"
    CALENDAR = "calendar.txt"
    CALENDAR_DATES = "calendar_dates.txt"
    SHAPES = "shapes.txt"
    TRANSFERS = "transfers.txt"
    FEED_INFO = "feed_info.txt"
    FREQUENCIES = "frequencies.txt"

    @property
    def filename(self) -> str:
        return self.value

    @property
    def record_type(self) -> type[GtfsRecord]:
        return RECORD_TYPES[self]


RECORD_TYPES: dict[GtfsFile, type[GtfsRecord]] = {
    GtfsFile.AGENCY: Agency,
    GtfsFile.STOPS: Stop,
    GtfsFile.ROUTES: Route,
    GtfsFile.TRIPS: Trip,
    GtfsFile.STOP_TIMES: StopTime,
    GtfsFile.CALENDAR: CalendarEntry,
    GtfsFile.CALENDAR_DATES: CalendarDate,
    GtfsFile.SHAPES: ShapePoint,
    GtfsFile.TRANSFERS: Transfer,
    GtfsFile.FEED_INFO: FeedInfo,
    GtfsFile.FREQUENCIES: Frequency,
}

RECORD_FACTORIES: dict[GtfsFile, RecordFactory] = {
    gtfs_file: record_type.from_row for gtfs_file, record_type in RECORD_TYPES.items()
}


def record_factory(gtfs_file: GtfsFile) -> RecordFactory:
    return RECORD_FACTORIES[gtfs_file]


def record_fields(gtfs_file: GtfsFile) -> tuple[str, ...]:
    """Column names read by the record type of ``gtfs_file``."""

    return tuple(f.name for f in fields(RECORD_TYPES[gtfs_file]) if f.name != "archive_ref")
