from __future__ import annotations

import weakref
from dataclasses import dataclass
from typing import Any, Mapping

from ._fields import gtfs_time_to_seconds, opt_float, opt_int, text, time_text
from .base import GtfsRecord


@dataclass(frozen=True, slots=True)
class StopTime(GtfsRecord):
    """Row of stop_times.txt.

    Arrival and departure times are kept as the raw ``HH:MM:SS`` strings;
    hours may exceed 24 for trips running past midnight. Use
    ``arrival_seconds``/``departure_seconds`` for arithmetic.
    """

    trip_id: str
    arrival_time: str = ""
    departure_time: str = ""
    stop_id: str = ""
    stop_sequence: int | None = None
    stop_headsign: str = ""
    pickup_type: int | None = None
    drop_off_type: int | None = None
    continuous_pickup: int | None = None
    continuous_drop_off: int | None = None
    shape_dist_traveled: float | None = None
    timepoint: int | None = None

    @property
    def arrival_seconds(self) -> int | None:
        return gtfs_time_to_seconds(self.arrival_time)

    @property
    def departure_seconds(self) -> int | None:
        return gtfs_time_to_seconds(self.departure_time)

    @classmethod
    def from_row(
        cls, row: Mapping[str, str], archive_ref: weakref.ReferenceType[Any] | None = None
    ) -> StopTime:
        return cls(
            trip_id=text(row, "trip_id"),
            arrival_time=time_text(row, "arrival_time"),
            departure_time=time_text(row, "departure_time"),
            stop_id=text(row, "stop_id"),
            stop_sequence=opt_int(row, "stop_sequence"),
            stop_headsign=text(row, "stop_headsign"),
            pickup_type=opt_int(row, "pickup_type"),
            drop_off_type=opt_int(row, "drop_off_type"),
            continuous_pickup=opt_int(row, "continuous_pickup"),
            continuous_drop_off=opt_int(row, "continuous_drop_off"),
            shape_dist_traveled=opt_float(row, "shape_dist_traveled"),
            timepoint=opt_int(row, "timepoint"),
            archive_ref=archive_ref,
        )
