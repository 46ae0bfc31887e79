from __future__ import annotations

import weakref
from dataclasses import dataclass
from typing import Any, Mapping

from ._fields import gtfs_time_to_seconds, opt_int, text, time_text
from .base import GtfsRecord


@dataclass(frozen=True, slots=True)
class Frequency(GtfsRecord):
    """Row of frequencies.txt: headway-based service for a trip."""

    trip_id: str
    start_time: str = ""
    end_time: str = ""
    headway_secs: int | None = None
    exact_times: int | None = None

    @property
    def start_seconds(self) -> int | None:
        return gtfs_time_to_seconds(self.start_time)

    @property
    def end_seconds(self) -> int | None:
        return gtfs_time_to_seconds(self.end_time)

    @classmethod
    def from_row(
        cls, row: Mapping[str, str], archive_ref: weakref.ReferenceType[Any] | None = None
    ) -> Frequency:
        return cls(
            trip_id=text(row, "trip_id"),
            start_time=time_text(row, "start_time"),
            end_time=time_text(row, "end_time"),
            headway_secs=opt_int(row, "headway_secs"),
            exact_times=opt_int(row, "exact_times"),
            archive_ref=archive_ref,
        )
