from __future__ import annotations

import weakref
from dataclasses import dataclass
from datetime import date
from enum import IntEnum
from typing import Any, Mapping

from ._fields import opt_date, opt_int, text
from .base import GtfsRecord

WEEKDAYS = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


class ExceptionType(IntEnum):
    ADDED = 1
    REMOVED = 2


@dataclass(frozen=True, slots=True)
class CalendarEntry(GtfsRecord):
    """Row of calendar.txt: weekly service pattern between two dates."""

    service_id: str
    monday: int | None = None
    tuesday: int | None = None
    wednesday: int | None = None
    thursday: int | None = None
    friday: int | None = None
    saturday: int | None = None
    sunday: int | None = None
    start_date: date | None = None
    end_date: date | None = None

    def active_weekdays(self) -> tuple[str, ...]:
        return tuple(day for day in WEEKDAYS if getattr(self, day) == 1)

    def runs_on(self, day: date) -> bool:
        """Whether the weekly pattern covers ``day``.

        Exceptions from calendar_dates.txt are not applied here.
        """

        if self.start_date is not None and day < self.start_date:
            return False
        if self.end_date is not None and day > self.end_date:
            return False
        return getattr(self, WEEKDAYS[day.weekday()]) == 1

    @classmethod
    def from_row(
        cls, row: Mapping[str, str], archive_ref: weakref.ReferenceType[Any] | None = None
    ) -> CalendarEntry:
        return cls(
            service_id=text(row, "service_id"),
            monday=opt_int(row, "monday"),
            tuesday=opt_int(row, "tuesday"),
            wednesday=opt_int(row, "wednesday"),
            thursday=opt_int(row, "thursday"),
            friday=opt_int(row, "friday"),
            saturday=opt_int(row, "saturday"),
            sunday=opt_int(row, "sunday"),
            start_date=opt_date(row, "start_date"),
            end_date=opt_date(row, "end_date"),
            archive_ref=archive_ref,
        )


@dataclass(frozen=True, slots=True)
class CalendarDate(GtfsRecord):
    """Row of calendar_dates.txt: a single-day service override."""

    service_id: str
    date: date | None = None
    exception_type: int | None = None

    @property
    def is_added(self) -> bool:
        return self.exception_type == ExceptionType.ADDED

    @property
    def is_removed(self) -> bool:
        return self.exception_type == ExceptionType.REMOVED

    @classmethod
    def from_row(
        cls, row: Mapping[str, str], archive_ref: weakref.ReferenceType[Any] | None = None
    ) -> CalendarDate:
        return cls(
            service_id=text(row, "service_id"),
            date=opt_date(row, "date"),
            exception_type=opt_int(row, "exception_type"),
            archive_ref=archive_ref,
        )
