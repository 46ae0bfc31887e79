from __future__ import annotations

import weakref
from dataclasses import dataclass
from typing import Any, Mapping

from ._fields import text
from .base import GtfsRecord


@dataclass(frozen=True, slots=True)
class Agency(GtfsRecord):
    """Row of agency.txt."""

    agency_id: str
    agency_name: str = ""
    agency_url: str = ""
    agency_timezone: str = ""
    agency_lang: str = ""
    agency_phone: str = ""
    agency_fare_url: str = ""
    agency_email: str = ""

    @classmethod
    def from_row(
        cls, row: Mapping[str, str], archive_ref: weakref.ReferenceType[Any] | None = None
    ) -> Agency:
        return cls(
            agency_id=text(row, "agency_id"),
            agency_name=text(row, "agency_name"),
            agency_url=text(row, "agency_url"),
            agency_timezone=text(row, "agency_timezone"),
            agency_lang=text(row, "agency_lang"),
            agency_phone=text(row, "agency_phone"),
            agency_fare_url=text(row, "agency_fare_url"),
            agency_email=text(row, "agency_email"),
            archive_ref=archive_ref,
        )
