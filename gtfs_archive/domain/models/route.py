from __future__ import annotations

import weakref
from dataclasses import dataclass
from typing import Any, Mapping

from ._fields import opt_int, text
from .base import GtfsRecord


@dataclass(frozen=True, slots=True)
class Route(GtfsRecord):
    """Row of routes.txt."""

    route_id: str
    agency_id: str = ""
    route_short_name: str = ""
    route_long_name: str = ""
    route_desc: str = ""
    route_type: int | None = None
    route_url: str = ""
    route_color: str = ""  # hex without '#', per GTFS
    route_text_color: str = ""  # hex without '#', per GTFS
    route_sort_order: int | None = None
    continuous_pickup: int | None = None
    continuous_drop_off: int | None = None

    @property
    def display_name(self) -> str:
        return self.route_short_name or self.route_long_name or self.route_id

    @classmethod
    def from_row(
        cls, row: Mapping[str, str], archive_ref: weakref.ReferenceType[Any] | None = None
    ) -> Route:
        return cls(
            route_id=text(row, "route_id"),
            agency_id=text(row, "agency_id"),
            route_short_name=text(row, "route_short_name"),
            route_long_name=text(row, "route_long_name"),
            route_desc=text(row, "route_desc"),
            route_type=opt_int(row, "route_type"),
            route_url=text(row, "route_url"),
            route_color=text(row, "route_color"),
            route_text_color=text(row, "route_text_color"),
            route_sort_order=opt_int(row, "route_sort_order"),
            continuous_pickup=opt_int(row, "continuous_pickup"),
            continuous_drop_off=opt_int(row, "continuous_drop_off"),
            archive_ref=archive_ref,
        )
