from __future__ import annotations

import weakref
from dataclasses import dataclass
from typing import Any, Mapping

from ._fields import opt_float, opt_int, text
from .base import GtfsRecord
from .geo import GeoPoint


@dataclass(frozen=True, slots=True)
class ShapePoint(GtfsRecord):
    """Row of shapes.txt: one vertex of a shape polyline."""

    shape_id: str
    shape_pt_lat: float | None = None
    shape_pt_lon: float | None = None
    shape_pt_sequence: int | None = None
    shape_dist_traveled: float | None = None

    @property
    def location(self) -> GeoPoint | None:
        return GeoPoint.maybe(self.shape_pt_lat, self.shape_pt_lon)

    @classmethod
    def from_row(
        cls, row: Mapping[str, str], archive_ref: weakref.ReferenceType[Any] | None = None
    ) -> ShapePoint:
        return cls(
            shape_id=text(row, "shape_id"),
            shape_pt_lat=opt_float(row, "shape_pt_lat"),
            shape_pt_lon=opt_float(row, "shape_pt_lon"),
            shape_pt_sequence=opt_int(row, "shape_pt_sequence"),
            shape_dist_traveled=opt_float(row, "shape_dist_traveled"),
            archive_ref=archive_ref,
        )
