from __future__ import annotations

import weakref
from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping

from ._fields import opt_date, text
from .base import GtfsRecord


@dataclass(frozen=True, slots=True)
class FeedInfo(GtfsRecord):
    """Row of feed_info.txt."""

    feed_publisher_name: str
    feed_publisher_url: str = ""
    feed_lang: str = ""
    default_lang: str = ""
    feed_start_date: date | None = None
    feed_end_date: date | None = None
    feed_version: str = ""
    feed_contact_email: str = ""
    feed_contact_url: str = ""

    @classmethod
    def from_row(
        cls, row: Mapping[str, str], archive_ref: weakref.ReferenceType[Any] | None = None
    ) -> FeedInfo:
        return cls(
            feed_publisher_name=text(row, "feed_publisher_name"),
            feed_publisher_url=text(row, "feed_publisher_url"),
            feed_lang=text(row, "feed_lang"),
            default_lang=text(row, "default_lang"),
            feed_start_date=opt_date(row, "feed_start_date"),
            feed_end_date=opt_date(row, "feed_end_date"),
            feed_version=text(row, "feed_version"),
            feed_contact_email=text(row, "feed_contact_email"),
            feed_contact_url=text(row, "feed_contact_url"),
            archive_ref=archive_ref,
        )
