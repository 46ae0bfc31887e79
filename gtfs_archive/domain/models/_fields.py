from __future__ import annotations

from datetime import date, datetime
from typing import Mapping

# Column readers shared by the record factories. Empty values are treated as
# absent; anything else must parse or a ValueError propagates to the reader.


def text(row: Mapping[str, str], name: str) -> str:
    return row.get(name) or ""


def opt_int(row: Mapping[str, str], name: str) -> int | None:
    raw = (row.get(name) or "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name}: expected an integer, got {raw!r}") from None


def opt_float(row: Mapping[str, str], name: str) -> float | None:
    raw = (row.get(name) or "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name}: expected a number, got {raw!r}") from None


def opt_date(row: Mapping[str, str], name: str) -> date | None:
    raw = (row.get(name) or "").strip()
    if not raw:
        return None
    try:
        return datetime.strptime(raw, "%Y%m%d").date()
    except ValueError:
        raise ValueError(f"{name}: expected a YYYYMMDD date, got {raw!r}") from None


def gtfs_time_to_seconds(raw: str) -> int | None:
    # GTFS time can be HH:MM:SS with HH possibly > 24.
    raw = raw.strip()
    if not raw:
        return None
    parts = raw.split(":")
    if len(parts) != 3 or not all(p.isdigit() for p in parts):
        raise ValueError(f"expected an HH:MM:SS time, got {raw!r}")
    hh, mm, ss = (int(p) for p in parts)
    return hh * 3600 + mm * 60 + ss


def time_text(row: Mapping[str, str], name: str) -> str:
    value = text(row, name)
    try:
        gtfs_time_to_seconds(value)
    except ValueError as exc:
        raise ValueError(f"{name}: {exc}") from None
    return value
