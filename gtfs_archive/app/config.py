from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def parse_headers(raw: str | None) -> dict[str, str]:
    """Parse ``'Key:Value;Key2:Value2'`` into a header dict."""

    raw = (raw or "").strip()
    if not raw:
        return {}
    headers: dict[str, str] = {}
    for part in raw.split(";"):
        part = part.strip()
        if not part:
            continue
        if ":" not in part:
            continue
        k, v = part.split(":", 1)
        k = k.strip()
        v = v.strip()
        if k:
            headers[k] = v
    return headers


@dataclass(frozen=True, slots=True)
class ArchiveConfig:
    """Where archives are downloaded/extracted and how they are fetched.

    Env vars:
      - GTFS_ARCHIVE_TMP: root for downloads and extraction dirs
        (default: <system temp>/gtfs)
      - GTFS_HTTP_TIMEOUT_S: download timeout in seconds (default 60)
      - GTFS_HTTP_HEADERS: optional headers, as 'Key:Value;Key2:Value2'
      - GTFS_KEEP_DOWNLOAD: keep the downloaded zip after extraction
    """

    temp_root: Path
    http_timeout_s: float = 60.0
    http_headers_raw: str | None = None
    keep_download: bool = False

    @staticmethod
    def from_env() -> "ArchiveConfig":
        temp_root = (os.getenv("GTFS_ARCHIVE_TMP") or "").strip()
        timeout = (os.getenv("GTFS_HTTP_TIMEOUT_S") or "").strip()

        return ArchiveConfig(
            temp_root=Path(temp_root) if temp_root else default_temp_root(),
            http_timeout_s=float(timeout) if timeout else 60.0,
            http_headers_raw=os.getenv("GTFS_HTTP_HEADERS"),
            keep_download=_env_bool("GTFS_KEEP_DOWNLOAD", False),
        )

    @property
    def http_headers(self) -> dict[str, str]:
        return parse_headers(self.http_headers_raw)


def default_temp_root() -> Path:
    return Path(tempfile.gettempdir()) / "gtfs"
