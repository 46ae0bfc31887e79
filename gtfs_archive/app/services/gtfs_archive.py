from __future__ import annotations

import hashlib
import logging
import shutil
import time
import weakref
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Mapping, cast

from gtfs_archive.adapters.persistence.gtfs_file_reader import GtfsFileReader
from gtfs_archive.app.config import ArchiveConfig
from gtfs_archive.app.ports.output import IArchiveExtractor, IArchiveRetriever
from gtfs_archive.app.services.view_cache import DerivedViewCache, ViewKey, ViewKind
from gtfs_archive.domain.algorithms.indexing import group_by, index_by
from gtfs_archive.domain.exceptions import ArchiveOpenError, CleanupError, ExtractionError
from gtfs_archive.domain.files import GtfsFile, record_fields
from gtfs_archive.domain.models import (
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

logger = logging.getLogger(__name__)


def _digest(value: str) -> str:
    return hashlib.md5(value.encode("utf-8"), usedforsecurity=False).hexdigest()


def _view_key(value: Any) -> str:
    # Identifiers are opaque strings; every view is keyed by the str() of the
    # field value so lookups behave the same for every field.
    return "" if value is None else str(value)


@dataclass(slots=True, weakref_slot=True, eq=False)
class GtfsArchive:
    """Handle over an extracted GTFS feed.

    ``get_*_file()`` accessors hand out a new, independent GtfsFileReader on
    every call. The query helpers (``stops()``, ``stop(id)``, ``shape(id)``,
    ...) go through a per-archive DerivedViewCache: each file is materialized
    at most once and every derived index is built at most once.

    The extraction directory is left on disk until ``cleanup()`` is called;
    nothing removes it automatically.
    """

    root: Path
    config: ArchiveConfig = field(default_factory=ArchiveConfig.from_env)
    cache: DerivedViewCache = field(default_factory=DerivedViewCache, init=False, repr=False)

    def __post_init__(self) -> None:
        self.root = Path(self.root)

    @classmethod
    def from_url(
        cls,
        url: str,
        *,
        config: ArchiveConfig | None = None,
        retriever: IArchiveRetriever | None = None,
        extractor: IArchiveExtractor | None = None,
    ) -> GtfsArchive:
        """Download (unless already present) and extract a remote archive.

        The zip is stored as ``<temp_root>/<md5(url)>.zip`` and extracted to
        ``<temp_root>/<md5(url)>/``. It is deleted after a successful
        extraction unless ``config.keep_download`` is set, and after a failed
        one so that the next attempt downloads it again.
        """

        config = config or ArchiveConfig.from_env()
        digest = _digest(url)
        archive_path = config.temp_root / f"{digest}.zip"

        if archive_path.exists():
            logger.info("Reusing downloaded archive %s for %s", archive_path, url)
        else:
            if retriever is None:
                from gtfs_archive.adapters.http import HttpxArchiveRetriever

                retriever = HttpxArchiveRetriever(
                    timeout_s=config.http_timeout_s, headers=config.http_headers
                )
            retriever.fetch(url, archive_path)

        if extractor is None:
            from gtfs_archive.adapters.storage import ZipArchiveExtractor

            extractor = ZipArchiveExtractor()

        try:
            root = extractor.extract(archive_path, config.temp_root / digest)
        except ExtractionError:
            archive_path.unlink(missing_ok=True)
            raise

        if not config.keep_download:
            archive_path.unlink(missing_ok=True)
        return cls(root=root, config=config)

    @classmethod
    def from_path(
        cls,
        path: str | Path,
        *,
        config: ArchiveConfig | None = None,
        extractor: IArchiveExtractor | None = None,
    ) -> GtfsArchive:
        """Extract a local zip to ``<temp_root>/<stem>-<md5(path)>/``."""

        config = config or ArchiveConfig.from_env()
        path = Path(path)
        if not path.is_file():
            raise ArchiveOpenError(f"Could not open the GTFS archive: {path}")

        if extractor is None:
            from gtfs_archive.adapters.storage import ZipArchiveExtractor

            extractor = ZipArchiveExtractor()

        resolved = path.resolve()
        destination = config.temp_root / f"{resolved.stem}-{_digest(str(resolved))}"
        root = extractor.extract(resolved, destination)
        return cls(root=root, config=config)

    # Stream readers, one fresh instance per call.

    def get_file(self, gtfs_file: GtfsFile) -> GtfsFileReader:
        return GtfsFileReader(
            path=self.root / gtfs_file.filename,
            gtfs_file=gtfs_file,
            archive_ref=weakref.ref(self),
        )

    def get_agency_file(self) -> GtfsFileReader:
        return self.get_file(GtfsFile.AGENCY)

    def get_stops_file(self) -> GtfsFileReader:
        return self.get_file(GtfsFile.STOPS)

    def get_routes_file(self) -> GtfsFileReader:
        return self.get_file(GtfsFile.ROUTES)

    def get_trips_file(self) -> GtfsFileReader:
        return self.get_file(GtfsFile.TRIPS)

    def get_stop_times_file(self) -> GtfsFileReader:
        return self.get_file(GtfsFile.STOP_TIMES)

    def get_calendar_file(self) -> GtfsFileReader:
        return self.get_file(GtfsFile.CALENDAR)

    def get_calendar_dates_file(self) -> GtfsFileReader:
        return self.get_file(GtfsFile.CALENDAR_DATES)

    def get_shapes_file(self) -> GtfsFileReader:
        return self.get_file(GtfsFile.SHAPES)

    def get_transfers_file(self) -> GtfsFileReader:
        return self.get_file(GtfsFile.TRANSFERS)

    def get_feed_info_file(self) -> GtfsFileReader:
        return self.get_file(GtfsFile.FEED_INFO)

    def get_frequencies_file(self) -> GtfsFileReader:
        return self.get_file(GtfsFile.FREQUENCIES)

    def available_files(self) -> tuple[GtfsFile, ...]:
        return tuple(f for f in GtfsFile if (self.root / f.filename).is_file())

    # Cached derived views.

    def all_records(self, gtfs_file: GtfsFile) -> tuple[GtfsRecord, ...]:
        key = ViewKey(file=gtfs_file, kind=ViewKind.ALL)
        return self.cache.get_or_compute(
            key, lambda: self._timed_build(key, self.get_file(gtfs_file).materialize)
        )

    def records_by_key(self, gtfs_file: GtfsFile, field_name: str) -> Mapping[str, GtfsRecord]:
        """Index a file by one of its fields; on duplicates the last row wins.

        The mapping is read-only and shared by every caller of this archive.
        """

        getter = self._field_getter(gtfs_file, field_name)
        key = ViewKey(file=gtfs_file, kind=ViewKind.BY_KEY, field=field_name)
        return self.cache.get_or_compute(
            key,
            lambda: self._timed_build(
                key, lambda: MappingProxyType(index_by(self.all_records(gtfs_file), getter))
            ),
        )

    def records_grouped_by(
        self, gtfs_file: GtfsFile, field_name: str
    ) -> Mapping[str, tuple[GtfsRecord, ...]]:
        """Group a file by one of its fields, keeping file order within groups."""

        getter = self._field_getter(gtfs_file, field_name)
        key = ViewKey(file=gtfs_file, kind=ViewKind.GROUP, field=field_name)
        return self.cache.get_or_compute(
            key,
            lambda: self._timed_build(
                key, lambda: MappingProxyType(group_by(self.all_records(gtfs_file), getter))
            ),
        )

    def record_by_key(self, gtfs_file: GtfsFile, field_name: str, value: Any) -> GtfsRecord | None:
        return self.records_by_key(gtfs_file, field_name).get(_view_key(value))

    def group(self, gtfs_file: GtfsFile, field_name: str, value: Any) -> tuple[GtfsRecord, ...]:
        return self.records_grouped_by(gtfs_file, field_name).get(_view_key(value), ())

    def agencies(self) -> tuple[Agency, ...]:
        return cast("tuple[Agency, ...]", self.all_records(GtfsFile.AGENCY))

    def agency(self, agency_id: Any) -> Agency | None:
        return cast("Agency | None", self.record_by_key(GtfsFile.AGENCY, "agency_id", agency_id))

    def stops(self) -> tuple[Stop, ...]:
        return cast("tuple[Stop, ...]", self.all_records(GtfsFile.STOPS))

    def stop(self, stop_id: Any) -> Stop | None:
        return cast("Stop | None", self.record_by_key(GtfsFile.STOPS, "stop_id", stop_id))

    def routes(self) -> tuple[Route, ...]:
        return cast("tuple[Route, ...]", self.all_records(GtfsFile.ROUTES))

    def route(self, route_id: Any) -> Route | None:
        return cast("Route | None", self.record_by_key(GtfsFile.ROUTES, "route_id", route_id))

    def trips(self) -> tuple[Trip, ...]:
        return cast("tuple[Trip, ...]", self.all_records(GtfsFile.TRIPS))

    def trip(self, trip_id: Any) -> Trip | None:
        return cast("Trip | None", self.record_by_key(GtfsFile.TRIPS, "trip_id", trip_id))

    def trips_for_route(self, route_id: Any) -> tuple[Trip, ...]:
        return cast("tuple[Trip, ...]", self.group(GtfsFile.TRIPS, "route_id", route_id))

    def stop_times(self) -> tuple[StopTime, ...]:
        return cast("tuple[StopTime, ...]", self.all_records(GtfsFile.STOP_TIMES))

    def stop_times_for_trip(self, trip_id: Any) -> tuple[StopTime, ...]:
        return cast("tuple[StopTime, ...]", self.group(GtfsFile.STOP_TIMES, "trip_id", trip_id))

    def calendar_entries(self) -> tuple[CalendarEntry, ...]:
        return cast("tuple[CalendarEntry, ...]", self.all_records(GtfsFile.CALENDAR))

    def calendar_entry(self, service_id: Any) -> CalendarEntry | None:
        return cast(
            "CalendarEntry | None",
            self.record_by_key(GtfsFile.CALENDAR, "service_id", service_id),
        )

    def calendar_dates(self) -> tuple[CalendarDate, ...]:
        return cast("tuple[CalendarDate, ...]", self.all_records(GtfsFile.CALENDAR_DATES))

    def calendar_dates_for_service(self, service_id: Any) -> tuple[CalendarDate, ...]:
        return cast(
            "tuple[CalendarDate, ...]",
            self.group(GtfsFile.CALENDAR_DATES, "service_id", service_id),
        )

    def shape_points(self) -> tuple[ShapePoint, ...]:
        return cast("tuple[ShapePoint, ...]", self.all_records(GtfsFile.SHAPES))

    def shape(self, shape_id: Any) -> tuple[ShapePoint, ...]:
        """Points of one shape in file order (no re-sorting by sequence)."""
        return cast("tuple[ShapePoint, ...]", self.group(GtfsFile.SHAPES, "shape_id", shape_id))

    def transfers(self) -> tuple[Transfer, ...]:
        return cast("tuple[Transfer, ...]", self.all_records(GtfsFile.TRANSFERS))

    def feed_info(self) -> tuple[FeedInfo, ...]:
        return cast("tuple[FeedInfo, ...]", self.all_records(GtfsFile.FEED_INFO))

    def frequencies(self) -> tuple[Frequency, ...]:
        return cast("tuple[Frequency, ...]", self.all_records(GtfsFile.FREQUENCIES))

    def frequencies_for_trip(self, trip_id: Any) -> tuple[Frequency, ...]:
        return cast("tuple[Frequency, ...]", self.group(GtfsFile.FREQUENCIES, "trip_id", trip_id))

    # Lifecycle.

    def cleanup(self) -> None:
        """Delete the extraction directory and everything in it.

        Safe to call more than once. If some entries cannot be removed a
        CleanupError lists them; calling again retries only what is left.
        """

        root = self.root
        if not root.exists():
            return

        failed: list[tuple[Path, OSError]] = []
        for entry in sorted(root.iterdir()):
            try:
                if entry.is_dir() and not entry.is_symlink():
                    shutil.rmtree(entry)
                else:
                    entry.unlink(missing_ok=True)
            except OSError as exc:
                failed.append((entry, exc))

        if not failed:
            try:
                root.rmdir()
            except FileNotFoundError:
                pass
            except OSError as exc:
                failed.append((root, exc))

        if failed:
            logger.warning("Cleanup of %s left %d path(s) behind", root, len(failed))
            raise CleanupError(root, failed)

        logger.info("Removed extraction directory %s", root)

    def _field_getter(self, gtfs_file: GtfsFile, field_name: str) -> Callable[[GtfsRecord], str]:
        if field_name not in record_fields(gtfs_file):
            raise ValueError(f"{gtfs_file.filename} records have no field {field_name!r}")

        def getter(record: GtfsRecord) -> str:
            return _view_key(getattr(record, field_name))

        return getter

    def _timed_build(self, key: ViewKey, build: Callable[[], Any]) -> Any:
        started = time.monotonic()
        value = build()
        logger.info(
            "Built %s view of %s%s: %d entries in %.2fs",
            key.kind.value,
            key.file.filename,
            f" by {key.field}" if key.field else "",
            len(value),
            time.monotonic() - started,
        )
        return value
