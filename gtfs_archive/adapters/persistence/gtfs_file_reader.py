from __future__ import annotations

import logging
import time
import weakref
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator, TextIO

from gtfs_archive.domain.algorithms.csv_rows import HeaderMapper, RowDecoder
from gtfs_archive.domain.exceptions import FeedFileNotFoundError, RowDecodeError
from gtfs_archive.domain.files import GtfsFile, RecordFactory, record_factory
from gtfs_archive.domain.models import GtfsRecord

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class GtfsFileReader:
    """Streams typed records out of one component file.

    Nothing is opened until the first ``next()`` (or ``header``) call. The
    handle is closed as soon as the end of the file is reached, when a row
    fails to decode, on ``close()`` and when leaving a ``with`` block. Once
    closed the reader is exhausted: ``next()`` keeps returning None and never
    reopens the file. The header parsed while streaming survives the close;
    asking for ``header`` on a reader closed before its first read parses it
    through a short-lived handle of its own.

    ``materialize()`` is independent of the streaming state: it always reads
    the whole file through a handle of its own.

    Each reader owns its handle, so any number of readers can walk the same
    file at once.
    """

    path: Path
    gtfs_file: GtfsFile
    archive_ref: weakref.ReferenceType[Any] | None = None

    _factory: RecordFactory = field(init=False, repr=False)
    _handle: TextIO | None = field(default=None, init=False, repr=False)
    _rows: RowDecoder | None = field(default=None, init=False, repr=False)
    _header: HeaderMapper | None = field(default=None, init=False, repr=False)
    _exhausted: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        self.path = Path(self.path)
        # Resolved once; the dispatch table is keyed by file identity.
        self._factory = record_factory(self.gtfs_file)

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    @property
    def is_open(self) -> bool:
        return self._handle is not None

    @property
    def header(self) -> tuple[str, ...]:
        """Field names from the first row of the file (empty for an empty file)."""

        if self._header is None:
            if self._exhausted:
                handle, _, header = self._open()
                handle.close()
                self._header = header or HeaderMapper(field_names=())
            else:
                self._ensure_open()
        return self._header.field_names if self._header is not None else ()

    def next(self) -> GtfsRecord | None:
        """Return the next record, or None once the file is exhausted."""

        if self._exhausted:
            return None
        self._ensure_open()
        assert self._rows is not None

        try:
            values = next(self._rows)
            header = self._header or HeaderMapper(field_names=())
            return self._build(header, values, self._rows.line_number)
        except StopIteration:
            self.close()
            return None
        except RowDecodeError:
            self.close()
            raise

    def materialize(self) -> tuple[GtfsRecord, ...]:
        """Decode the whole file into memory, in file order."""

        started = time.monotonic()
        handle, rows, header = self._open()
        with handle:
            if header is None:
                return ()
            out = [self._build(header, values, rows.line_number) for values in rows]

        logger.debug(
            "Materialized %d rows from %s in %.2fs",
            len(out),
            self.path.name,
            time.monotonic() - started,
        )
        return tuple(out)

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            logger.debug("Closed %s", self.path)
        self._handle = None
        self._rows = None
        self._exhausted = True

    def __iter__(self) -> Iterator[GtfsRecord]:
        while True:
            record = self.next()
            if record is None:
                return
            yield record

    def __enter__(self) -> GtfsFileReader:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def _ensure_open(self) -> None:
        if self._handle is None and not self._exhausted:
            self._handle, self._rows, self._header = self._open()
            logger.debug("Opened %s", self.path)

    def _open(self) -> tuple[TextIO, RowDecoder, HeaderMapper | None]:
        try:
            handle = self.path.open("r", encoding="utf-8-sig", newline="")
        except FileNotFoundError as exc:
            raise FeedFileNotFoundError(self.path) from exc

        rows = RowDecoder(handle, path=self.path)
        try:
            header: HeaderMapper | None = HeaderMapper.from_values(next(rows))
        except StopIteration:
            header = None
        except BaseException:
            handle.close()
            raise
        return handle, rows, header

    def _build(self, header: HeaderMapper, values: list[str], line_number: int) -> GtfsRecord:
        row = header.label(values, path=self.path, line_number=line_number)
        try:
            return self._factory(row, self.archive_ref)
        except ValueError as exc:
            raise RowDecodeError(str(exc), path=self.path, line_number=line_number) from exc
