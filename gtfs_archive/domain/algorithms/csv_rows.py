from __future__ import annotations

import csv
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

from gtfs_archive.domain.exceptions import RowDecodeError

_BOM = "\ufeff"


class RowDecoder:
    """Decodes rows from raw text lines using quoted-CSV rules.

    Quoted fields may hold the delimiter or line breaks, and a doubled quote
    inside a quoted field is a literal quote. Parsing is strict: a stray quote
    or an unterminated quoted field raises RowDecodeError. Blank lines carry no
    values and are skipped.

    Lines are pulled from ``lines`` one row at a time, so wrapping an open file
    keeps memory flat regardless of file size.
    """

    def __init__(self, lines: Iterable[str], *, path: str | Path | None = None) -> None:
        self._reader = csv.reader(lines, strict=True)
        self._path = path

    @property
    def line_number(self) -> int:
        """Physical line number of the last row returned (1-based)."""
        return self._reader.line_num

    def __iter__(self) -> RowDecoder:
        return self

    def __next__(self) -> list[str]:
        while True:
            try:
                values = next(self._reader)
            except csv.Error as exc:
                raise RowDecodeError(
                    f"malformed row: {exc}",
                    path=self._path,
                    line_number=self._reader.line_num,
                ) from exc
            except UnicodeDecodeError as exc:
                raise RowDecodeError(
                    f"invalid UTF-8: {exc.reason}",
                    path=self._path,
                    line_number=self._reader.line_num + 1,
                ) from exc
            if values:
                return values


def decode_line(line: str) -> list[str]:
    """Decode a single raw row (which may span lines inside quotes)."""

    rows = list(RowDecoder([line]))
    if not rows:
        return []
    if len(rows) > 1:
        raise RowDecodeError(f"expected one row, found {len(rows)}")
    return rows[0]


@dataclass(frozen=True, slots=True)
class HeaderMapper:
    """Field names from a file's first row, used to label every later row."""

    field_names: tuple[str, ...]

    @classmethod
    def from_values(cls, values: Sequence[str]) -> HeaderMapper:
        names = list(values)
        if names and names[0].startswith(_BOM):
            names[0] = names[0][len(_BOM) :]
        return cls(field_names=tuple(names))

    @classmethod
    def from_line(cls, line: str) -> HeaderMapper:
        return cls.from_values(decode_line(line))

    def __len__(self) -> int:
        return len(self.field_names)

    def label(
        self,
        values: Sequence[str],
        *,
        path: str | Path | None = None,
        line_number: int | None = None,
    ) -> dict[str, str]:
        if len(values) != len(self.field_names):
            raise RowDecodeError(
                f"expected {len(self.field_names)} columns, found {len(values)}",
                path=path,
                line_number=line_number,
            )
        return dict(zip(self.field_names, values))
