from __future__ import annotations

from pathlib import Path


class GtfsArchiveError(Exception):
    """Base exception for archive, retrieval and decoding failures."""


class ArchiveOpenError(GtfsArchiveError):
    """Raised when a feed archive cannot be opened."""


class ExtractionError(ArchiveOpenError):
    """Raised when a zip archive is corrupt or cannot be extracted."""


class RetrievalError(GtfsArchiveError):
    """Raised when a remote archive cannot be downloaded."""


class FeedFileNotFoundError(GtfsArchiveError, FileNotFoundError):
    """Raised when a component file is absent from the extracted archive."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"Missing feed file: {self.path.name} ({self.path})")


class RowDecodeError(GtfsArchiveError, ValueError):
    """Raised when a row cannot be decoded into a record.

    Covers column-count mismatches against the header, malformed quoting and
    values that cannot be coerced to the declared field type.
    """

    def __init__(
        self, message: str, *, path: str | Path | None = None, line_number: int | None = None
    ) -> None:
        self.path = Path(path) if path is not None else None
        self.line_number = line_number
        self.reason = message

        where = ""
        if self.path is not None:
            where = self.path.name
            if line_number is not None:
                where += f":{line_number}"
            where += ": "
        super().__init__(f"{where}{message}")


class CleanupError(GtfsArchiveError, OSError):
    """Raised when extracted files could not all be removed.

    Cleanup may be retried; entries that are already gone are skipped.
    """

    def __init__(self, root: str | Path, failed: list[tuple[Path, OSError]]) -> None:
        self.root = Path(root)
        self.failed = tuple(failed)
        names = ", ".join(str(p) for p, _ in self.failed)
        super().__init__(f"Could not remove {len(self.failed)} path(s) under {self.root}: {names}")
