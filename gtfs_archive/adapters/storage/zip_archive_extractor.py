from __future__ import annotations

import logging
import zipfile
from dataclasses import dataclass
from pathlib import Path

from gtfs_archive.app.ports.output import IArchiveExtractor
from gtfs_archive.domain.exceptions import ArchiveOpenError, ExtractionError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ZipArchiveExtractor(IArchiveExtractor):
    """Extracts a zip archive into a directory, creating it if needed."""

    def extract(self, archive_path: Path, destination: Path) -> Path:
        archive_path = Path(archive_path)
        destination = Path(destination)

        if not archive_path.is_file():
            raise ArchiveOpenError(f"Could not open the GTFS archive: {archive_path}")

        try:
            with zipfile.ZipFile(archive_path) as zf:
                names = zf.namelist()
                destination.mkdir(parents=True, exist_ok=True)
                zf.extractall(destination)
        except zipfile.BadZipFile as exc:
            raise ExtractionError(f"Corrupt GTFS archive: {archive_path}") from exc
        except OSError as exc:
            raise ExtractionError(
                f"Could not extract {archive_path} to {destination}: {exc}"
            ) from exc

        logger.info("Extracted %d entries from %s to %s", len(names), archive_path, destination)
        return destination
