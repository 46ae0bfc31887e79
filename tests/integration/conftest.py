from __future__ import annotations

from pathlib import Path

import pytest

from gtfs_archive.app.config import ArchiveConfig
from gtfs_archive.app.services.gtfs_archive import GtfsArchive

from ..fixtures.gtfs_fixture import reference_feed, write_gtfs_zip


@pytest.fixture(scope="session")
def reference_zip(tmp_path_factory: pytest.TempPathFactory) -> Path:
    return write_gtfs_zip(tmp_path_factory.mktemp("feeds") / "klt.zip", reference_feed())


@pytest.fixture(scope="module")
def reference_archive(reference_zip: Path, tmp_path_factory: pytest.TempPathFactory):
    config = ArchiveConfig(temp_root=tmp_path_factory.mktemp("extract"))
    archive = GtfsArchive.from_path(reference_zip, config=config)
    yield archive
    archive.cleanup()
