from __future__ import annotations

from pathlib import Path

import pytest

from gtfs_archive.app.config import ArchiveConfig
from gtfs_archive.app.services.gtfs_archive import GtfsArchive

from .fixtures.gtfs_fixture import SMALL_FEED, write_gtfs_dir, write_gtfs_zip


@pytest.fixture
def archive_config(tmp_path: Path) -> ArchiveConfig:
    """Config rooted in the test's own temp dir, independent of env vars."""

    return ArchiveConfig(temp_root=tmp_path / "gtfs")


@pytest.fixture
def small_feed_zip(tmp_path: Path) -> Path:
    return write_gtfs_zip(tmp_path / "small.zip", SMALL_FEED)


@pytest.fixture
def small_feed_dir(tmp_path: Path) -> Path:
    return write_gtfs_dir(tmp_path / "small", SMALL_FEED)


@pytest.fixture
def small_archive(small_feed_zip: Path, archive_config: ArchiveConfig):
    archive = GtfsArchive.from_path(small_feed_zip, config=archive_config)
    yield archive
    archive.cleanup()
