from .adapters.persistence import GtfsFileReader
from .app.config import ArchiveConfig
from .app.services.gtfs_archive import GtfsArchive
from .app.services.view_cache import DerivedViewCache, ViewKey, ViewKind
from .domain.exceptions import (
    ArchiveOpenError,
    CleanupError,
    ExtractionError,
    FeedFileNotFoundError,
    GtfsArchiveError,
    RetrievalError,
    RowDecodeError,
)
from .domain.files import GtfsFile
from .domain.models import (
    Agency,
    CalendarDate,
    CalendarEntry,
    FeedInfo,
    Frequency,
    GeoPoint,
    GtfsRecord,
    Route,
    ShapePoint,
    Stop,
    StopTime,
    Transfer,
    Trip,
)

__all__ = [
    "Agency",
    "ArchiveConfig",
    "ArchiveOpenError",
    "CalendarDate",
    "CalendarEntry",
    "CleanupError",
    "DerivedViewCache",
    "ExtractionError",
    "FeedFileNotFoundError",
    "FeedInfo",
    "Frequency",
    "GeoPoint",
    "GtfsArchive",
    "GtfsArchiveError",
    "GtfsFile",
    "GtfsFileReader",
    "GtfsRecord",
    "RetrievalError",
    "Route",
    "RowDecodeError",
    "ShapePoint",
    "Stop",
    "StopTime",
    "Transfer",
    "Trip",
    "ViewKey",
    "ViewKind",
]
