from .archive import (
    ArchiveOpenError,
    CleanupError,
    ExtractionError,
    FeedFileNotFoundError,
    GtfsArchiveError,
    RetrievalError,
    RowDecodeError,
)

__all__ = [
    "ArchiveOpenError",
    "CleanupError",
    "ExtractionError",
    "FeedFileNotFoundError",
    "GtfsArchiveError",
    "RetrievalError",
    "RowDecodeError",
]
