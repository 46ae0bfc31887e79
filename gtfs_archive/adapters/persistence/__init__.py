from .gtfs_file_reader import GtfsFileReader

__all__ = [
    "GtfsFileReader",
]
