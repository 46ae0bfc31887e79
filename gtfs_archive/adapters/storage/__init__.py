from .zip_archive_extractor import ZipArchiveExtractor

__all__ = ["ZipArchiveExtractor"]
