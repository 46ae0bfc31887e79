from .archive_extractor import IArchiveExtractor
from .archive_retriever import IArchiveRetriever

__all__ = [
    "IArchiveExtractor",
    "IArchiveRetriever",
]
