from .httpx_archive_retriever import HttpxArchiveRetriever

__all__ = ["HttpxArchiveRetriever"]
