from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


class IArchiveRetriever(ABC):
    """Port for downloading a remote feed archive to a local file."""

    @abstractmethod
    def fetch(self, url: str, destination: Path) -> Path:
        """Download ``url`` to ``destination`` and return the written path.

        Raises RetrievalError on failure; ``destination`` must not be left
        half-written.
        """
        raise NotImplementedError
