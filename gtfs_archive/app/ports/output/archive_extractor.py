from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


class IArchiveExtractor(ABC):
    """Port for unpacking a feed archive into a directory."""

    @abstractmethod
    def extract(self, archive_path: Path, destination: Path) -> Path:
        raise NotImplementedError
