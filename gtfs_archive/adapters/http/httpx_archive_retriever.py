from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path

import httpx

from gtfs_archive.app.ports.output import IArchiveRetriever
from gtfs_archive.domain.exceptions import RetrievalError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class HttpxArchiveRetriever(IArchiveRetriever):
    """Downloads feed archives with a plain, unauthenticated HTTP GET.

    The body is streamed to ``<destination>.part`` and renamed into place once
    complete, so an interrupted download never looks like a cached archive.

    ``transport`` is handed to ``httpx.Client`` as is (tests use
    ``httpx.MockTransport``).
    """

    timeout_s: float = 60.0
    headers: dict[str, str] = field(default_factory=dict)
    transport: httpx.BaseTransport | None = None

    def fetch(self, url: str, destination: Path) -> Path:
        destination = Path(destination)
        destination.parent.mkdir(parents=True, exist_ok=True)
        partial = destination.with_name(destination.name + ".part")

        started = time.monotonic()
        size = 0
        try:
            with httpx.Client(
                timeout=self.timeout_s,
                follow_redirects=True,
                transport=self.transport,
            ) as client:
                with client.stream("GET", url, headers=self.headers) as resp:
                    resp.raise_for_status()
                    with partial.open("wb") as fp:
                        for chunk in resp.iter_bytes():
                            fp.write(chunk)
                            size += len(chunk)
            partial.replace(destination)
        except httpx.HTTPStatusError as exc:
            partial.unlink(missing_ok=True)
            raise RetrievalError(
                f"GET {url} failed with status {exc.response.status_code}"
            ) from exc
        except (httpx.HTTPError, OSError) as exc:
            partial.unlink(missing_ok=True)
            raise RetrievalError(f"GET {url} failed: {exc}") from exc

        logger.info(
            "Downloaded %s to %s (%d bytes, %.2fs)",
            url,
            destination,
            size,
            time.monotonic() - started,
        )
        return destination
