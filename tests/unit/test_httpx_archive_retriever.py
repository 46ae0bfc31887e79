from __future__ import annotations

from pathlib import Path

import httpx
import pytest

from gtfs_archive.adapters.http import HttpxArchiveRetriever
from gtfs_archive.domain.exceptions import RetrievalError


def test_fetch_streams_body_to_destination(tmp_path: Path) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, content=b"PK-zip-bytes")

    retriever = HttpxArchiveRetriever(
        headers={"X-Client": "tests"}, transport=httpx.MockTransport(handler)
    )
    dest = tmp_path / "downloads" / "feed.zip"

    out = retriever.fetch("https://example.org/gtfs.zip", dest)

    assert out == dest
    assert dest.read_bytes() == b"PK-zip-bytes"
    assert not (tmp_path / "downloads" / "feed.zip.part").exists()
    assert seen[0].method == "GET"
    assert seen[0].headers["X-Client"] == "tests"


def test_fetch_raises_on_error_status_and_leaves_nothing(tmp_path: Path) -> None:
    retriever = HttpxArchiveRetriever(
        transport=httpx.MockTransport(lambda request: httpx.Response(404))
    )
    dest = tmp_path / "feed.zip"

    with pytest.raises(RetrievalError, match="404"):
        retriever.fetch("https://example.org/missing.zip", dest)

    assert list(tmp_path.iterdir()) == []


def test_fetch_wraps_transport_errors(tmp_path: Path) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    retriever = HttpxArchiveRetriever(transport=httpx.MockTransport(handler))

    with pytest.raises(RetrievalError) as info:
        retriever.fetch("https://example.org/gtfs.zip", tmp_path / "feed.zip")

    assert isinstance(info.value.__cause__, httpx.ConnectError)
    assert not (tmp_path / "feed.zip").exists()


def test_fetch_wraps_rename_failure_and_drops_partial_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    def refuse(self: Path, target: Path) -> Path:
        raise PermissionError(13, "Permission denied", str(target))

    monkeypatch.setattr(Path, "replace", refuse)
    retriever = HttpxArchiveRetriever(
        transport=httpx.MockTransport(lambda request: httpx.Response(200, content=b"PK"))
    )

    with pytest.raises(RetrievalError) as info:
        retriever.fetch("https://example.org/gtfs.zip", tmp_path / "feed.zip")

    assert isinstance(info.value.__cause__, PermissionError)
    assert list(tmp_path.iterdir()) == []
