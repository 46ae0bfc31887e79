from __future__ import annotations

from pathlib import Path

import pytest

from gtfs_archive.adapters.persistence import GtfsFileReader
from gtfs_archive.domain.exceptions import FeedFileNotFoundError, RowDecodeError
from gtfs_archive.domain.files import GtfsFile
from gtfs_archive.domain.models import Stop


def _reader(root: Path, gtfs_file: GtfsFile = GtfsFile.STOPS) -> GtfsFileReader:
    return GtfsFileReader(path=root / gtfs_file.filename, gtfs_file=gtfs_file)


def test_construction_does_not_open_the_file(tmp_path: Path) -> None:
    reader = _reader(tmp_path)  # stops.txt does not exist

    assert not reader.is_open
    assert not reader.exhausted
    with pytest.raises(FeedFileNotFoundError) as info:
        reader.next()
    assert isinstance(info.value, FileNotFoundError)
    assert info.value.path.name == "stops.txt"


def test_next_yields_records_in_file_order(small_feed_dir: Path) -> None:
    reader = _reader(small_feed_dir)

    first = reader.next()
    assert reader.is_open
    assert isinstance(first, Stop)
    assert first.stop_name == "Central, North"

    rest = [reader.next(), reader.next(), reader.next()]
    assert [s.stop_id for s in rest] == ["S2", "S3", "S2"]
    assert rest[1].stop_name == 'The "Old" Mill'


def test_end_of_stream_closes_and_never_reopens(
    small_feed_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    reader = _reader(small_feed_dir)
    records = list(reader)
    assert len(records) == 4
    assert reader.exhausted
    assert not reader.is_open

    def fail_open(self: GtfsFileReader) -> None:
        raise AssertionError("file reopened after end of stream")

    monkeypatch.setattr(GtfsFileReader, "_open", fail_open)
    assert reader.next() is None
    assert reader.next() is None


def test_header_matches_first_row(small_feed_dir: Path) -> None:
    reader = _reader(small_feed_dir)
    assert reader.header == (
        "stop_id",
        "stop_name",
        "stop_lat",
        "stop_lon",
        "location_type",
        "parent_station",
    )
    # Reading the header does not consume a data row.
    assert reader.next().stop_id == "S1"


def test_header_after_close_reads_it_separately(small_feed_dir: Path) -> None:
    reader = _reader(small_feed_dir, GtfsFile.ROUTES)
    reader.close()
    assert reader.header[0] == "route_id"
    assert reader.next() is None


def test_header_survives_close_without_reopening(
    small_feed_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    reader = _reader(small_feed_dir, GtfsFile.ROUTES)
    reader.next()
    reader.close()

    def fail_open(self: GtfsFileReader) -> None:
        raise AssertionError("file reopened after close")

    monkeypatch.setattr(GtfsFileReader, "_open", fail_open)
    assert reader.header[0] == "route_id"
    assert reader.next() is None


def test_materialize_is_independent_of_streaming_state(small_feed_dir: Path) -> None:
    reader = _reader(small_feed_dir)
    reader.next()
    reader.next()

    everything = reader.materialize()

    assert [s.stop_id for s in everything] == ["S1", "S2", "S3", "S2"]
    # Streaming continues where it left off.
    assert reader.next().stop_id == "S3"


def test_two_materialize_calls_are_value_equal(small_feed_dir: Path) -> None:
    a = _reader(small_feed_dir, GtfsFile.STOP_TIMES).materialize()
    b = _reader(small_feed_dir, GtfsFile.STOP_TIMES).materialize()
    assert a == b
    assert a is not b


def test_readers_over_the_same_file_do_not_share_position(small_feed_dir: Path) -> None:
    r1 = _reader(small_feed_dir)
    r2 = _reader(small_feed_dir)

    assert r1.next().stop_id == "S1"
    assert r1.next().stop_id == "S2"
    assert r2.next().stop_id == "S1"
    r1.close()
    assert r2.next().stop_id == "S2"


def test_context_manager_closes_the_handle(small_feed_dir: Path) -> None:
    with _reader(small_feed_dir) as reader:
        reader.next()
        assert reader.is_open
    assert not reader.is_open
    assert reader.next() is None


def test_column_count_mismatch_fails_the_read(tmp_path: Path) -> None:
    (tmp_path / "stops.txt").write_text(
        "stop_id,stop_name\nS1,One\nS2,Two,extra\nS3,Three\n", encoding="utf-8"
    )
    reader = _reader(tmp_path)

    assert reader.next().stop_id == "S1"
    with pytest.raises(RowDecodeError) as info:
        reader.next()
    assert info.value.line_number == 3
    assert not reader.is_open
    assert reader.next() is None

    with pytest.raises(RowDecodeError):
        _reader(tmp_path).materialize()


def test_uncoercible_value_is_a_row_decode_error(tmp_path: Path) -> None:
    (tmp_path / "stops.txt").write_text("stop_id,stop_lat\nS1,north\n", encoding="utf-8")

    with pytest.raises(RowDecodeError, match="stop_lat") as info:
        _reader(tmp_path).next()
    assert info.value.line_number == 2


def test_invalid_utf8_is_a_row_decode_error(tmp_path: Path) -> None:
    (tmp_path / "stops.txt").write_bytes(b"stop_id,stop_name\nS1,\xff\xfe\n")

    with pytest.raises(RowDecodeError, match="UTF-8"):
        _reader(tmp_path).materialize()


def test_quoted_field_spanning_lines(tmp_path: Path) -> None:
    (tmp_path / "stops.txt").write_text(
        'stop_id,stop_desc\r\nS1,"first line\r\nsecond line"\r\nS2,plain\r\n',
        encoding="utf-8",
    )
    stops = _reader(tmp_path).materialize()
    assert [s.stop_desc for s in stops] == ["first line\r\nsecond line", "plain"]


def test_byte_order_mark_is_not_part_of_the_header(tmp_path: Path) -> None:
    (tmp_path / "agency.txt").write_bytes(
        "agency_id,agency_name\nA1,Kalmar Länstrafik\n".encode("utf-8-sig")
    )
    reader = _reader(tmp_path, GtfsFile.AGENCY)
    assert reader.header == ("agency_id", "agency_name")
    assert reader.next().agency_name == "Kalmar Länstrafik"


@pytest.mark.parametrize("content", ["", "stop_id,stop_name\n"])
def test_empty_files_yield_no_records(tmp_path: Path, content: str) -> None:
    (tmp_path / "stops.txt").write_text(content, encoding="utf-8")
    assert _reader(tmp_path).materialize() == ()
    assert _reader(tmp_path).next() is None


def test_malformed_time_fails_at_decode(tmp_path: Path) -> None:
    (tmp_path / "stop_times.txt").write_text(
        "trip_id,arrival_time,departure_time\nT1,8:00,08:00:00\n", encoding="utf-8"
    )

    with pytest.raises(RowDecodeError, match="arrival_time") as info:
        _reader(tmp_path, GtfsFile.STOP_TIMES).materialize()
    assert info.value.line_number == 2
