"""Unit tests for the append-only CSV sink."""
from __future__ import annotations

from pathlib import Path

import pytest

from price_sampler.errors import SinkError
from price_sampler.models import Observation
from price_sampler.sinks import CsvSink, read_observations


class TestCsvSinkAppend:
    def test_fresh_file_gets_header_and_one_row(self, tmp_path: Path) -> None:
        path = tmp_path / "bitcoin_prices.csv"
        CsvSink(path).append(Observation("2024-03-14T09:30:00+01:00", 67000.5))

        assert path.read_text(encoding="utf-8").splitlines() == [
            "timestamp,price",
            "2024-03-14T09:30:00+01:00,67000.5",
        ]

    def test_second_append_adds_row_without_header(self, tmp_path: Path) -> None:
        path = tmp_path / "bitcoin_prices.csv"
        sink = CsvSink(path)
        sink.append(Observation("2024-03-14T09:30:00+01:00", 1.0))
        sink.append(Observation("2024-03-14T09:30:10+01:00", 2.0))

        lines = path.read_text(encoding="utf-8").splitlines()
        assert lines.count("timestamp,price") == 1
        assert lines[1:] == [
            "2024-03-14T09:30:00+01:00,1.0",
            "2024-03-14T09:30:10+01:00,2.0",
        ]

    def test_empty_existing_file_gets_header(self, tmp_path: Path) -> None:
        path = tmp_path / "eth.csv"
        path.touch()
        CsvSink(path).append(Observation("t", 3.0))
        assert path.read_text(encoding="utf-8") == "timestamp,price\nt,3.0\n"

    def test_existing_rows_are_preserved(self, tmp_path: Path) -> None:
        path = tmp_path / "eth.csv"
        path.write_text("timestamp,price\nold,1.5\n", encoding="utf-8")
        CsvSink(path).append(Observation("new", 2.5))
        assert path.read_text(encoding="utf-8") == "timestamp,price\nold,1.5\nnew,2.5\n"

    def test_identical_state_appends_twice(self, tmp_path: Path) -> None:
        path = tmp_path / "eth.csv"
        sink = CsvSink(path)
        obs = Observation("t", 3.0)
        sink.append(obs)
        sink.append(obs)
        assert path.read_text(encoding="utf-8").splitlines()[1:] == ["t,3.0", "t,3.0"]

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "dir" / "spy.csv"
        CsvSink(path).append(Observation("t", 1.0))
        assert path.exists()

    def test_unwritable_path_raises_sink_error(self, tmp_path: Path) -> None:
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("x")
        sink = CsvSink(blocker / "prices.csv", source="bitcoin")

        with pytest.raises(SinkError) as exc_info:
            sink.append(Observation("t", 1.0))

        assert exc_info.value.source == "bitcoin"
        assert exc_info.value.path == blocker / "prices.csv"

    def test_logs_row(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level("INFO", logger="price_sampler.sinks.csv_sink")
        CsvSink(tmp_path / "b.csv", source="bitcoin").append(Observation("t", 5.0))
        assert "[bitcoin] t,5.0" in caplog.text


class TestReadObservations:
    def test_reads_back_written_rows(self, tmp_path: Path) -> None:
        path = tmp_path / "b.csv"
        sink = CsvSink(path)
        written = [
            Observation("2024-03-14T09:30:00+01:00", 67000.5),
            Observation("2024-03-14T09:30:10+01:00", 67001.25),
        ]
        for obs in written:
            sink.append(obs)

        assert read_observations(path) == written

    def test_file_without_header(self, tmp_path: Path) -> None:
        path = tmp_path / "b.csv"
        path.write_text("t1,1.0\nt2,2.0\n", encoding="utf-8")
        assert [o.value for o in read_observations(path)] == [1.0, 2.0]
