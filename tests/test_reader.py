"""Tests for canfuzz.data.reader module."""

import random
from pathlib import Path

import pandas as pd
import pytest

from canfuzz.data.generator import Label, RecordGenerator
from canfuzz.data.reader import (
    COLUMNS,
    iter_frames,
    read_dataset,
    row_to_frame,
    summarize,
    validate_dataset,
)
from canfuzz.data.writer import write_dataset


@pytest.fixture
def dataset_path(tmp_path: Path, rng: random.Random, ticking_clock) -> Path:
    """Small dataset with 60 normal and 40 injected frames."""
    path = tmp_path / "fuzzy.csv"
    write_dataset(RecordGenerator(60, 40, rng=rng, clock=ticking_clock), path, show_progress=False)
    return path


class TestRowToFrame:
    """Tests for row_to_frame function."""

    def test_parse_row(self) -> None:
        row = ["1700000000.000001", "205", "8", "0B", "B8", "00", "00", "00", "00", "00", "00", "R"]
        frame = row_to_frame(row)
        assert frame.can_id == 0x205
        assert frame.dlc == 8
        assert frame.data == bytes([0x0B, 0xB8]) + bytes(6)
        assert frame.label is Label.NORMAL

    def test_wrong_column_count(self) -> None:
        with pytest.raises(ValueError, match="Expected 12 columns"):
            row_to_frame(["1.000000", "100", "8", "T"])

    def test_unknown_flag(self) -> None:
        row = ["1.000000", "100", "8"] + ["00"] * 8 + ["X"]
        with pytest.raises(ValueError, match="Unknown flag"):
            row_to_frame(row)

    def test_bad_hex(self) -> None:
        row = ["1.000000", "100", "8"] + ["ZZ"] * 8 + ["R"]
        with pytest.raises(ValueError):
            row_to_frame(row)

    def test_short_byte(self) -> None:
        row = ["1.000000", "100", "8"] + ["0"] * 8 + ["R"]
        with pytest.raises(ValueError, match="2 uppercase hex digits"):
            row_to_frame(row)


class TestReadDataset:
    """Tests for read_dataset and iter_frames."""

    def test_columns_kept_as_text(self, dataset_path: Path) -> None:
        df = read_dataset(dataset_path)
        assert list(df.columns) == COLUMNS
        assert len(df) == 100
        assert all(len(b) == 2 for b in df["data0"])

    def test_round_trip_dlc(self, dataset_path: Path) -> None:
        """Test every written row parses back with DLC 8."""
        frames = list(iter_frames(dataset_path))
        assert len(frames) == 100
        assert all(frame.dlc == 8 for frame in frames)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Dataset not found"):
            read_dataset(tmp_path / "missing.csv")


class TestSummarize:
    """Tests for summarize function."""

    def test_counts(self, dataset_path: Path) -> None:
        stats = summarize(read_dataset(dataset_path))
        assert stats["total"] == 100
        assert stats["normal"] == 60
        assert stats["injected"] == 40
        assert stats["injected_ratio"] == pytest.approx(0.4)
        assert sum(stats["normal_id_counts"].values()) == 60
        assert stats["time_span_seconds"] == pytest.approx(99e-6, abs=1e-6)

    def test_empty(self) -> None:
        stats = summarize(pd.DataFrame(columns=COLUMNS))
        assert stats["total"] == 0
        assert stats["injected_ratio"] == 0.0
        assert stats["time_span_seconds"] == 0.0


class TestValidateDataset:
    """Tests for validate_dataset function."""

    def test_generated_dataset_is_valid(self, dataset_path: Path) -> None:
        df = read_dataset(dataset_path)
        assert validate_dataset(df, normal_target=60, injected_target=40) == []

    def test_count_mismatch(self, dataset_path: Path) -> None:
        df = read_dataset(dataset_path)
        violations = validate_dataset(df, normal_target=61, injected_target=40)
        assert violations == ["expected 61 normal frames, found 60"]

    def test_detects_bad_rows(self) -> None:
        rows = [
            ["1.000001", "100", "8", "02", "00", "00", "00", "00", "00", "00", "00", "R"],
            ["1.000002", "100", "8", "01", "00", "00", "00", "00", "00", "00", "00", "T"],
            ["1.000000", "300", "8", "00", "00", "00", "00", "00", "00", "00", "00", "R"],
            ["1.0", "206", "7", "00", "00", "00", "00", "00", "00", "00", "00", "T"],
        ]
        violations = validate_dataset(pd.DataFrame(rows, columns=COLUMNS))
        assert "row 0: payload out of range for EngineOnOff" in violations
        assert "row 1: injected frame uses known ID 100" in violations
        assert "row 2: timestamp goes backward" in violations
        assert "row 2: normal frame uses unknown ID 300" in violations
        assert "row 3: bad timestamp '1.0'" in violations
        assert "row 3: DLC 7 != 8" in violations


class TestHexFormat:
    """Tests for strict uppercase hex parsing."""

    @pytest.mark.parametrize("can_id", ["0x205", "205h", "+F", "2ab", ""])
    def test_rejects_non_canonical_id(self, can_id: str) -> None:
        row = ["1.000000", can_id, "8"] + ["00"] * 8 + ["T"]
        with pytest.raises(ValueError, match="uppercase hex without prefix"):
            row_to_frame(row)

    @pytest.mark.parametrize("byte", ["ff", "+F", "0x"])
    def test_rejects_non_canonical_byte(self, byte: str) -> None:
        row = ["1.000000", "2AB", "8", byte] + ["00"] * 7 + ["T"]
        with pytest.raises(ValueError, match="2 uppercase hex digits"):
            row_to_frame(row)

    def test_validate_reports_lowercase_id(self) -> None:
        rows = [["1.000000", "2ab", "8"] + ["00"] * 8 + ["T"]]
        violations = validate_dataset(pd.DataFrame(rows, columns=COLUMNS))
        assert violations == ["row 0: ID must be uppercase hex without prefix: '2ab'"]


class TestMalformedTimestamps:
    """Tests for datasets with unparseable timestamps."""

    def test_summarize_skips_bad_timestamp(self) -> None:
        rows = [
            ["abc", "100", "8"] + ["00"] * 8 + ["R"],
            ["1.000000", "100", "8"] + ["01"] + ["00"] * 7 + ["R"],
            ["3.000000", "2AB", "8"] + ["00"] * 8 + ["T"],
        ]
        stats = summarize(pd.DataFrame(rows, columns=COLUMNS))
        assert stats["total"] == 3
        assert stats["time_span_seconds"] == pytest.approx(2.0)

    def test_summarize_all_bad_timestamps(self) -> None:
        rows = [["abc", "100", "8"] + ["00"] * 8 + ["R"]]
        assert summarize(pd.DataFrame(rows, columns=COLUMNS))["time_span_seconds"] == 0.0

    def test_validate_reports_bad_timestamp(self) -> None:
        rows = [["abc", "100", "8"] + ["00"] * 8 + ["R"]]
        violations = validate_dataset(pd.DataFrame(rows, columns=COLUMNS))
        assert violations == ["row 0: bad timestamp 'abc'"]
