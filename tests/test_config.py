"""Tests for canfuzz.config module."""

import pytest

from canfuzz.config import Settings


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test defaults match the reference dataset sizes."""
        monkeypatch.delenv("CANFUZZ_NORMAL_COUNT", raising=False)
        monkeypatch.delenv("CANFUZZ_INJECTED_COUNT", raising=False)
        s = Settings(_env_file=None)
        assert s.output_path == "Fuzzy_dataset.csv"
        assert s.normal_count == 3_347_013
        assert s.injected_count == 491_847
        assert s.total_count == 3_838_860
        assert (s.injected_id_min, s.injected_id_max) == (0x206, 0x2FF)
        assert s.seed is None

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CANFUZZ_NORMAL_COUNT", "30")
        monkeypatch.setenv("CANFUZZ_SEED", "7")
        s = Settings(_env_file=None)
        assert s.normal_count == 30
        assert s.seed == 7
