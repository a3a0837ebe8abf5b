"""Tests for BufferConfig."""

import pytest

from memstream.config import DEFAULT_SPILL_THRESHOLD, BufferConfig
from memstream.errors import InvalidArgumentError


def test_defaults() -> None:
    config = BufferConfig()
    assert config.spill_threshold == DEFAULT_SPILL_THRESHOLD == 2 * 1024 * 1024
    assert config.temp_dir is None


def test_is_frozen() -> None:
    config = BufferConfig()
    with pytest.raises(AttributeError):
        config.spill_threshold = 1  # type: ignore[misc]


@pytest.mark.parametrize("threshold", [-1, True, 1.5, "10"])
def test_rejects_invalid_threshold(threshold: object) -> None:
    with pytest.raises(InvalidArgumentError):
        BufferConfig(spill_threshold=threshold)  # type: ignore[arg-type]


def test_rejects_non_string_temp_dir() -> None:
    with pytest.raises(InvalidArgumentError, match="temp_dir"):
        BufferConfig(temp_dir=42)  # type: ignore[arg-type]


def test_to_dict_from_dict() -> None:
    config = BufferConfig(spill_threshold=64, temp_dir="/tmp/spill")
    payload = config.to_dict()
    assert payload == {"spill_threshold": 64, "temp_dir": "/tmp/spill"}
    assert BufferConfig.from_dict(payload) == config


def test_from_dict_uses_defaults_for_missing_keys() -> None:
    assert BufferConfig.from_dict({}) == BufferConfig()


def test_from_dict_rejects_non_mapping() -> None:
    with pytest.raises(InvalidArgumentError, match="must be a mapping"):
        BufferConfig.from_dict([("spill_threshold", 1)])  # type: ignore[arg-type]


def test_from_env_reads_variables() -> None:
    config = BufferConfig.from_env({"MEMSTREAM_SPILL_THRESHOLD": " 1024 ", "MEMSTREAM_TEMP_DIR": "/var/tmp"})
    assert config.spill_threshold == 1024
    assert config.temp_dir == "/var/tmp"


def test_from_env_empty_values_fall_back_to_defaults() -> None:
    config = BufferConfig.from_env({"MEMSTREAM_SPILL_THRESHOLD": "", "MEMSTREAM_TEMP_DIR": ""})
    assert config == BufferConfig()


def test_from_env_rejects_non_integer_threshold() -> None:
    with pytest.raises(InvalidArgumentError, match="MEMSTREAM_SPILL_THRESHOLD"):
        BufferConfig.from_env({"MEMSTREAM_SPILL_THRESHOLD": "lots"})


def test_from_env_defaults_to_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MEMSTREAM_SPILL_THRESHOLD", "7")
    monkeypatch.delenv("MEMSTREAM_TEMP_DIR", raising=False)
    assert BufferConfig.from_env() == BufferConfig(spill_threshold=7)
