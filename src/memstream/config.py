"""BufferConfig: resource settings shared by storage backends."""

import os
from collections.abc import Mapping
from dataclasses import dataclass

from memstream.serde import as_str_object_dict, optional_string, parse_int_string, require_non_negative_int

DEFAULT_SPILL_THRESHOLD = 2 * 1024 * 1024

ENV_SPILL_THRESHOLD = "MEMSTREAM_SPILL_THRESHOLD"
ENV_TEMP_DIR = "MEMSTREAM_TEMP_DIR"


@dataclass(frozen=True, slots=True)
class BufferConfig:
    """Resource settings for opening a ByteBuffer.

    ``spill_threshold`` is the stream size in bytes a spillable backend may keep
    in RAM before it moves to a temporary file. ``temp_dir`` selects the
    directory for that file (system default when ``None``). The in-memory
    backend ignores both.
    """

    spill_threshold: int = DEFAULT_SPILL_THRESHOLD
    temp_dir: str | None = None

    def __post_init__(self) -> None:
        """Validate field values."""
        require_non_negative_int(self.spill_threshold, field_name="BufferConfig.spill_threshold")
        optional_string(self.temp_dir, field_name="BufferConfig.temp_dir")

    def to_dict(self) -> dict[str, object]:
        """Serialize BufferConfig to a plain dictionary."""
        return {
            "spill_threshold": self.spill_threshold,
            "temp_dir": self.temp_dir,
        }

    @classmethod
    def from_dict(cls, value: Mapping[str, object]) -> "BufferConfig":
        """Deserialize BufferConfig from a plain dictionary."""
        data = as_str_object_dict(value, field_name="BufferConfig")
        spill_threshold = data.get("spill_threshold", DEFAULT_SPILL_THRESHOLD)
        return cls(
            spill_threshold=require_non_negative_int(spill_threshold, field_name="BufferConfig.spill_threshold"),
            temp_dir=optional_string(data.get("temp_dir"), field_name="BufferConfig.temp_dir"),
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "BufferConfig":
        """Build a BufferConfig from ``MEMSTREAM_*`` environment variables.

        Unset or empty variables fall back to the field defaults.
        """
        env = os.environ if environ is None else environ
        raw_threshold = env.get(ENV_SPILL_THRESHOLD, "")
        spill_threshold = (
            parse_int_string(raw_threshold, field_name=ENV_SPILL_THRESHOLD)
            if raw_threshold.strip()
            else DEFAULT_SPILL_THRESHOLD
        )
        temp_dir = env.get(ENV_TEMP_DIR) or None
        return cls(spill_threshold=spill_threshold, temp_dir=temp_dir)
