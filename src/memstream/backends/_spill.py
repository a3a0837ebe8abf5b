"""SpillableBackend: RAM-resident stream that moves to a temp file past a threshold."""

from __future__ import annotations

import io
import logging
import tempfile
from typing import IO

from memstream.backends._backend import BackendKind
from memstream.errors import StreamIOError

logger = logging.getLogger(__name__)


class SpillableBackend:
    """Stream storage that starts in RAM and spills to a temporary file.

    The content stays in an ``io.BytesIO`` until a write would push the end of
    the stream past ``spill_threshold`` bytes. At that point the content is
    copied into an anonymous ``tempfile.TemporaryFile`` and every later call
    goes to the file. The file is removed by the OS when the backend closes.
    """

    def __init__(self, *, spill_threshold: int, temp_dir: str | None = None) -> None:
        """Initialize an empty RAM-resident stream with the given spill settings."""
        self._spill_threshold = spill_threshold
        self._temp_dir = temp_dir
        self._stream: IO[bytes] = io.BytesIO()
        self._spilled = False

    @property
    def kind(self) -> BackendKind:
        """Return ``BackendKind.SPILLABLE``."""
        return BackendKind.SPILLABLE

    @property
    def spill_threshold(self) -> int:
        """Return the RAM budget in bytes."""
        return self._spill_threshold

    @property
    def spilled(self) -> bool:
        """Return whether the content now lives in a temporary file."""
        return self._spilled

    @property
    def closed(self) -> bool:
        """Return whether the stream has been closed."""
        return self._stream.closed

    def rollover(self) -> None:
        """Move the content to a temporary file now, keeping the stream position."""
        if self._spilled:
            return
        position = self._stream.tell()
        try:
            spill_file = tempfile.TemporaryFile(dir=self._temp_dir)
        except OSError as exc:
            raise StreamIOError("spill", str(exc)) from exc

        content = self._stream.getvalue()  # type: ignore[attr-defined]
        try:
            spill_file.write(content)
            spill_file.seek(position)
        except OSError as exc:
            spill_file.close()
            raise StreamIOError("spill", str(exc)) from exc
        self._stream.close()
        self._stream = spill_file
        self._spilled = True
        logger.debug("Spilled %d bytes to temporary file %s", len(content), spill_file.name)

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        """Move the stream position."""
        return self._stream.seek(offset, whence)

    def tell(self) -> int:
        """Return the current stream position."""
        return self._stream.tell()

    def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` bytes from the current position."""
        return self._stream.read(size)

    def write(self, data: bytes | bytearray | memoryview) -> int:
        """Write bytes at the current position, spilling first if the threshold is crossed."""
        if not self._spilled and self._stream.tell() + memoryview(data).nbytes > self._spill_threshold:
            self.rollover()
        return self._stream.write(data)

    def close(self) -> None:
        """Release the RAM buffer or the temporary file."""
        self._stream.close()
