"""InMemoryBackend: RAM-resident stream storage."""

import io

from memstream.backends._backend import BackendKind


class InMemoryBackend:
    """Stream storage that stays in RAM regardless of size."""

    def __init__(self) -> None:
        """Initialize an empty in-memory stream."""
        self._stream = io.BytesIO()

    @property
    def kind(self) -> BackendKind:
        """Return ``BackendKind.MEMORY``."""
        return BackendKind.MEMORY

    @property
    def closed(self) -> bool:
        """Return whether the stream has been closed."""
        return self._stream.closed

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
        """Write bytes at the current position."""
        return self._stream.write(data)

    def close(self) -> None:
        """Drop the in-memory content."""
        self._stream.close()
