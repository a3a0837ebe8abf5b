"""ByteBuffer: random-access byte storage over a StorageBackend."""

from __future__ import annotations

import io
import logging
import weakref
from contextlib import contextmanager
from typing import TYPE_CHECKING

from memstream.backends import BackendKind, open_backend
from memstream.errors import InvalidArgumentError, InvalidByteValueError, StreamIOError, UseAfterDestroyError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from types import TracebackType

    from memstream.backends import StorageBackend
    from memstream.config import BufferConfig

logger = logging.getLogger(__name__)


def validate_byte(value: object, *, index: int | None = None) -> int:
    """Return ``value`` if it is an int in [0, 255], else raise InvalidByteValueError."""
    if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= 255:
        raise InvalidByteValueError(value, index)
    return value


def _require_position(value: object, *, field_name: str) -> int:
    """Validate a zero-based offset or length argument."""
    if not isinstance(value, int) or isinstance(value, bool):
        msg = f"{field_name} must be an int, got {type(value).__name__}."
        raise TypeError(msg)
    if value < 0:
        msg = f"{field_name} must be >= 0, got {value}."
        raise InvalidArgumentError(msg)
    return value


@contextmanager
def _backend_errors(operation: str) -> Iterator[None]:
    """Translate backend faults into StreamIOError.

    Offsets too large for the platform surface from ``io`` as ``OverflowError``
    or ``MemoryError`` rather than ``OSError``; they are wrapped the same way.
    """
    try:
        yield
    except (OSError, OverflowError, MemoryError) as exc:
        raise StreamIOError(operation, str(exc)) from exc


def _release_unclosed(backend: StorageBackend) -> None:
    """Close a backend whose ByteBuffer was collected without ``close()``."""
    if backend.closed:
        return
    logger.warning("ByteBuffer on %s backend was collected without close(); releasing it", backend.kind.value)
    backend.close()


class ByteBuffer:
    """Growable byte stream with positional and indexed access.

    Every operation positions the backend explicitly, so no cursor survives
    between calls. ``write`` and ``write_bytes`` append at the end of data;
    ``set_byte_at`` and ``buffer[i] = v`` overwrite in place and zero-fill any
    gap when the offset lies past the end.

    ``close()`` is the release point. A buffer that is garbage-collected while
    still open is closed by a finalizer, which logs a warning.
    """

    def __init__(self, backend: StorageBackend) -> None:
        """Wrap an already-open backend."""
        self._backend = backend
        self._finalizer = weakref.finalize(self, _release_unclosed, backend)

    @classmethod
    def open(
        cls,
        kind: BackendKind | str = BackendKind.MEMORY,
        *,
        config: BufferConfig | None = None,
    ) -> ByteBuffer:
        """Open an empty buffer on a new backend of the given kind."""
        return cls(open_backend(kind, config))

    @property
    def kind(self) -> BackendKind:
        """Return the backend's storage medium."""
        return self._backend.kind

    @property
    def backend(self) -> StorageBackend:
        """Return the underlying backend."""
        return self._backend

    @property
    def closed(self) -> bool:
        """Return whether the buffer has been closed."""
        return not self._finalizer.alive or self._backend.closed

    def _ensure_open(self) -> None:
        if self.closed:
            msg = "ByteBuffer has been closed."
            raise UseAfterDestroyError(msg)

    def write(self, data: bytes | bytearray | memoryview) -> bool:
        """Append raw bytes at the end of the stream."""
        if not isinstance(data, (bytes, bytearray, memoryview)):
            msg = f"write() expects a bytes-like object, got {type(data).__name__}."
            raise TypeError(msg)
        self._ensure_open()
        with _backend_errors("write"):
            self._backend.seek(0, io.SEEK_END)
            self._backend.write(data)
        return True

    def write_bytes(self, values: Iterable[int]) -> bool:
        """Append integer byte values at the end of the stream.

        All values are validated before anything is written.
        """
        payload = bytes(validate_byte(value, index=index) for index, value in enumerate(values))
        return self.write(payload)

    def read(self, length: int = 0, offset: int = 0) -> bytes:
        """Read ``length`` bytes starting at ``offset``.

        ``length == 0`` reads to the end of the stream. An offset at or past
        the end returns ``b""``.
        """
        _require_position(length, field_name="length")
        _require_position(offset, field_name="offset")
        end = self.length()
        if offset >= end:
            return b""
        with _backend_errors("read"):
            self._backend.seek(offset)
            return self._backend.read(min(length, end - offset) if length > 0 else -1)

    def read_bytes(self, length: int = 0, offset: int = 0) -> list[int]:
        """Read like ``read`` and return each byte as an int."""
        return list(self.read(length, offset))

    def byte_at(self, offset: int) -> int | None:
        """Return the byte at ``offset``, or ``None`` past the end of the stream."""
        data = self.read(1, offset)
        return data[0] if data else None

    def set_byte_at(self, offset: int, value: int) -> None:
        """Overwrite the byte at ``offset``, extending the stream if needed."""
        _require_position(offset, field_name="offset")
        byte = validate_byte(value)
        self._ensure_open()
        with _backend_errors("write"):
            self._backend.seek(offset)
            self._backend.write(bytes((byte,)))

    def length(self) -> int:
        """Return the stream length without moving the backend position."""
        self._ensure_open()
        with _backend_errors("seek"):
            position = self._backend.tell()
            end = self._backend.seek(0, io.SEEK_END)
            self._backend.seek(position)
        return end

    def close(self) -> None:
        """Release the backend. Further calls are no-ops."""
        if not self._finalizer.alive:
            return
        self._finalizer.detach()
        with _backend_errors("close"):
            self._backend.close()
        logger.debug("Closed %s buffer", self._backend.kind.value)

    def __getitem__(self, offset: int) -> int:
        value = self.byte_at(offset)
        if value is None:
            msg = f"offset {offset} is past the end of the buffer"
            raise IndexError(msg)
        return value

    def __setitem__(self, offset: int, value: int) -> None:
        self.set_byte_at(offset, value)

    def __len__(self) -> int:
        return self.length()

    def __bytes__(self) -> bytes:
        return self.read()

    def __enter__(self) -> ByteBuffer:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else f"length={self.length()}"
        return f"ByteBuffer(kind={self.kind.value!r}, {state})"
