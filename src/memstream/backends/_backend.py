"""StorageBackend: protocol for the stream behind a ByteBuffer."""

from __future__ import annotations

import io
from enum import Enum
from typing import Protocol, runtime_checkable

from memstream.errors import InvalidArgumentError


class BackendKind(str, Enum):
    """Closed set of storage media a ByteBuffer can be opened on."""

    MEMORY = "memory"
    SPILLABLE = "spillable"


def normalize_kind(kind: BackendKind | str) -> BackendKind:
    """Normalize a backend selector into a BackendKind."""
    if isinstance(kind, BackendKind):
        return kind
    try:
        return BackendKind(kind)
    except ValueError:
        choices = ", ".join(repr(member.value) for member in BackendKind)
        msg = f"Unknown backend kind {kind!r}; expected one of {choices}."
        raise InvalidArgumentError(msg) from None


@runtime_checkable
class StorageBackend(Protocol):
    """Seekable byte stream protocol.

    Implementations must zero-fill the gap when a write lands past the
    current end of the stream, the way ``io.BytesIO`` and regular files do.
    """

    @property
    def kind(self) -> BackendKind:
        """Return which storage medium this backend uses."""
        ...

    @property
    def closed(self) -> bool:
        """Return whether the backend has been closed."""
        ...

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        """Move the stream position and return the new absolute position."""
        ...

    def tell(self) -> int:
        """Return the current stream position."""
        ...

    def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` bytes from the current position (all when negative)."""
        ...

    def write(self, data: bytes | bytearray | memoryview) -> int:
        """Write ``data`` at the current position and return the byte count."""
        ...

    def close(self) -> None:
        """Release the underlying resource. Safe to call more than once."""
        ...
