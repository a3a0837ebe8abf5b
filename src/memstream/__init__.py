"""memstream: byte buffers over memory or spill-to-disk storage, with owned and weak handles."""

import importlib.metadata as importlib_metadata

from memstream.backends import BackendKind, InMemoryBackend, SpillableBackend, StorageBackend, open_backend
from memstream.buffer import ByteBuffer
from memstream.config import BufferConfig
from memstream.errors import (
    InvalidArgumentError,
    InvalidByteValueError,
    MemstreamError,
    StreamIOError,
    UseAfterDestroyError,
)
from memstream.handles import (
    BorrowedBuffer,
    BufferRegistry,
    HandleToken,
    OwnedHandle,
    WeakHandle,
    create_owned,
    create_weak_observer,
    default_registry,
    destroy,
    resolve,
)


def _detect_version() -> str:
    """Return installed package version or a local fallback when metadata is unavailable."""
    try:
        return importlib_metadata.version("memstream")
    except importlib_metadata.PackageNotFoundError:
        return "0.0.0+unknown"


__version__ = _detect_version()

__all__ = [
    "BackendKind",
    "BorrowedBuffer",
    "BufferConfig",
    "BufferRegistry",
    "ByteBuffer",
    "HandleToken",
    "InMemoryBackend",
    "InvalidArgumentError",
    "InvalidByteValueError",
    "MemstreamError",
    "OwnedHandle",
    "SpillableBackend",
    "StorageBackend",
    "StreamIOError",
    "UseAfterDestroyError",
    "WeakHandle",
    "create_owned",
    "create_weak_observer",
    "default_registry",
    "destroy",
    "open_backend",
    "resolve",
]
