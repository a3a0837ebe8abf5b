"""Storage backends: the seekable streams a ByteBuffer is opened on."""

from memstream.backends._backend import BackendKind, StorageBackend, normalize_kind
from memstream.backends._factory import open_backend
from memstream.backends._memory import InMemoryBackend
from memstream.backends._spill import SpillableBackend

__all__ = [
    "BackendKind",
    "InMemoryBackend",
    "SpillableBackend",
    "StorageBackend",
    "normalize_kind",
    "open_backend",
]
