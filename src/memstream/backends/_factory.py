"""open_backend: construct a StorageBackend variant from a BackendKind."""

from __future__ import annotations

import logging
import os

from memstream.backends._backend import BackendKind, StorageBackend, normalize_kind
from memstream.backends._memory import InMemoryBackend
from memstream.backends._spill import SpillableBackend
from memstream.config import BufferConfig
from memstream.errors import StreamIOError

logger = logging.getLogger(__name__)


def _check_temp_dir(temp_dir: str) -> None:
    """Fail early when the spill directory cannot hold a temporary file."""
    if not os.path.isdir(temp_dir):
        msg = f"temporary directory {temp_dir!r} does not exist"
        raise StreamIOError("open", msg)
    if not os.access(temp_dir, os.W_OK | os.X_OK):
        msg = f"temporary directory {temp_dir!r} is not writable"
        raise StreamIOError("open", msg)


def open_backend(kind: BackendKind | str, config: BufferConfig | None = None) -> StorageBackend:
    """Open an empty backend of the given kind.

    Raise ``StreamIOError`` when the backend resource cannot be allocated and
    ``InvalidArgumentError`` for an unknown kind.
    """
    backend_kind = normalize_kind(kind)
    settings = config if config is not None else BufferConfig()

    backend: StorageBackend
    try:
        if backend_kind is BackendKind.MEMORY:
            backend = InMemoryBackend()
        else:
            if settings.temp_dir is not None:
                _check_temp_dir(settings.temp_dir)
            backend = SpillableBackend(spill_threshold=settings.spill_threshold, temp_dir=settings.temp_dir)
    except OSError as exc:
        raise StreamIOError("open", str(exc)) from exc

    logger.debug("Opened %s backend", backend_kind.value)
    return backend
