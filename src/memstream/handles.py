"""Ownership handles: exclusive owners and weak observers over ByteBuffers.

Buffers live in a ``BufferRegistry``, an arena of slots where each slot
carries a generation counter. A handle is a ``(slot, generation)`` token;
it resolves to the buffer only while the slot still holds the generation
the token was issued for. Destroying a buffer closes its backend, empties
the slot and bumps the generation, so every outstanding handle resolves to
``None`` from then on, even after the slot is reused.

Two handle kinds sit on top of the registry:

- ``OwnedHandle`` is responsible for releasing its buffer. Ownership can be
  moved with ``transfer()`` but never duplicated.
- ``WeakHandle`` only observes. It can check liveness, resolve, borrow, and
  request destruction, but it cannot become an owner.

``resolve()`` returns the ``ByteBuffer`` itself. Holding on to that object
past the immediate call does not keep the buffer alive: once destroyed, the
retained object raises ``UseAfterDestroyError``. Prefer ``borrow()``, whose
view stops working when its ``with`` block ends.
"""

from __future__ import annotations

import logging
import weakref
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING

from memstream.backends import BackendKind
from memstream.buffer import ByteBuffer
from memstream.errors import UseAfterDestroyError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from contextlib import AbstractContextManager
    from types import TracebackType

    from memstream.config import BufferConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class HandleToken:
    """Stable identity of one buffer inside a BufferRegistry."""

    slot: int
    generation: int


@dataclass(slots=True)
class _Slot:
    generation: int = 0
    buffer: ByteBuffer | None = None


class BufferRegistry:
    """Generation-checked arena that owns registered ByteBuffers."""

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._slots: list[_Slot] = []
        self._free: list[int] = []

    def __len__(self) -> int:
        return sum(1 for slot in self._slots if slot.buffer is not None and not slot.buffer.closed)

    def register(self, buffer: ByteBuffer) -> HandleToken:
        """Take ownership of an open buffer and return its token."""
        if buffer.closed:
            msg = "Cannot register a closed ByteBuffer."
            raise UseAfterDestroyError(msg)
        if self._free:
            index = self._free.pop()
            slot = self._slots[index]
        else:
            index = len(self._slots)
            slot = _Slot()
            self._slots.append(slot)
        slot.buffer = buffer
        return HandleToken(slot=index, generation=slot.generation)

    def _vacate(self, index: int) -> ByteBuffer | None:
        """Empty a slot and advance its generation."""
        slot = self._slots[index]
        buffer = slot.buffer
        slot.buffer = None
        slot.generation += 1
        self._free.append(index)
        return buffer

    def _live_slot(self, token: HandleToken) -> _Slot | None:
        if not 0 <= token.slot < len(self._slots):
            return None
        slot = self._slots[token.slot]
        if slot.buffer is None or slot.generation != token.generation:
            return None
        if slot.buffer.closed:
            # Closed through a retained reference; treat as destroyed.
            self._vacate(token.slot)
            return None
        return slot

    def resolve(self, token: HandleToken) -> ByteBuffer | None:
        """Return the live buffer for ``token``, or ``None`` once destroyed."""
        slot = self._live_slot(token)
        return slot.buffer if slot is not None else None

    def release(self, token: HandleToken) -> bool:
        """Destroy the buffer behind ``token``.

        Return ``True`` when this call closed the buffer and ``False`` when the
        token was already stale.
        """
        if self._live_slot(token) is None:
            return False
        buffer = self._vacate(token.slot)
        logger.debug("Destroying buffer in slot %d (generation %d)", token.slot, token.generation)
        if buffer is not None:
            buffer.close()
        return True

    def tokens(self) -> tuple[HandleToken, ...]:
        """Return tokens for every live buffer."""
        return tuple(
            HandleToken(slot=index, generation=slot.generation)
            for index, slot in enumerate(self._slots)
            if slot.buffer is not None and not slot.buffer.closed
        )

    def close(self) -> None:
        """Destroy every live buffer."""
        for token in self.tokens():
            self.release(token)

    def __enter__(self) -> BufferRegistry:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()


class BorrowedBuffer:
    """Scoped view of a registered buffer.

    The view holds only the token. Each call re-resolves it, so the view never
    keeps the buffer alive and fails with ``UseAfterDestroyError`` once the
    buffer is destroyed or the ``borrow()`` block has exited.
    """

    def __init__(self, registry: BufferRegistry, token: HandleToken) -> None:
        """Bind the view to a registry token."""
        self._registry = registry
        self._token = token
        self._active = True

    @property
    def active(self) -> bool:
        """Return whether the view is inside its scope and the buffer is alive."""
        return self._active and self._registry.resolve(self._token) is not None

    def _target(self) -> ByteBuffer:
        if not self._active:
            msg = "Borrowed buffer used outside its borrow() block."
            raise UseAfterDestroyError(msg)
        buffer = self._registry.resolve(self._token)
        if buffer is None:
            msg = "Borrowed buffer has been destroyed."
            raise UseAfterDestroyError(msg)
        return buffer

    def _expire(self) -> None:
        self._active = False

    def write(self, data: bytes | bytearray | memoryview) -> bool:
        """Append raw bytes."""
        return self._target().write(data)

    def write_bytes(self, values: Iterable[int]) -> bool:
        """Append integer byte values."""
        return self._target().write_bytes(values)

    def read(self, length: int = 0, offset: int = 0) -> bytes:
        """Read bytes; see ``ByteBuffer.read``."""
        return self._target().read(length, offset)

    def read_bytes(self, length: int = 0, offset: int = 0) -> list[int]:
        """Read bytes as ints; see ``ByteBuffer.read_bytes``."""
        return self._target().read_bytes(length, offset)

    def byte_at(self, offset: int) -> int | None:
        """Return one byte or ``None`` past the end."""
        return self._target().byte_at(offset)

    def set_byte_at(self, offset: int, value: int) -> None:
        """Overwrite one byte."""
        self._target().set_byte_at(offset, value)

    def length(self) -> int:
        """Return the stream length."""
        return self._target().length()

    def destroy(self) -> None:
        """Destroy the borrowed buffer for every handle."""
        self._registry.release(self._token)

    def __getitem__(self, offset: int) -> int:
        return self._target()[offset]

    def __setitem__(self, offset: int, value: int) -> None:
        self._target()[offset] = value

    def __len__(self) -> int:
        return self.length()

    def __bytes__(self) -> bytes:
        return self.read()


@contextmanager
def _borrow(registry: BufferRegistry, token: HandleToken) -> Iterator[BorrowedBuffer]:
    if registry.resolve(token) is None:
        msg = "Cannot borrow a destroyed buffer."
        raise UseAfterDestroyError(msg)
    view = BorrowedBuffer(registry, token)
    try:
        yield view
    finally:
        view._expire()


@dataclass(frozen=True, slots=True)
class WeakHandle:
    """Non-owning observer of a registered buffer."""

    registry: BufferRegistry
    token: HandleToken

    @property
    def alive(self) -> bool:
        """Return whether the target buffer is still live."""
        return self.registry.resolve(self.token) is not None

    def resolve(self) -> ByteBuffer | None:
        """Return the live buffer, or ``None`` once destroyed."""
        return self.registry.resolve(self.token)

    def borrow(self) -> AbstractContextManager[BorrowedBuffer]:
        """Borrow the target for the duration of a ``with`` block."""
        return _borrow(self.registry, self.token)

    def destroy(self) -> None:
        """Destroy the target for every handle. Repeated calls are no-ops."""
        self.registry.release(self.token)


class OwnedHandle:
    """Exclusive owner of a registered buffer.

    The buffer is destroyed when the owner is destroyed, leaves its ``with``
    block, or is garbage-collected while it still holds ownership.
    """

    def __init__(self, registry: BufferRegistry, token: HandleToken) -> None:
        """Take responsibility for the buffer behind ``token``."""
        self._registry = registry
        self._token = token
        self._moved = False
        self._finalizer = weakref.finalize(self, registry.release, token)

    @property
    def token(self) -> HandleToken:
        """Return the target's token."""
        return self._token

    @property
    def registry(self) -> BufferRegistry:
        """Return the registry holding the target."""
        return self._registry

    @property
    def alive(self) -> bool:
        """Return whether this handle still owns a live buffer."""
        return self.resolve() is not None

    @property
    def buffer(self) -> ByteBuffer:
        """Return the owned buffer, raising if it is gone or ownership moved."""
        self._require_ownership()
        buffer = self._registry.resolve(self._token)
        if buffer is None:
            msg = "Owned buffer has been destroyed."
            raise UseAfterDestroyError(msg)
        return buffer

    def _require_ownership(self) -> None:
        if self._moved:
            msg = "Ownership was transferred away from this handle."
            raise UseAfterDestroyError(msg)

    def resolve(self) -> ByteBuffer | None:
        """Return the live buffer, or ``None`` once destroyed or moved."""
        if self._moved:
            return None
        return self._registry.resolve(self._token)

    def observe(self) -> WeakHandle:
        """Return a weak observer of the owned buffer."""
        self._require_ownership()
        return WeakHandle(registry=self._registry, token=self._token)

    def borrow(self) -> AbstractContextManager[BorrowedBuffer]:
        """Borrow the owned buffer for the duration of a ``with`` block."""
        self._require_ownership()
        return _borrow(self._registry, self._token)

    def transfer(self) -> OwnedHandle:
        """Move ownership to a new handle and retire this one."""
        self._require_ownership()
        self._moved = True
        self._finalizer.detach()
        return OwnedHandle(self._registry, self._token)

    def destroy(self) -> None:
        """Destroy the owned buffer. No-op when already destroyed or moved."""
        if self._moved:
            return
        self._finalizer()

    def close(self) -> None:
        """Alias of ``destroy`` for use with ``contextlib.closing``."""
        self.destroy()

    def __enter__(self) -> OwnedHandle:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.destroy()

    def __repr__(self) -> str:
        state = "moved" if self._moved else ("live" if self.alive else "destroyed")
        return f"OwnedHandle(slot={self._token.slot}, generation={self._token.generation}, {state})"


Handle = OwnedHandle | WeakHandle

_default_registry = BufferRegistry()


def default_registry() -> BufferRegistry:
    """Return the process-wide registry used when none is passed."""
    return _default_registry


def create_owned(
    kind: BackendKind | str = BackendKind.MEMORY,
    *,
    config: BufferConfig | None = None,
    registry: BufferRegistry | None = None,
) -> OwnedHandle:
    """Open a buffer and return its exclusive owner."""
    target = registry if registry is not None else _default_registry
    token = target.register(ByteBuffer.open(kind, config=config))
    return OwnedHandle(target, token)


def create_weak_observer(
    kind: BackendKind | str = BackendKind.MEMORY,
    *,
    config: BufferConfig | None = None,
    registry: BufferRegistry | None = None,
) -> WeakHandle:
    """Open a buffer held only by the registry and return a weak observer.

    The buffer stays live until some observer calls ``destroy`` or the
    registry is closed.
    """
    target = registry if registry is not None else _default_registry
    token = target.register(ByteBuffer.open(kind, config=config))
    return WeakHandle(registry=target, token=token)


def resolve(handle: Handle) -> ByteBuffer | None:
    """Return the handle's live buffer, or ``None`` once destroyed."""
    return handle.resolve()


def destroy(handle: Handle) -> None:
    """Destroy the handle's buffer for every handle that refers to it."""
    handle.destroy()
