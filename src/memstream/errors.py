"""Typed errors for memstream."""


class MemstreamError(Exception):
    """Base exception for all memstream errors."""


class StreamIOError(MemstreamError):
    """Raised when a storage backend cannot be opened, read, written, or closed."""

    def __init__(self, operation: str, detail: str) -> None:
        """Initialize with the failed backend operation and a description."""
        self.operation = operation
        super().__init__(f"Backend {operation} failed: {detail}")


class InvalidArgumentError(MemstreamError, ValueError):
    """Raised when an argument is outside its accepted domain."""


class InvalidByteValueError(InvalidArgumentError):
    """Raised when a byte value is not an integer in [0, 255]."""

    def __init__(self, value: object, index: int | None = None) -> None:
        """Initialize with the offending value and its position, if any."""
        self.value = value
        self.index = index
        where = f" at index {index}" if index is not None else ""
        super().__init__(f"Byte value{where} must be an integer between 0 and 255, got {value!r}")


class UseAfterDestroyError(MemstreamError):
    """Raised for operations on a buffer that has been closed or destroyed."""
