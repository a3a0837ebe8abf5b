"""ByteBuffer basics on both storage backends."""

from memstream import BackendKind, BufferConfig, ByteBuffer

# ---- InMemoryBackend ----
# Content stays in RAM for the life of the buffer.

with ByteBuffer.open(BackendKind.MEMORY) as buf:
    buf.write(b"hello")
    buf.write_bytes([0x20, 0x77, 0x6F, 0x72, 0x6C, 0x64])
    print(f"[memory] read() = {buf.read()!r}, length() = {buf.length()}")
    print(f"  read(length=3, offset=6) = {buf.read(3, 6)!r}")
    print(f"  read_bytes(2) = {buf.read_bytes(2)}")

    buf[0] = ord("H")
    buf.set_byte_at(15, 0x21)  # past the end: the gap is zero-filled
    print(f"  after indexed writes = {bytes(buf)!r}")
    print(f"  byte_at(99) = {buf.byte_at(99)}")

# ---- SpillableBackend ----
# Starts in RAM and moves to a temporary file once it grows past the threshold.

config = BufferConfig(spill_threshold=16)
with ByteBuffer.open(BackendKind.SPILLABLE, config=config) as buf:
    buf.write(b"0123456789")
    print(f"\n[spillable] spilled after 10 bytes = {buf.backend.spilled}")
    buf.write(b"abcdefghij")
    print(f"  spilled after 20 bytes = {buf.backend.spilled}")
    print(f"  read() = {buf.read()!r}, length() = {buf.length()}")

print(f"\nclosed on exit = {buf.closed}")
