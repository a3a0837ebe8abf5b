"""Owned handles, weak observers, and scoped borrows."""

from memstream import BufferRegistry, UseAfterDestroyError, create_owned, create_weak_observer, destroy, resolve

with BufferRegistry() as registry:
    # ---- Owned handle ----
    # The owner releases the buffer; observers only watch.

    with create_owned(registry=registry) as owner:
        owner.buffer.write(b"owned data")
        observer = owner.observe()
        print(f"[owned] observer sees {resolve(observer).read()!r}")  # type: ignore[union-attr]
    print(f"  observer after owner scope: {resolve(observer)}")

    # Ownership moves, it is never shared.
    first = create_owned(registry=registry)
    second = first.transfer()
    print(f"  after transfer: first={first!r}, second={second!r}")
    second.destroy()

    # ---- Weak observers ----
    # The registry holds the buffer; any observer may destroy it for everyone.

    weak = create_weak_observer("spillable", registry=registry)
    with weak.borrow() as view:
        view.write_bytes([1, 2, 3, 4, 255])
        print(f"\n[weak] read_bytes(2, 1) = {view.read_bytes(2, 1)}")

    try:
        view.read()
    except UseAfterDestroyError as exc:
        print(f"  borrowed view after its block: {exc}")

    destroy(weak)
    print(f"  resolve() after destroy = {resolve(weak)}")
    destroy(weak)
    print(f"  second destroy is a no-op, alive = {weak.alive}")
