from typing import Protocol, runtime_checkable


@runtime_checkable
class StorageMedium(Protocol):
    """Byte-level I/O for a single settings identity.

    A medium runs at most one session at a time: either a read session
    (`open_read` then `read_chunk` until it returns `b""`) or a write session
    (`open_write`, `write_chunk`/`flush`, then `close` to commit or `discard`
    to abandon). Failures raise `OSError`.

    - `write_chunk` is all-or-nothing: on failure none of `data` is kept.
    - `close` may be retried after a failure until it succeeds.
    """

    identity: str

    def open_read(self) -> None: ...

    def read_chunk(self, size: int) -> bytes: ...

    def open_write(self) -> None: ...

    def write_chunk(self, data: bytes) -> None: ...

    def flush(self) -> None: ...

    def close(self) -> None: ...

    def discard(self) -> None: ...
