"""Simple memory-backed storage medium

Settings content lives in a shared `MemoryStore` as `{<identity>: <bytes>}`
so that several accessors (and tests) can address the same identity.
"""
from threading import RLock
from typing import Dict, Iterable, Optional
import logging

logger = logging.getLogger(__name__)


class MemoryStore:
    def __init__(self):
        self._lock = RLock()
        self._store: Dict[str, bytes] = {}

    def get(self, identity: str) -> Optional[bytes]:
        with self._lock:
            return self._store.get(identity)

    def set(self, identity: str, content: bytes) -> None:
        with self._lock:
            self._store[identity] = bytes(content)

    def delete(self, identity: str) -> None:
        with self._lock:
            self._store.pop(identity, None)

    def exists(self, identity: str) -> bool:
        with self._lock:
            return identity in self._store

    def list_keys(self) -> Iterable[str]:
        with self._lock:
            return list(self._store.keys())


class MemoryMedium:
    """Medium that keeps one identity's content in a `MemoryStore`.

    Written chunks are staged and only committed to the store by `close`,
    so a read never observes a half-written session.
    """

    def __init__(self, store: MemoryStore, identity: str) -> None:
        self.store = store
        self.identity = identity
        self._content: Optional[bytes] = None
        self._pos = 0
        self._staged: Optional[bytearray] = None

    def open_read(self) -> None:
        self._content = self.store.get(self.identity) or b""
        self._pos = 0

    def read_chunk(self, size: int) -> bytes:
        if self._content is None:
            raise OSError(f"{self.identity!r} is not open for reading")
        chunk = self._content[self._pos:self._pos + size]
        self._pos += len(chunk)
        return chunk

    def open_write(self) -> None:
        self._staged = bytearray()

    def write_chunk(self, data: bytes) -> None:
        if self._staged is None:
            raise OSError(f"{self.identity!r} is not open for writing")
        self._staged += data

    def flush(self) -> None:
        # Staged bytes are already as durable as this medium gets until commit.
        return

    def close(self) -> None:
        if self._staged is not None:
            self.store.set(self.identity, self._staged)
            logger.debug("MemoryMedium committed %s (%d bytes)", self.identity, len(self._staged))
            self._staged = None
        self._content = None
        self._pos = 0

    def discard(self) -> None:
        self._staged = None
        self._content = None
        self._pos = 0
