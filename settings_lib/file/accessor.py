"""Buffered settings file accessor.

`SettingsAccessor` implements the `SettingsFile` contract on top of any
`StorageMedium`. It owns the open state, the read cursor and the bytes that
were accepted by `write` but not yet handed to the medium. Pending bytes are
flushed when `flush_threshold` is reached (if configured), and always on
`close`, `force_close` and destruction.

The medium is opened lazily on the first read, flush or close, so opening
the accessor never touches storage.
"""
from __future__ import annotations
import logging

from settings_lib.medium.interfaces import StorageMedium
from .base import SettingsFile, WriteData
from .types import FileStatus, SettingsFileResult

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 4096


class SettingsAccessor(SettingsFile):
    """Settings file backed by a storage medium.

    Parameters
    - medium: the medium addressing this accessor's settings identity.
    - flush_threshold: flush pending writes once this many bytes are
      buffered. 0 defers every physical write until the file is closed.
    - chunk_size: number of bytes requested from the medium per read.
    """

    def __init__(self, medium: StorageMedium, *, flush_threshold: int = 0,
                 chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        if flush_threshold < 0:
            raise ValueError("flush_threshold must be >= 0")
        if chunk_size <= 0:
            raise ValueError("chunk_size must be > 0")
        self.medium = medium
        self.flush_threshold = flush_threshold
        self.chunk_size = chunk_size
        self._mode = FileStatus.FILE_CLOSED
        self._pending = bytearray()
        self._medium_open = False
        self._chunk = b""
        self._chunk_pos = 0
        self._cursor = 0

    @property
    def identity(self) -> str:
        return self.medium.identity

    @property
    def cursor(self) -> int:
        """Number of bytes consumed in the current read session."""
        return self._cursor

    @property
    def pending_writes(self) -> bytes:
        return bytes(self._pending)

    def get_open_state(self) -> FileStatus:
        return self._mode

    def _invalid(self, operation: str) -> SettingsFileResult:
        logger.debug("%s rejected for %s in state %s", operation, self.identity, self._mode.name)
        return SettingsFileResult.INVALID_STATE

    def _ensure_medium(self) -> None:
        if self._medium_open:
            return
        if self._mode == FileStatus.FILE_OPENED_FOR_READ:
            self.medium.open_read()
        else:
            self.medium.open_write()
        self._medium_open = True

    # Read path

    def open_for_read(self) -> SettingsFileResult:
        if self._mode != FileStatus.FILE_CLOSED:
            return self._invalid("open_for_read")
        self._chunk = b""
        self._chunk_pos = 0
        self._cursor = 0
        self._mode = FileStatus.FILE_OPENED_FOR_READ
        logger.debug("Opened %s for read", self.identity)
        return SettingsFileResult.SUCCESS

    def _fill(self) -> bool:
        """Make sure unread bytes are available; False at end of file."""
        if self._chunk_pos < len(self._chunk):
            return True
        self._ensure_medium()
        self._chunk = self.medium.read_chunk(self.chunk_size)
        self._chunk_pos = 0
        return bool(self._chunk)

    def read(self, buffer: bytearray) -> SettingsFileResult:
        if self._mode != FileStatus.FILE_OPENED_FOR_READ:
            return self._invalid("read")
        try:
            available = self._fill()
        except OSError:
            logger.warning("Failed reading %s at offset %d", self.identity, self._cursor, exc_info=True)
            return SettingsFileResult.IO_ERROR
        if not available:
            return SettingsFileResult.END_OF_FILE
        buffer.append(self._chunk[self._chunk_pos])
        self._chunk_pos += 1
        self._cursor += 1
        return SettingsFileResult.SUCCESS

    def read_line(self, buffer: bytearray) -> SettingsFileResult:
        if self._mode != FileStatus.FILE_OPENED_FOR_READ:
            return self._invalid("read_line")
        while True:
            try:
                available = self._fill()
            except OSError:
                logger.warning("Failed reading line of %s at offset %d", self.identity, self._cursor, exc_info=True)
                return SettingsFileResult.IO_ERROR
            if not available:
                return SettingsFileResult.END_OF_FILE
            newline = self._chunk.find(b"\n", self._chunk_pos)
            end = len(self._chunk) if newline < 0 else newline + 1
            buffer += self._chunk[self._chunk_pos:end]
            self._cursor += end - self._chunk_pos
            self._chunk_pos = end
            if newline >= 0:
                return SettingsFileResult.SUCCESS

    def _end_read(self) -> None:
        if self._medium_open:
            try:
                self.medium.close()
            except OSError:
                # Nothing was written, so a failed release loses no data.
                logger.warning("Failed to release read handle for %s", self.identity, exc_info=True)
        self._medium_open = False
        self._chunk = b""
        self._chunk_pos = 0
        self._mode = FileStatus.FILE_CLOSED

    # Write path

    def open_for_write(self) -> SettingsFileResult:
        if self._mode != FileStatus.FILE_CLOSED:
            return self._invalid("open_for_write")
        self._pending.clear()
        self._mode = FileStatus.FILE_OPENED_FOR_WRITE
        logger.debug("Opened %s for write", self.identity)
        return SettingsFileResult.SUCCESS

    @staticmethod
    def _to_bytes(data: WriteData) -> bytes:
        if isinstance(data, bool):
            raise TypeError("cannot write bool to a settings file")
        if isinstance(data, int):
            if not 0 <= data <= 0xFF:
                raise ValueError(f"byte value out of range: {data}")
            return bytes((data,))
        if isinstance(data, str):
            return data.encode("utf-8")
        if isinstance(data, (bytes, bytearray, memoryview)):
            return bytes(data)
        raise TypeError(f"cannot write {type(data).__name__} to a settings file")

    def write(self, data: WriteData) -> SettingsFileResult:
        if self._mode != FileStatus.FILE_OPENED_FOR_WRITE:
            return self._invalid("write")
        payload = self._to_bytes(data)
        accepted = len(self._pending)
        self._pending += payload
        if self.flush_threshold and len(self._pending) >= self.flush_threshold:
            try:
                self._hand_off_pending()
            except OSError:
                # write_chunk is all-or-nothing: drop only this call's bytes.
                del self._pending[accepted:]
                logger.warning("Early flush of %s failed; %d bytes remain pending",
                               self.identity, len(self._pending), exc_info=True)
                return SettingsFileResult.IO_ERROR
        return SettingsFileResult.SUCCESS

    def _hand_off_pending(self) -> None:
        """Move pending bytes into the medium session without syncing it."""
        self._ensure_medium()
        if self._pending:
            self.medium.write_chunk(bytes(self._pending))
            logger.debug("Flushed %d bytes to %s", len(self._pending), self.identity)
            self._pending.clear()

    def _flush_pending(self) -> None:
        self._hand_off_pending()
        self.medium.flush()

    def _commit(self) -> None:
        self._flush_pending()
        self.medium.close()
        self._medium_open = False
        self._mode = FileStatus.FILE_CLOSED

    # Lifecycle

    def close(self) -> SettingsFileResult:
        if self._mode == FileStatus.FILE_CLOSED:
            return self._invalid("close")
        if self._mode == FileStatus.FILE_OPENED_FOR_READ:
            self._end_read()
            return SettingsFileResult.SUCCESS
        try:
            self._commit()
        except OSError:
            logger.warning("Failed to close %s; %d bytes still pending, file left open for write",
                           self.identity, len(self._pending), exc_info=True)
            return SettingsFileResult.IO_ERROR
        logger.debug("Closed %s", self.identity)
        return SettingsFileResult.SUCCESS

    def force_close(self) -> None:
        if self._mode == FileStatus.FILE_CLOSED:
            return
        if self._mode == FileStatus.FILE_OPENED_FOR_READ:
            self._end_read()
            return
        try:
            self._commit()
            return
        except OSError:
            logger.exception("Force close of %s failed; discarding %d pending bytes",
                             self.identity, len(self._pending))
        self._pending.clear()
        try:
            self.medium.discard()
        except OSError:
            logger.exception("Failed to discard write session for %s", self.identity)
        self._medium_open = False
        self._mode = FileStatus.FILE_CLOSED

    def __enter__(self) -> "SettingsAccessor":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.force_close()
        return False

    def __del__(self) -> None:
        if getattr(self, "_mode", FileStatus.FILE_CLOSED) != FileStatus.FILE_CLOSED:
            logger.warning("SettingsAccessor for %s destroyed while open; forcing close", self.identity)
            self.force_close()

    def __repr__(self) -> str:  # pragma: no cover - convenience
        return f"SettingsAccessor(identity={self.identity!r}, state={self._mode.name})"
