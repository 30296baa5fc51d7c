"""Storage medium that maps a settings identity to a single on-disk file.

Reads go straight to the configured file. Write sessions stream into a
temporary sibling file which atomically replaces the target on `close`, so
readers only ever observe a complete settings file.
"""
from __future__ import annotations
import os
from pathlib import Path
from typing import BinaryIO, Optional
import logging

logger = logging.getLogger(__name__)


class FileMedium:
    """Medium that targets a single on-disk file.

    Parameters
    - file_path: path of the settings file. A missing file reads as empty.
    - fsync: when True, `flush` forces written bytes to stable storage.
    """

    def __init__(self, file_path: str | Path, *, fsync: bool = True) -> None:
        self.file_path = Path(file_path)
        self.fsync = fsync
        self._reader: Optional[BinaryIO] = None
        self._writer: Optional[BinaryIO] = None
        self._writing = False

    @property
    def identity(self) -> str:
        return str(self.file_path)

    def _tmp_path(self) -> Path:
        return self.file_path.with_suffix(self.file_path.suffix + ".tmp")

    def open_read(self) -> None:
        if not self.file_path.exists():
            logger.debug("FileMedium %s does not exist; reading as empty", self.file_path)
            self._reader = None
            return
        self._reader = open(self.file_path, "rb")

    def read_chunk(self, size: int) -> bytes:
        if self._reader is None:
            return b""
        return self._reader.read(size)

    def open_write(self) -> None:
        # Ensure parent directory exists so writes succeed.
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        self._writer = open(self._tmp_path(), "wb")
        self._writing = True

    def write_chunk(self, data: bytes) -> None:
        if self._writer is None:
            if not self._writing:
                raise OSError(f"{self.file_path} is not open for writing")
            # A failed commit closed the handle; continue the same session.
            self._writer = open(self._tmp_path(), "ab")
        pos = self._writer.tell()
        try:
            self._writer.write(data)
        except OSError:
            # Keep the chunk all-or-nothing.
            self._writer.seek(pos)
            self._writer.truncate()
            raise

    def flush(self) -> None:
        if self._writer is None:
            return
        self._writer.flush()
        if self.fsync:
            os.fsync(self._writer.fileno())

    def close(self) -> None:
        if self._reader is not None:
            self._reader.close()
            self._reader = None
        if not self._writing:
            return
        if self._writer is not None:
            self.flush()
            self._writer.close()
            self._writer = None
        self._tmp_path().replace(self.file_path)
        self._writing = False
        logger.debug("FileMedium committed %s", self.file_path)

    def discard(self) -> None:
        for handle in (self._reader, self._writer):
            if handle is not None:
                try:
                    handle.close()
                except OSError:
                    logger.warning("FileMedium failed to close handle for %s", self.file_path)
        self._reader = None
        self._writer = None
        if self._writing:
            self._tmp_path().unlink(missing_ok=True)
            self._writing = False
