"""Settings file interface definitions.

Defines the SettingsFile abstract class used by the settings layer to load
and persist its content. A SettingsFile represents one specific file (its
identity is fixed at construction time) and can be opened either for
reading or for writing, never both at once.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Union

from .types import FileStatus, SettingsFileResult

WriteData = Union[int, bytes, bytearray, str]


class SettingsFile(ABC):
    """Abstract settings file.

    Implementations are not thread-safe; a single owner drives each
    instance. Writes may be deferred, but every accepted byte must be
    durable after a successful `close`, after `force_close` and when the
    object is destroyed.
    """

    @abstractmethod
    def open_for_read(self) -> SettingsFileResult:
        """Open the file for reading.

        Returns `SUCCESS`, or `INVALID_STATE` if the file is already open.
        """

    @abstractmethod
    def read(self, buffer: bytearray) -> SettingsFileResult:
        """Append the next byte of the file to `buffer`.

        Returns `SUCCESS`, `END_OF_FILE` when no byte remains (nothing is
        appended), `INVALID_STATE` when not open for reading or `IO_ERROR`.
        """

    @abstractmethod
    def read_line(self, buffer: bytearray) -> SettingsFileResult:
        """Append the next line, including its trailing newline, to `buffer`.

        At the end of the file any remaining data is appended and
        `END_OF_FILE` is returned.
        """

    @abstractmethod
    def open_for_write(self) -> SettingsFileResult:
        """Open the file for writing, replacing its content.

        Returns `SUCCESS`, or `INVALID_STATE` if the file is already open.
        """

    @abstractmethod
    def write(self, data: WriteData) -> SettingsFileResult:
        """Write a single byte (int), bytes or text to the file.

        The physical write may be delayed. Returns `SUCCESS`,
        `INVALID_STATE` when not open for writing or `IO_ERROR`.
        """

    @abstractmethod
    def close(self) -> SettingsFileResult:
        """Close the file, flushing pending writes.

        Returns `SUCCESS`, `INVALID_STATE` if the file is not open, or
        `IO_ERROR` if pending writes could not be flushed. In the latter
        case the file stays open for writing so the call can be retried.
        """

    @abstractmethod
    def get_open_state(self) -> FileStatus:
        """Return the open state of the file."""

    @abstractmethod
    def force_close(self) -> None:
        """Write any pending data to the medium now and close the file if open.

        Unlike `close`, this never reports failure and is safe to call on a
        closed file.
        """
