"""Scoped helpers around the result-code based settings file contract.

Whoever opens a settings file must leave it closed and durable on every
exit path. These helpers do that for `with` blocks and turn failing result
codes into exceptions.
"""
from __future__ import annotations
from contextlib import contextmanager
from typing import Iterator

from .base import SettingsFile
from .errors import InvalidStateError, SettingsIOError
from .types import SettingsFileResult


def check(result: SettingsFileResult, operation: str = "operation") -> SettingsFileResult:
    """Raise for `INVALID_STATE` and `IO_ERROR`; return any other result."""
    if result == SettingsFileResult.INVALID_STATE:
        raise InvalidStateError(f"{operation} not allowed in the current state")
    if result == SettingsFileResult.IO_ERROR:
        raise SettingsIOError(f"{operation} failed on the storage medium")
    return result


@contextmanager
def reading(settings_file: SettingsFile) -> Iterator[SettingsFile]:
    check(settings_file.open_for_read(), "open_for_read")
    try:
        yield settings_file
    finally:
        settings_file.force_close()


@contextmanager
def writing(settings_file: SettingsFile) -> Iterator[SettingsFile]:
    """Open `settings_file` for writing and close it when the block exits.

    On normal exit the file is closed with `close` and a flush failure is
    raised as `SettingsIOError` (after a final `force_close` attempt). If
    the block raises, `force_close` still persists what was written.
    """
    check(settings_file.open_for_write(), "open_for_write")
    try:
        yield settings_file
    except BaseException:
        settings_file.force_close()
        raise
    result = settings_file.close()
    if result == SettingsFileResult.IO_ERROR:
        settings_file.force_close()
    check(result, "close")


def iter_lines(settings_file: SettingsFile) -> Iterator[bytes]:
    """Yield lines (with their newline) from a file opened for reading."""
    while True:
        buffer = bytearray()
        result = check(settings_file.read_line(buffer), "read_line")
        if buffer:
            yield bytes(buffer)
        if result == SettingsFileResult.END_OF_FILE:
            return
