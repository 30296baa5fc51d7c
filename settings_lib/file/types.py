"""Result and status codes shared by every settings file implementation."""
from enum import IntEnum


class SettingsFileResult(IntEnum):
    """Outcome of a settings file operation.

    `END_OF_FILE` is a normal read boundary, not a failure.
    """

    END_OF_FILE = -1
    SUCCESS = 0
    INVALID_STATE = 1
    IO_ERROR = 2


class FileStatus(IntEnum):
    FILE_CLOSED = 0
    FILE_OPENED_FOR_READ = 1
    FILE_OPENED_FOR_WRITE = 2
