from typing import Protocol, runtime_checkable

from .types import FileStatus, SettingsFileResult


@runtime_checkable
class SettingsFileProtocol(Protocol):
    """Settings file protocol mirroring `settings_lib.file.base.SettingsFile`.

    Implementations should follow the semantics documented on the abstract
    base class (result codes, flush points, idempotent `force_close`).
    """

    def open_for_read(self) -> SettingsFileResult: ...

    def read(self, buffer: bytearray) -> SettingsFileResult: ...

    def read_line(self, buffer: bytearray) -> SettingsFileResult: ...

    def open_for_write(self) -> SettingsFileResult: ...

    def write(self, data) -> SettingsFileResult: ...

    def close(self) -> SettingsFileResult: ...

    def get_open_state(self) -> FileStatus: ...

    def force_close(self) -> None: ...
